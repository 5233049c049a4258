# main.py
import argparse
import logging
import sys
import time
from tqdm import tqdm
from config import PathConfig, VERSION
from core.naming.build_name_index import IndexBuildError, build_name_index
from core.naming.name_index_searcher import IndexLoadError
from core.naming.name_sources import NameDataError
from core.resolution.query_resolver import additional_names, resolve
from core.utilities.config_manager import config_manager
from core.utilities.download_manager import DownloadError, UcdDownloader
from core.utilities.index_validator import validate_name_index
from ui.cli.character_display import describe
from ui.cli.console_utils import format_elapsed_time, format_size, print_error, print_header

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_FAILURE = 2

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chars",
        description="Look up characters by themselves, their code points or their names."
    )
    parser.add_argument(
        'queries',
        nargs='*',
        metavar='QUERY',
        help='A character, a number (0x41, U+41, 65, 101), a ^-escape or a name fragment'
    )
    parser.add_argument(
        '--fetch',
        action='store_true',
        help='Download the Unicode data files needed by --build'
    )
    parser.add_argument(
        '--build',
        action='store_true',
        help='Rebuild the name index from the name tables'
    )
    parser.add_argument(
        '--check',
        action='store_true',
        help='Validate the name index'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log progress and debugging details'
    )
    parser.add_argument('--version', action='version', version=f"chars {VERSION}")
    return parser

def run_fetch() -> int:
    bars = {}

    def show_progress(filename: str, downloaded: int, total: int):
        bar = bars.get(filename)
        if bar is None:
            bar = bars[filename] = tqdm(
                total=total or None, unit='B', unit_scale=True, desc=filename,
                disable=not config_manager.get_show_progress()
            )
        bar.update(downloaded - bar.n)

    downloader = UcdDownloader(
        base_url=config_manager.get_ucd_base_url(),
        progress_callback=show_progress
    )
    try:
        paths = downloader.fetch_all()
    except DownloadError as e:
        print_error(str(e))
        return EXIT_FAILURE
    finally:
        for bar in bars.values():
            bar.close()
    for path in paths:
        print(f"  ✓ {path}")
    return EXIT_OK

def run_build() -> int:
    print_header("🔨 Building Name Index")
    start = time.time()
    try:
        stats = build_name_index(show_progress=config_manager.get_show_progress())
    except (NameDataError, IndexBuildError, FileNotFoundError) as e:
        print_error(f"Build failed: {e}")
        return EXIT_FAILURE
    print(f"  ✓ {stats['tokens']:,} tokens, {stats['ambiguity_groups']:,} ambiguity groups")
    print(f"  ✓ {format_size(stats['trie_bytes'] + stats['table_bytes'])} "
          f"written to {PathConfig.get_name_index_dir()}")
    print(f"  ✓ Done in {format_elapsed_time(time.time() - start)}")
    return EXIT_OK

def run_check() -> int:
    is_valid, message = validate_name_index()
    print(f"  {'✓' if is_valid else '❌'} {message}")
    return EXIT_OK if is_valid else EXIT_FAILURE

def run_queries(queries) -> int:
    status = EXIT_OK
    for query in queries:
        try:
            found = resolve(query)
        except IndexLoadError as e:
            print_error(str(e))
            return EXIT_FAILURE
        if not found:
            print(f"No character found for {query!r}\n")
            status = EXIT_NOT_FOUND
            continue
        for ch in found:
            print(describe(ch, additional_names(ch)) + "\n")
    return status

def main(argv=None) -> int:
    """Main entry point for chars."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = 'DEBUG' if args.verbose else config_manager.get_log_level()
    logging.basicConfig(
        level=getattr(logging, level),
        format="  %(levelname)s %(name)s: %(message)s"
    )

    if not (args.fetch or args.build or args.check or args.queries):
        parser.print_help()
        return EXIT_FAILURE

    for requested, step in ((args.fetch, run_fetch), (args.build, run_build), (args.check, run_check)):
        if requested:
            status = step()
            if status != EXIT_OK:
                return status

    if args.queries:
        return run_queries(args.queries)
    return EXIT_OK

if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nGoodbye!")
        sys.exit(0)
