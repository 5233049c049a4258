# core/naming/build_name_index.py
"""
Character Name Index Builder
============================
Builds the name index consumed by the query resolver:
tokenizes every name from the ASCII and Unicode tables, assigns each
token a Direct or Ambiguous value, and writes the MARISA trie plus the
names table. Output is published only once both files are complete.
"""
import json
import logging
import os
import shutil
import tempfile
import time
import marisa_trie
import psutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple
from tqdm import tqdm
from config import PathConfig, RECORD_FORMAT, VERSION
from core.naming.name_accumulator import NameAccumulator
from core.naming.name_index_format import Ambiguous, Direct, IndexValue, encode_value
from core.naming.name_sources import (
    AsciiEntry,
    insert_ascii_names,
    parse_ascii_nametable,
    read_names
)

logger = logging.getLogger(__name__)

class IndexBuildError(RuntimeError):
    """Raised when the name index can't be serialized or published."""
    pass

def get_memory_usage() -> str:
    """Get current memory usage in human-readable format"""
    process = psutil.Process()
    mem_info = process.memory_info()
    return f"{mem_info.rss / (1024**2):.0f} MB"

@dataclass
class SerializedIndex:
    """Sorted token → value entries plus the ambiguity groups they refer to."""
    entries: List[Tuple[str, IndexValue]] = field(default_factory=list)
    ambiguous_chars: List[str] = field(default_factory=list)

    def packed_entries(self) -> Iterator[Tuple[str, int]]:
        """Entries with values packed for the trie."""
        for token, value in self.entries:
            yield token, encode_value(value)

def serialize_names(names: NameAccumulator, show_progress: bool = False) -> SerializedIndex:
    """
    Assign every token its index value.

    Tokens naming one character get a Direct value. Tokens naming several
    share an Ambiguous group keyed by their characters in code point
    order; the first occurrence of a key allocates the next group id.

    Raises:
        IndexBuildError: if tokens don't come out in strictly increasing order
    """
    index = SerializedIndex()
    group_ids: Dict[str, int] = {}
    previous: Optional[str] = None

    for token, chars in tqdm(names.iter_sorted(), total=len(names), unit='tokens',
                             unit_scale=True, disable=not show_progress):
        if previous is not None and token <= previous:
            raise IndexBuildError(
                f"Token {token!r} inserted out of order after {previous!r}"
            )
        previous = token

        if len(chars) == 1:
            index.entries.append((token, Direct(chars[0])))
            continue

        key = "".join(chars)
        group_id = group_ids.get(key)
        if group_id is None:
            group_id = len(index.ambiguous_chars)
            group_ids[key] = group_id
            index.ambiguous_chars.append(key)
        index.entries.append((token, Ambiguous(group_id)))

    return index

def build_marisa_trie(index: SerializedIndex, output_path: Path) -> None:
    """Build the MARISA RecordTrie from the serialized entries and save it."""
    records = ((token, (value,)) for token, value in index.packed_entries())
    trie = marisa_trie.RecordTrie(RECORD_FORMAT, records)
    trie.save(str(output_path))

def write_names_table(index: SerializedIndex, ascii_entries: List[AsciiEntry],
                      output_path: Path) -> None:
    """Write the ambiguity groups and ASCII metadata as JSON."""
    table = {
        "version": VERSION,
        "ambiguous_chars": index.ambiguous_chars,
        "ascii": [entry.to_dict() for entry in ascii_entries]
    }
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(table, f, ensure_ascii=False, indent=1)

def collect_names(nametable_path: Path = None, ucd_files: List[Path] = None,
                  show_progress: bool = False) -> Tuple[NameAccumulator, List[AsciiEntry]]:
    """
    Read every name source into a fresh accumulator.

    Args:
        nametable_path: ASCII name table (default: PathConfig)
        ucd_files: UCD files to read, in order (default: NameAliases.txt, UnicodeData.txt)

    Returns:
        (accumulator, ASCII entries)
    """
    nametable_path = nametable_path or PathConfig.get_ascii_nametable()
    if ucd_files is None:
        ucd_files = [PathConfig.get_name_aliases_file(), PathConfig.get_unicode_data_file()]

    names = NameAccumulator()

    if not nametable_path.exists():
        raise FileNotFoundError(f"ASCII name table not found: {nametable_path}")
    with open(nametable_path, "r", encoding="utf-8") as f:
        ascii_entries = parse_ascii_nametable(f, source=nametable_path.name)
    insert_ascii_names(names, ascii_entries)
    logger.info(f"ASCII name table: {len(ascii_entries)} entries, {len(names):,} tokens so far")

    for path in ucd_files:
        if not path.exists():
            raise FileNotFoundError(
                f"Unicode data file not found: {path} (run `chars --fetch` first)"
            )
        with open(path, "r", encoding="utf-8") as f:
            read_names(names, f, source=path.name, show_progress=show_progress)
        logger.info(f"{path.name}: {len(names):,} tokens so far | Memory: {get_memory_usage()}")

    return names, ascii_entries

def publish_index(index: SerializedIndex, ascii_entries: List[AsciiEntry],
                  output_dir: Path) -> None:
    """
    Write both artifacts into a scratch directory next to output_dir,
    then swap it into place. A failed build leaves any previous index
    untouched and no partial files behind.

    Raises:
        IndexBuildError: on any I/O failure
    """
    output_dir = Path(output_dir)
    trie_name = PathConfig.get_name_trie_file().name
    table_name = PathConfig.get_names_table_file().name

    try:
        output_dir.parent.mkdir(parents=True, exist_ok=True)
        staging_dir = Path(tempfile.mkdtemp(prefix=f".{output_dir.name}_", dir=output_dir.parent))
    except OSError as e:
        raise IndexBuildError(f"Cannot create staging directory for {output_dir}: {e}") from e

    backup_dir = None
    try:
        build_marisa_trie(index, staging_dir / trie_name)
        write_names_table(index, ascii_entries, staging_dir / table_name)

        if output_dir.exists():
            backup_dir = output_dir.with_name(f".{output_dir.name}_old_{os.getpid()}")
            os.rename(output_dir, backup_dir)
        os.rename(staging_dir, output_dir)
    except OSError as e:
        if backup_dir is not None and not output_dir.exists():
            os.rename(backup_dir, output_dir)
            backup_dir = None
        raise IndexBuildError(f"Failed writing name index to {output_dir}: {e}") from e
    finally:
        if staging_dir.exists():
            shutil.rmtree(staging_dir, ignore_errors=True)

    if backup_dir is not None:
        shutil.rmtree(backup_dir, ignore_errors=True)

def build_name_index(output_dir: Path = None, nametable_path: Path = None,
                     ucd_files: List[Path] = None, show_progress: bool = True) -> Dict[str, int]:
    """
    Main entry point: collect, serialize and publish the name index.

    Returns:
        Build statistics (tokens, groups, artifact sizes)
    """
    output_dir = Path(output_dir or PathConfig.get_name_index_dir())
    overall_start = time.time()
    logger.info(f"Building name index into {output_dir}")
    logger.info(f"Initial memory: {get_memory_usage()}")

    logger.info("Phase 1: Collecting names")
    names, ascii_entries = collect_names(nametable_path, ucd_files, show_progress)

    logger.info("Phase 2: Assigning index values")
    index = serialize_names(names, show_progress)

    logger.info("Phase 3: Writing trie and names table")
    publish_index(index, ascii_entries, output_dir)

    trie_size = (output_dir / PathConfig.get_name_trie_file().name).stat().st_size
    table_size = (output_dir / PathConfig.get_names_table_file().name).stat().st_size
    stats = {
        "tokens": len(index.entries),
        "ambiguity_groups": len(index.ambiguous_chars),
        "trie_bytes": trie_size,
        "table_bytes": table_size
    }

    elapsed = time.time() - overall_start
    logger.info(f"Name index built in {elapsed:.1f}s | Memory: {get_memory_usage()}")
    logger.info(f"  Unique tokens: {stats['tokens']:,}")
    logger.info(f"  Ambiguity groups: {stats['ambiguity_groups']:,}")
    logger.info(f"  Trie: {trie_size / 1024:.0f} KB | Names table: {table_size / 1024:.0f} KB")
    return stats
