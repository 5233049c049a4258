# core/naming/name_sources.py
"""
Name Sources
============
Readers for the tables that feed the name accumulator:

1. The ascii(1)-style name table (data/ascii/nametable), one
   %%-terminated record per code point 0-127:

       Mnemonics: "\\"",
       ISO names: "Quotation Mark",
       Synonyms:  "Double Quote", "Quote", "String Quote",
       Comment:   "# See ' and ` for matching names.",
       %%

   The first name line of a record holds its mnemonics, every later
   line adds synonyms. An element starting with '#' is the record's note.

2. Unicode Character Database files (NameAliases.txt, UnicodeData.txt):
   ';'-delimited lines, field 0 a hex code point, field 1 the name and,
   in UnicodeData.txt, field 10 the Unicode 1.0 name. Names ending in
   ", First>" / ", Last>" bracket a block whose members are named
   algorithmically; those are expanded through unicodedata.
"""
import logging
import re
import unicodedata
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple
from tqdm import tqdm
from config import ASCII_TABLE_SIZE, MAX_SCALAR_VALUE
from core.naming.name_accumulator import NameAccumulator

logger = logging.getLogger(__name__)

class NameDataError(ValueError):
    """Raised when a source name table is malformed."""
    pass

# --- ASCII name table ---

_QUOTES = re.compile(r'",\s*"')
_RIGHT_QUOTE = re.compile(r'"\s*,\s*$')
_BACKSLASH_SOMETHING = re.compile(r"\\(.)")
_LABEL = re.compile(r"^[A-Za-z ]*:\s*")

@dataclass
class AsciiEntry:
    """Names known for one ASCII code point."""
    value: str
    mnemonics: List[str] = field(default_factory=list)
    synonyms: List[str] = field(default_factory=list)
    note: Optional[str] = None

    @property
    def called(self) -> List[str]:
        """Mnemonics worth showing (single characters are just the character itself)."""
        return [m for m in self.mnemonics if len(m) != 1]

    def to_dict(self) -> dict:
        return {
            "mnemonics": self.mnemonics,
            "synonyms": self.synonyms,
            "note": self.note
        }

def split_name_line(line: str) -> List[str]:
    """
    Split a line of quoted, comma-separated names.

    eg. ' "Shift In", "Locking Shift 0",' → ["Shift In", "Locking Shift 0"]
        '"\\\\v",'                          → ["\\v"]
    """
    line = line.lstrip()
    line = _RIGHT_QUOTE.sub("", line)
    line = line.lstrip('"')
    return [_BACKSLASH_SOMETHING.sub(r"\1", s) for s in _QUOTES.split(line)]

def parse_ascii_nametable(lines: Iterable[str], source: str = "nametable") -> List[AsciiEntry]:
    """
    Parse an ascii(1) name table into one AsciiEntry per code point.

    Raises:
        NameDataError: if the table doesn't describe exactly 128 code points
    """
    entries: List[AsciiEntry] = []
    entry = AsciiEntry(value=chr(0))

    for line in lines:
        line = line.rstrip("\r\n")
        if not line or line.startswith("#"):
            continue
        if line == "%%":
            entries.append(entry)
            entry = AsciiEntry(value=chr(len(entries)))
            continue

        # Not at a record boundary; add names
        line = _LABEL.sub("", line, count=1).lstrip()
        if not entry.mnemonics:
            entry.mnemonics = split_name_line(line)
            continue
        for element in split_name_line(line):
            if element.startswith("#"):
                entry.note = element[2:]
            else:
                entry.synonyms.append(element)

    if entry.mnemonics:
        entries.append(entry)

    if len(entries) != ASCII_TABLE_SIZE:
        raise NameDataError(
            f"{source}: expected {ASCII_TABLE_SIZE} records, found {len(entries)}"
        )
    return entries

def insert_ascii_names(names: NameAccumulator, entries: Iterable[AsciiEntry]):
    """Make every mnemonic and synonym of the ASCII table searchable."""
    for entry in entries:
        names.insert(entry.mnemonics, entry.value)
        names.insert(entry.synonyms, entry.value)

# --- Unicode Character Database ---

class LineKind(Enum):
    NONE = "none"
    SIMPLE = "simple"
    BLOCK_START = "block_start"
    BLOCK_END = "block_end"

LineType = Tuple[LineKind, Optional[int]]

def _scalar_char(cp: int) -> Optional[str]:
    """Return the character for a Unicode scalar value, None for surrogates and out-of-range."""
    if 0 <= cp <= MAX_SCALAR_VALUE and not 0xD800 <= cp <= 0xDFFF:
        return chr(cp)
    return None

def process_line(names: NameAccumulator, line: str) -> LineType:
    """
    Insert the names from a single UCD data line.

    Returns:
        (LineKind, code point) where the code point is set for block
        boundaries only

    Raises:
        NameDataError: if field 0 isn't a base-16 integer
    """
    if line.startswith("#") or not line.strip():
        return LineKind.NONE, None

    fields = line.rstrip("\r\n").split(";", 14)
    try:
        cp = int(fields[0], 16)
    except ValueError:
        raise NameDataError(f"Could not parse {fields[0]!r} as base-16 integer")

    ch = _scalar_char(cp)
    if ch is None or len(fields) < 2:
        return LineKind.NONE, None

    name = fields[1]
    if name.endswith(", First>"):
        return LineKind.BLOCK_START, cp
    if name.endswith(", Last>"):
        return LineKind.BLOCK_END, cp

    names.insert([name], ch)
    # Unicode 1.0 name, if any
    if len(fields) > 10 and fields[10]:
        names.insert([fields[10]], ch)
    return LineKind.SIMPLE, None

def _insert_block(names: NameAccumulator, start: int, end: int, show_progress: bool):
    """Insert every named character of an inclusive code point range."""
    block = range(start, end + 1)
    for cp in tqdm(block, unit='chars', unit_scale=True, leave=False,
                   desc=f"U+{start:04X}..U+{end:04X}", disable=not show_progress):
        ch = _scalar_char(cp)
        if ch is None:
            continue
        name = unicodedata.name(ch, None)
        if name is not None:
            names.insert([name], ch)

def read_names(names: NameAccumulator, lines: Iterable[str],
               source: str = "<ucd>", show_progress: bool = False):
    """
    Feed every line of a UCD file into the accumulator.

    A First line must be immediately followed by its Last line; the
    characters in between are named through unicodedata.

    Raises:
        NameDataError: on malformed lines or inconsistent block records
    """
    numbered: Iterator[Tuple[int, str]] = enumerate(lines, 1)
    for line_no, line in numbered:
        try:
            kind, cp = process_line(names, line)
        except NameDataError as e:
            raise NameDataError(f"{source}:{line_no}: {e}") from e

        if kind is LineKind.BLOCK_END:
            raise NameDataError(
                f"{source}:{line_no}: block end without a start: U+{cp:04X}"
            )
        if kind is not LineKind.BLOCK_START:
            continue

        start = cp
        following = next(numbered, None)
        if following is None:
            raise NameDataError(
                f"{source}:{line_no}: premature end of block from U+{start:04X}"
            )
        end_line_no, end_line = following
        try:
            end_kind, end = process_line(names, end_line)
        except NameDataError as e:
            raise NameDataError(f"{source}:{end_line_no}: {e}") from e
        if end_kind is not LineKind.BLOCK_END:
            raise NameDataError(
                f"{source}:{end_line_no}: unexpected line after block start "
                f"U+{start:04X}: {end_line.strip()!r}"
            )

        logger.debug(f"Expanding block U+{start:04X}..U+{end:04X} from {source}")
        _insert_block(names, start, end, show_progress)
