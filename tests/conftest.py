"""
Shared fixtures: a real name index built from the shipped ASCII name
table and a UnicodeData.txt excerpt synthesized from unicodedata.
"""
import sys
import unicodedata
from pathlib import Path
import pytest

# Add the parent directory to path to import the project modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import PathConfig
from core.naming.build_name_index import build_name_index
from core.naming.name_index_searcher import NameIndexSearcher
from core.resolution.query_resolver import QueryResolver

# Ranges copied into the synthesized UnicodeData.txt
EXCERPT_RANGES = [
    (0x0020, 0x024F),    # Basic Latin .. Latin Extended-B
    (0x0370, 0x03FF),    # Greek and Coptic
    (0x2000, 0x206F),    # General Punctuation
    (0x1F600, 0x1F64F),  # Emoticons
    (0x1F6CF, 0x1F6CF),  # BED
    (0xE0100, 0xE01EF),  # Variation Selectors Supplement
]

# Unicode 1.0 names (field 10) for a few characters
OLD_NAMES = {
    0x03BB: "GREEK SMALL LETTER LAMBDA",
    0x00AE: "REGISTERED TRADE MARK SIGN",
}

CJK_BLOCK = (0x3400, 0x3410)

NAME_ALIASES = """\
# NameAliases.txt excerpt
0000;NULL;control
0005;ENQUIRY;control
0091;PRIVATE USE ONE;control
0092;PRIVATE USE TWO;control
200D;ZWJ;abbreviation
"""

def ucd_line(cp: int, name: str, old_name: str = "") -> str:
    fields = [f"{cp:04X}", name, "", "", "", "", "", "", "", "", old_name, "", "", "", ""]
    return ";".join(fields)

def synthesize_unicode_data() -> str:
    lines = ["0000;<control>;Cc;0;BN;;;;;N;NULL;;;;"]
    for start, end in EXCERPT_RANGES:
        for cp in range(start, end + 1):
            name = unicodedata.name(chr(cp), None)
            if name is None:
                continue
            lines.append(ucd_line(cp, name, OLD_NAMES.get(cp, "")))
        if start == 0x2000:
            first, last = CJK_BLOCK
            lines.append(ucd_line(first, "<CJK Ideograph Extension A, First>"))
            lines.append(ucd_line(last, "<CJK Ideograph Extension A, Last>"))
    return "\n".join(lines) + "\n"

def named_excerpt_chars():
    """Every (char, name) in the excerpt that unicodedata can name."""
    found = []
    for start, end in EXCERPT_RANGES + [CJK_BLOCK]:
        for cp in range(start, end + 1):
            name = unicodedata.name(chr(cp), None)
            if name is not None:
                found.append((chr(cp), name))
    return found

@pytest.fixture(scope="session")
def ucd_files(tmp_path_factory):
    ucd_dir = tmp_path_factory.mktemp("ucd")
    aliases = ucd_dir / "NameAliases.txt"
    aliases.write_text(NAME_ALIASES, encoding="utf-8")
    data = ucd_dir / "UnicodeData.txt"
    data.write_text(synthesize_unicode_data(), encoding="utf-8")
    return [aliases, data]

@pytest.fixture(scope="session")
def index_dir(tmp_path_factory, ucd_files):
    output_dir = tmp_path_factory.mktemp("index") / "name_index"
    build_name_index(
        output_dir=output_dir,
        nametable_path=PathConfig.get_ascii_nametable(),
        ucd_files=ucd_files,
        show_progress=False
    )
    return output_dir

@pytest.fixture(scope="session")
def searcher(index_dir):
    return NameIndexSearcher(index_dir)

@pytest.fixture(scope="session")
def resolver(searcher):
    return QueryResolver(searcher)
