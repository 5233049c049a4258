# config.py
import os
import tomllib
from pathlib import Path

def _get_version():
    """Read chars' version from pyproject.toml"""
    try:
        pyproject_path = Path(__file__).parent / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
        return data["project"]["version"]
    except (OSError, KeyError, tomllib.TOMLDecodeError):
        return "unknown"  # Fallback if pyproject.toml is missing

VERSION = _get_version()
FRAME_WIDTH = 70 # For CLI UI headings

# Constants pertaining to the name index (see core/naming/name_index_format.py)
MAX_SCALAR_VALUE = 0x10FFFF
AMBIGUITY_TAG = 0xFF << 32      # High-order marker for ambiguity group ids
GROUP_ID_MASK = 0xFFFFFFFF      # Group id lives in the low 32 bits
RECORD_FORMAT = "<Q"            # marisa RecordTrie value: one uint64
READ_BASES = (16, 10, 8, 2)     # Bases tried for bare numeric queries
ASCII_TABLE_SIZE = 128

class PathConfig:
    BASE_DIR = Path(__file__).parent
    DATA = Path(os.environ.get("CHARS_DATA_DIR", BASE_DIR / "data"))

    @classmethod
    def get_ascii_nametable(cls):
        """ascii(1)-style name table shipped with the sources"""
        return cls.DATA / "ascii" / "nametable"

    @classmethod
    def get_ucd_dir(cls):
        """Directory for downloaded Unicode Character Database files"""
        return cls.DATA / "unicode"

    @classmethod
    def get_unicode_data_file(cls):
        return cls.get_ucd_dir() / "UnicodeData.txt"

    @classmethod
    def get_name_aliases_file(cls):
        return cls.get_ucd_dir() / "NameAliases.txt"

    @classmethod
    def get_name_index_dir(cls):
        """Directory for name index files"""
        return cls.DATA / "name_index"

    @classmethod
    def get_name_trie_file(cls):
        """MARISA trie file for token lookup"""
        return cls.get_name_index_dir() / "name_trie.bin"

    @classmethod
    def get_names_table_file(cls):
        """Ambiguity groups and ASCII metadata"""
        return cls.get_name_index_dir() / "names_table.json"

    @classmethod
    def get_all_required_files(cls):
        """Return all files the query side needs"""
        return [
            cls.get_name_trie_file(),
            cls.get_names_table_file()
        ]

    @classmethod
    def get_config_path(cls):
        return cls.BASE_DIR / "config.json"

class UcdConfig:
    """Where the Unicode Character Database source tables come from."""

    BASE_URL = "https://www.unicode.org/Public/UCD/latest/ucd/"

    # Files needed by the index builder, in the order they are read
    FILES = [
        "NameAliases.txt",
        "UnicodeData.txt"
    ]

    @classmethod
    def get_file_url(cls, filename: str, base_url: str = None) -> str:
        base = base_url or cls.BASE_URL
        if not base.endswith("/"):
            base += "/"
        return base + filename
