# core/naming/name_index_searcher.py
"""
Low-Level Name Index Searcher
=============================
Exact token lookup against the MARISA RecordTrie, resolving Ambiguous
values through the names table. Read-only once loaded.
"""
import json
import logging
import marisa_trie
from pathlib import Path
from typing import List, Optional
from config import PathConfig, RECORD_FORMAT, ASCII_TABLE_SIZE
from core.naming.name_index_format import Ambiguous, Direct, IndexValue, decode_value
from core.naming.name_sources import AsciiEntry

logger = logging.getLogger(__name__)

class IndexLoadError(RuntimeError):
    """Raised when the name index is missing or can't be read."""
    pass

class NameIndexSearcher:
    """Token → characters lookup over the built name index."""

    @classmethod
    def is_available(cls, index_dir: Path = None) -> bool:
        """Check if index files exist"""
        if index_dir is None:
            paths = PathConfig.get_all_required_files()
        else:
            paths = [Path(index_dir) / p.name for p in PathConfig.get_all_required_files()]
        return all(p.exists() for p in paths)

    def __init__(self, index_dir: Path = None):
        """
        Load the trie and names table.

        Raises:
            IndexLoadError: if either file is missing or corrupt
        """
        if index_dir is None:
            trie_path = PathConfig.get_name_trie_file()
            table_path = PathConfig.get_names_table_file()
        else:
            trie_path = Path(index_dir) / PathConfig.get_name_trie_file().name
            table_path = Path(index_dir) / PathConfig.get_names_table_file().name

        for path in (trie_path, table_path):
            if not path.exists():
                raise IndexLoadError(
                    f"Name index file not found: {path} (run `chars --build` first)"
                )

        self.trie = marisa_trie.RecordTrie(RECORD_FORMAT)
        try:
            self.trie.load(str(trie_path))
        except Exception as e:
            raise IndexLoadError(f"Could not load name trie {trie_path}: {e}") from e

        try:
            with open(table_path, "r", encoding="utf-8") as f:
                table = json.load(f)
            self.ambiguous_chars: List[str] = list(table["ambiguous_chars"])
            self.ascii_entries: List[AsciiEntry] = [
                AsciiEntry(
                    value=chr(code),
                    mnemonics=list(entry["mnemonics"]),
                    synonyms=list(entry["synonyms"]),
                    note=entry["note"]
                )
                for code, entry in enumerate(table["ascii"])
            ]
            self.version = table.get("version", "unknown")
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise IndexLoadError(f"Could not read names table {table_path}: {e}") from e

        logger.debug(
            f"Loaded name index: {len(self.trie):,} tokens, "
            f"{len(self.ambiguous_chars):,} ambiguity groups (built by {self.version})"
        )

    def __len__(self) -> int:
        return len(self.trie)

    def lookup_value(self, token: str) -> Optional[IndexValue]:
        """Return the decoded value stored for an exact token, or None."""
        if not token or token not in self.trie:
            return None
        # RecordTrie with format '<Q' returns a list of tuples like [(value,)]
        records = self.trie[token]
        if not records:
            return None
        return decode_value(records[0][0])

    def lookup(self, token: str) -> List[str]:
        """
        Characters filed under an exact token, in ascending code point
        order. Empty if the token is absent.
        """
        value = self.lookup_value(token)
        if value is None:
            return []
        if isinstance(value, Direct):
            return [value.char]
        return list(self.group_chars(value))

    def group_chars(self, value: Ambiguous) -> str:
        try:
            return self.ambiguous_chars[value.group_id]
        except IndexError:
            raise IndexLoadError(
                f"Ambiguity group {value.group_id} missing from names table"
            ) from None

    def additional_names(self, ch: str) -> Optional[AsciiEntry]:
        """Return the ASCII name table entry for ch, None beyond ASCII."""
        code = ord(ch)
        if code < ASCII_TABLE_SIZE and code < len(self.ascii_entries):
            return self.ascii_entries[code]
        return None

    def validate_index(self, test_token: str = "latin") -> bool:
        """
        Validate that a common token can be found and resolved.
        Returns True if valid, raises exception with details if not.
        """
        if test_token not in self.trie:
            raise ValueError(f"Test token '{test_token}' not found in trie")

        try:
            chars = self.lookup(test_token)
        except (ValueError, IndexLoadError) as e:
            raise ValueError(f"Failed to resolve token '{test_token}': {e}")
        if not chars:
            raise ValueError(f"Token '{test_token}' resolved to no characters")
        return True
