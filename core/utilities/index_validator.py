# core/utilities/index_validator.py
"""
Name index validation utilities.
Checks the MARISA trie and names table written by build_name_index.py.
"""
from pathlib import Path
from typing import Tuple
from config import PathConfig, ASCII_TABLE_SIZE
from core.naming.name_index_format import Ambiguous, decode_value
from core.naming.name_index_searcher import IndexLoadError, NameIndexSearcher

def validate_name_index(index_dir: Path = None) -> Tuple[bool, str]:
    """
    Validate the name index without trusting it.

    Returns:
        Tuple of (is_valid, message)
    """
    index_dir = Path(index_dir or PathConfig.get_name_index_dir())

    # --- 1. Both files present and loadable ---
    if not NameIndexSearcher.is_available(index_dir):
        return False, f"Name index incomplete in {index_dir}"
    try:
        searcher = NameIndexSearcher(index_dir)
    except IndexLoadError as e:
        return False, str(e)

    if len(searcher) == 0:
        return False, "Name trie holds no tokens"
    if len(searcher.ascii_entries) != ASCII_TABLE_SIZE:
        return False, (
            f"ASCII table has {len(searcher.ascii_entries)} entries, "
            f"expected {ASCII_TABLE_SIZE}"
        )

    # --- 2. Ambiguity groups ---
    group_count = len(searcher.ambiguous_chars)
    for group_id, chars in enumerate(searcher.ambiguous_chars):
        if len(chars) < 2:
            return False, f"Ambiguity group {group_id} holds fewer than two characters"
        if list(chars) != sorted(set(chars)):
            return False, f"Ambiguity group {group_id} is not sorted and distinct"

    # --- 3. Every trie value decodes and points inside the groups ---
    for token, (packed,) in searcher.trie.items():
        try:
            value = decode_value(packed)
        except ValueError as e:
            return False, f"Token {token!r}: {e}"
        if isinstance(value, Ambiguous) and value.group_id >= group_count:
            return False, (
                f"Token {token!r} refers to group {value.group_id}, "
                f"only {group_count} exist"
            )

    return True, f"Name index valid: {len(searcher):,} tokens, {group_count:,} groups"
