# core/resolution/query_resolver.py
"""
Query Resolver
==============
Turns a free-form query into the characters it may denote.

Every interpretation strategy that parses contributes candidates:

    1. literal      "x"                 the character itself
    2. codepoint    "0x41", "U+1F600"   hexadecimal code point
    3. numeric      "60"                the number in bases 16, 10, 8, 2
    4. control      "^C", "^?"          caret notation for control codes
    5. names        "latin small a"     token lookup in the name index

Strategies 1, 2 and 4 claim the query outright: when they apply, name
lookup is skipped even if they found nothing.
"""
import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional
from config import MAX_SCALAR_VALUE, READ_BASES
from core.naming.name_index_searcher import NameIndexSearcher

logger = logging.getLogger(__name__)

CODEPOINT_PREFIXES = ("0x", "U+")
CONTROL_ESCAPE = "^"
DELETE_ESCAPE = "?"
DELETE = "\x7f"

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

@dataclass
class Interpretation:
    """Candidates found by one strategy, and whether it claims the query."""
    strategy: str
    chars: List[str] = field(default_factory=list)
    skip_names: bool = False

def scalar_char(num: int) -> Optional[str]:
    """Return the character for num if it's a Unicode scalar value."""
    if 0 <= num <= MAX_SCALAR_VALUE and not 0xD800 <= num <= 0xDFFF:
        return chr(num)
    return None

def max_scalar_digits(base: int) -> int:
    """Digits needed to write MAX_SCALAR_VALUE in base."""
    digits, num = 1, MAX_SCALAR_VALUE
    while num >= base:
        num //= base
        digits += 1
    return digits

def parse_unsigned(text: str, base: int) -> Optional[int]:
    """
    Parse text as an unsigned integer made only of the digits of base.

    Unlike int(), this rejects signs, underscores, surrounding whitespace
    and "0x"-style prefixes. Returns None when text doesn't parse, or
    when it has more significant digits than any scalar value needs.
    """
    if not text:
        return None
    allowed = _DIGITS[:base]
    if any(not c.isascii() or c.lower() not in allowed for c in text):
        return None
    significant = text.lstrip("0") or "0"
    if len(significant) > max_scalar_digits(base):
        return None
    return int(significant, base)

# --- Interpretation strategies ---
# Each takes the raw query and returns None when it doesn't apply.

def literal_character(query: str) -> Optional[Interpretation]:
    if len(query) != 1:
        return None
    return Interpretation("literal", [query], skip_names=True)

def codepoint_notation(query: str) -> Optional[Interpretation]:
    if not query.startswith(CODEPOINT_PREFIXES):
        return None
    result = Interpretation("codepoint", skip_names=True)
    num = parse_unsigned(query[2:], 16)
    if num is not None:
        ch = scalar_char(num)
        if ch is not None:
            result.chars.append(ch)
    return result

def bare_numeric(query: str) -> Optional[Interpretation]:
    result = Interpretation("numeric")
    for base in READ_BASES:
        num = parse_unsigned(query, base)
        if num is None:
            continue
        ch = scalar_char(num)
        if ch is not None:
            result.chars.append(ch)
    return result if result.chars else None

def control_escape(query: str) -> Optional[Interpretation]:
    if len(query) != 2 or query[0] != CONTROL_ESCAPE or not query[1].isascii():
        return None
    if query[1] == DELETE_ESCAPE:
        return Interpretation("control", [DELETE], skip_names=True)
    # Masking to the low 5 bits folds case: ^c and ^C are both U+0003
    return Interpretation("control", [chr(ord(query[1]) & 0x1F)], skip_names=True)

STRATEGIES: List[Callable[[str], Optional[Interpretation]]] = [
    literal_character,
    codepoint_notation,
    bare_numeric,
    control_escape,
]

class QueryResolver:
    """Resolves queries against a loaded name index."""

    def __init__(self, searcher: NameIndexSearcher):
        self.searcher = searcher

    def lookup_by_query(self, query: str) -> List[str]:
        """
        Name lookup: exact match of the whole lower-cased query first.
        Failing that, a multi-word query ANDs the characters of each word.
        A single word with no exact match yields nothing.
        """
        query = query.lower()
        exact = self.searcher.lookup(query)
        if exact:
            return exact

        if not any(c.isspace() for c in query):
            return []

        words = query.split()
        if not words:
            return []
        candidates = set(self.searcher.lookup(words[0]))
        for word in words[1:]:
            if not candidates:
                break
            candidates &= set(self.searcher.lookup(word))
        return sorted(candidates)

    def resolve(self, query: str) -> List[str]:
        """
        Resolve a query to its candidate characters.

        Returns:
            Distinct characters sorted by descending code point; empty when
            no interpretation matched
        """
        chars: List[str] = []
        try_names = True

        for strategy in STRATEGIES:
            interpretation = strategy(query)
            if interpretation is None:
                continue
            logger.debug(
                f"{query!r}: {interpretation.strategy} → "
                f"{[f'U+{ord(c):04X}' for c in interpretation.chars]}"
            )
            chars.extend(interpretation.chars)
            if interpretation.skip_names:
                try_names = False

        if try_names:
            found = self.lookup_by_query(query)
            logger.debug(f"{query!r}: names → {len(found)} characters")
            chars.extend(found)

        return sorted(set(chars), key=ord, reverse=True)

# Process-wide index, loaded on first use
_default_searcher = None
_load_error = None
_load_lock = threading.Lock()

def get_searcher() -> NameIndexSearcher:
    """
    Get the singleton NameIndexSearcher.

    The first call loads the index. If loading fails, that error is
    remembered and raised again on every later call.
    """
    global _default_searcher, _load_error
    with _load_lock:
        if _load_error is not None:
            raise _load_error
        if _default_searcher is None:
            try:
                _default_searcher = NameIndexSearcher()
            except Exception as e:
                _load_error = e
                raise
        return _default_searcher

def get_resolver() -> QueryResolver:
    """Get a QueryResolver over the singleton index."""
    return QueryResolver(get_searcher())

def resolve(query: str) -> List[str]:
    """Resolve a query against the process-wide name index."""
    return get_resolver().resolve(query)

def additional_names(ch: str):
    """ASCII names for ch from the process-wide index, None beyond ASCII."""
    return get_searcher().additional_names(ch)
