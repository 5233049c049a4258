# core/naming/name_tokenizer.py
"""
Name Tokenizer
==============
Deterministic tokenization of character names.
Used by name_accumulator.py to key characters by every searchable
fragment of their names. The query side never re-tokenizes: it looks
up the lower-cased query (or its whitespace-separated words) directly.
"""
from typing import Iterable, Iterator

# Words too common in Unicode names to discriminate between characters
STOPWORDS = frozenset([
    "with",
    "sign",
    "small",
    "letter",
    "digit",
    "for",
    "symbol",
    "<control>",
])

def normalize_component(component: str) -> str:
    """Lower-case a name component and strip trailing commas.

    eg. "CURL," → "curl"
    """
    return component.lower().rstrip(",")

def is_searchable(component: str) -> bool:
    """A normalized component is kept unless it's a stopword or a single letter."""
    return component not in STOPWORDS and len(component) != 1

def filter_components(words: Iterable[str]) -> Iterator[str]:
    """
    Apply the stopword/length filter to each word.

    Hyphenated words that survive the filter are emitted whole and then
    once per hyphen-delimited part (each part filtered the same way).
    Only one level of decomposition happens: parts are never split again.

    Args:
        words: Raw or already-normalized name components

    Yields:
        Searchable tokens, in input order
    """
    for word in words:
        component = normalize_component(word)
        if not component or not is_searchable(component):
            continue
        yield component

        if "-" not in component:
            continue
        for part in component.split("-"):
            part = normalize_component(part)
            # Doubled hyphens leave empty parts behind
            if part and is_searchable(part):
                yield part

def tokenize(name: str) -> Iterator[str]:
    """
    Tokenize a character name.

    The full lower-cased name comes first, verbatim, so that exact
    full-name queries hit; it is exempt from filtering. After that come
    the filtered whitespace-separated words.

    eg. "D WITH CURL, LATIN SMALL LETTER" →
        ["d with curl, latin small letter", "curl", "latin"]

    Args:
        name: Character name as it appears in a source table

    Returns:
        A one-shot iterator over the tokens
    """
    yield name.lower()
    yield from filter_components(name.split())
