# core/naming/name_index_format.py
"""
Name Index Format Specifications
================================

This module documents the on-disk format of the character name index
and holds the value types that cross the serialization boundary.

The index consists of two files in data/name_index/:
1. name_trie.bin - MARISA RecordTrie mapping tokens to one packed uint64
2. names_table.json - Ambiguity groups plus the ASCII name metadata


File Structure: name_trie.bin
-----------------------------

A marisa_trie.RecordTrie saved with record format "<Q" (one little-endian
uint64 per key). Keys are tokens (see name_tokenizer.py), stored as UTF-8.
Exactly one record exists per key. The value is either:

    Direct      the code point itself             (0x0 .. 0x10FFFF)
    Ambiguous   AMBIGUITY_TAG | group id          (0xFF << 32 | id)

Unicode scalar values fit in 21 bits, so any value with a bit set at or
above bit 32 is a group id; the tag byte sits in bits 32-39 and the id
in the low 32 bits.

Keys are inserted in ascending order. The trie itself doesn't demand it,
but the builder does so that the key stream, and therefore the artifact,
is reproducible.


File Structure: names_table.json
--------------------------------

    {
      "version": "<chars version that built it>",
      "ambiguous_chars": ["<chars of group 0>", "<chars of group 1>", ...],
      "ascii": [
        {"mnemonics": [...], "synonyms": [...], "note": null | "..."},
        ... 128 entries, indexed by code point ...
      ]
    }

Each ambiguous_chars entry is the group's characters concatenated in
ascending code point order. That string is also the dedup key: tokens
whose character sets are equal share a group id.


Tokenization Properties
-----------------------

- The full lower-cased name is always a token ("latin small letter a").
- Each whitespace-separated word is a token unless it's a stopword
  ("with", "sign", "small", "letter", "digit", "for", "symbol",
  "<control>") or a single character.
- Hyphenated words add their parts ("upside-down" → "upside", "down").


Tokenization Example
--------------------

UnicodeData.txt line:
    03BB;GREEK SMALL LETTER LAMDA;Ll;0;L;;;;;N;GREEK SMALL LETTER LAMBDA;;039B;;039B

Tokens (current name, then the Unicode 1.0 name):
    "greek small letter lamda", "greek", "lamda",
    "greek small letter lambda", "lambda"

"greek" is shared with every other Greek character and so ends up as an
Ambiguous value; the others are Direct values for U+03BB.
"""
from dataclasses import dataclass
from typing import Union
from config import AMBIGUITY_TAG, GROUP_ID_MASK, MAX_SCALAR_VALUE

@dataclass(frozen=True)
class Direct:
    """Token naming exactly one character."""
    char: str

@dataclass(frozen=True)
class Ambiguous:
    """Token shared by several characters, stored once as a group."""
    group_id: int

IndexValue = Union[Direct, Ambiguous]

def encode_value(value: IndexValue) -> int:
    """Pack an index value into the uint64 stored in the trie."""
    if isinstance(value, Direct):
        return ord(value.char)
    if not 0 <= value.group_id <= GROUP_ID_MASK:
        raise ValueError(f"Group id out of range: {value.group_id}")
    return AMBIGUITY_TAG | value.group_id

def decode_value(packed: int) -> IndexValue:
    """
    Unpack a uint64 read from the trie.

    Raises:
        ValueError: if the value is neither a tagged group id nor a scalar value
    """
    if packed & AMBIGUITY_TAG:
        return Ambiguous(packed & GROUP_ID_MASK)
    if packed > MAX_SCALAR_VALUE or 0xD800 <= packed <= 0xDFFF:
        raise ValueError(f"Not a Unicode scalar value: {packed:#x}")
    return Direct(chr(packed))
