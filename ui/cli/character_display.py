# ui/cli/character_display.py
"""
Plain-text description of a resolved character for the CLI.
"""
import unicodedata
from typing import List, Optional
from core.naming.name_sources import AsciiEntry

def format_codepoint(ch: str) -> str:
    return f"U+{ord(ch):04X}"

def format_printable(ch: str) -> str:
    """Printable form: the character itself, or ^-notation for controls."""
    code = ord(ch)
    if code == 0x7F:
        return "^?"
    if code < 0x20:
        return "^" + chr(0x40 + code)
    if unicodedata.category(ch) in ("Cc", "Cs", "Co", "Cn", "Zl", "Zp"):
        return repr(ch)[1:-1]
    return ch

def describe(ch: str, ascii_entry: Optional[AsciiEntry] = None) -> str:
    """
    Build the multi-line description of ch.

    Args:
        ch: Character to describe
        ascii_entry: Its ASCII name table entry, if it has one
    """
    lines = [f"{format_codepoint(ch)}  {format_printable(ch)}"]
    unicode_name = unicodedata.name(ch, None)
    if unicode_name:
        lines.append(f"Unicode name: {unicode_name}")

    if ascii_entry is not None:
        synonyms: List[str] = []
        xml = None
        for synonym in ascii_entry.synonyms:
            if synonym.startswith("&") and synonym.endswith(";"):
                xml = synonym
            elif unicode_name is None or unicode_name.lower() != synonym.lower():
                synonyms.append(synonym)
        if ascii_entry.called:
            lines.append(f"Called: {', '.join(ascii_entry.called)}")
        if synonyms:
            lines.append(f"Also known as: {', '.join(synonyms)}")
        if xml:
            lines.append(f"Escapes in XML as: {xml}")
        if ascii_entry.note:
            lines.append(f"Note: {ascii_entry.note}")

    return "\n".join(lines)
