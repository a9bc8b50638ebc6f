"""HTML5 named character reference table and numeric correction rules.

The named table is the WHATWG list (2231 references) as shipped in
``html.entities.html5``, re-keyed as raw bytes with the leading ``&`` so the
scanner can compare candidates without decoding them. Both the plain
mapping and a trie over it are built once at import and never mutated.

Numeric references follow §13.2.5.80 (numeric character reference end
state): null, out-of-range and surrogate values become U+FFFD, and a fixed
set of C1 controls is remapped to the characters Windows-1252 puts there.
"""

import html.entities

from .entity_trie import Trie

# Unicode replacement character, substituted for disallowed numeric references
REPLACEMENT_CHAR = "\ufffd"

# Keys include the ampersand and the semicolon where the name has one,
# e.g. b"&amp;" and the legacy b"&amp"
ENTITIES = {
    ("&" + name).encode("ascii"): value.encode("utf-8")
    for name, value in html.entities.html5.items()
}

ENTITY_MIN_LENGTH = min(len(key) for key in ENTITIES)
ENTITY_MAX_LENGTH = max(len(key) for key in ENTITIES)

ENTITY_TRIE = Trie(ENTITIES)

# Windows-1252 remaps for 0x80-0x9F (0x81, 0x8D, 0x8F, 0x90 and 0x9D map to themselves)
CONTROL_REPLACEMENTS = {
    0x80: "\u20ac",  # EURO SIGN
    0x82: "\u201a",  # SINGLE LOW-9 QUOTATION MARK
    0x83: "\u0192",  # LATIN SMALL LETTER F WITH HOOK
    0x84: "\u201e",  # DOUBLE LOW-9 QUOTATION MARK
    0x85: "\u2026",  # HORIZONTAL ELLIPSIS
    0x86: "\u2020",  # DAGGER
    0x87: "\u2021",  # DOUBLE DAGGER
    0x88: "\u02c6",  # MODIFIER LETTER CIRCUMFLEX ACCENT
    0x89: "\u2030",  # PER MILLE SIGN
    0x8a: "\u0160",  # LATIN CAPITAL LETTER S WITH CARON
    0x8b: "\u2039",  # SINGLE LEFT-POINTING ANGLE QUOTATION MARK
    0x8c: "\u0152",  # LATIN CAPITAL LIGATURE OE
    0x8e: "\u017d",  # LATIN CAPITAL LETTER Z WITH CARON
    0x91: "\u2018",  # LEFT SINGLE QUOTATION MARK
    0x92: "\u2019",  # RIGHT SINGLE QUOTATION MARK
    0x93: "\u201c",  # LEFT DOUBLE QUOTATION MARK
    0x94: "\u201d",  # RIGHT DOUBLE QUOTATION MARK
    0x95: "\u2022",  # BULLET
    0x96: "\u2013",  # EN DASH
    0x97: "\u2014",  # EM DASH
    0x98: "\u02dc",  # SMALL TILDE
    0x99: "\u2122",  # TRADE MARK SIGN
    0x9a: "\u0161",  # LATIN SMALL LETTER S WITH CARON
    0x9b: "\u203a",  # SINGLE RIGHT-POINTING ANGLE QUOTATION MARK
    0x9c: "\u0153",  # LATIN SMALL LIGATURE OE
    0x9e: "\u017e",  # LATIN SMALL LETTER Z WITH CARON
    0x9f: "\u0178",  # LATIN CAPITAL LETTER Y WITH DIAERESIS
}

MAX_CODE_POINT = 0x10FFFF
MAX_REFERENCE_VALUE = 0xFFFFFFFF

_ASCII_WHITESPACE = frozenset((0x09, 0x0A, 0x0C, 0x0D, 0x20))


def is_outside_range(number):
    return number > MAX_CODE_POINT


def is_surrogate(number):
    return 0xD800 <= number <= 0xDFFF


def is_noncharacter(number):
    return 0xFDD0 <= number <= 0xFDEF or (number & 0xFFFE) == 0xFFFE


def is_control(number):
    return number <= 0x1F or 0x7F <= number <= 0x9F


def correct_numeric_reference(number):
    """Map a parsed numeric reference value to the text it represents.

    Args:
        number: non-negative integer parsed from the digit run

    Returns:
        The text for the reference, a single character
    """
    if number == 0x00:
        return REPLACEMENT_CHAR
    if is_outside_range(number):
        return REPLACEMENT_CHAR
    if is_surrogate(number):
        return REPLACEMENT_CHAR
    if number in CONTROL_REPLACEMENTS:
        return CONTROL_REPLACEMENTS[number]
    # Noncharacters, other controls, CR and whitespace are emitted as-is
    return chr(number)


def numeric_reference_error(number):
    """Return the WHATWG parse error code for a numeric value, if any."""
    if number == 0x00:
        return "null-character-reference"
    if is_outside_range(number):
        return "character-reference-outside-unicode-range"
    if is_surrogate(number):
        return "surrogate-character-reference"
    if is_noncharacter(number):
        return "noncharacter-character-reference"
    if number == 0x0D or (is_control(number) and number not in _ASCII_WHITESPACE):
        return "control-character-reference"
    return None
