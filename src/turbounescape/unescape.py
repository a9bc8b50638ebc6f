"""HTML5 character reference decoding.

Implements the character reference states of the WHATWG tokenizer
(§13.2.5.72 - §13.2.5.80) over raw bytes: named references (&amp;, &notin;),
decimal references (&#60;) and hexadecimal references (&#x3C;).

Named references without a trailing semicolon are expanded by longest prefix
in general text ("&notit" -> "¬it") but only on an exact match in attribute
values, where "&not=" and "&notit" are left alone.
"""

from .buffer import ByteCursor
from .context import Context
from .entities import (
    ENTITIES,
    ENTITY_MAX_LENGTH,
    ENTITY_MIN_LENGTH,
    ENTITY_TRIE,
    MAX_REFERENCE_VALUE,
    REPLACEMENT_CHAR,
    correct_numeric_reference,
    numeric_reference_error,
)
from .errors import ParseError
from .smallset import ALPHANUMERIC, DECIMAL_DIGITS, HEX_DIGITS

_AMPERSAND = 0x26
_NUMBER_SIGN = 0x23
_SEMICOLON = 0x3B
_EQUALS = 0x3D
_LOWER_X = 0x78
_UPPER_X = 0x58

_REPLACEMENT_BYTES = REPLACEMENT_CHAR.encode("utf-8")

# Significant digits that still fit in an unsigned 32-bit value
_MAX_HEX_DIGITS = 8
_MAX_DECIMAL_DIGITS = 10


class UnescaperOpts:
    __slots__ = ("collect_errors", "debug")

    def __init__(self, collect_errors=False, debug=False):
        self.collect_errors = bool(collect_errors)
        self.debug = bool(debug)


class Unescaper:
    """Single-pass character reference decoder.

    One instance decodes one input at a time; ``errors`` holds the parse
    errors of the most recent ``decode`` call when collection is enabled.
    """

    __slots__ = ("errors", "opts", "_reference_start")

    def __init__(self, opts=None):
        self.opts = opts or UnescaperOpts()
        self.errors = []
        self._reference_start = 0

    def decode(self, data, context=Context.GENERAL):
        data = _as_bytes(data)
        self.errors = []
        if _AMPERSAND not in data:
            return data.decode("utf-8", "replace")

        cursor = ByteCursor(data)
        buffer = bytearray()
        while not cursor.is_empty():
            buffer += cursor.pop_until(_AMPERSAND)
            if cursor.next() == _AMPERSAND:
                self._reference_start = cursor.pos - 1
                buffer += self._match_entity(cursor, context)

        return buffer.decode("utf-8", "replace")

    def debug(self, message):
        if self.opts.debug:
            print(f"Unescaper: {message}")

    def _emit_error(self, code):
        if self.opts.collect_errors:
            self.errors.append(ParseError(code, offset=self._reference_start))

    def _match_entity(self, cursor, context):
        if cursor.peek() == _NUMBER_SIGN:
            return self._match_numeric_entity(cursor)

        # Longest possible candidate, including & and any trailing ;
        candidate = bytearray(b"&")
        candidate += cursor.consume_while(ALPHANUMERIC)

        following = cursor.peek()
        if following == _SEMICOLON:
            candidate.append(cursor.expect(_SEMICOLON))
        elif following == _EQUALS and context == Context.ATTRIBUTE:
            # The name cannot end in an alphanumeric here, they were all consumed above
            if self.opts.debug:
                self.debug(f"{bytes(candidate)!r} followed by '=' in attribute, left as-is")
            return candidate

        if len(candidate) < ENTITY_MIN_LENGTH:
            return candidate

        if context == Context.ATTRIBUTE:
            # Attribute values only expand a name that is a whole entity
            expansion = ENTITIES.get(bytes(candidate))
            if expansion is not None:
                self._named_match(candidate, candidate, expansion)
                return expansion
        else:
            try:
                name, expansion = ENTITY_TRIE.longest_prefix_item(candidate, ENTITY_MAX_LENGTH)
            except KeyError:
                pass
            else:
                self._named_match(candidate, name, expansion)
                if len(name) < len(candidate):
                    return expansion + candidate[len(name):]
                return expansion

        if candidate[-1] == _SEMICOLON and len(candidate) > 2:
            self._emit_error("unknown-named-character-reference")
        if self.opts.debug:
            self.debug(f"{bytes(candidate)!r} is not a known reference")
        return candidate

    def _named_match(self, candidate, name, expansion):
        if name[-1] != _SEMICOLON:
            self._emit_error("missing-semicolon-after-character-reference")
        if self.opts.debug:
            self.debug(f"{bytes(candidate)!r} matched {bytes(name)!r} -> {expansion!r}")

    def _match_numeric_entity(self, cursor):
        best_expansion = bytearray(b"&")
        best_expansion.append(cursor.expect(_NUMBER_SIGN))

        marker = cursor.peek()
        if marker is None:
            self._emit_error("absence-of-digits-in-numeric-character-reference")
            return best_expansion

        if marker == _LOWER_X or marker == _UPPER_X:
            best_expansion.append(cursor.expect(marker))
            digits = cursor.consume_while(HEX_DIGITS)
            number = _parse_number(digits, 16, _MAX_HEX_DIGITS)
        else:
            digits = cursor.consume_while(DECIMAL_DIGITS)
            number = _parse_number(digits, 10, _MAX_DECIMAL_DIGITS)
        best_expansion += digits

        if cursor.peek() == _SEMICOLON:
            best_expansion.append(cursor.expect(_SEMICOLON))
        elif digits:
            self._emit_error("missing-semicolon-after-character-reference")

        if not digits:
            # &#; &#x; &#a0; and friends
            self._emit_error("absence-of-digits-in-numeric-character-reference")
            return best_expansion

        if number is None:
            self._emit_error("character-reference-outside-unicode-range")
            if self.opts.debug:
                self.debug(f"{bytes(best_expansion)!r} is too large")
            return _REPLACEMENT_BYTES

        error = numeric_reference_error(number)
        if error is not None:
            self._emit_error(error)

        expansion = correct_numeric_reference(number)
        if self.opts.debug:
            self.debug(f"{bytes(best_expansion)!r} -> U+{ord(expansion):04X}")
        return expansion.encode("utf-8")


def _parse_number(digits, base, max_digits):
    """Parse a digit run, returning None when it overflows 32 bits."""
    significant = digits.lstrip(b"0")
    if len(significant) > max_digits:
        return None
    number = int(significant or b"0", base)
    if number > MAX_REFERENCE_VALUE:
        return None
    return number


def _as_bytes(data):
    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        return data.encode("utf-8", "surrogatepass")
    return bytes(data)


def decode(data, context=Context.GENERAL, *, errors=None):
    """Expand every character reference in data.

    Args:
        data: bytes (or str, encoded as UTF-8) holding text or an attribute value
        context: Context.GENERAL for text, Context.ATTRIBUTE for attribute values
        errors: optional list that receives a ParseError per problem found

    Returns:
        The decoded text. Never raises for any input.
    """
    unescaper = Unescaper(UnescaperOpts(collect_errors=errors is not None))
    result = unescaper.decode(data, context)
    if errors is not None:
        errors.extend(unescaper.errors)
    return result


def decode_general(data):
    """Expand character references in text outside of an attribute."""
    return decode(data, Context.GENERAL)


def decode_attribute(data):
    """Expand character references in an attribute value."""
    return decode(data, Context.ATTRIBUTE)
