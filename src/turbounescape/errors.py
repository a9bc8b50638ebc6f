class ParseError:
    """A WHATWG parse error observed while decoding a character reference."""

    __slots__ = ("code", "offset")

    def __init__(self, code, offset=None):
        self.code = code
        self.offset = offset

    def __repr__(self):
        if self.offset is not None:
            return f"ParseError({self.code!r}, offset={self.offset})"
        return f"ParseError({self.code!r})"

    def __str__(self):
        if self.offset is not None:
            return f"({self.offset}): {self.code}"
        return self.code

    def __eq__(self, other):
        if not isinstance(other, ParseError):
            return NotImplemented
        return self.code == other.code and self.offset == other.offset

    __hash__ = None  # Unhashable since we define __eq__
