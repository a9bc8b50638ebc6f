class SmallByteSet:
    __slots__ = ("_mask",)

    def __init__(self, chars):
        mask = 0
        for c in chars:
            code = c if isinstance(c, int) else ord(c)
            if code >= 128:
                raise ValueError("SmallByteSet only supports ASCII")
            mask |= 1 << code
        self._mask = mask

    def contains(self, byte):
        if byte is None or byte >= 128:
            return False
        return (self._mask >> byte) & 1 == 1

    __contains__ = contains


DECIMAL_DIGITS = SmallByteSet("0123456789")
HEX_DIGITS = SmallByteSet("0123456789abcdefABCDEF")
ALPHANUMERIC = SmallByteSet("0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
