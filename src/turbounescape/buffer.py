PEEK_MATCH_ERROR = "next() did not match previous peek()"


class ByteCursor:
    """Forward-only cursor over a byte string with one byte of lookahead."""

    __slots__ = ("_data", "_length", "pos")

    def __init__(self, data):
        self._data = data
        self._length = len(data)
        self.pos = 0

    def is_empty(self):
        return self.pos >= self._length

    def peek(self):
        if self.pos >= self._length:
            return None
        return self._data[self.pos]

    def next(self):
        if self.pos >= self._length:
            return None
        byte = self._data[self.pos]
        self.pos += 1
        return byte

    def expect(self, byte):
        """Consume the byte a previous peek() returned."""
        consumed = self.next()
        assert consumed == byte, PEEK_MATCH_ERROR
        return consumed

    def consume_while(self, byte_set):
        """Consume the maximal run of bytes in byte_set and return it."""
        data = self._data
        start = pos = self.pos
        length = self._length
        while pos < length and byte_set.contains(data[pos]):
            pos += 1
        self.pos = pos
        return data[start:pos]

    def pop_until(self, byte):
        """Consume everything before the next occurrence of byte (or to the end)."""
        start = self.pos
        index = self._data.find(byte, start)
        if index == -1:
            index = self._length
        self.pos = index
        return self._data[start:index]
