"""Byte trie for longest-prefix matching of named character references.

Keys are the raw reference bytes, ampersand included (``b"&times"``,
``b"&times;"``, ``b"&timesb;"``). Walking a candidate through the trie visits
every shorter key on the way, so the longest key that prefixes the candidate
is found in a single pass without re-reading any byte.
"""


class TrieNode:
    """Single node in the trie tree."""
    __slots__ = ("children", "value", "is_terminal")

    def __init__(self):
        self.children = {}  # byte -> TrieNode
        self.value = None  # Expansion bytes (or None if non-terminal)
        self.is_terminal = False


class Trie:
    """Trie keyed by byte strings.

    Usage:
        trie = Trie({b"&not": b"\\xc2\\xac", b"&notin;": b"\\xe2\\x88\\x89"})

        trie.longest_prefix_item(b"&notit;")
        # Returns (b"&not", b"\\xc2\\xac")
    """

    __slots__ = ("root", "max_depth")

    def __init__(self, entities):
        """Build trie from a name -> expansion mapping.

        Args:
            entities: dict mapping reference bytes to expansion bytes
        """
        self.root = TrieNode()
        self.max_depth = 0
        for name, value in entities.items():
            self._insert(name, value)

    def _insert(self, name, value):
        node = self.root
        children = node.children
        for byte in name:
            if byte not in children:
                children[byte] = TrieNode()
            node = children[byte]
            children = node.children
        node.is_terminal = True
        node.value = value
        if len(name) > self.max_depth:
            self.max_depth = len(name)

    def longest_prefix_item(self, text, limit=None):
        """Find the longest key that is a prefix of text.

        Args:
            text: candidate bytes, starting with ``&``
            limit: optional upper bound on the key length to consider

        Raises:
            KeyError: if no key matches any prefix of text

        Returns:
            tuple: (matched key bytes, expansion bytes)
        """
        node = self.root
        longest_match_len = 0
        longest_value = None
        children = node.children
        if limit is not None:
            text = text[:limit]

        for i, byte in enumerate(text):
            if byte not in children:
                break
            node = children[byte]
            if node.is_terminal:
                longest_match_len = i + 1
                longest_value = node.value
            children = node.children

        if longest_match_len == 0:
            raise KeyError(text)

        return bytes(text[:longest_match_len]), longest_value

    def __contains__(self, name):
        node = self._find(name)
        return node is not None and node.is_terminal

    def __getitem__(self, name):
        node = self._find(name)
        if node is None or not node.is_terminal:
            raise KeyError(name)
        return node.value

    def _find(self, name):
        node = self.root
        for byte in name:
            node = node.children.get(byte)
            if node is None:
                return None
        return node
