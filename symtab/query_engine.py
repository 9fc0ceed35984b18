"""
Query engine over a WordTable.

Compound lookups (prefix, ranges, order statistics) built on the ordered
operations of the underlying AVL symbol table.
"""

from typing import List, Optional, Tuple

from symtab.storage import WordTable

_MAX_CHAR = "\U0010ffff"


def prefix_upper_bound(prefix: str) -> Optional[str]:
    """Smallest string above every string that starts with prefix.

    Returns None when no such string exists (prefix is all U+10FFFF).
    """
    stem = prefix.rstrip(_MAX_CHAR)
    if not stem:
        return None
    return stem[:-1] + chr(ord(stem[-1]) + 1)


# ------------------ Query Engine ------------------
class QueryEngine:
    def __init__(self, words: WordTable):
        self.words = words

    def between(self, lo: str, hi: str) -> List[str]:
        return self.words.table.keys(lo, hi)

    def count_between(self, lo: str, hi: str) -> int:
        return self.words.table.size(lo, hi)

    def with_prefix(self, prefix: str) -> List[str]:
        table = self.words.table
        if not prefix:
            return table.keys()
        if table.is_empty():
            return []
        hi = prefix_upper_bound(prefix)
        if hi is None:
            hi = table.max()
        # the bound itself may be stored; it never carries the prefix
        return [w for w in table.keys(prefix, hi) if w.startswith(prefix)]

    def kth(self, k: int) -> str:
        return self.words.table.select(k)

    def neighbors(self, word: str) -> Tuple[Optional[str], Optional[str]]:
        """Closest words strictly below and strictly above word."""
        table = self.words.table
        r = table.rank(word)
        below = table.select(r - 1) if r > 0 else None
        if table.contains(word):
            r += 1
        above = table.select(r) if r < len(table) else None
        return below, above
