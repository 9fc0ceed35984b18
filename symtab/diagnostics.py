"""
Debug-only consistency checks for AVLTreeST.

Each check walks the whole tree and recomputes its property without trusting
the cached height/size fields, so a stale cache shows up as a failure.
These are meant for tests and for AVLTreeST(check_invariants=True); nothing
in normal control flow depends on them.
"""

from typing import Any, Optional


def _root(st):
    return st._root


def _measure_height(node) -> int:
    if node is None:
        return -1
    return 1 + max(_measure_height(node.left), _measure_height(node.right))


def _is_bst(node, lo: Optional[Any], hi: Optional[Any]) -> bool:
    if node is None:
        return True
    if lo is not None and not (node.key > lo):
        return False
    if hi is not None and not (node.key < hi):
        return False
    return _is_bst(node.left, lo, node.key) and _is_bst(node.right, node.key, hi)


def _avl_height(node) -> Optional[int]:
    """Return the measured height of node, or None if some subtree is unbalanced."""
    if node is None:
        return -1
    left = _avl_height(node.left)
    if left is None:
        return None
    right = _avl_height(node.right)
    if right is None:
        return None
    if abs(left - right) > 1:
        return None
    return 1 + max(left, right)


def _count(node) -> Optional[int]:
    if node is None:
        return 0
    left = _count(node.left)
    right = _count(node.right)
    if left is None or right is None:
        return None
    if node.size != 1 + left + right:
        return None
    return node.size


def is_bst(st) -> bool:
    """True if every key is strictly between the keys bounding its subtree."""
    return _is_bst(_root(st), None, None)


def is_avl(st) -> bool:
    """True if subtree heights differ by at most one at every node."""
    return _avl_height(_root(st)) is not None


def is_size_consistent(st) -> bool:
    """True if every cached size equals 1 + size(left) + size(right)."""
    return _count(_root(st)) is not None


def heights_consistent(st) -> bool:
    """True if every cached height equals the measured height of its subtree."""
    stack = [_root(st)]
    while stack:
        node = stack.pop()
        if node is None:
            continue
        if node.height != _measure_height(node):
            return False
        stack.append(node.left)
        stack.append(node.right)
    return True


def check(st) -> bool:
    """Run every check, printing one line per violated invariant."""
    bst = is_bst(st)
    avl = is_avl(st)
    sized = is_size_consistent(st)
    if not bst:
        print("Symmetric order not consistent")
    if not avl:
        print("AVL property not consistent")
    if not sized:
        print("Subtree counts not consistent")
    return bst and avl and sized
