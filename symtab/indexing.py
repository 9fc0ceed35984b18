from abc import ABC, abstractmethod
from collections import deque, namedtuple
from typing import Iterable, Any, Iterator, List, Optional, Tuple

from symtab.diagnostics import check


class EmptySymbolTableError(LookupError):
    """Raised when min/max/delete_min/delete_max is called on an empty table."""


NodeInfo = namedtuple("NodeInfo", ["key", "height", "size", "has_left", "has_right", "depth"])

_NO_BOUND = object()


class SymbolTable(ABC):
    """Abstract base class representing an ordered symbol table."""

    @abstractmethod
    def __len__(self) -> int:
        """Return the number of key-value pairs in the table."""
        pass

    def is_empty(self) -> bool:
        """Return True if the table is empty."""
        return len(self) == 0

    @abstractmethod
    def __iter__(self) -> Iterator[Any]:
        """Generate the table's keys in ascending order."""
        pass

    @abstractmethod
    def get(self, key: Any) -> Optional[Any]:
        """Return the value associated with key, or None."""
        pass

    @abstractmethod
    def contains(self, key: Any) -> bool:
        """Return True if the table holds key."""
        pass

    def __contains__(self, key: Any) -> bool:
        return key is not None and self.contains(key)

    def values(self) -> Iterable[Any]:
        """Generate the table's values in key order."""
        for key in self:
            yield self.get(key)

    def items(self) -> Iterable[Tuple[Any, Any]]:
        """Generate (key, value) pairs in key order."""
        for key in self:
            yield key, self.get(key)


class AVLTreeST(SymbolTable):
    """Ordered symbol table backed by an AVL tree.

    Heights follow the convention height(empty) == -1 and height(leaf) == 0.
    Every mutation returns a possibly new subtree root that the caller
    reattaches, so balance is restored level by level on the way back up.
    """

    class _Node:
        """Tree node caching the height and size of its subtree."""
        __slots__ = 'key', 'value', 'height', 'size', 'left', 'right'

        def __init__(self, key, value, height=0, size=1):
            self.key = key
            self.value = value
            self.height = height
            self.size = size
            self.left = None
            self.right = None

    def __init__(self, check_invariants: bool = False):
        self._root = None
        self._check_invariants = check_invariants

    # ------------------ Accessors ------------------
    def __len__(self) -> int:
        return self._size(self._root)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.keys_in_order())

    def __repr__(self) -> str:
        return f"AVLTreeST(size={len(self)}, height={self.height()})"

    def is_empty(self) -> bool:
        return self._root is None

    def size(self, lo: Any = _NO_BOUND, hi: Any = _NO_BOUND) -> int:
        """Return the number of keys, or the number of keys in [lo, hi]."""
        if lo is _NO_BOUND and hi is _NO_BOUND:
            return self._size(self._root)
        self._require_bounds(lo, hi, "size")
        if lo > hi:
            return 0
        if self.contains(hi):
            return self.rank(hi) - self.rank(lo) + 1
        return self.rank(hi) - self.rank(lo)

    def height(self) -> int:
        """Return the height of the tree (-1 if empty, 0 for a single node)."""
        return self._height(self._root)

    def _size(self, node) -> int:
        if node is None:
            return 0
        return node.size

    def _height(self, node) -> int:
        if node is None:
            return -1
        return node.height

    def _update(self, node) -> None:
        """Recompute the cached size and height of node from its children."""
        node.size = 1 + self._size(node.left) + self._size(node.right)
        node.height = 1 + max(self._height(node.left), self._height(node.right))

    # ------------------ Lookup ------------------
    def get(self, key: Any) -> Optional[Any]:
        self._require_key(key, "get")
        node = self._get(self._root, key)
        if node is None:
            return None
        return node.value

    def _get(self, node, key):
        if node is None:
            return None
        if key < node.key:
            return self._get(node.left, key)
        elif key > node.key:
            return self._get(node.right, key)
        return node

    def contains(self, key: Any) -> bool:
        self._require_key(key, "contains")
        return self._get(self._root, key) is not None

    def __getitem__(self, key: Any) -> Any:
        if key is None:
            raise KeyError(key)
        node = self._get(self._root, key)
        if node is None:
            raise KeyError(key)
        return node.value

    # ------------------ Insert / update ------------------
    def put(self, key: Any, value: Any) -> None:
        """Insert key with value, overwriting the value of an existing key."""
        self._require_key(key, "put")
        self._root = self._put(self._root, key, value)
        self._after_mutation()

    def _put(self, node, key, value):
        if node is None:
            return self._Node(key, value)
        if key < node.key:
            node.left = self._put(node.left, key, value)
        elif key > node.key:
            node.right = self._put(node.right, key, value)
        else:
            node.value = value
            return node
        self._update(node)
        return self._balance(node)

    def __setitem__(self, key: Any, value: Any) -> None:
        self.put(key, value)

    # ------------------ Balance & rotation ------------------
    def _balance_factor(self, node) -> int:
        return self._height(node.left) - self._height(node.right)

    def _balance(self, node):
        """Restore the AVL property at node with at most two rotations."""
        if self._balance_factor(node) < -1:
            if self._balance_factor(node.right) > 0:
                node.right = self._rotate_right(node.right)
            node = self._rotate_left(node)
        elif self._balance_factor(node) > 1:
            if self._balance_factor(node.left) < 0:
                node.left = self._rotate_left(node.left)
            node = self._rotate_right(node)
        return node

    def _rotate_right(self, node):
        child = node.left
        node.left = child.right
        child.right = node
        child.size = node.size
        self._update(node)
        child.height = 1 + max(self._height(child.left), self._height(child.right))
        return child

    def _rotate_left(self, node):
        child = node.right
        node.right = child.left
        child.left = node
        child.size = node.size
        self._update(node)
        child.height = 1 + max(self._height(child.left), self._height(child.right))
        return child

    # ------------------ Delete ------------------
    def delete(self, key: Any) -> None:
        """Remove key and its value; does nothing if key is absent."""
        self._require_key(key, "delete")
        if not self.contains(key):
            return
        self._root = self._delete(self._root, key)
        self._after_mutation()

    def _delete(self, node, key):
        if key < node.key:
            node.left = self._delete(node.left, key)
        elif key > node.key:
            node.right = self._delete(node.right, key)
        else:
            if node.left is None:
                return node.right
            elif node.right is None:
                return node.left
            hold = node
            node = self._min(hold.right)
            node.right = self._delete_min(hold.right)
            node.left = hold.left
        self._update(node)
        return self._balance(node)

    def __delitem__(self, key: Any) -> None:
        if key is None or not self.contains(key):
            raise KeyError(key)
        self.delete(key)

    def delete_min(self) -> None:
        """Remove the smallest key and its value."""
        if self.is_empty():
            raise EmptySymbolTableError("called delete_min() with empty symbol table")
        self._root = self._delete_min(self._root)
        self._after_mutation()

    def _delete_min(self, node):
        if node.left is None:
            return node.right
        node.left = self._delete_min(node.left)
        self._update(node)
        return self._balance(node)

    def delete_max(self) -> None:
        """Remove the largest key and its value."""
        if self.is_empty():
            raise EmptySymbolTableError("called delete_max() with empty symbol table")
        self._root = self._delete_max(self._root)
        self._after_mutation()

    def _delete_max(self, node):
        if node.right is None:
            return node.left
        node.right = self._delete_max(node.right)
        self._update(node)
        return self._balance(node)

    # ------------------ Order statistics ------------------
    def min(self) -> Any:
        """Return the smallest key."""
        if self.is_empty():
            raise EmptySymbolTableError("called min() with empty symbol table")
        return self._min(self._root).key

    def _min(self, node):
        if node.left is None:
            return node
        return self._min(node.left)

    def max(self) -> Any:
        """Return the largest key."""
        if self.is_empty():
            raise EmptySymbolTableError("called max() with empty symbol table")
        return self._max(self._root).key

    def _max(self, node):
        if node.right is None:
            return node
        return self._max(node.right)

    def rank(self, key: Any) -> int:
        """Return the number of keys strictly less than key."""
        self._require_key(key, "rank")
        return self._rank(key, self._root)

    def _rank(self, key, node) -> int:
        if node is None:
            return 0
        if key < node.key:
            return self._rank(key, node.left)
        elif key > node.key:
            return 1 + self._size(node.left) + self._rank(key, node.right)
        return self._size(node.left)

    def select(self, k: int) -> Any:
        """Return the key of rank k (the k-th smallest, counting from 0)."""
        if not (0 <= k < len(self)):
            raise IndexError('rank out of bound')
        return self._select(self._root, k).key

    def _select(self, node, k):
        t = self._size(node.left)
        if k < t:
            return self._select(node.left, k)
        elif k > t:
            return self._select(node.right, k - t - 1)
        return node

    def floor(self, key: Any) -> Optional[Any]:
        """Return the largest key less than or equal to key, or None."""
        self._require_key(key, "floor")
        node = self._floor(self._root, key)
        return None if node is None else node.key

    def _floor(self, node, key):
        if node is None:
            return None
        if key == node.key:
            return node
        if key < node.key:
            return self._floor(node.left, key)
        found = self._floor(node.right, key)
        return node if found is None else found

    def ceiling(self, key: Any) -> Optional[Any]:
        """Return the smallest key greater than or equal to key, or None."""
        self._require_key(key, "ceiling")
        node = self._ceiling(self._root, key)
        return None if node is None else node.key

    def _ceiling(self, node, key):
        if node is None:
            return None
        if key == node.key:
            return node
        if key > node.key:
            return self._ceiling(node.right, key)
        found = self._ceiling(node.left, key)
        return node if found is None else found

    # ------------------ Traversal ------------------
    def keys(self, lo: Any = _NO_BOUND, hi: Any = _NO_BOUND) -> List[Any]:
        """Return all keys in order, or the keys k with lo <= k <= hi."""
        if lo is _NO_BOUND and hi is _NO_BOUND:
            return self.keys_in_order()
        self._require_bounds(lo, hi, "keys")
        queue: List[Any] = []
        self._keys(self._root, queue, lo, hi)
        return queue

    def _keys(self, node, queue, lo, hi) -> None:
        if node is None:
            return
        if lo < node.key:
            self._keys(node.left, queue, lo, hi)
        if lo <= node.key <= hi:
            queue.append(node.key)
        if hi > node.key:
            self._keys(node.right, queue, lo, hi)

    def keys_in_order(self) -> List[Any]:
        """Return all keys following an in-order traversal."""
        queue: List[Any] = []
        self._keys_in_order(self._root, queue)
        return queue

    def _keys_in_order(self, node, queue) -> None:
        if node is None:
            return
        self._keys_in_order(node.left, queue)
        queue.append(node.key)
        self._keys_in_order(node.right, queue)

    def keys_level_order(self) -> List[Any]:
        """Return all keys following a level-order (breadth-first) traversal."""
        return [info.key for info in self.walk("levelorder")]

    def walk(self, order: str = "inorder") -> Iterator[NodeInfo]:
        """Generate a NodeInfo per node in the requested traversal order.

        Supported orders are "inorder", "preorder" and "levelorder". This is
        the hook used by the renderers; it exposes no node references.
        """
        if order == "inorder":
            return self._walk_in_order(self._root, 0)
        elif order == "preorder":
            return self._walk_pre_order(self._root, 0)
        elif order == "levelorder":
            return self._walk_level_order()
        raise ValueError(f"unknown traversal order: {order!r}")

    def _info(self, node, depth: int) -> NodeInfo:
        return NodeInfo(node.key, node.height, node.size,
                        node.left is not None, node.right is not None, depth)

    def _walk_in_order(self, node, depth: int) -> Iterator[NodeInfo]:
        if node is None:
            return
        yield from self._walk_in_order(node.left, depth + 1)
        yield self._info(node, depth)
        yield from self._walk_in_order(node.right, depth + 1)

    def _walk_pre_order(self, node, depth: int) -> Iterator[NodeInfo]:
        if node is None:
            return
        yield self._info(node, depth)
        yield from self._walk_pre_order(node.left, depth + 1)
        yield from self._walk_pre_order(node.right, depth + 1)

    def _walk_level_order(self) -> Iterator[NodeInfo]:
        if self._root is None:
            return
        queue = deque([(self._root, 0)])
        while queue:
            node, depth = queue.popleft()
            yield self._info(node, depth)
            if node.left is not None:
                queue.append((node.left, depth + 1))
            if node.right is not None:
                queue.append((node.right, depth + 1))

    # ------------------ Argument checks ------------------
    def _require_key(self, key: Any, op: str) -> None:
        if key is None:
            raise ValueError(f"argument to {op}() is None")

    def _require_bounds(self, lo: Any, hi: Any, op: str) -> None:
        if lo is _NO_BOUND or hi is _NO_BOUND:
            raise ValueError(f"{op}() needs both lo and hi, or neither")
        if lo is None:
            raise ValueError(f"first argument to {op}() is None")
        if hi is None:
            raise ValueError(f"second argument to {op}() is None")

    def _after_mutation(self) -> None:
        if self._check_invariants:
            assert check(self), "AVL tree invariants violated"
