from __future__ import annotations
from collections.abc import Iterable, Iterator
from typing import Callable, TypeVar, Union, overload

import numpy as np

from . import permutation
from .errors import IndexOutOfRange, RangeError
from .node import Node, ONode, Tag, size_of
from .splay import (
    build_balanced,
    extract,
    find_by_rank,
    flatten,
    merge,
    reattach,
    splay,
    split,
)

T = TypeVar("T")


# --- Main Tree Class ---
class SplayTree:
    """Mutable integer sequence with lazy range updates and range permutations.

    Positions are 0-based and ranges are inclusive on both ends. Reads splay
    too, so no call is safe to run concurrently with another on the same tree.
    """

    def __init__(self, values: Iterable[int] = ()):
        self.root: ONode = build_balanced(list(values))
        self._clock: int = 0

    @classmethod
    def filled(cls, size: int, value: int) -> SplayTree:
        """Build a tree holding size copies of value"""
        return cls([value] * size)

    # --- Public API ---
    def __len__(self) -> int:
        return size_of(self.root)

    def size(self) -> int:
        return size_of(self.root)

    @property
    def clock(self) -> int:
        """The number of range mutations issued so far"""
        return self._clock

    def __iter__(self) -> Iterator[int]:
        return iter(self.to_list())

    def __repr__(self):
        return f"SplayTree({self.to_list()!r})"

    @overload
    def __getitem__(self, key: int) -> int: ...

    @overload
    def __getitem__(self, key: slice) -> list[int]: ...

    def __getitem__(self, key: Union[int, slice]) -> Union[int, list[int]]:
        if isinstance(key, slice):
            start, stop, step = key.indices(len(self))
            if step != 1:
                raise ValueError("Slice step must be 1")
            if start >= stop:
                return []
            return self._with_range(start, stop - 1, lambda middle: (middle, flatten(middle)))

        if key < 0:
            key += len(self)
        return self.get(key)

    def __setitem__(self, key: int, value: int) -> None:
        if key < 0:
            key += len(self)
        self._check_index(key)
        self.assign(key, key, value)

    def __delitem__(self, key: int) -> None:
        if key < 0:
            key += len(self)
        self.remove(key)

    # ------------------------------------------------------------
    # Point operations
    # ------------------------------------------------------------

    def get(self, index: int) -> int:
        """Get the element at index"""
        self._check_index(index)
        self.root = splay(find_by_rank(self.root, index + 1))
        return self.root.value

    def insert(self, index: int, value: int):
        """Insert value so that it ends up at index"""
        self._check_index(index, allow_end=True)
        left, right = split(self.root, index + 1)
        self.root = Node(value, left, right)

    def append(self, value: int):
        self.insert(len(self), value)

    def remove(self, index: int):
        """Delete the element at index"""
        self._check_index(index)
        node = splay(find_by_rank(self.root, index + 1))
        left, right = node.left, node.right
        node.left = node.right = None
        if left is not None:
            left.detach()
        if right is not None:
            right.detach()
        self.root = merge(left, right)

    # ------------------------------------------------------------
    # Range operations
    # ------------------------------------------------------------

    def range_sum(self, first: int, last: int) -> int:
        """Sum of the values in [first, last]"""
        return self._with_range(first, last, lambda middle: (middle, middle.sum))

    def range_min(self, first: int, last: int) -> int:
        return self._with_range(first, last, lambda middle: (middle, middle.min_value))

    def range_max(self, first: int, last: int) -> int:
        return self._with_range(first, last, lambda middle: (middle, middle.max_value))

    def assign(self, first: int, last: int, value: int):
        """Overwrite every value in [first, last] with value"""

        def _assign(middle: Node) -> tuple[Node, None]:
            middle.assign_tag = Tag(self._tick(), value)
            return middle, None

        self._with_range(first, last, _assign)

    def add(self, first: int, last: int, value: int):
        """Add value to every value in [first, last]"""

        def _add(middle: Node) -> tuple[Node, None]:
            middle.add_tag = Tag(self._tick(), value)
            return middle, None

        self._with_range(first, last, _add)

    def reverse(self, first: int, last: int):
        """Reverse the order of the values in [first, last]"""

        def _reverse(middle: Node) -> tuple[Node, None]:
            self._tick()
            middle.reversed = not middle.reversed
            return middle, None

        self._with_range(first, last, _reverse)

    def next_permutation(self, first: int, last: int):
        """Rearrange [first, last] into its lexicographically next permutation

        The last permutation wraps around to the first one.
        """

        def _next(middle: Node) -> tuple[Node, None]:
            self._tick()
            return permutation.next_permutation(middle), None

        self._with_range(first, last, _next)

    def prev_permutation(self, first: int, last: int):
        """Rearrange [first, last] into its lexicographically previous permutation

        The first permutation wraps around to the last one.
        """

        def _prev(middle: Node) -> tuple[Node, None]:
            self._tick()
            return permutation.prev_permutation(middle), None

        self._with_range(first, last, _prev)

    # ------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------

    def to_list(self) -> list[int]:
        """Return all values as a flattened list"""
        return flatten(self.root)

    def to_array(self) -> np.ndarray:
        """Return all values as an int64 numpy array"""
        return np.array(self.to_list(), dtype=np.int64)

    # ------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------

    def _tick(self) -> int:
        self._clock += 1
        return self._clock

    def _check_index(self, index: int, allow_end: bool = False):
        limit = len(self) + 1 if allow_end else len(self)
        if index < 0 or index >= limit:
            raise IndexOutOfRange(index, len(self))

    def _with_range(
        self, first: int, last: int, operation: Callable[[Node], tuple[Node, T]]
    ) -> T:
        """Cut [first, last] out of the tree, run operation on it, and splice it back

        The operation gets the pushed root of the isolated range and returns
        the (possibly new) root along with its result.
        """
        size = len(self)
        if first > last or first < 0 or last >= size:
            raise RangeError(first, last, size)

        before, middle, after = extract(self.root, first + 1, last + 1)
        assert middle is not None
        middle.push()
        middle, result = operation(middle)
        self.root = reattach(before, middle, after)
        return result
