from __future__ import annotations
from enum import Enum
from typing import NamedTuple, Optional


class Monotone(Enum):
    """The ordering guaranteed for the in-order values of a subtree"""

    NON_INCREASING = "non-increasing"
    NON_DECREASING = "non-decreasing"
    CONSTANT = "constant"
    NONE = "none"

    def flipped(self) -> Monotone:
        """The ordering of the same values read back to front"""
        if self is Monotone.NON_INCREASING:
            return Monotone.NON_DECREASING
        if self is Monotone.NON_DECREASING:
            return Monotone.NON_INCREASING
        return self

    def satisfies(self, run: Monotone) -> bool:
        """Whether a subtree tagged with self is also a run of the given kind"""
        if self is run or self is Monotone.CONSTANT:
            return True
        return run is Monotone.NONE


class Tag(NamedTuple):
    """A pending assign or add, stamped with the tree clock when it was issued"""

    time: int
    value: int


def fold_add(tag: Optional[Tag], add: Tag) -> Tag:
    """Compose an older pending tag with a newer add"""
    if tag is None:
        return add
    return Tag(add.time, tag.value + add.value)


class Node:
    __slots__: tuple[str, ...] = (
        "value",
        "size",
        "sum",
        "min_value",
        "max_value",
        "first_value",
        "last_value",
        "monotone",
        "reversed",
        "assign_tag",
        "add_tag",
        "left",
        "right",
        "parent",
    )

    def __init__(
        self,
        value: int,
        left: ONode = None,
        right: ONode = None,
    ):
        self.value: int = value
        self.size: int = 1
        self.sum: int = value
        self.min_value: int = value
        self.max_value: int = value
        self.first_value: int = value
        self.last_value: int = value
        self.monotone: Monotone = Monotone.CONSTANT
        self.reversed: bool = False
        self.assign_tag: Optional[Tag] = None
        self.add_tag: Optional[Tag] = None
        self.left: ONode = left
        self.right: ONode = right
        self.parent: ONode = None
        if left is not None or right is not None:
            self.update()

    def __repr__(self):
        return f"<Node v: {self.value} size: {self.size} sum: {self.sum}>"

    # ------------------------------------------------------------
    # Lazy tags
    # ------------------------------------------------------------

    def push(self):
        """Apply this node's pending tags to itself and hand them to its children

        Reverse goes first, then assign (which absorbs or discards the add),
        then add when no assign was pending.
        """
        if self.reversed:
            self._push_reverse()
        if self.assign_tag is not None:
            self._push_assign()
        elif self.add_tag is not None:
            self._push_add()

    def _push_reverse(self):
        self.first_value, self.last_value = self.last_value, self.first_value
        self.left, self.right = self.right, self.left
        self.monotone = self.monotone.flipped()
        if self.left is not None:
            self.left.reversed = not self.left.reversed
        if self.right is not None:
            self.right.reversed = not self.right.reversed
        self.reversed = False

    def _push_assign(self):
        tag = self.assign_tag
        add = self.add_tag
        if add is not None and add.time > tag.time:
            # assign x, then add d  ==  assign x + d
            tag = fold_add(tag, add)
        self.add_tag = None

        value = tag.value
        self.value = value
        self.sum = value * self.size
        self.first_value = value
        self.last_value = value
        self.min_value = value
        self.max_value = value
        self.monotone = Monotone.CONSTANT

        if self.left is not None:
            self.left.assign_tag = tag
        if self.right is not None:
            self.right.assign_tag = tag
        self.assign_tag = None

    def _push_add(self):
        tag = self.add_tag
        delta = tag.value
        self.value += delta
        self.sum += delta * self.size
        self.first_value += delta
        self.last_value += delta
        self.min_value += delta
        self.max_value += delta

        for child in (self.left, self.right):
            if child is None:
                continue
            if child.assign_tag is not None:
                child.assign_tag = fold_add(child.assign_tag, tag)
            else:
                child.add_tag = fold_add(child.add_tag, tag)
        self.add_tag = None

    # ------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------

    def update(self):
        """Recompute the subtree aggregates from the (pushed) children"""
        left = self.left
        right = self.right
        value = self.value

        size = 1
        total = value
        lo = value
        hi = value
        first = value
        last = value

        if left is not None:
            left.parent = self
            left.push()
            size += left.size
            total += left.sum
            lo = min(lo, left.min_value)
            hi = max(hi, left.max_value)
            first = left.first_value
        if right is not None:
            right.parent = self
            right.push()
            size += right.size
            total += right.sum
            lo = min(lo, right.min_value)
            hi = max(hi, right.max_value)
            last = right.last_value

        self.size = size
        self.sum = total
        self.min_value = lo
        self.max_value = hi
        self.first_value = first
        self.last_value = last
        self.monotone = _classify(self)

    def detach(self):
        """Forget the parent back reference, making this the root of its own tree"""
        self.parent = None


ONode = Optional[Node]


def size_of(node: ONode) -> int:
    return 0 if node is None else node.size


def _is_run(node: ONode, run: Monotone) -> bool:
    return node is None or node.monotone.satisfies(run)


def _classify(node: Node) -> Monotone:
    """Work out the monotone tag of a node from its children and its own value"""
    left = node.left
    right = node.right
    value = node.value

    if _is_run(left, Monotone.CONSTANT) and _is_run(right, Monotone.CONSTANT):
        if (left is None or left.min_value == value) and (
            right is None or right.min_value == value
        ):
            return Monotone.CONSTANT

    if _is_run(left, Monotone.NON_DECREASING) and _is_run(
        right, Monotone.NON_DECREASING
    ):
        if (left is None or left.max_value <= value) and (
            right is None or right.min_value >= value
        ):
            return Monotone.NON_DECREASING

    if _is_run(left, Monotone.NON_INCREASING) and _is_run(
        right, Monotone.NON_INCREASING
    ):
        if (left is None or left.min_value >= value) and (
            right is None or right.max_value <= value
        ):
            return Monotone.NON_INCREASING

    return Monotone.NONE
