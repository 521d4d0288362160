"""Next/previous permutation of a detached range.

The suffix that is already in its last (or first) arrangement is measured with
the monotone tags, so whole sorted subtrees are skipped instead of being walked
element by element. Inside that suffix the values are ordered by position,
which lets the swap partner be found by a plain value-directed descent.
"""

from __future__ import annotations
import operator
from typing import Callable, Optional

from .node import Monotone, Node
from .splay import find_by_rank, merge, rank_of, splay, split, swap_ranks

Compare = Callable[[int, int], bool]


def _extends(run: Monotone, value: int, front: Optional[int]) -> bool:
    """Can value sit directly before front in a run of the given kind"""
    if front is None:
        return True
    if run is Monotone.NON_INCREASING:
        return value >= front
    return value <= front


def monotone_suffix(root: Node, run: Monotone) -> int:
    """Length of the longest suffix of the subtree that forms a run

    Walks the tree back to front. A subtree whose tag already guarantees the
    run and whose last value continues it is taken whole.
    """
    count = 0
    front: Optional[int] = None  # leftmost value counted so far
    stack: list[Node] = []
    node: Optional[Node] = root

    while True:
        while node is not None:
            node.push()
            if node.monotone.satisfies(run) and _extends(run, node.last_value, front):
                count += node.size
                front = node.first_value
                node = None
                break
            stack.append(node)
            node = node.right

        if not stack:
            return count
        node = stack.pop()
        if not _extends(run, node.value, front):
            return count
        count += 1
        front = node.value
        node = node.left


def closest(root: Optional[Node], target: int, better: Compare) -> Optional[Node]:
    """Find the rightmost node whose value is better than target

    Only valid on a monotone subtree: every node that passes ``better`` sits to
    the left of every node that fails it.
    """
    best: Optional[Node] = None
    node = root
    while node is not None:
        node.push()
        if better(node.value, target):
            best = node
            node = node.right
        else:
            node = node.left
    return best


def _reverse_from(root: Node, rank: int) -> Node:
    """Reverse everything from rank to the end"""
    head, tail = split(root, rank)
    if tail is not None:
        tail.push()
        tail.reversed = True
    ret = merge(head, tail)
    assert ret is not None
    return ret


def _step(root: Node, run: Monotone, better: Compare) -> Node:
    length = root.size
    if length == 1:
        return root

    suffix = monotone_suffix(root, run)
    if suffix >= length:
        # Already the last arrangement, wrap around to the first
        root.push()
        root.reversed = True
        return root

    pivot = length - suffix
    root = splay(find_by_rank(root, pivot))
    pivot_value = root.value

    head, tail = split(root, pivot + 1)
    partner = closest(tail, pivot_value, better)
    assert partner is not None, "a non-maximal suffix always has a partner"
    root = merge(head, tail)
    assert root is not None

    root = swap_ranks(root, pivot, rank_of(partner))
    return _reverse_from(root, pivot + 1)


def next_permutation(root: Node) -> Node:
    """Rearrange the subtree into the lexicographically next permutation"""
    return _step(root, Monotone.NON_INCREASING, operator.gt)


def prev_permutation(root: Node) -> Node:
    """Rearrange the subtree into the lexicographically previous permutation"""
    return _step(root, Monotone.NON_DECREASING, operator.lt)
