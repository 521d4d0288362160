"""Rank-addressed splay primitives.

Every function here works on a bare subtree root and returns the new root, so
the same helpers serve the whole sequence and a range that has been cut out of
it. Ranks are 1-based, matching the in-order position inside the subtree.
"""

from __future__ import annotations
from collections.abc import Sequence
from typing import Optional

from .node import Node, ONode, size_of


# --- Splaying ---
def rotate(parent: Node, child: Node):
    """Lift child above parent, keeping the in-order sequence intact"""
    grand = parent.parent
    if grand is not None:
        if grand.left is parent:
            grand.left = child
        else:
            grand.right = child

    if parent.left is child:
        parent.left = child.right
        child.right = parent
    else:
        parent.right = child.left
        child.left = parent

    # parent now hangs below child, so it is recomputed first
    parent.update()
    child.update()
    child.parent = grand
    if grand is not None:
        grand.update()


def splay(node: Node) -> Node:
    """Rotate node up until it is the root of its tree, and return it"""
    node.push()
    while node.parent is not None:
        parent = node.parent
        grand = parent.parent
        if grand is None:
            # zig
            rotate(parent, node)
            break

        if (grand.left is parent) == (parent.left is node):
            # zig-zig
            rotate(grand, parent)
            rotate(parent, node)
        else:
            # zig-zag
            rotate(parent, node)
            rotate(grand, node)
        grand.update()
        parent.update()

    node.update()
    return node


def find_by_rank(root: Node, rank: int) -> Node:
    """Walk down to the node at the given rank, pushing tags on the way

    A rank past either end stops at the first or last node.
    """
    node = root
    while True:
        node.push()
        current = size_of(node.left) + 1
        if rank == current:
            return node
        if rank < current and node.left is not None:
            node = node.left
        elif rank > current and node.right is not None:
            rank -= current
            node = node.right
        else:
            return node


def rank_of(node: Node) -> int:
    """Get the 1-based rank of a node within the tree it currently belongs to"""
    path = [node]
    while path[-1].parent is not None:
        path.append(path[-1].parent)

    # Pending reversals above the node decide which side it really sits on
    for ancestor in reversed(path):
        ancestor.push()

    rank = size_of(node.left) + 1
    for child, parent in zip(path, path[1:]):
        if parent.right is child:
            rank += size_of(parent.left) + 1
    return rank


# --- Extract / splice ---
def split(root: ONode, rank: int) -> tuple[ONode, ONode]:
    """Split into the first rank - 1 elements and the rest"""
    if root is None:
        return None, None

    root = splay(find_by_rank(root, rank))
    if root.size < rank:
        # the cut falls after the last node
        right = root.right
        root.right = None
        root.update()
        if right is not None:
            right.detach()
            right.update()
        return root, right

    left = root.left
    root.left = None
    root.update()
    if left is not None:
        left.detach()
        left.update()
    return left, root


def merge(left: ONode, right: ONode) -> ONode:
    """Splice two trees together, left's sequence followed by right's"""
    if right is None:
        return left
    if left is None:
        return right

    left = splay(find_by_rank(left, left.size))
    left.right = right
    left.update()
    return left


def extract(root: ONode, first: int, last: int) -> tuple[ONode, ONode, ONode]:
    """Cut out ranks first..last (inclusive) as a standalone tree

    Returns:
        ONode: The elements before the range
        ONode: The range itself
        ONode: The elements after the range
    """
    before, rest = split(root, first)
    middle, after = split(rest, last - first + 2)
    return before, middle, after


def reattach(before: ONode, middle: ONode, after: ONode) -> ONode:
    """Undo an extract"""
    return merge(merge(before, middle), after)


def swap_ranks(root: Node, first: int, second: int) -> Node:
    """Exchange the single elements at two distinct ranks"""
    if first > second:
        first, second = second, first
    head, lo, rest = extract(root, first, first)
    between, hi, tail = extract(rest, second - first, second - first)
    ret = merge(merge(merge(merge(head, hi), between), lo), tail)
    assert ret is not None
    return ret


# --- Bulk helpers ---
def build_balanced(values: Sequence[int]) -> ONode:
    """Build a perfectly balanced tree."""
    if not values:
        return None

    def _build(lo: int, hi: int) -> ONode:
        if lo >= hi:
            return None
        mid = (lo + hi) // 2
        return Node(values[mid], _build(lo, mid), _build(mid + 1, hi))

    return _build(0, len(values))


def flatten(root: ONode) -> list[int]:
    """Collect all values under a node, in order."""
    ret: list[int] = []
    stack: list[Node] = []
    node: Optional[Node] = root
    while stack or node is not None:
        while node is not None:
            node.push()
            stack.append(node)
            node = node.left
        node = stack.pop()
        ret.append(node.value)
        node = node.right
    return ret
