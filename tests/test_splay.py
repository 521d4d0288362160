"""Tests for the rank-addressed splay and extract/splice helpers."""

import pytest
from seqsplay.node import Node
from seqsplay.splay import (
    build_balanced,
    extract,
    find_by_rank,
    flatten,
    merge,
    rank_of,
    reattach,
    rotate,
    splay,
    split,
    swap_ranks,
)

VALUES = [10, 20, 30, 40, 50, 60, 70]


@pytest.fixture
def root():
    return build_balanced(VALUES)


def _depth(node):
    depth = 0
    while node.parent is not None:
        node = node.parent
        depth += 1
    return depth


class TestBuild:
    """Test building and flattening trees."""

    def test_empty(self):
        assert build_balanced([]) is None
        assert flatten(None) == []

    def test_round_trip(self, root):
        assert flatten(root) == VALUES
        assert root.size == len(VALUES)
        assert root.sum == sum(VALUES)

    def test_balanced(self):
        root = build_balanced(list(range(127)))
        deepest = max(_depth(find_by_rank(root, r)) for r in range(1, 128))
        assert deepest == 6

    def test_flatten_applies_pending_reverse(self, root):
        root.reversed = True
        assert flatten(root) == VALUES[::-1]


class TestRotateAndSplay:
    """Test rotation and splaying."""

    def test_rotate_keeps_order(self, root):
        child = root.left
        rotate(root, child)
        assert child.parent is None
        assert child.right is root
        assert root.parent is child
        assert flatten(child) == VALUES
        assert child.size == len(VALUES)

    @pytest.mark.parametrize("rank", range(1, len(VALUES) + 1))
    def test_splay_to_root(self, root, rank):
        node = splay(find_by_rank(root, rank))
        assert node.parent is None
        assert node.value == VALUES[rank - 1]
        assert node.size == len(VALUES)
        assert node.sum == sum(VALUES)
        assert flatten(node) == VALUES

    def test_splay_deep_chain(self):
        """A degenerate left spine is splayed without recursion"""
        root = Node(0)
        for i in range(1, 3000):
            root = Node(i, root, None)
        node = splay(find_by_rank(root, 1))
        assert node.value == 0
        assert node.parent is None
        assert flatten(node) == list(range(3000))


class TestFindAndRank:
    """Test finding a node by rank and working out the rank of a node."""

    @pytest.mark.parametrize("rank", range(1, len(VALUES) + 1))
    def test_find_by_rank(self, root, rank):
        assert find_by_rank(root, rank).value == VALUES[rank - 1]

    def test_find_clamps(self, root):
        assert find_by_rank(root, 0).value == VALUES[0]
        assert find_by_rank(root, 100).value == VALUES[-1]

    @pytest.mark.parametrize("rank", range(1, len(VALUES) + 1))
    def test_rank_of(self, root, rank):
        node = find_by_rank(root, rank)
        assert rank_of(node) == rank

    def test_rank_of_through_pending_reverse(self, root):
        # The node is looked up first, then a reverse lands above it
        node = find_by_rank(root, 2)
        root.reversed = True
        assert rank_of(node) == len(VALUES) - 1


class TestSplitMerge:
    """Test the extract/splice protocol."""

    def test_split_middle(self, root):
        left, right = split(root, 3)
        assert flatten(left) == VALUES[:2]
        assert flatten(right) == VALUES[2:]
        assert left.parent is None
        assert right.parent is None

    def test_split_ends(self, root):
        left, right = split(root, 1)
        assert left is None
        assert flatten(right) == VALUES

        root = build_balanced(VALUES)
        left, right = split(root, len(VALUES) + 1)
        assert flatten(left) == VALUES
        assert right is None

    def test_split_empty(self):
        assert split(None, 1) == (None, None)

    def test_merge(self):
        left = build_balanced([1, 2, 3])
        right = build_balanced([4, 5])
        merged = merge(left, right)
        assert flatten(merged) == [1, 2, 3, 4, 5]
        assert merged.size == 5
        assert merged.sum == 15

    def test_merge_with_empty(self):
        tree = build_balanced([1, 2])
        assert merge(tree, None) is tree
        assert merge(None, tree) is tree
        assert merge(None, None) is None

    def test_extract(self, root):
        before, middle, after = extract(root, 2, 4)
        assert flatten(before) == VALUES[:1]
        assert flatten(middle) == VALUES[1:4]
        assert flatten(after) == VALUES[4:]
        assert middle.sum == sum(VALUES[1:4])

    def test_extract_whole(self, root):
        before, middle, after = extract(root, 1, len(VALUES))
        assert before is None
        assert after is None
        assert flatten(middle) == VALUES

    def test_reattach(self, root):
        before, middle, after = extract(root, 3, 5)
        middle.reversed = True
        assert flatten(reattach(before, middle, after)) == [10, 20, 50, 40, 30, 60, 70]

    @pytest.mark.parametrize("first, second", [(2, 5), (5, 2), (3, 4), (1, 7)])
    def test_swap_ranks(self, root, first, second):
        expected = list(VALUES)
        expected[first - 1], expected[second - 1] = expected[second - 1], expected[first - 1]
        assert flatten(swap_ranks(root, first, second)) == expected
