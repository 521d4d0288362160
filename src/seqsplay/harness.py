"""Driver for the line-oriented request protocol.

The input is a stream of whitespace separated integers: the initial size, the
initial values, the request count, then the requests themselves. Sums are
written one per line as they are computed; the final sequence is written last.
"""

from __future__ import annotations
import logging
from collections.abc import Iterator
from typing import TextIO

from .errors import ProtocolError
from .tree import SplayTree

logger = logging.getLogger(__name__)

# --- Configuration ---
# opcode: (name, operand count, indices of the operands that are positions)
OPCODES: dict[int, tuple[str, int, tuple[int, ...]]] = {
    1: ("sum", 2, (0, 1)),
    2: ("insert", 2, (1,)),
    3: ("remove", 1, (0,)),
    4: ("assign", 3, (1, 2)),
    5: ("add", 3, (1, 2)),
    6: ("next_permutation", 2, (0, 1)),
    7: ("prev_permutation", 2, (0, 1)),
}


def _tokens(reader: TextIO) -> Iterator[str]:
    for line in reader:
        yield from line.split()


class RequestReader:
    """Pulls integers off a text stream, complaining clearly when it runs dry"""

    def __init__(self, reader: TextIO):
        self._tokens = _tokens(reader)
        self.consumed = 0

    def read_int(self, what: str) -> int:
        try:
            token = next(self._tokens)
        except StopIteration:
            raise ProtocolError(f"Unexpected end of input while reading {what}") from None
        self.consumed += 1
        try:
            return int(token)
        except ValueError:
            raise ProtocolError(
                f"Expected an integer for {what}, got {token!r} (token {self.consumed})"
            ) from None

    def read_count(self, what: str) -> int:
        count = self.read_int(what)
        if count < 0:
            raise ProtocolError(f"{what} must not be negative, got {count}")
        return count


def execute(tree: SplayTree, opcode: int, operands: list[int], writer: TextIO):
    """Run one decoded request against the tree"""
    if opcode == 1:
        writer.write(f"{tree.range_sum(operands[0], operands[1])}\n")
    elif opcode == 2:
        value, pos = operands
        tree.insert(pos, value)
    elif opcode == 3:
        tree.remove(operands[0])
    elif opcode == 4:
        value, first, last = operands
        tree.assign(first, last, value)
    elif opcode == 5:
        value, first, last = operands
        tree.add(first, last, value)
    elif opcode == 6:
        tree.next_permutation(operands[0], operands[1])
    elif opcode == 7:
        tree.prev_permutation(operands[0], operands[1])
    else:
        raise ProtocolError(f"Unknown opcode {opcode}")


def run(reader: TextIO, writer: TextIO, one_based: bool = False) -> SplayTree:
    """Read a whole request stream, answer it, and return the final tree

    Args:
        reader: The stream holding the initial sequence and the requests
        writer: Where sums and the final sequence are written
        one_based: Whether request positions count from 1 instead of 0
    """
    requests = RequestReader(reader)
    size = requests.read_count("the initial size")
    tree = SplayTree(requests.read_int(f"initial value {i}") for i in range(size))

    count = requests.read_count("the request count")
    logger.info("Running %d requests against %d initial values", count, size)

    shift = 1 if one_based else 0
    for number in range(count):
        opcode = requests.read_int(f"the opcode of request {number}")
        if opcode not in OPCODES:
            raise ProtocolError(f"Unknown opcode {opcode} in request {number}")

        name, arity, positions = OPCODES[opcode]
        operands = [
            requests.read_int(f"operand {i} of request {number} ({name})")
            for i in range(arity)
        ]
        for i in positions:
            operands[i] -= shift

        logger.debug("request %d: %s %s", number, name, operands)
        execute(tree, opcode, operands, writer)

    writer.write(" ".join(str(v) for v in tree) + "\n")
    return tree
