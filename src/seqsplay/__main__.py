from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence, TYPE_CHECKING

from . import harness
from .errors import SeqSplayException

logger = logging.getLogger("seqsplay")


class Namespace(argparse.Namespace):
    if TYPE_CHECKING:
        input: Optional[str]
        output: Optional[str]
        one_based: bool
        verbose: bool


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="seqsplay", description="Answer a stream of sequence requests with an implicit splay tree")
    parser.add_argument("input", nargs="?", type=str, help="the file holding the requests (default: stdin)")
    parser.add_argument("-o", "--output", type=str, help="write the answers to this file (default: stdout)")
    parser.add_argument("--one-based", action="store_true", help="request positions count from 1 instead of 0")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every request to stderr")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    namespace = Namespace()
    build_parser().parse_args(argv, namespace=namespace)

    logging.basicConfig(
        level=logging.DEBUG if namespace.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    reader = sys.stdin if namespace.input is None else open(namespace.input, "r")
    writer = sys.stdout if namespace.output is None else open(namespace.output, "w")
    try:
        harness.run(reader, writer, one_based=namespace.one_based)
    except SeqSplayException as e:
        logger.error("%s", e)
        return 1
    finally:
        if reader is not sys.stdin:
            reader.close()
        if writer is not sys.stdout:
            writer.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
