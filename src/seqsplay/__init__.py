from .tree import SplayTree
from .errors import IndexOutOfRange, ProtocolError, RangeError, SeqSplayException
from .node import Monotone

__all__ = [
    "IndexOutOfRange",
    "Monotone",
    "ProtocolError",
    "RangeError",
    "SeqSplayException",
    "SplayTree",
]
