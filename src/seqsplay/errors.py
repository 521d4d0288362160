class SeqSplayException(Exception):
    """Base class for all exceptions from this library"""
    pass


class RangeError(SeqSplayException, ValueError):
    """Exception raised when a range is inverted or falls outside the sequence"""

    def __init__(self, first: int, last: int, size: int, /) -> None:
        super().__init__(f"Invalid range [{first}, {last}] for a sequence of size {size}")
        self.first = first
        self.last = last
        self.size = size


class IndexOutOfRange(SeqSplayException, IndexError):
    """Exception raised when a single position falls outside the sequence"""

    def __init__(self, index: int, size: int, /) -> None:
        super().__init__(f"Index {index} out of range for a sequence of size {size}")
        self.index = index
        self.size = size


class ProtocolError(SeqSplayException):
    """Exception raised when a request stream cannot be decoded"""
    pass
