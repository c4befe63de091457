"""Exception types raised by seqflow."""


class SeqflowError(Exception):
    """Base class for errors raised by the library itself."""


class ReentrantAdvanceError(SeqflowError, RuntimeError):
    """A producer was advanced from inside its own running body."""
