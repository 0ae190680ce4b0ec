# errors.py


class WriteNowError(Exception):
    """Base class for every error raised by writenow."""


class InvalidArgument(WriteNowError):
    """An unrecognised command-line argument was given."""


class OutputPathInvalid(WriteNowError):
    """The output path is missing, cannot be created, or is not writable."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class MissingDependency(WriteNowError):
    """A terminal capability required for interactive input is unavailable."""


class EmptyHistory(WriteNowError):
    """Raised when reverting with no committed lines left."""


class TerminationRequested(WriteNowError):
    """
    Delivered to the blocking read when a termination signal arrives.

    Carries the signal number so the handler can log what stopped the loop.
    """

    def __init__(self, signum: int = 0):
        self.signum = signum
        super().__init__(f"termination requested (signal {signum})")
