# editing/history.py

from itertools import islice
from typing import Iterator, List

from ..errors import EmptyHistory


class HistoryView:
    """
    Read-only window onto a LineHistory.

    Nothing is copied: iterating walks the underlying list, and the view can
    be iterated any number of times.
    """

    def __init__(self, lines: List[str], start: int, stop: int):
        self._lines = lines
        self.start = max(0, start)
        self.stop = max(self.start, min(stop, len(lines)))

    def __iter__(self) -> Iterator[str]:
        return islice(self._lines, self.start, self.stop)

    def __len__(self) -> int:
        return self.stop - self.start


class LineHistory:
    """
    Ordered log of committed lines.

    Grows by appending at the end and shrinks only by removing the last
    line. ``rows`` counts committed lines and moves in step with them.
    """

    def __init__(self, logger=None):
        self._lines: List[str] = []
        self.rows = 0
        self.logger = logger

    def append(self, line: str) -> None:
        """Commit a line to the end of the history."""
        self._lines.append(line)
        self.rows += 1
        if self.logger:
            self.logger.debug(f"Committed line {self.rows}: {line!r}")

    def remove_last(self) -> str:
        """Remove and return the most recent line."""
        if not self._lines:
            raise EmptyHistory("no committed lines to revert")
        line = self._lines.pop()
        self.rows -= 1
        if self.logger:
            self.logger.debug(f"Reverted line {self.rows + 1}: {line!r}")
        return line

    def count(self) -> int:
        return len(self._lines)

    def slice(self, start: int, stop: int) -> HistoryView:
        """Return a lazy read-only view of lines[start:stop]."""
        return HistoryView(self._lines, start, stop)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._lines))
