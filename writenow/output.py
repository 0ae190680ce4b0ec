# output.py

import os
from typing import Iterable, Optional

from .errors import OutputPathInvalid


def validate_path(path: Optional[str]) -> str:
    """
    Make sure ``path`` names a file we can append to.

    The file is created if absent; its parent directory must already exist.
    Returns the expanded path.
    """
    if path is None or not path.strip():
        raise OutputPathInvalid(path or "", "no output path given")
    path = os.path.expanduser(path.strip())
    if os.path.isdir(path):
        raise OutputPathInvalid(path, "is a directory")
    try:
        # append mode creates without truncating
        with open(path, "a", encoding="utf-8"):
            pass
    except OSError as e:
        raise OutputPathInvalid(path, e.strerror or str(e)) from e
    if not os.access(path, os.W_OK):
        raise OutputPathInvalid(path, "not writable")
    return path


class OutputTarget:
    """
    Where the history goes at exit.

    The path is set once, either at startup or from the exit prompt, and the
    flush may happen at most once.
    """

    def __init__(self, path: Optional[str] = None, logger=None):
        self.logger = logger
        self._path: Optional[str] = None
        self.flushed = False
        if path is not None:
            self.set(path)

    @property
    def path(self) -> Optional[str]:
        return self._path

    @property
    def is_set(self) -> bool:
        return self._path is not None

    def set(self, path: str) -> str:
        """Validate and fix the output path."""
        if self._path is not None:
            raise RuntimeError(f"output path already set to {self._path}")
        self._path = validate_path(path)
        if self.logger:
            self.logger.debug(f"Output path set to {self._path}")
        return self._path

    def flush(self, lines: Iterable[str]) -> int:
        """
        Append every line to the target file, one per row.

        The path is re-validated first so a file removed or locked since
        startup is reported instead of half-written. Returns the line count.
        """
        if self.flushed:
            raise RuntimeError("history already flushed")
        path = validate_path(self._path)
        lines = list(lines)
        # one write call, so a signal cannot land between lines
        try:
            with open(path, "a", encoding="utf-8") as f:
                f.write("".join(line + "\n" for line in lines))
        except OSError as e:
            raise OutputPathInvalid(path, e.strerror or str(e)) from e
        count = len(lines)
        self.flushed = True
        if self.logger:
            self.logger.info(f"Flushed {count} lines to {path}")
        return count
