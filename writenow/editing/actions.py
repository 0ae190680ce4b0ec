# editing/actions.py

import signal
from enum import Enum
from typing import Callable, Optional

from ..errors import EmptyHistory, TerminationRequested


class EditorState(Enum):
    EDITING = "editing"
    TERMINATING = "terminating"


class LineEditor:
    """
    Consumes keystrokes and keeps the history, the in-progress line and the
    screen in step.

    Three kinds of key matter: backspace (drop a character, or revert the
    last committed line when the buffer is empty), newline (commit the
    buffer, even when empty) and everything else (append to the buffer).
    """

    def __init__(self, display, history, logger):
        self.display = display
        self.terminal = display.terminal
        self.window = display.window
        self.history = history
        self.logger = logger

        self.buffer = ""
        self.state = EditorState.EDITING

    def start(self) -> None:
        """Draw the initial prompt row."""
        self.window.start()

    def feed(self, char: str) -> None:
        """Apply one character to the editor."""
        if char in self.terminal.BACKSPACE:
            self.delete_char()
        elif char in self.terminal.NEWLINE:
            self.commit()
        elif char.startswith(self.terminal.ESCAPE):
            # no cursor movement inside a line
            self.logger.debug(f"Ignored escape sequence {char!r}")
        else:
            self.buffer += char
            self.window.refresh_prompt(self.buffer)

    def delete_char(self) -> None:
        """Handle backspace."""
        if self.buffer:
            self.buffer = self.buffer[:-1]
            self.window.refresh_prompt(self.buffer)
            return
        self.revert()

    def commit(self) -> None:
        """Move the in-progress line into the history and redraw the window."""
        self.history.append(self.buffer)
        self.buffer = ""
        self.window.render_commit(self.history)

    def revert(self) -> None:
        """Pull the last committed line back into the buffer for editing."""
        try:
            self.buffer = self.history.remove_last()
        except EmptyHistory:
            self.window.refresh_prompt(self.buffer)
            return
        self.window.render_revert(self.history, self.buffer)

    def run(self, read_char: Optional[Callable[[], Optional[str]]] = None) -> None:
        """
        Read and apply characters until a termination is requested.

        Ends by raising TerminationRequested: from the signal handler while
        blocked in the read, or from here on end of input or a literal Ctrl-C.
        """
        read_char = read_char or self.terminal.read_char
        self.start()
        try:
            while self.state is EditorState.EDITING:
                char = read_char()
                if char is None:
                    self.logger.debug("End of input")
                    raise TerminationRequested()
                if char == self.terminal.INTERRUPT:
                    raise TerminationRequested(signal.SIGINT)
                self.feed(char)
        except TerminationRequested:
            self.state = EditorState.TERMINATING
            raise
