# display/terminal.py
import os
import sys
import select
import signal
from contextlib import contextmanager
from typing import Optional

try:
    import termios
    import tty
except ImportError:  # not a POSIX terminal
    termios = tty = None

from ..errors import MissingDependency
from .style import DisplayStyle


HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)

# how long to wait for the rest of an escape sequence after ESC
ESCAPE_TIMEOUT = 0.05


class DisplayTerminal:
    """
    Low-level terminal operations and raw input.

    Every output primitive writes and flushes before returning, so the cursor
    position the caller assumes is always the one on screen. Write failures
    (closed pipe, detached terminal) are ignored.
    """

    BACKSPACE = ("\x7f", "\x08")
    NEWLINE = ("\n", "\r")
    INTERRUPT = "\x03"
    ESCAPE = "\x1b"

    def __init__(self, style: Optional[DisplayStyle] = None, stream=None, input_fd: Optional[int] = None):
        """Initialize terminal state."""
        self.stream = stream if stream is not None else sys.stdout
        self.style = style if style is not None else DisplayStyle(stream=self.stream)
        self._input_fd = input_fd
        self._cursor_visible = True
        self._pending = b""

    @property
    def input_fd(self) -> int:
        if self._input_fd is None:
            self._input_fd = sys.stdin.fileno()
        return self._input_fd

    def _is_terminal(self) -> bool:
        """Return True if the output stream is a terminal."""
        try:
            return self.stream.isatty()
        except (AttributeError, ValueError):
            return False

    def check_capabilities(self) -> None:
        """
        Fail early when interactive editing is impossible.

        Raises MissingDependency if termios is unavailable or standard input
        is not a terminal.
        """
        if termios is None or tty is None:
            raise MissingDependency("termios is required for raw terminal input")
        try:
            interactive = os.isatty(self.input_fd)
        except (OSError, ValueError):
            interactive = False
        if not interactive:
            raise MissingDependency("standard input is not a terminal")

    def write(self, text: str = "", newline: bool = False) -> None:
        """Write text to the stream; append newline if requested."""
        try:
            self.stream.write(text)
            if newline:
                self.stream.write("\n")
            self.stream.flush()
        except (IOError, ValueError):
            pass  # Ignore pipe errors

    def _manage_cursor(self, show: bool) -> None:
        """Toggle cursor visibility based on 'show' flag."""
        if self._cursor_visible != show and self._is_terminal():
            self._cursor_visible = show
            self.write("\033[?25h" if show else "\033[?25l")

    def show_cursor(self) -> None:
        self._manage_cursor(True)

    def hide_cursor(self) -> None:
        self._manage_cursor(False)

    def move_cursor_up(self, n: int) -> None:
        """Move the cursor up n rows and to column 0."""
        # CSI 0 A moves one row on most terminals
        if n > 0:
            self.write(f"\r\033[{n}A")
        else:
            self.write("\r")

    def clear_line(self) -> None:
        """Erase the current row and return to column 0."""
        self.write("\r\033[2K")

    def delete_lines(self, n: int) -> None:
        """Delete n rows at the cursor, scrolling the content below up."""
        if n > 0:
            self.write(f"\033[{n}M")

    def write_styled(self, text: str, color: Optional[str] = None, newline: bool = False) -> None:
        """Write text in the named colour, or the default colour if None."""
        self.write(self.style.format(text, color), newline=newline)

    def write_prompt(self, prompt: str, buffer: str = "") -> None:
        """Redraw the prompt row with the current in-progress buffer."""
        self.clear_line()
        self.write(self.style.format(prompt, self.style.primary) + buffer)

    def _read_byte(self, fd: int) -> bytes:
        """Return the pushed-back byte if there is one, else read one."""
        if self._pending:
            byte, self._pending = self._pending, b""
            return byte
        return os.read(fd, 1)

    def _unread(self, byte: bytes) -> None:
        self._pending = byte

    def _input_ready(self, fd: int) -> bool:
        if self._pending:
            return True
        readable, _, _ = select.select([fd], [], [], ESCAPE_TIMEOUT)
        return bool(readable)

    def read_char(self) -> Optional[str]:
        """
        Read one complete UTF-8 character from input.

        Returns None at end of input. CSI and SS3 escape sequences are read
        whole and returned with their leading ESC; a lone ESC comes back on
        its own and the key after it is left for the next call.
        """
        fd = self.input_fd
        first_byte = self._read_byte(fd)
        if not first_byte:
            return None

        # Check if it's ASCII (0xxxxxxx)
        if first_byte[0] & 0x80 == 0:
            if first_byte == b"\x1b":
                return self._read_escape_sequence(fd)
            return first_byte.decode("ascii")

        # Determine number of bytes in UTF-8 sequence
        if first_byte[0] & 0xE0 == 0xC0:  # 110xxxxx - 2 bytes
            num_bytes = 2
        elif first_byte[0] & 0xF0 == 0xE0:  # 1110xxxx - 3 bytes
            num_bytes = 3
        elif first_byte[0] & 0xF8 == 0xF0:  # 11110xxx - 4 bytes
            num_bytes = 4
        else:
            return first_byte.decode("utf-8", errors="replace")

        result = first_byte
        for _ in range(num_bytes - 1):
            next_byte = self._read_byte(fd)
            if not next_byte:
                break
            if (next_byte[0] & 0xC0) != 0x80:
                self._unread(next_byte)
                break
            result += next_byte
        return result.decode("utf-8", errors="replace")

    def _read_escape_sequence(self, fd: int) -> str:
        """Read the rest of a CSI or SS3 sequence that started with ESC."""
        if not self._input_ready(fd):
            return "\x1b"
        seq = self._read_byte(fd)
        if seq == b"O":
            final = self._read_byte(fd)
            return "\x1bO" + final.decode("ascii", errors="replace")
        if seq != b"[":
            if seq:
                self._unread(seq)
            return "\x1b"

        chars = b"["
        while True:
            c = self._read_byte(fd)
            if not c:
                break
            chars += c
            # Final byte is in @ through ~
            if 0x40 <= c[0] <= 0x7E:
                break
        return "\x1b" + chars.decode("ascii", errors="replace")

    @contextmanager
    def cbreak(self):
        """
        Put input into cbreak mode for the duration of the block.

        Echo and line buffering are off; Ctrl-C still raises SIGINT.
        """
        fd = self.input_fd
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setcbreak(fd, termios.TCSANOW)
            yield self
        finally:
            # a signal arriving here is held until the settings are back
            blocked = signal.pthread_sigmask(signal.SIG_BLOCK, HANDLED_SIGNALS)
            try:
                termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)
            finally:
                signal.pthread_sigmask(signal.SIG_SETMASK, blocked)
            self.write(self.style.get_format('RESET'))
            self.show_cursor()
