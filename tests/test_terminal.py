# test_terminal.py

import pytest
import signal
from io import StringIO

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from writenow.display import Display, DisplayStyle, DisplayTerminal
from writenow.display import terminal as terminal_module
from writenow.editing.history import LineHistory
from writenow.errors import MissingDependency


class BrokenStream:
    def write(self, text):
        raise BrokenPipeError()

    def flush(self):
        pass


class TestDisplayTerminal:
    """Output primitives against an in-memory stream."""

    def setup_method(self):
        self.out = StringIO()
        self.style = DisplayStyle(stream=self.out, color_system=None)
        self.terminal = DisplayTerminal(style=self.style, stream=self.out)

    def test_move_cursor_up(self):
        self.terminal.move_cursor_up(3)
        assert self.out.getvalue() == "\r\033[3A"

    def test_move_cursor_up_zero_stays_on_row(self):
        self.terminal.move_cursor_up(0)
        assert self.out.getvalue() == "\r"

    def test_delete_lines(self):
        self.terminal.delete_lines(4)
        self.terminal.delete_lines(0)
        assert self.out.getvalue() == "\033[4M"

    def test_clear_line(self):
        self.terminal.clear_line()
        assert self.out.getvalue() == "\r\033[2K"

    def test_write_prompt(self):
        self.terminal.write_prompt("> ", "draft")
        assert self.out.getvalue() == "\r\033[2K> draft"

    def test_write_styled_without_colour_support(self):
        self.terminal.write_styled("plain", "GRAY", newline=True)
        assert self.out.getvalue() == "plain\n"

    def test_write_ignores_broken_pipe(self):
        terminal = DisplayTerminal(style=self.style, stream=BrokenStream())
        terminal.write("lost")
        terminal.delete_lines(2)

    def test_check_capabilities_rejects_non_tty(self):
        read_fd, write_fd = os.pipe()
        try:
            terminal = DisplayTerminal(style=self.style, stream=self.out, input_fd=read_fd)
            with pytest.raises(MissingDependency):
                terminal.check_capabilities()
        finally:
            os.close(read_fd)
            os.close(write_fd)


class TestColourOutput:

    def test_secondary_colour_is_applied(self):
        out = StringIO()
        style = DisplayStyle(secondary="GRAY", stream=out, color_system="256")
        terminal = DisplayTerminal(style=style, stream=out)
        terminal.write_styled("old line", style.secondary)
        text = out.getvalue()
        assert text.startswith("\033[")
        assert "old line" in text
        assert text.endswith("\033[0m")

    def test_unknown_colour_is_rejected(self):
        with pytest.raises(ValueError):
            DisplayStyle(primary="MAUVE", color_system=None)

    def test_no_color_env_disables_styling(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        style = DisplayStyle(stream=StringIO())
        assert style.format("text", "GREEN") == "text"


class TestReadChar:
    """Raw character decoding from a file descriptor."""

    def setup_method(self):
        self.read_fd, self.write_fd = os.pipe()
        self.terminal = DisplayTerminal(
            style=DisplayStyle(color_system=None),
            stream=StringIO(),
            input_fd=self.read_fd
        )

    def teardown_method(self):
        os.close(self.read_fd)
        if self.write_fd is not None:
            os.close(self.write_fd)

    def feed(self, data: bytes):
        os.write(self.write_fd, data)
        os.close(self.write_fd)
        self.write_fd = None

    def test_reads_ascii_and_multibyte(self):
        self.feed("aé✓\x7f\n".encode("utf-8"))
        chars = [self.terminal.read_char() for _ in range(5)]
        assert chars == ["a", "é", "✓", "\x7f", "\n"]
        assert self.terminal.read_char() is None

    def test_reads_escape_sequence_whole(self):
        self.feed(b"\x1b[Ax")
        assert self.terminal.read_char() == "\x1b[A"
        assert self.terminal.read_char() == "x"


class TtyStream(StringIO):
    def isatty(self):
        return True


class TestStdoutDefault:
    """With no stream given, colour follows the real stdout."""

    def test_colour_detected_on_terminal_stdout(self, monkeypatch):
        for name in ("NO_COLOR", "FORCE_COLOR", "TTY_COMPATIBLE", "COLORTERM", "TTY_INTERACTIVE"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        out = TtyStream()
        monkeypatch.setattr(sys, "stdout", out)
        display = Display()
        assert display.terminal.stream is out
        assert display.style.color_system is not None
        display.terminal.write_styled("old", display.style.secondary)
        assert out.getvalue().startswith("\033[")

    def test_plain_when_stdout_is_not_a_terminal(self, monkeypatch):
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        monkeypatch.delenv("TTY_COMPATIBLE", raising=False)
        monkeypatch.setattr(sys, "stdout", StringIO())
        assert Display().style.color_system is None


class TestCursorVisibility:

    def test_redraw_hides_and_restores_cursor(self):
        out = TtyStream()
        display = Display(stream=out, color_system=None)
        history = LineHistory()
        display.window.start()
        history.append("x")
        display.window.render_commit(history)
        text = out.getvalue()
        assert text.index("\033[?25l") < text.index("x\n") < text.index("\033[?25h")


class TestEscapeInput:
    """Lone ESC must not swallow the key typed after it."""

    def setup_method(self):
        self.read_fd, self.write_fd = os.pipe()
        self.terminal = DisplayTerminal(
            style=DisplayStyle(color_system=None),
            stream=StringIO(),
            input_fd=self.read_fd
        )

    def teardown_method(self):
        os.close(self.read_fd)
        if self.write_fd is not None:
            os.close(self.write_fd)

    def feed(self, data: bytes):
        os.write(self.write_fd, data)
        os.close(self.write_fd)
        self.write_fd = None

    def read_all(self):
        chars = []
        while (char := self.terminal.read_char()) is not None:
            chars.append(char)
        return chars

    def test_lone_escape_before_newline(self):
        self.feed(b"\x1b\n")
        assert self.read_all() == ["\x1b", "\n"]

    def test_lone_escape_before_letter_and_backspace(self):
        self.feed(b"\x1bq\x1b\x7f")
        assert self.read_all() == ["\x1b", "q", "\x1b", "\x7f"]

    def test_escape_at_end_of_input(self):
        self.feed(b"\x1b")
        assert self.read_all() == ["\x1b"]

    def test_ss3_sequence_read_whole(self):
        self.feed(b"\x1bOAz")
        assert self.read_all() == ["\x1bOA", "z"]

    def test_escape_with_no_followup_returns_promptly(self):
        os.write(self.write_fd, b"\x1b")
        assert self.terminal.read_char() == "\x1b"

    def test_broken_utf8_keeps_next_character(self):
        self.feed(b"\xc3a")
        assert self.read_all() == ["\ufffd", "a"]


class FakeTermios:
    TCSANOW = 0
    TCSADRAIN = 1

    def __init__(self, on_restore):
        self.on_restore = on_restore
        self.restored = []

    def tcgetattr(self, fd):
        return ["saved"]

    def tcsetattr(self, fd, when, settings):
        self.on_restore()
        self.restored.append(settings)


class FakeTty:
    def setcbreak(self, fd, when):
        pass


class TestCbreakRestore:

    def test_signal_during_restore_waits_for_settings(self, monkeypatch):
        def exit_now(signum, frame):
            raise SystemExit(0)

        fake = FakeTermios(lambda: os.kill(os.getpid(), signal.SIGTERM))
        monkeypatch.setattr(terminal_module, "termios", fake)
        monkeypatch.setattr(terminal_module, "tty", FakeTty())
        previous = signal.signal(signal.SIGTERM, exit_now)
        try:
            terminal = DisplayTerminal(
                style=DisplayStyle(color_system=None), stream=StringIO(), input_fd=0
            )
            with pytest.raises(SystemExit):
                with terminal.cbreak():
                    pass
        finally:
            signal.signal(signal.SIGTERM, previous)
        assert fake.restored == [["saved"]]
