# display/window.py

from typing import Tuple


def visible_range(rows: int, max_rows: int) -> Tuple[int, int]:
    """Return the [start, stop) bounds of the history lines kept on screen."""
    return max(0, rows - max_rows), rows


class WindowRenderer:
    """
    Draws the most recent history lines above the live prompt row.

    The screen region owned by the renderer is ``drawn`` history rows
    followed by the prompt row, with the cursor left at the end of the
    prompt. ``drawn`` is the number of history rows currently on screen and
    is what each redraw erases before printing the new window.
    """
    def __init__(self, terminal, prompt: str = "> ", max_rows: int = 3, logger=None):
        if max_rows < 1:
            raise ValueError("max_rows must be at least 1")
        self.terminal = terminal
        self.prompt = prompt
        self.max_rows = max_rows
        self.drawn = 0
        self.logger = logger

    def start(self) -> None:
        """Draw the empty prompt row."""
        self.drawn = 0
        self.terminal.write_prompt(self.prompt, "")

    def refresh_prompt(self, buffer: str) -> None:
        """Redraw only the prompt row."""
        self.terminal.write_prompt(self.prompt, buffer)

    def render_commit(self, history) -> int:
        """
        Redraw after a line has been committed.

        The commit ends the prompt row with a newline, so the rows to erase
        are the drawn history rows plus the old prompt row. Returns the
        number of rows erased.
        """
        erase = min(self.drawn, self.max_rows) + 1
        self.terminal.hide_cursor()
        self.terminal.write("", newline=True)
        self.terminal.move_cursor_up(erase)
        self.terminal.delete_lines(erase)
        self._draw_window(history)
        self.terminal.write_prompt(self.prompt, "")
        self.terminal.show_cursor()
        if self.logger:
            self.logger.debug(f"Commit redraw: erased {erase} rows, drew {self.drawn}")
        return erase

    def render_revert(self, history, buffer: str) -> int:
        """
        Redraw after the last line has been moved back into the buffer.

        The cursor is still on the prompt row, so the erase covers the drawn
        history rows (all of them while the window is still filling, exactly
        ``max_rows`` once it slides) plus the prompt row itself. Returns the
        number of rows erased.
        """
        above = min(self.drawn, self.max_rows)
        self.terminal.hide_cursor()
        self.terminal.move_cursor_up(above)
        self.terminal.delete_lines(above + 1)
        self._draw_window(history)
        self.terminal.write_prompt(self.prompt, buffer)
        self.terminal.show_cursor()
        if self.logger:
            self.logger.debug(f"Revert redraw: erased {above + 1} rows, drew {self.drawn}")
        return above + 1

    def _draw_window(self, history) -> None:
        start, stop = visible_range(history.rows, self.max_rows)
        window = history.slice(start, stop)
        for line in window:
            self.terminal.write_styled(line, self.terminal.style.secondary, newline=True)
        self.drawn = len(window)
