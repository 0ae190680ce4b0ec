# interface.py

import signal
from dataclasses import dataclass
from typing import Optional

from .logger import Logger
from .display import Display, AUTO, HANDLED_SIGNALS
from .editing import LineEditor, LineHistory
from .errors import TerminationRequested
from .output import OutputTarget
from .termination import TerminationHandler


@dataclass(frozen=True)
class Config:
    """Settings fixed for the lifetime of a session."""
    max_rows: int = 3
    prompt: str = "> "
    primary_color: str = "GREEN"
    secondary_color: str = "GRAY"
    output_path: Optional[str] = None


class Interface:
    """
    Main entry point that assembles Display, history, editor and the
    termination handler, and owns all session state.
    """

    def __init__(self, config: Optional[Config] = None,
                 logging_enabled: bool = False,
                 log_file: Optional[str] = None,
                 stream=None, input_fd: Optional[int] = None,
                 color_system: Optional[str] = AUTO,
                 read_path=None, console=None):
        """
        Initialize components.

        Args:
            config: Session settings. Defaults to Config().
            logging_enabled: Enable detailed logging.
            log_file: Path to log file. Use "-" for stderr.
            stream: Output stream for the editing surface (stdout by default).
            input_fd: File descriptor keystrokes are read from.
            read_path: Callable asking for the output path at exit.

        Raises OutputPathInvalid if config.output_path cannot be written.
        """
        self.config = config or Config()
        self.logger = Logger(__name__, logging_enabled, log_file)
        try:
            # validate the path before anything touches the terminal
            self.output = OutputTarget(self.config.output_path, logger=self.logger)
            self.display = Display(
                prompt=self.config.prompt,
                max_rows=self.config.max_rows,
                primary=self.config.primary_color,
                secondary=self.config.secondary_color,
                stream=stream,
                input_fd=input_fd,
                color_system=color_system,
                logger=self.logger
            )
            self.history = LineHistory(logger=self.logger)
            self.editor = LineEditor(self.display, self.history, self.logger)
            self.termination = TerminationHandler(
                self.history, self.output, self.display.terminal, self.logger,
                read_path=read_path, console=console
            )
        except Exception as e:
            self.logger.error(f"Init error: {e}")
            raise

    def _install_signal_handlers(self) -> dict:
        previous = {}
        for signum in HANDLED_SIGNALS:
            previous[signum] = signal.signal(signum, self.termination.on_signal)
        return previous

    @staticmethod
    def _restore_signal_handlers(previous: dict) -> None:
        for signum, handler in previous.items():
            signal.signal(signum, handler)

    def start(self) -> int:
        """
        Run the editing loop until a termination signal, then flush.

        Returns the exit code. Raises MissingDependency before any input is
        read if the terminal cannot do raw input.
        """
        terminal = self.display.terminal
        terminal.check_capabilities()
        previous = self._install_signal_handlers()
        try:
            try:
                with terminal.cbreak():
                    self.editor.run()
            except TerminationRequested as e:
                self.logger.debug(f"Input loop stopped: {e}")
            return self.termination.terminate()
        finally:
            self._restore_signal_handlers(previous)
