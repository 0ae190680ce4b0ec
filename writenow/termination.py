# termination.py

from typing import Callable, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.validation import Validator, ValidationError
from rich.console import Console

from .errors import OutputPathInvalid, TerminationRequested


class NonEmptyValidator(Validator):
    def validate(self, document):
        if not document.text.strip():
            raise ValidationError(message='', cursor_position=0)


class TerminationHandler:
    """
    Runs once when the session is told to stop.

    The first signal sets ``terminating`` and cancels the blocking read; the
    editing loop then calls :meth:`terminate`, which asks for a path when
    none was given and flushes the history. A second signal at any point
    after that ends the process with status 0 and no flush.
    """

    def __init__(self, history, output, terminal, logger,
                 read_path: Optional[Callable[[], str]] = None,
                 console: Optional[Console] = None,
                 path_prompt: str = "save to: "):
        self.history = history
        self.output = output
        self.terminal = terminal
        self.logger = logger
        self.read_path = read_path or self._prompt_for_path
        self.console = console or Console(stderr=True, highlight=False)
        self.path_prompt = path_prompt
        self.terminating = False

    def on_signal(self, signum, frame=None) -> None:
        """Signal handler for SIGINT and SIGTERM."""
        if self.terminating:
            self.logger.debug(f"Signal {signum} while terminating, exiting without flush")
            self.terminal.write("", newline=True)
            raise SystemExit(0)
        self.terminating = True
        self.logger.debug(f"Signal {signum} received, stopping input")
        raise TerminationRequested(signum)

    def _prompt_for_path(self) -> str:
        session = PromptSession()
        result = session.prompt(
            FormattedText([('class:prompt', self.path_prompt)]),
            validator=NonEmptyValidator(),
            validate_while_typing=False
        )
        return result.strip()

    def _ask_path(self) -> Optional[str]:
        """Ask for the output path; None if the prompt was interrupted."""
        try:
            return self.read_path()
        except (KeyboardInterrupt, EOFError):
            self.logger.debug("Path prompt interrupted, exiting without flush")
            self.terminal.write("", newline=True)
            return None

    def terminate(self) -> int:
        """Flush the history and return the process exit code."""
        self.terminating = True
        self.terminal.write("", newline=True)

        if not self.output.is_set:
            path = self._ask_path()
            if path is None:
                return 0
            try:
                self.output.set(path)
            except OutputPathInvalid as e:
                return self._report_error(e)

        try:
            count = self.output.flush(self.history)
        except OutputPathInvalid as e:
            return self._report_error(e)

        noun = "line" if count == 1 else "lines"
        self.console.print(f"added {count} {noun} to {self.output.path}", markup=False, soft_wrap=True)
        return 0

    def _report_error(self, error: OutputPathInvalid) -> int:
        self.logger.error(f"Flush failed: {error}")
        self.console.print(f"error: {error}", style="red", markup=False, soft_wrap=True)
        return 1
