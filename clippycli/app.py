import logging
import threading
from typing import Optional

from . import ui
from .controller import (
    Cancel,
    Effect,
    GenerationCompleted,
    KeyPress,
    Session,
    State,
    Submit,
    start,
    transition,
)

logger = logging.getLogger(__name__)


class GenerationTask(threading.Thread):
    """Runs the single in-flight generation request off the UI thread."""

    def __init__(self, generator, prompt: str):
        # Daemon so that Ctrl+C while loading does not wait on the API call
        super().__init__(name="clippycli-generate", daemon=True)
        self.generator = generator
        self.prompt = prompt
        self.event: Optional[GenerationCompleted] = None

    def run(self):
        try:
            response = self.generator.generate_command(self.prompt)
        except Exception as e:
            logger.exception("Command generation crashed")
            response = {"error": str(e)}
        self.event = GenerationCompleted(
            command=response.get("command"),
            error=response.get("error"),
            full_prompt=response.get("full_prompt"),
        )


class ClippyApp:
    """Drives the interaction controller with keyboard input and the generator."""

    def __init__(self, generator, executor, confirm_action: str = "copy", terminal=ui):
        self._generator = generator
        self._executor = executor
        self._confirm_action = confirm_action
        self._ui = terminal

    def run(self, initial_prompt: str = "", verbose: bool = False) -> int:
        """Runs the interaction loop until the user quits or confirms. Returns the exit code."""
        session, effect = start(initial_prompt, verbose)

        while True:
            if effect is Effect.QUIT:
                logger.info("Exiting without action")
                return 0
            if effect is Effect.CONFIRM:
                self._confirm(session.generated_command)
                return 0
            if effect is Effect.GENERATE:
                session, effect = transition(session, self._generate(session))
                continue

            session, effect = transition(session, self._read_event(session))

    def _read_event(self, session: Session):
        self._ui.render(session, self._confirm_action)
        try:
            if session.state in (State.INPUT, State.EDIT):
                return Submit(self._ui.read_prompt(session.prompt))
            return KeyPress(self._ui.read_key())
        except (KeyboardInterrupt, EOFError):
            return Cancel()

    def _generate(self, session: Session):
        logger.info(f"Generating command for prompt: {session.prompt!r}")
        task = GenerationTask(self._generator, session.prompt)
        task.start()
        self._ui.render(session, self._confirm_action)
        try:
            self._ui.wait_for(task)
        except KeyboardInterrupt:
            return Cancel()
        return task.event

    def _confirm(self, command: str):
        if self._confirm_action == "execute":
            status, error = self._executor.execute_command(command)
            if error:
                self._ui.report_error(f"Error executing command: {error}")
            elif status != 0:
                logger.info(f"Command finished with exit status {status}")
            return

        copied, error = self._executor.copy_to_clipboard(command)
        if copied:
            self._ui.show_copied(command)
        else:
            self._ui.report_error(f"Error copying to clipboard: {error}")
