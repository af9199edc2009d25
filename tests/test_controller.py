import unittest

from clippycli.controller import (
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


class TestStart(unittest.TestCase):
    """Test cases for the opening session."""

    def test_start_without_prompt(self):
        """Test that with no CLI prompt the user is asked for one."""
        session, effect = start("", verbose=False)

        self.assertEqual(session.state, State.INPUT)
        self.assertEqual(session.prompt, "")
        self.assertEqual(effect, Effect.NONE)

    def test_start_with_prompt_generates_immediately(self):
        """Test that a CLI prompt skips straight to generation."""
        session, effect = start("list all files", verbose=True)

        self.assertEqual(session.state, State.LOADING)
        self.assertEqual(session.prompt, "list all files")
        self.assertTrue(session.verbose)
        self.assertEqual(effect, Effect.GENERATE)

    def test_start_with_blank_prompt_waits_for_input(self):
        """Test that a whitespace-only CLI prompt is not sent."""
        session, effect = start("   ")

        self.assertEqual(session.state, State.INPUT)
        self.assertEqual(effect, Effect.NONE)


class TestTransitions(unittest.TestCase):
    """Test cases for the Input -> Loading -> Result -> Edit flow."""

    def _result(self, command="ls -la", prompt="list files"):
        session, _ = transition(Session(), Submit(prompt))
        session, _ = transition(session, GenerationCompleted(command=command, full_prompt="System: x\n\nUser: " + prompt))
        return session

    def test_empty_submit_stays_in_input(self):
        """Test that blank submissions never leave Input."""
        for text in ("", "   ", "\n\t"):
            session, effect = transition(Session(), Submit(text))
            self.assertEqual(session.state, State.INPUT)
            self.assertEqual(effect, Effect.NONE)

    def test_empty_submit_stays_in_edit(self):
        """Test that blank submissions never leave Edit."""
        session = transition(self._result(), KeyPress("e"))[0]

        session, effect = transition(session, Submit("  "))

        self.assertEqual(session.state, State.EDIT)
        self.assertEqual(effect, Effect.NONE)

    def test_submit_starts_generation(self):
        """Test that a real prompt moves to Loading and asks for generation."""
        session, effect = transition(Session(), Submit("list files"))

        self.assertEqual(session.state, State.LOADING)
        self.assertEqual(session.prompt, "list files")
        self.assertEqual(effect, Effect.GENERATE)

    def test_successful_generation_shows_command(self):
        """Test that "list files" -> "ls -la" lands in Result with that command."""
        session, effect = transition(Session(), Submit("list files"))
        session, effect = transition(session, GenerationCompleted(command="ls -la", full_prompt="full"))

        self.assertEqual(session.state, State.RESULT)
        self.assertEqual(session.generated_command, "ls -la")
        self.assertEqual(session.full_prompt, "full")
        self.assertIsNone(session.error)
        self.assertEqual(effect, Effect.NONE)

    def test_failed_generation_shows_error(self):
        """Test that a generation failure is shown in Result."""
        session, _ = transition(Session(), Submit("list files"))
        session, effect = transition(session, GenerationCompleted(error="network down"))

        self.assertEqual(session.state, State.RESULT)
        self.assertEqual(session.error, "network down")
        self.assertIsNone(session.generated_command)
        self.assertEqual(effect, Effect.NONE)

    def test_error_offers_only_quit(self):
        """Test that every key quits once an error is shown."""
        session, _ = transition(Session(), Submit("list files"))
        session, _ = transition(session, GenerationCompleted(error="network down"))

        for key in ("enter", "e", "E", "x", "escape"):
            _, effect = transition(session, KeyPress(key))
            self.assertEqual(effect, Effect.QUIT)

    def test_loading_ignores_input(self):
        """Test that keys and submissions are ignored while a request is in flight."""
        session, _ = transition(Session(), Submit("list files"))

        for event in (Submit("something else"), KeyPress("enter"), KeyPress("e")):
            next_session, effect = transition(session, event)
            self.assertEqual(next_session, session)
            self.assertEqual(effect, Effect.NONE)

    def test_completion_outside_loading_is_ignored(self):
        """Test that a stray completion cannot inject a command."""
        session, effect = transition(Session(), GenerationCompleted(command="rm -rf /"))

        self.assertEqual(session.state, State.INPUT)
        self.assertIsNone(session.generated_command)
        self.assertEqual(effect, Effect.NONE)

    def test_enter_confirms(self):
        """Test that Enter on a command asks for the confirm action."""
        session, effect = transition(self._result(), KeyPress("enter"))

        self.assertEqual(effect, Effect.CONFIRM)
        self.assertEqual(session.generated_command, "ls -la")

    def test_edit_preserves_prompt(self):
        """Test that e/E reopens the original prompt for editing."""
        for key in ("e", "E"):
            session, effect = transition(self._result(prompt="find big files"), KeyPress(key))

            self.assertEqual(session.state, State.EDIT)
            self.assertEqual(session.prompt, "find big files")
            self.assertIsNone(session.generated_command)
            self.assertEqual(effect, Effect.NONE)

    def test_other_keys_quit_without_action(self):
        """Test that any other key quits without confirming."""
        for key in ("q", "n", " ", "up", "c-x"):
            _, effect = transition(self._result(), KeyPress(key))
            self.assertEqual(effect, Effect.QUIT)

    def test_cancel_quits_from_every_state(self):
        """Test that Cancel quits from Input, Loading, Result and Edit."""
        loading, _ = transition(Session(), Submit("list files"))
        edit, _ = transition(self._result(), KeyPress("e"))

        for session in (Session(), loading, self._result(), edit):
            _, effect = transition(session, Cancel())
            self.assertEqual(effect, Effect.QUIT)

    def test_escape_key_in_result_quits(self):
        """Test that Escape read as a key on the Result screen quits."""
        _, effect = transition(self._result(), KeyPress("escape"))

        self.assertEqual(effect, Effect.QUIT)

    def test_resubmit_from_edit_clears_error(self):
        """Test that going back to Loading clears an earlier error."""
        session, _ = transition(Session(), Submit("list files"))
        session, _ = transition(session, GenerationCompleted(command="ls"))
        session, _ = transition(session, KeyPress("e"))
        # Simulate an error left over from an earlier attempt
        session = Session(state=State.EDIT, prompt=session.prompt, error="old failure")

        session, effect = transition(session, Submit("list all files"))

        self.assertEqual(session.state, State.LOADING)
        self.assertEqual(session.prompt, "list all files")
        self.assertIsNone(session.error)
        self.assertEqual(effect, Effect.GENERATE)

    def test_command_only_set_in_result(self):
        """Test that the generated command exists only while in Result."""
        session, _ = start("list files")
        self.assertIsNone(session.generated_command)

        # Loading -> Result
        session, _ = transition(session, GenerationCompleted(command="ls -la"))
        self.assertEqual(session.state, State.RESULT)
        self.assertEqual(session.generated_command, "ls -la")

        # Result -> Edit
        session, _ = transition(session, KeyPress("e"))
        self.assertIsNone(session.generated_command)

        # Edit -> Loading
        session, _ = transition(session, Submit("list files again"))
        self.assertIsNone(session.generated_command)


if __name__ == "__main__":
    unittest.main()
