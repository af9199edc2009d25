import logging
import subprocess
import platform
from typing import Tuple

import pyperclip

# Configure logging
logger = logging.getLogger(__name__)


class ActionExecutor:
    """Carries out the confirm action on a generated command."""

    def copy_to_clipboard(self, command: str) -> Tuple[bool, str]:
        """
        Copy a command to the system clipboard.

        Args:
            command: The shell command to copy

        Returns:
            Tuple of (success, error message)
        """
        try:
            pyperclip.copy(command)
        except pyperclip.PyperclipException as e:
            logger.warning(f"Failed to copy to clipboard: {e}")
            return False, str(e)

        logger.info(f"Copied command to clipboard: {command}")
        return True, ""

    def execute_command(self, command: str) -> Tuple[int, str]:
        """
        Run a command through the shell, attached to the current terminal.

        Args:
            command: The shell command to execute

        Returns:
            Tuple of (exit status, error message); the status is -1 when the
            shell could not be started
        """
        logger.info(f"Executing command: {command}")

        try:
            if platform.system() == "Windows":
                # Let cmd.exe parse the line
                completed = subprocess.run(command, shell=True)
            else:
                completed = subprocess.run(["sh", "-c", command])
        except OSError as e:
            logger.warning(f"Error executing command '{command}': {e}")
            return -1, str(e)

        if completed.returncode == 0:
            logger.info(f"Command executed successfully: {command}")
        else:
            logger.warning(f"Command exited with status {completed.returncode}: {command}")
        return completed.returncode, ""


# Create a global executor instance
executor = ActionExecutor()
