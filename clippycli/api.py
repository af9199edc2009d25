import logging
import os
import platform
from typing import Dict, Any

import google.generativeai as genai
from google.generativeai.types import GenerationConfig

# Configure logging
logger = logging.getLogger(__name__)


SYSTEM_PROMPT = """You are a helpful command-line assistant. Given a user's description of what they want to do, generate a single, safe command that accomplishes their goal.

Rules:
1. Return ONLY the command, no explanations or markdown
2. Make sure the command is safe and won't cause harm
3. Use common Unix/Linux commands when possible
4. If the request is unclear or potentially dangerous, suggest a safer alternative
5. For file operations, use relative paths unless absolute paths are specifically requested
6. Don't include commands that require sudo unless explicitly requested

Examples:
User: "list all files in current directory"
Response: ls -la

User: "find all .py files"
Response: find . -name "*.py"

User: "create a new directory called myproject"
Response: mkdir myproject"""


def get_environment_context() -> str:
    """Describes the machine the command will run on."""
    system = platform.system() or "Unknown"
    shell = os.environ.get("SHELL") or os.environ.get("COMSPEC") or "sh"
    return (
        f"Environment:\n"
        f"- Operating system: {system} {platform.release()}\n"
        f"- Shell: {shell}\n"
        f"- Working directory: {os.getcwd()}"
    )


def extract_command(response_text: str) -> str:
    """Pulls a single command line out of the model's reply."""
    text = (response_text or "").strip()
    if text.startswith("```"):
        # Drop the opening fence (and its language tag) and the closing fence
        if "\n" in text:
            text = text.split("\n", 1)[1].rsplit("```", 1)[0]
        else:
            text = text.strip("`")
    text = text.strip()
    if text.startswith("`") and text.endswith("`"):
        text = text.strip("`").strip()
    return text


class GeminiClient:
    """A client that turns natural-language requests into shell commands with Gemini."""

    def __init__(self, api_key: str, model: str = "gemini-2.5-flash", max_tokens: int = 1024):
        """
        Initializes the GeminiClient.

        Args:
            api_key: The Gemini API key.
            model: The model to use for generation.
            max_tokens: Upper bound on the reply length.
        """
        self.api_key = api_key
        self.model_name = model
        self.max_tokens = max_tokens
        genai.configure(api_key=self.api_key)
        logger.info(f"Initialized Gemini client with model: {self.model_name}")

    def build_system_prompt(self) -> str:
        """Constructs the system instruction, including environment context."""
        return f"{SYSTEM_PROMPT}\n\n{get_environment_context()}"

    def generate_command(self, prompt: str) -> Dict[str, Any]:
        """
        Generates a single shell command from a natural language request.

        Args:
            prompt: The user's request.

        Returns:
            A dict with "command" and "full_prompt" on success, or "error"
            and "full_prompt" on failure.
        """
        system_prompt = self.build_system_prompt()
        full_prompt = f"System: {system_prompt}\n\nUser: {prompt}"
        logger.debug(f"Sending prompt to {self.model_name}: {prompt!r}")

        try:
            model = genai.GenerativeModel(self.model_name, system_instruction=system_prompt)
            response = model.generate_content(
                prompt,
                generation_config=GenerationConfig(max_output_tokens=self.max_tokens),
            )
            command = extract_command(response.text)
        except Exception as e:
            logger.error(f"Error generating command: {e}")
            return {"error": str(e), "full_prompt": full_prompt}

        if not command:
            logger.error(f"Model returned no command for prompt: {prompt!r}")
            return {"error": "The model returned an empty response.", "full_prompt": full_prompt}

        logger.info(f"Generated command: {command}")
        return {"command": command, "full_prompt": full_prompt}
