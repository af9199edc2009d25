import os
import sys
import toml
import logging
from dataclasses import dataclass, field
from typing import Optional, Any
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

CONFIRM_ACTIONS = ("copy", "execute")


def _default_config_dir() -> str:
    return os.environ.get("CLI_CONFIG_DIR") or os.path.expanduser("~/.config/clippycli")


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    """Configuration handler for the CLI tool."""

    config_dir: str = field(default_factory=_default_config_dir)
    config_file: Optional[str] = None
    api_key: Optional[str] = field(init=False)
    model: str = field(init=False)
    max_tokens: int = field(init=False)
    confirm_action: str = field(init=False)
    verbose: bool = field(init=False)
    log_dir: str = field(init=False)
    _file_config: dict = field(init=False, repr=False)

    def __post_init__(self):
        """Post-initialization to set up dependent fields."""
        if self.config_file is None:
            self.config_file = os.path.join(self.config_dir, "config.toml")
        self._file_config = self._load_config_from_file()
        self.api_key = self._get_config("GEMINI_API_KEY")
        self.model = self._get_config("GEMINI_MODEL", "gemini-2.5-flash")
        self.max_tokens = int(self._get_config("CLI_MAX_TOKENS", 1024))
        self.confirm_action = str(self._get_config("CLI_CONFIRM_ACTION", "copy")).strip().lower()
        self.verbose = _as_bool(self._get_config("CLI_VERBOSE", False))
        self.log_dir = self._get_config("CLI_LOG_DIR", os.path.join(self.config_dir, "logs"))

    def _load_config_from_file(self) -> dict:
        """Loads configuration from the TOML file."""
        if not os.path.exists(self.config_file):
            self._create_default_config()
        try:
            with open(self.config_file, 'r') as f:
                return toml.load(f)
        except (toml.TomlDecodeError, IOError) as e:
            logger.warning(f"Could not read config file at {self.config_file}: {e}")
            return {}

    def _create_default_config(self):
        """Creates a default configuration file."""
        # The API key is left out on purpose; it belongs in the environment or .env
        default_config = {
            "api": {
                "GEMINI_MODEL": "gemini-2.5-flash",
                "CLI_MAX_TOKENS": 1024,
            },
            "application": {
                "CLI_LOG_DIR": os.path.join(self.config_dir, "logs"),
            },
            "behavior": {
                "CLI_CONFIRM_ACTION": "copy",
                "CLI_VERBOSE": False,
            },
        }
        try:
            os.makedirs(self.config_dir, exist_ok=True)
            with open(self.config_file, 'w') as f:
                toml.dump(default_config, f)
            logger.info(f"Created default config file at: {self.config_file}")
        except OSError as e:
            logger.warning(f"Could not create default config file: {e}")

    def _get_config(self, key: str, default: Optional[Any] = None) -> Any:
        """
        Get a configuration value, prioritizing environment variables,
        then the config file, and finally a default value.
        """
        # 1. Check environment variable
        value = os.environ.get(key)
        if value is not None:
            return value

        # 2. Check config file
        for section in self._file_config.values():
            if isinstance(section, dict) and key in section:
                return section[key]

        # 3. Return default
        return default

    def validate(self) -> bool:
        """Validate the configuration, reporting problems on stderr."""
        if not self.api_key:
            print("Error: GEMINI_API_KEY environment variable is required", file=sys.stderr)
            print("Please set your Gemini API key: export GEMINI_API_KEY=your_key_here", file=sys.stderr)
            print("Get a key from https://aistudio.google.com/app/apikey", file=sys.stderr)
            return False

        if self.confirm_action not in CONFIRM_ACTIONS:
            print(
                f"Error: CLI_CONFIRM_ACTION must be one of {', '.join(CONFIRM_ACTIONS)}, "
                f"got '{self.confirm_action}'",
                file=sys.stderr,
            )
            return False

        return True

    def __str__(self) -> str:
        """Return string representation of the configuration."""
        config_dict = self.__dict__.copy()
        if self.api_key:
            config_dict['api_key'] = f"{self.api_key[:4]}...{self.api_key[-4:]}" if len(self.api_key) > 8 else "****"
        del config_dict['_file_config']  # Don't print the raw file contents
        return str(config_dict)


# Singleton instance holder
_config_instance: Optional[Config] = None

def get_config() -> Config:
    """Returns the singleton Config instance."""
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance
