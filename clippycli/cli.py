import argparse
import logging
import sys
from typing import List, Optional

from .api import GeminiClient
from .app import ClippyApp
from .config import get_config
from .executor import executor
from .logger import setup_logging

logger = logging.getLogger(__name__)

EPILOG = """
Examples:
  clippycli                           # Interactive mode
  clippycli "list all files"          # Quick mode with auto-generation
  clippycli -v find large files       # Show the full prompt sent to the model
  clippycli -- -la means what         # "--" is optional; words after the options are the prompt

Environment Variables:
  GEMINI_API_KEY                      # Required: Your Gemini API key
  GEMINI_MODEL                        # Model to use (default: gemini-2.5-flash)
  CLI_CONFIRM_ACTION                  # What Enter does: copy (default) or execute
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clippycli",
        description="ClippyCLI - AI Command Generator. Describe what you want to do and get a shell command back.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show the full text sent to the model.",
    )
    parser.add_argument(
        "prompt",
        nargs="*",
        help="(Optional) What you want to do. Generation starts immediately when given.",
    )
    return parser


OPTION_FLAGS = ("-v", "--verbose", "-h", "--help")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parses the leading option flags; every word after them is the prompt.

    A prompt may itself start with a dash (``clippycli -la in dir``), so
    argparse only sees the flags and the rest is kept in order.
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    split = 0
    while split < len(argv) and argv[split] in OPTION_FLAGS:
        split += 1

    words = argv[split:]
    if words and words[0] == "--":
        words = words[1:]

    args = build_parser().parse_args(argv[:split])
    args.prompt = words
    return args


def run_cli(argv: Optional[List[str]] = None) -> int:
    """Parses arguments, checks configuration and runs the interactive loop."""
    args = parse_args(argv)

    config = get_config()
    config.verbose = config.verbose or args.verbose
    if not config.validate():
        return 1

    setup_logging(config)
    logger.debug(f"Loaded configuration: {config}")

    generator = GeminiClient(api_key=config.api_key, model=config.model, max_tokens=config.max_tokens)
    app = ClippyApp(generator, executor, confirm_action=config.confirm_action)
    return app.run(" ".join(args.prompt), verbose=config.verbose)
