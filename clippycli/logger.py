import logging
import os
from logging.handlers import RotatingFileHandler

from rich.console import Console
from rich.logging import RichHandler

from .config import Config, get_config

LOG_FILE_NAME = "clippycli.log"


def setup_logging(config: Config = None):
    """Set up logging for the application.

    Errors go to stderr through Rich; everything at the root level goes to
    a rotating log file so the terminal UI stays clean.
    """
    config = config or get_config()

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if config.verbose else logging.INFO)

    # Console handler (with Rich)
    console = Console(stderr=True)
    rich_handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        rich_tracebacks=True
    )
    rich_handler.setLevel(logging.ERROR)
    root_logger.addHandler(rich_handler)

    # File handler (Rotating)
    try:
        os.makedirs(config.log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(config.log_dir, LOG_FILE_NAME),
            maxBytes=10*1024*1024, backupCount=5  # 10 MB per file, 5 backups
        )
    except OSError as e:
        root_logger.warning(f"File logging disabled, cannot write to {config.log_dir}: {e}")
    else:
        file_handler.setFormatter(
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        )
        root_logger.addHandler(file_handler)

    # The HTTP and gRPC layers under the Gemini SDK are chatty at INFO
    for noisy in ("urllib3", "httpx", "grpc", "google"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"Logger initialized. Logs will be stored in {config.log_dir}")
