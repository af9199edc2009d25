import logging
import sys

from .cli import run_cli

# Configure logging
logger = logging.getLogger(__name__)


def main():
    """Main entry point for the application."""
    try:
        exit_code = run_cli()
        sys.exit(exit_code)
    except KeyboardInterrupt:
        # Cancelling is a normal way to leave
        logger.info("Operation cancelled by user")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception: {str(e)}")
        print(f"Error running program: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
