"""
mediamatch Package Main Entry Point

Runs the CLI when the package is executed with ``python -m mediamatch``.
"""

import logging
import sys

from mediamatch.cli.error_handler import handle_cli_error
from mediamatch.cli.typer_app import app

logger = logging.getLogger(__name__)


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        logger.info("Command interrupted by user")
        sys.exit(1)
    except SystemExit:
        raise
    except Exception as e:  # noqa: BLE001
        sys.exit(handle_cli_error(e, "mediamatch-main"))
