"""
CLI Error Handling Utilities

Consistent error output (rich or JSON) and exit codes for CLI commands.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from rich.console import Console

from mediamatch.shared.errors import (
    ApplicationError,
    ErrorCode,
    MediaMatchError,
)
from mediamatch.shared.logging import log_operation_error

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_MATCH_FAILURE = 1
EXIT_CONFIG_ERROR = 2
EXIT_UNEXPECTED_ERROR = 3

error_console = Console(stderr=True)


def format_json_output(
    command: str,
    *,
    success: bool,
    errors: list[dict[str, Any]] | None = None,
    data: dict[str, Any] | None = None,
) -> str:
    """Format command output as a JSON document.

    Args:
        command: The command that was executed
        success: Whether the operation was successful
        errors: Error payloads
        data: Command result

    Returns:
        JSON text
    """
    output: dict[str, Any] = {"success": success, "command": command}
    if errors:
        output["errors"] = errors
    if data is not None:
        output["data"] = data
    return json.dumps(output, indent=2, ensure_ascii=False, default=str)


def exit_code_for(error: Exception) -> int:
    """Map an exception to the process exit code."""
    if isinstance(error, ApplicationError):
        return EXIT_CONFIG_ERROR
    if isinstance(error, MediaMatchError):
        return EXIT_MATCH_FAILURE
    return EXIT_UNEXPECTED_ERROR


def handle_cli_error(error: Exception, command: str, *, json_output: bool = False) -> int:
    """Log and print an error, returning the exit code.

    Args:
        error: The exception that occurred
        command: The CLI command being executed
        json_output: Whether to print JSON

    Returns:
        Exit code for the CLI command
    """
    if isinstance(error, MediaMatchError):
        mm_error = error
        log_operation_error(logger, mm_error, operation=command)
    else:
        mm_error = ApplicationError(
            ErrorCode.CLI_UNEXPECTED_ERROR,
            f"Unexpected error: {error}",
            original_error=error,
        )
        logger.exception("Unexpected error in %s", command)

    if json_output:
        print(format_json_output(command, success=False, errors=[mm_error.to_dict()]))
    else:
        error_console.print(f"[red bold]Error:[/red bold] {mm_error.message}")

    return exit_code_for(error)
