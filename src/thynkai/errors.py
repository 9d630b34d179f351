"""Error formatting utilities for thynkai.

Provides clean, user-friendly error messages from Pydantic validation errors
and other exceptions.
"""

import subprocess

from pydantic import ValidationError

from thynkai import cli_logger, exit_codes
from thynkai.fs import InvalidJsonError
from thynkai.validate import RegistryValidationError


def format_validation_errors(error: ValidationError) -> str:
    """Format Pydantic ValidationError into clean, user-friendly message.

    Removes Pydantic-specific URLs and technical jargon, producing a message
    suitable for CLI output.

    Args:
        error: The Pydantic ValidationError to format.

    Returns:
        A clean, human-readable error message.
    """
    messages = []

    for err in error.errors():
        # Field path, e.g. "artifact.digest" or just "version"
        loc = ".".join(str(part) for part in err["loc"])

        error_type = err["type"]
        msg = err["msg"]

        if error_type == "missing":
            messages.append(f"'{loc}': field is required")
        elif error_type == "string_type":
            messages.append(f"'{loc}': expected string")
        elif error_type == "list_type":
            messages.append(f"'{loc}': expected list")
        elif error_type == "dict_type":
            messages.append(f"'{loc}': expected object")
        elif error_type == "enum":
            messages.append(f"'{loc}': {msg.lower()}")
        elif error_type == "value_error":
            # Drop Pydantic's "Value error, " prefix from custom validators
            clean_msg = msg.removeprefix("Value error, ")
            messages.append(f"'{loc}': {clean_msg}")
        else:
            messages.append(f"'{loc}': {msg.lower()}")

    if len(messages) == 1:
        return messages[0]

    return "; ".join(messages)


def handle_cli_error(error: Exception) -> int:
    """Handle an unhandled exception at the CLI boundary.

    Formats the error into a clean user-friendly message and returns
    an appropriate exit code. This is the last line of defense; it
    prevents raw tracebacks from reaching the user.

    Args:
        error: The exception to handle.

    Returns:
        An exit code from exit_codes.
    """
    if isinstance(error, (RegistryValidationError, InvalidJsonError)):
        cli_logger.error(str(error))
        return exit_codes.GENERAL_ERROR

    if isinstance(error, ValidationError):
        cli_logger.error(f"Invalid document: {format_validation_errors(error)}")
        return exit_codes.GENERAL_ERROR

    if isinstance(error, subprocess.CalledProcessError):
        cmd_str = " ".join(str(c) for c in error.cmd) if isinstance(error.cmd, list) else str(error.cmd)
        cli_logger.error(f"Command failed (exit code {error.returncode}): {cmd_str}")
        return exit_codes.GENERAL_ERROR

    if isinstance(error, OSError):
        if error.filename:
            cli_logger.error(f"{error.strerror}: {error.filename}")
        else:
            cli_logger.error(str(error))
        return exit_codes.GENERAL_ERROR

    cli_logger.error(f"Unexpected error: {error}")
    return exit_codes.GENERAL_ERROR
