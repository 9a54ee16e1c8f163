"""
Utility functions for the Emailnator client.

Provides logging and formatting helpers shared by the session and API modules.
"""

import config


def logger(message: str, level: int = 0, force: bool = False) -> None:
    """
    Print a message with indentation based on level.

    Args:
        message: The message to print.
        level: Indentation level (each level adds 2 spaces).
        force: Print even when config.VERBOSE is off.
    """
    if not config.VERBOSE and not force:
        return
    indent = "  " * level
    print(f"{indent}{message}")


def format_error(e: Exception) -> str:
    """
    Format an exception message for display.

    libcurl errors carry a trailing documentation link that clutters output.
    This function strips everything after "See https://curl.se/" and falls
    back to the exception class name for empty messages.

    Args:
        e: The exception to format.

    Returns:
        A cleaned error message string.
    """
    message = str(e).split("See https://curl.se/")[0].strip().rstrip(".")
    return message or type(e).__name__


def mask(value: str, show_chars: int = 3) -> str:
    """Mask sensitive data, showing only first few characters."""
    if not value:
        return "***"
    if len(value) <= show_chars:
        return "*" * len(value)
    return value[:show_chars] + "*" * (len(value) - show_chars)
