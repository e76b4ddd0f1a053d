"""Common CLI helper utilities."""

from __future__ import annotations

import argparse
import logging


def setup_logging(level: int = logging.INFO) -> None:
    """Configure standard logging format for CLI tools."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def parse_positive_int(value: str, field_name: str = "value") -> int:
    """Parse a positive integer for argparse arguments.

    Args:
        value: Raw string from the command line.
        field_name: Name of the field for error messages.

    Returns:
        Parsed integer.

    Raises:
        argparse.ArgumentTypeError: If the value is not a positive integer.
    """
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{field_name} must be an integer") from exc
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"{field_name} must be at least 1")
    return parsed
