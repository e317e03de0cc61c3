"""
Infrastructure helpers shared by the client, the CLI and the tests.

Kept free of third-party imports so it can be loaded before any transport is
configured.
"""

from .logging import StructuredLogFormatter, configure_logging, get_logger

__all__ = [
    "StructuredLogFormatter",
    "configure_logging",
    "get_logger",
]
