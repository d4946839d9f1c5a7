"""Podkeeper Core Exceptions Package - Exception hierarchy for error handling.

Missing files (user settings, Podfile, Podfile.lock) are treated as absent
values by the configuration layer; these exceptions signal content that
exists but is malformed or invalid.
"""

from .core import (
    ConfigurationError,
    ParsingError,
    PodkeeperError,
)

__all__ = [
    # Base exception
    "PodkeeperError",

    # Domain-specific exceptions
    "ParsingError",
    "ConfigurationError",
]
