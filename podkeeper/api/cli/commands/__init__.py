"""Podkeeper CLI commands package - modular command implementations."""

from .config import config_command

__all__ = [
    "config_command",
]
