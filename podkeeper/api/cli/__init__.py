"""Podkeeper CLI API package - modular command-line interface."""

# Commands are imported lazily in main.py when needed

__all__ = [
    "config_command",
]
