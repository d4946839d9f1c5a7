"""User-facing output for Podkeeper.

Messages meant for the person running the tool go to stdout and honour
the ``silent`` and ``verbose`` flags. Diagnostic output
goes through loguru instead.
"""

import json
import sys
from typing import Any, Dict, Optional, TextIO

import yaml


class OutputFormatter:
    """Handles consistent output formatting across the tool."""

    def __init__(self, verbose: bool = False, silent: bool = False, stream: Optional[TextIO] = None):
        """Initialize output formatter.

        Args:
            verbose: Whether to print verbose messages
            silent: Whether to suppress everything but errors
            stream: Output stream (stdout when omitted)
        """
        self.verbose = verbose and not silent
        self.silent = silent
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved per call so captured/redirected stdout is honoured
        return self._stream or sys.stdout

    def puts(self, message: str) -> None:
        """Print a plain line unless silent."""
        if not self.silent:
            print(message, file=self.stream)

    def info(self, message: str) -> None:
        self.puts(message)

    def verbose_info(self, message: str) -> None:
        """Print a message only in verbose mode."""
        if self.verbose:
            print(message, file=self.stream)

    def json_output(self, data: Dict[str, Any]) -> None:
        print(json.dumps(data, indent=2, default=str), file=self.stream)

    def yaml_output(self, data: Dict[str, Any]) -> None:
        print(yaml.dump(data, default_flow_style=False, sort_keys=False).rstrip(), file=self.stream)
