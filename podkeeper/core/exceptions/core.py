"""Errors raised while reading Podkeeper's inputs.

Three kinds of file feed the configuration: the user settings YAML, the
Podfile and ``Podfile.lock``. A missing file is never an error. These
classes are raised only when one of them exists but its content cannot be
used, and the CLI turns any of them into a one-line message and exit
status 1.
"""

from typing import Optional, Any, Dict


class PodkeeperError(Exception):
    """Root of the errors Podkeeper reports to the user.

    ``context`` holds extra facts a caller wants in the message, such as
    the installation root a Podfile was found in. ``cause`` is the
    YAML, OS or validation error underneath, when there is one.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        """
        Args:
            message: What went wrong, phrased for the person running the tool
            context: Extra facts appended to the message (e.g. ``{"installation_root": ...}``)
            cause: Exception raised by the YAML parser, the filesystem or pydantic
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.cause = cause

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message

    def add_context(self, key: str, value: Any) -> "PodkeeperError":
        """Record one more fact and return the error, for use in ``raise``."""
        self.context[key] = value
        return self


class ParsingError(PodkeeperError):
    """Raised when a settings file, Podfile or Podfile.lock cannot be parsed."""

    def __init__(
        self,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        reason: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        """Initialize parsing error.

        Args:
            file_path: Path to file that failed to parse
            operation: Parsing operation that failed (e.g., "load_podfile")
            reason: Description of what went wrong
            context: Optional additional context
            cause: Optional underlying exception
        """
        parts = []
        if file_path:
            parts.append(f"file={file_path}")
        if operation:
            parts.append(f"operation={operation}")

        prefix = f"Parsing error ({', '.join(parts)})" if parts else "Parsing error"
        message = f"{prefix}: {reason}" if reason else prefix

        super().__init__(message, context, cause)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class ConfigurationError(PodkeeperError):
    """Raised when a configuration value is invalid.

    Used for user settings that parse as YAML but carry values of the wrong
    type, and for attempts to persist settings that do not exist.
    """

    def __init__(
        self,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        reason: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        """Initialize configuration error.

        Args:
            config_key: Configuration key that caused the error
            config_value: Invalid configuration value
            reason: Description of what went wrong
            context: Optional additional context
            cause: Optional underlying exception
        """
        if config_key:
            message = f"Configuration error for '{config_key}': {reason}"
        else:
            message = f"Configuration error: {reason}" if reason else "Configuration error"

        super().__init__(message, context, cause)
        self.config_key = config_key
        self.config_value = config_value
        self.reason = reason
