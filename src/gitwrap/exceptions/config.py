from __future__ import annotations

from typing import Any

from gitwrap.exceptions.base import GitwrapError


class ConfigError(GitwrapError):
    """Exception for configuration loading, parsing, and validation errors.

    Raised for YAML parsing failures, Pydantic validation errors, and invalid
    environment variable values.

    Attributes:
        message: Human-readable error message describing the configuration issue.
        field: Optional field name that caused the error (e.g., "git.binary").
        value: Optional value that failed validation (for debugging).

    Examples:
        ```python
        raise ConfigError("Failed to parse gitwrap.yaml: invalid YAML at line 3")

        raise ConfigError(
            "Invalid configuration value",
            field="defaults.max_count",
            value=-1,
        )
        ```
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        """Initialize the ConfigError.

        Args:
            message: Human-readable error message.
            field: Optional field name that caused the error.
            value: Optional value that failed validation.
        """
        self.field = field
        self.value = value
        super().__init__(message)
