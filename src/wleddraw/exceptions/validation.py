"""Data validation exceptions.

Raised for malformed colors, out-of-range gradient parameters and stored
data that cannot be decoded. Callers recover by falling back to defaults.
"""

from typing import Any

from .base import WledDrawError


class ValidationError(WledDrawError):
    """Input or stored data is malformed."""

    def __init__(self, user_message: str, **kwargs):
        kwargs.setdefault("recoverable", True)
        super().__init__(user_message, **kwargs)


class InvalidColorError(ValidationError):
    """A color string is not a valid #rrggbb hex value."""

    def __init__(self, value: Any):
        """
        Initialize invalid color error.

        Args:
            value: The rejected color value
        """
        super().__init__(
            user_message=f"Invalid color: {value!r}",
            technical_message=f"Expected '#rrggbb' hex color, got {value!r}",
            recovery_hint="Use a hex color such as '#ff2500'.",
        )
        self.value = value


class GradientParameterError(ValidationError):
    """A gradient parameter is out of range or a stop edit is not allowed."""

    def __init__(self, field: str, value: Any, error_msg: str):
        """
        Initialize gradient parameter error.

        Args:
            field: The gradient parameter that failed validation
            value: The rejected value
            error_msg: Why the value is invalid
        """
        super().__init__(
            user_message=f"Invalid gradient {field}: {error_msg}",
            technical_message=f"Gradient validation failed for {field}={value!r}: {error_msg}",
        )
        self.field = field
        self.value = value


class StoredDataError(ValidationError):
    """A persisted value could not be decoded."""

    def __init__(self, key: str, raw: str | None, error_msg: str):
        """
        Initialize stored data error.

        Args:
            key: The storage key that held the bad value
            raw: The raw stored string
            error_msg: Why decoding failed
        """
        preview = raw if raw is None or len(raw) <= 60 else raw[:57] + "..."
        super().__init__(
            user_message=f"Ignoring unreadable saved value for '{key}'",
            technical_message=f"Failed to decode '{key}' from {preview!r}: {error_msg}",
        )
        self.key = key
