"""Errors in the wleddraw config file (``~/.wleddraw/config.json``).

The config holds the device API URL, output settings (brightness,
nightlight, encoding) and the fallback grid size. A broken file never
stops drawing: the CLI reports it and points at ``wleddraw config``.
"""

from typing import Any

from .base import WledDrawError

# Shown after the generic hint for fields whose valid values are not obvious
FIELD_HINTS = {
    "api_url": "Point it at the device's JSON API, e.g. http://4.3.2.1/json",
    "brightness": "Brightness is 0-255 (WLED's 'bri')",
    "nightlight_timer": "Nightlight is in minutes; 0 turns it off",
    "encoding": "Use 'serpentine' for zig-zag wired matrices, 'row_major' otherwise",
    "debounce_ms": "Debounce delay is in milliseconds (0 sends every edit)",
    "default_width": "Grid width must be a positive number of LEDs",
    "default_height": "Grid height must be a positive number of LEDs",
    "request_timeout": "Request timeout is in seconds",
}


class ConfigurationError(WledDrawError):
    """The config file cannot be read or holds bad values."""
    pass


class ConfigFileInvalidError(ConfigurationError):
    """The config file is not valid JSON."""

    def __init__(self, file_path: str, parse_error: str):
        lowered = parse_error.lower()
        if "trailing comma" in lowered:
            user_msg = "Config file has a trailing comma"
            recovery = f"Delete the comma after the last setting in {file_path}"
        elif "empty" in lowered:
            user_msg = "Config file is empty"
            recovery = f"Delete {file_path} or run 'wleddraw config reset --yes' to write the defaults"
        else:
            user_msg = "Config file is not valid JSON"
            recovery = (
                f"Fix the JSON in {file_path}, or run 'wleddraw config reset --yes' "
                "to start over from the defaults"
            )

        super().__init__(
            user_message=user_msg,
            technical_message=f"Cannot parse {file_path}: {parse_error}",
            recoverable=True,
            recovery_hint=recovery
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigurationError):
    """A config value is outside what the editor or device accepts."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: str | None = None):
        """
        Args:
            field: Config field name (or "multiple fields")
            value: The rejected value
            error_msg: Validation message from pydantic
            file_path: Config file the value came from, if any
        """
        if field in FIELD_HINTS:
            lines = [f"Run 'wleddraw config set {field} VALUE' or 'wleddraw config reset {field}'"]
            lines.append(FIELD_HINTS[field])
        else:
            lines = ["Run 'wleddraw config show' to review the settings"]
        if file_path:
            lines.append(f"Config file: {file_path}")

        super().__init__(
            user_message=f"Invalid setting '{field}': {error_msg}",
            technical_message=f"Config validation failed for {field}={value!r}: {error_msg}",
            recoverable=True,
            recovery_hint="\n".join(lines)
        )
        self.field = field
        self.value = value
        self.file_path = file_path
