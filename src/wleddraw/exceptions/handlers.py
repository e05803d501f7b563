"""
Centralized error handling utilities.

Each layer translates errors to be more useful at the next level up:

```
┌─────────────────────────────────────────┐
│  FRONT END (CLI)                        │
│  - Shows user_message + recovery_hint   │
└─────────────────────────────────────────┘
                  ↑
                  │ WledDrawError
                  │
┌─────────────────────────────────────────┐
│  SERVICES (editor, device)              │
│  - Turns NetworkError into error flags  │
│  - Falls back to defaults on bad data   │
└─────────────────────────────────────────┘
                  ↑
                  │ requests / pydantic / PIL exceptions
                  │
┌─────────────────────────────────────────┐
│  LOW LEVEL (HTTP client, storage, I/O)  │
└─────────────────────────────────────────┘
```

## Handling Patterns

| Pattern | Code |
|---------|------|
| Log, continue with a fallback | `@handle_errors(operation_name="remove stop", re_raise=False, fallback_value=False)` |
| Log and re-raise | `@handle_errors(operation_name="push frame", re_raise=True)` |
| Critical section with auto-logging | `with ErrorContext("load state"): ...` |
| Convert an HTTP failure | `raise wrap_request_error(e, url) from e` |
"""

import logging
from collections.abc import Callable
from functools import wraps
from typing import Optional, TypeVar

from .base import WledDrawError
from .config import ConfigFileInvalidError, ConfigValidationError
from .network import DeviceUnreachableError, InvalidDeviceResponseError, NetworkError


logger = logging.getLogger(__name__)

T = TypeVar('T')


def handle_errors(
    *,
    operation_name: str,
    user_notification: Optional[Callable[[str], None]] = None,
    fallback_value: Optional[T] = None,
    re_raise: bool = True,
    log_level: int = logging.ERROR
) -> Callable:
    """
    Decorator for consistent error handling.

    Args:
        operation_name: Name of the operation for logging (e.g., "send frame")
        user_notification: Optional callback to notify user
        fallback_value: Value to return if error occurs and re_raise=False
        re_raise: Whether to re-raise the exception after handling
        log_level: Logging level for the error (default: ERROR)

    Example:
        ```python
        @handle_errors(operation_name="remove color stop", re_raise=False, fallback_value=False)
        def remove_stop(self, index: int) -> bool:
            self._spec = self._spec.without_stop(index)
            return True
        ```
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)

            except WledDrawError as e:
                logger.log(log_level, f"Failed to {operation_name}: {e.technical_message}")

                if user_notification:
                    user_notification(e.get_full_message())

                if re_raise:
                    raise
                return fallback_value

            except Exception as e:
                logger.log(
                    log_level,
                    f"Unexpected error during {operation_name}: {e}",
                    exc_info=True
                )

                if user_notification:
                    user_notification(f"Error: {e}")

                if re_raise:
                    raise
                return fallback_value

        return wrapper
    return decorator


class ErrorContext:
    """
    Context manager for error handling with automatic logging.

    Example:
        ```python
        with ErrorContext("restore history", re_raise=False) as ctx:
            history.load(raw)

        if ctx.error:
            history.clear()
        ```
    """

    def __init__(
        self,
        operation: str,
        logger_instance: Optional[logging.Logger] = None,
        re_raise: bool = True
    ):
        """
        Initialize error context.

        Args:
            operation: Description of the operation
            logger_instance: Logger to use (defaults to module logger)
            re_raise: Whether to re-raise exceptions
        """
        self.operation = operation
        self.logger = logger_instance or logger
        self.re_raise = re_raise
        self.error: Optional[Exception] = None

    def __enter__(self):
        """Enter the context."""
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """
        Exit the context and handle any exceptions.

        Returns:
            True if exception should be suppressed, False otherwise
        """
        if exc_type is None:
            self.logger.debug(f"Completed: {self.operation}")
            return False

        self.error = exc_val

        if isinstance(exc_val, WledDrawError):
            self.logger.error(
                f"Failed to {self.operation}: {exc_val.technical_message}"
            )
        else:
            self.logger.error(
                f"Failed to {self.operation}: {exc_val}",
                exc_info=True
            )

        return not self.re_raise


def wrap_pydantic_error(error: Exception, file_path: str) -> WledDrawError:
    """
    Convert Pydantic validation errors to wleddraw exceptions.

    Args:
        error: The Pydantic ValidationError
        file_path: Path to the config file that failed validation

    Returns:
        A ConfigurationError with appropriate type and message
    """
    from pydantic import ValidationError as PydanticValidationError

    error_msg = str(error)

    # Format: "Invalid JSON: <actual error> [type=json_invalid, ..."
    if "Invalid JSON" in error_msg or "json_invalid" in error_msg:
        if "Invalid JSON:" in error_msg:
            parse_error = error_msg.split("Invalid JSON:")[1].split("[type=")[0].strip()
        else:
            parse_error = error_msg

        return ConfigFileInvalidError(file_path, parse_error)

    if isinstance(error, PydanticValidationError):
        errors = error.errors()
        if len(errors) == 1:
            first_error = errors[0]
            field = ".".join(str(loc) for loc in first_error.get('loc', ('unknown',)))
            return ConfigValidationError(
                field=field,
                value=first_error.get('input', None),
                error_msg=first_error.get('msg', 'validation failed'),
                file_path=file_path
            )
        if errors:
            error_lines = []
            for err in errors:
                field = ".".join(str(loc) for loc in err.get('loc', ('unknown',)))
                error_lines.append(f"  - {field}: {err.get('msg', 'validation failed')}")

            combined_msg = f"{len(errors)} validation errors:\n" + "\n".join(error_lines)
            return ConfigValidationError(
                field="multiple fields",
                value=None,
                error_msg=combined_msg,
                file_path=file_path
            )

    return ConfigValidationError(
        field="unknown",
        value=None,
        error_msg=error_msg,
        file_path=file_path
    )


def wrap_request_error(error: Exception, url: str) -> NetworkError:
    """
    Convert low-level HTTP errors to wleddraw exceptions.

    Args:
        error: The original exception from requests (or JSON decoding)
        url: The device URL that was called

    Returns:
        A NetworkError subclass with a user-friendly message
    """
    import requests

    if isinstance(error, NetworkError):
        return error

    if isinstance(error, requests.HTTPError):
        status = error.response.status_code if error.response is not None else None
        return InvalidDeviceResponseError(url, status_code=status, detail=str(error))

    if isinstance(error, (requests.ConnectionError, requests.Timeout)):
        return DeviceUnreachableError(url, original_error=str(error))

    if isinstance(error, ValueError):
        # requests raises a ValueError subclass for undecodable JSON bodies
        return InvalidDeviceResponseError(url, detail=f"Body is not JSON: {error}")

    return NetworkError(
        user_message=f"Device request failed: {error}",
        url=url,
        technical_message=f"Request to {url} failed: {error!r}",
    )


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Format an exception for user display.

    Args:
        error: The exception to format

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, WledDrawError):
        return error.user_message, error.recovery_hint

    error_type = type(error).__name__
    return f"{error_type}: {error}", None
