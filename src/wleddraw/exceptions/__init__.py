"""
Custom exception hierarchy for wleddraw.

## Exception Hierarchy

```
WledDrawError (base)
├── NetworkError
│   ├── DeviceUnreachableError
│   └── InvalidDeviceResponseError
├── ValidationError
│   ├── InvalidColorError
│   ├── GradientParameterError
│   └── StoredDataError
└── ConfigurationError
    ├── ConfigFileInvalidError
    └── ConfigValidationError
```

All custom exceptions inherit from `WledDrawError`, which provides
`user_message`, `technical_message`, `recoverable` and `recovery_hint`.

Nothing raised here is meant to be fatal. Network errors become an error
flag on the device service, validation errors fall back to defaults.

### Example: Device Unreachable

```python
from wleddraw.exceptions import DeviceUnreachableError

raise DeviceUnreachableError("http://4.3.2.1/json", original_error="timed out")

# User sees: "WLED device is not reachable."
# Recovery hint: "Check that the device is powered ... or run with --offline ..."
```

See `wleddraw.exceptions.handlers` for utilities to handle these exceptions systematically.
"""

from .base import WledDrawError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .handlers import (
    ErrorContext,
    format_error_for_display,
    handle_errors,
    wrap_pydantic_error,
    wrap_request_error,
)
from .network import DeviceUnreachableError, InvalidDeviceResponseError, NetworkError
from .validation import (
    GradientParameterError,
    InvalidColorError,
    StoredDataError,
    ValidationError,
)

__all__ = [
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # Network
    "DeviceUnreachableError",
    "ErrorContext",
    "GradientParameterError",
    "InvalidColorError",
    "InvalidDeviceResponseError",
    "NetworkError",
    "StoredDataError",
    # Validation
    "ValidationError",
    # Base
    "WledDrawError",
    "format_error_for_display",
    # Handlers
    "handle_errors",
    "wrap_pydantic_error",
    "wrap_request_error",
]
