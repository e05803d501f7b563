"""Device network exceptions.

This module defines exceptions for talking to the WLED device:
- NetworkError: Base class for device communication errors
- DeviceUnreachableError: Connection refused, timed out, DNS failure
- InvalidDeviceResponseError: Non-2xx status or a body that is not JSON
"""

from .base import WledDrawError


class NetworkError(WledDrawError):
    """Communication with the WLED device failed."""

    def __init__(self, user_message: str, url: str | None = None, **kwargs):
        """
        Initialize network error.

        Args:
            user_message: User-friendly error message
            url: The device URL involved (if applicable)
        """
        kwargs.setdefault("recoverable", True)
        super().__init__(user_message, **kwargs)
        self.url = url


class DeviceUnreachableError(NetworkError):
    """The device did not answer."""

    def __init__(self, url: str, original_error: str | None = None):
        """
        Initialize device-unreachable error.

        Args:
            url: The API URL that could not be reached
            original_error: The error reported by the HTTP library
        """
        tech_msg = f"Could not reach {url}"
        if original_error:
            tech_msg += f"\nOriginal error: {original_error}"

        super().__init__(
            user_message="WLED device is not reachable.",
            url=url,
            technical_message=tech_msg,
            recovery_hint=(
                "Check that the device is powered and on the same network, "
                "or run with --offline to keep drawing without it."
            ),
        )


class InvalidDeviceResponseError(NetworkError):
    """The device answered with an error status or a non-JSON body."""

    def __init__(self, url: str, status_code: int | None = None, detail: str | None = None):
        """
        Initialize invalid-response error.

        Args:
            url: The API URL that was called
            status_code: HTTP status code of the response (if any)
            detail: What was wrong with the response
        """
        if status_code is not None and not 200 <= status_code < 300:
            user_msg = f"WLED device returned HTTP {status_code}."
        else:
            user_msg = "WLED device returned an unexpected response."

        tech_msg = f"Invalid response from {url}"
        if status_code is not None:
            tech_msg += f" (status {status_code})"
        if detail:
            tech_msg += f": {detail}"

        super().__init__(
            user_message=user_msg,
            url=url,
            technical_message=tech_msg,
            recovery_hint="Make sure the API URL points at the device's /json endpoint.",
        )
        self.status_code = status_code
