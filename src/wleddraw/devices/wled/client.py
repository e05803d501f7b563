"""HTTP client for the WLED JSON API."""

import logging
from typing import Any
from urllib.parse import urlparse

import requests
from pydantic import BaseModel, Field

from wleddraw.exceptions import InvalidDeviceResponseError, wrap_request_error

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json; charset=UTF-8"}


class DeviceInfo(BaseModel):
    """The parts of ``GET /json`` the editor cares about."""

    name: str | None = Field(default=None, description="Device name")
    version: str | None = Field(default=None, description="Firmware version")
    led_count: int | None = Field(default=None, description="Total LEDs configured")
    matrix_width: int | None = Field(default=None, description="2D matrix width, if configured")
    matrix_height: int | None = Field(default=None, description="2D matrix height, if configured")

    @property
    def has_matrix(self) -> bool:
        return bool(self.matrix_width and self.matrix_height)

    @classmethod
    def from_response(cls, data: Any) -> "DeviceInfo":
        """
        Extract device info from a ``GET /json`` body.

        Missing or malformed fields are left as None.
        """
        info = data.get("info") if isinstance(data, dict) else None
        if not isinstance(info, dict):
            return cls()

        leds = info.get("leds") if isinstance(info.get("leds"), dict) else {}
        matrix = leds.get("matrix") if isinstance(leds.get("matrix"), dict) else {}

        def positive_int(value: Any) -> int | None:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return None
            return int(value) if value > 0 else None

        return cls(
            name=info.get("name") if isinstance(info.get("name"), str) else None,
            version=info.get("ver") if isinstance(info.get("ver"), str) else None,
            led_count=positive_int(leds.get("count")),
            matrix_width=positive_int(matrix.get("w")),
            matrix_height=positive_int(matrix.get("h")),
        )


class WledClient:
    """
    Thin wrapper over ``requests`` for one WLED device.

    Every failure (connection error, timeout, non-2xx status, body that is
    not JSON) is raised as a NetworkError subclass.
    """

    def __init__(self, api_url: str, timeout: float = 2.0, session: requests.Session | None = None):
        """
        Initialize the client.

        Args:
            api_url: JSON API endpoint, e.g. http://4.3.2.1/json
            timeout: Request timeout in seconds
            session: Optional session (injected by tests)
        """
        self.api_url = api_url
        self.timeout = timeout
        self._session = session or requests.Session()

    @property
    def base_url(self) -> str:
        """Device web interface URL (scheme://host)."""
        parsed = urlparse(self.api_url)
        return f"{parsed.scheme}://{parsed.hostname}"

    def close(self) -> None:
        self._session.close()

    def _request(self, method: str, body: str | None = None) -> Any:
        try:
            response = self._session.request(
                method,
                self.api_url,
                data=body,
                headers=JSON_HEADERS,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise wrap_request_error(e, self.api_url) from e

    def fetch_info(self) -> DeviceInfo:
        """
        ``GET /json`` and extract the device info.

        Raises:
            NetworkError: If the request fails or the body is not JSON
        """
        data = self._request("GET")
        if not isinstance(data, dict):
            raise InvalidDeviceResponseError(self.api_url, detail="Expected a JSON object")
        info = DeviceInfo.from_response(data)
        logger.info(
            f"Device info from {self.api_url}: name={info.name} "
            f"matrix={info.matrix_width}x{info.matrix_height}"
        )
        return info

    def send_state(self, body: str) -> Any:
        """
        ``POST /json`` with a prebuilt state body.

        Returns:
            The decoded JSON response

        Raises:
            NetworkError: If the request fails or the body is not JSON
        """
        result = self._request("POST", body)
        logger.debug(f"Posted {len(body)} bytes to {self.api_url}")
        return result
