"""Device service: connection state of the WLED device."""

import logging
from threading import Lock

from wleddraw.devices import DeviceInfo, WledClient
from wleddraw.exceptions import NetworkError
from wleddraw.model_manager import ObserverManager
from wleddraw.protocols import DeviceEvent, DeviceObserver

logger = logging.getLogger(__name__)


class DeviceService:
    """
    Tracks whether the device is reachable and forwards frames to it.

    Flags:
        loading: An info request is outstanding
        error: The last request (info or frame) failed
        ignore_api: The user chose to keep drawing without the device;
            frames and info requests are skipped

    Info requests carry a generation number. Only the response to the most
    recently issued request is applied, so a slow answer from a previous
    URL cannot overwrite a newer one.

    Threading:
        Flags are guarded by a lock. push() is normally called from the
        coalescer's timer thread, and observers are notified from it.
    """

    def __init__(self, client: WledClient, ignore_api: bool = False):
        """
        Initialize the device service.

        Args:
            client: HTTP client for the device
            ignore_api: Start in offline mode
        """
        self.client = client
        self._lock = Lock()
        self._generation = 0
        self._loading = False
        self._error = False
        self._ignore_api = ignore_api
        self._info: DeviceInfo | None = None
        self._last_error: NetworkError | None = None
        self._observers = ObserverManager[DeviceObserver](observer_type_name="device")

    @property
    def loading(self) -> bool:
        with self._lock:
            return self._loading

    @property
    def error(self) -> bool:
        with self._lock:
            return self._error

    @property
    def ignore_api(self) -> bool:
        with self._lock:
            return self._ignore_api

    @property
    def last_error(self) -> NetworkError | None:
        """Error of the most recent failed request, cleared by a success."""
        with self._lock:
            return self._last_error

    @property
    def info(self) -> DeviceInfo | None:
        """Most recently received device info."""
        with self._lock:
            return self._info

    # =================================================================
    # Event System
    # =================================================================

    def register_observer(self, observer: DeviceObserver) -> None:
        self._observers.register(observer)

    def unregister_observer(self, observer: DeviceObserver) -> None:
        self._observers.unregister(observer)

    def _notify(self, event: DeviceEvent, **kwargs) -> None:
        self._observers.notify("on_device_event", event, **kwargs)

    # =================================================================
    # Info requests
    # =================================================================

    def _begin_request(self) -> int:
        with self._lock:
            self._generation += 1
            self._loading = True
            return self._generation

    def refresh(self) -> DeviceInfo | None:
        """
        Fetch device info now.

        Returns:
            The device info, or None if the request failed, was superseded,
            or the device is being ignored
        """
        if self.ignore_api:
            logger.debug("Device ignored, skipping info request")
            return None
        return self._fetch(self._begin_request())

    def _fetch(self, generation: int) -> DeviceInfo | None:
        try:
            info = self.client.fetch_info()
        except NetworkError as e:
            with self._lock:
                if generation != self._generation:
                    logger.debug(f"Dropping stale failure of info request #{generation}")
                    return None
                self._loading = False
                self._error = True
                self._last_error = e
            logger.warning(f"Device info request failed: {e.technical_message}")
            self._notify(DeviceEvent.CONNECTION_ERROR, error=e)
            return None

        with self._lock:
            if generation != self._generation:
                logger.debug(f"Dropping stale response of info request #{generation}")
                return None
            self._loading = False
            self._error = False
            self._last_error = None
            self._info = info

        self._notify(DeviceEvent.INFO_RECEIVED, info=info)
        if info.has_matrix:
            self._notify(DeviceEvent.MATRIX_DETECTED, width=info.matrix_width, height=info.matrix_height)
        return info

    def continue_without_device(self) -> None:
        """Stop waiting for the device and keep drawing offline."""
        with self._lock:
            self._generation += 1
            self._loading = False
            self._error = False
            self._ignore_api = True
        logger.info("Continuing without device")

    # =================================================================
    # Frames
    # =================================================================

    def push(self, body: str) -> None:
        """
        POST an encoded frame.

        Raises:
            NetworkError: If the device rejected or did not answer the request
        """
        if self.ignore_api:
            return
        try:
            self.client.send_state(body)
        except NetworkError as e:
            with self._lock:
                self._error = True
                self._last_error = e
            self._notify(DeviceEvent.SEND_FAILED, error=e)
            raise
        with self._lock:
            self._error = False
            self._last_error = None

    def close(self) -> None:
        self.client.close()
