"""High-level application facade for the editor."""

import logging

from wleddraw.core.coalescer import TimerFactory
from wleddraw.devices import WledClient
from wleddraw.models import AppConfig
from wleddraw.protocols import DeviceEvent
from wleddraw.services import DeviceService, EditorService
from wleddraw.storage import JsonFileKeyValueStore, StateStore

logger = logging.getLogger(__name__)


class WledDrawApp:
    """
    Wires configuration, persisted state, the device and the editor.

    Separates concerns:
    - EditorService: grid, history, palette and the send pipeline
    - DeviceService: device reachability and frame delivery
    - WledDrawApp: construction, startup and shutdown

    The only link from the device to the editor is MATRIX_DETECTED, which
    rebuilds the grid at the reported size. Rebuilding the grid never
    triggers a device request.

    Settings saved with the drawing (debounce delay, brightness, nightlight
    timer, grid size) take precedence over the config defaults.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        store: StateStore | None = None,
        client: WledClient | None = None,
        timer_factory: TimerFactory | None = None,
    ):
        """
        Initialize the application.

        Args:
            config: Application configuration (loads default if None)
            store: Persisted state (defaults to the JSON file at config.state_path)
            client: Device client (defaults to one for config.api_url)
            timer_factory: Debounce timer factory (tests inject fakes)
        """
        self.config = config or AppConfig.load_or_default()
        self.store = store or StateStore(JsonFileKeyValueStore(self.config.state_path))

        client = client or WledClient(self.config.api_url, timeout=self.config.request_timeout)
        self.device = DeviceService(client, ignore_api=self.config.offline)

        width, height = self.store.get_grid_size() or (self.config.default_width, self.config.default_height)
        self.editor = EditorService(
            self.store,
            width=width,
            height=height,
            encoding=self.config.encoding,
            brightness=self._saved_or_default(self.store.get_brightness(), self.config.brightness),
            nightlight_timer=self._saved_or_default(
                self.store.get_nightlight_timer(), self.config.nightlight_timer
            ),
            debounce_ms=self._saved_or_default(self.store.get_debounce_delay(), self.config.debounce_ms),
            sink=self.device.push,
            timer_factory=timer_factory,
        )
        self.device.register_observer(self)

    @staticmethod
    def _saved_or_default(saved: int | None, default: int) -> int:
        return default if saved is None else saved

    def start(self, fetch_info: bool = True) -> None:
        """
        Load the saved drawing and, unless offline, ask the device for its matrix size.

        Args:
            fetch_info: Request device info (synchronously) after loading
        """
        self.editor.setup_grid(self.editor.width, self.editor.height)
        if fetch_info and not self.device.ignore_api:
            self.device.refresh()
        logger.info(f"Application started ({self.editor.width}x{self.editor.height})")

    def on_device_event(self, event: DeviceEvent, **kwargs) -> None:
        """React to device events (DeviceObserver protocol)."""
        if event == DeviceEvent.MATRIX_DETECTED:
            width, height = kwargs["width"], kwargs["height"]
            if (width, height) != (self.editor.width, self.editor.height):
                logger.info(f"Device reports a {width}x{height} matrix, rebuilding grid")
                self.editor.setup_grid(width, height)
        elif event == DeviceEvent.CONNECTION_ERROR:
            logger.warning("Device not reachable, drawing continues locally")

    def shutdown(self) -> None:
        """Deliver pending changes and release the device connection."""
        logger.info("Shutting down")
        self.editor.shutdown()
        self.device.close()
