"""Editor service: drawing operations over the pixel grid."""

import logging
from collections.abc import Callable
from threading import Lock

from wleddraw.core import MAX_HISTORY_LENGTH, HistoryStack, PixelGrid, UpdateCoalescer
from wleddraw.core.coalescer import TimerFactory
from wleddraw.devices import PayloadEncoder
from wleddraw.exceptions import ErrorContext
from wleddraw.gradient import GradientField
from wleddraw.imaging import ImageSampler
from wleddraw.models import BLACK, DrawAction, EncodingMode, GradientSpec, HistoryAction, normalize_hex
from wleddraw.model_manager import ObserverManager
from wleddraw.protocols import DrawEvent, DrawObserver
from wleddraw.storage import PALETTE_SIZE, StateStore

logger = logging.getLogger(__name__)

FrameSink = Callable[[str], None]


class EditorService:
    """
    Owns the grid, its undo history and the send pipeline.

    Every edit follows the same path: record the inverse in the history,
    change the grid, persist through the StateStore, notify DrawObservers,
    then either schedule a debounced send (single pixels, batches) or send
    right away (end of stroke, clear, undo, full-array applies).

    Frames are encoded with a PayloadEncoder sized to the grid and handed to
    ``sink`` (normally ``DeviceService.push``). Without a sink, sends only
    encode.

    Threading:
        Edits are expected from one thread. The coalescer's timer thread
        only reads a snapshot of the cells and the encoder, taken under
        ``_frame_lock`` so setup_grid can swap both at once.
    """

    def __init__(
        self,
        store: StateStore,
        width: int = 16,
        height: int = 16,
        encoding: EncodingMode = EncodingMode.SERPENTINE,
        brightness: int = 128,
        nightlight_timer: int = 0,
        debounce_ms: int = 100,
        sink: FrameSink | None = None,
        timer_factory: TimerFactory | None = None,
        history_capacity: int = MAX_HISTORY_LENGTH,
    ):
        """
        Initialize the editor service.

        Args:
            store: Persisted editor state
            width: Initial grid width (until setup_grid is called)
            height: Initial grid height
            encoding: LED addressing order of the matrix
            brightness: Brightness sent with every frame (0-255)
            nightlight_timer: Nightlight minutes sent with every frame (0 = off)
            debounce_ms: Coalescing delay for pixel edits
            sink: Receives each encoded frame; raises NetworkError on failure
            timer_factory: Timer factory for the coalescer (tests inject fakes)
            history_capacity: Maximum undo depth
        """
        self.store = store
        self.grid = PixelGrid(width, height)
        self.history = HistoryStack(history_capacity)
        self.encoder = PayloadEncoder(width, height, encoding, brightness, nightlight_timer)
        self._frame_lock = Lock()
        self.gradient = GradientField()
        self._sink = sink
        self.coalescer = UpdateCoalescer(self._send_frame, debounce_ms, timer_factory)

        self._current_color = store.get_current_color()
        self._palette = store.get_palette()

        self._observers = ObserverManager[DrawObserver](observer_type_name="draw")
        logger.info(f"EditorService initialized ({width}x{height}, {encoding.value})")

    # =================================================================
    # State
    # =================================================================

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def cells(self) -> list[str]:
        return self.grid.cells

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def current_color(self) -> str:
        return self._current_color

    @property
    def palette(self) -> list[str]:
        return list(self._palette)

    @property
    def send_error(self) -> bool:
        """True when the last frame could not be delivered."""
        return self.coalescer.error

    # =================================================================
    # Event System
    # =================================================================

    def register_observer(self, observer: DrawObserver) -> None:
        self._observers.register(observer)

    def unregister_observer(self, observer: DrawObserver) -> None:
        self._observers.unregister(observer)

    def _notify(self, event: DrawEvent, **kwargs) -> None:
        self._observers.notify("on_draw_event", event, **kwargs)

    def _notify_grid_replaced(self) -> None:
        self._notify(DrawEvent.GRID_REPLACED, cells=self.grid.cells, width=self.width, height=self.height)

    def _notify_history(self) -> None:
        self._notify(DrawEvent.HISTORY_CHANGED, can_undo=self.history.can_undo, depth=len(self.history))

    # =================================================================
    # Persistence
    # =================================================================

    def _persist(self, history: bool = True) -> None:
        self.store.set_pixels(self.grid.cells)
        if history:
            self.store.set_history(self.history.to_json())

    def _load_history(self) -> None:
        with ErrorContext("restore undo history", logger, re_raise=False) as ctx:
            self.history.load_json(self.store.get_history() or "[]")
        if ctx.error:
            self.history.clear()
            self.store.clear_history()

    # =================================================================
    # Grid lifecycle
    # =================================================================

    def setup_grid(self, width: int, height: int) -> None:
        """
        (Re)build the grid at ``width x height``.

        Saved pixels are fitted to the new size by linear index, the undo
        history is restored, and the encoder follows the new dimensions.
        Nothing is sent to the device.
        """
        encoder = PayloadEncoder(
            width, height, self.encoder.mode, self.encoder.brightness, self.encoder.nightlight_timer
        )
        saved = self.store.get_pixels()
        with self._frame_lock:
            # A send sees either the old grid and encoder or the new pair
            self.grid.resize(width, height)
            if saved is not None:
                self.grid.replace(saved)
            self.encoder = encoder
        self.store.set_grid_size(width, height)
        self._persist(history=False)
        self._load_history()

        logger.info(f"Grid set up at {width}x{height} ({len(self.history)} undo steps)")
        self._notify_grid_replaced()
        self._notify_history()

    # =================================================================
    # Drawing
    # =================================================================

    def update_pixel(self, index: int, color: str) -> bool:
        """
        Paint one cell and schedule a debounced send.

        Returns:
            False if the cell already had that color (nothing recorded or sent)

        Raises:
            IndexError: If index is outside the grid
            InvalidColorError: If color is not a valid hex color
        """
        normalized = normalize_hex(color)
        previous = self.grid.get(index)
        if previous == normalized:
            return False

        self.history.record_draw(index, previous)
        self.grid.set(index, normalized)
        self._persist()

        self._notify(DrawEvent.PIXEL_UPDATED, index=index, color=normalized)
        self._notify_history()
        self.coalescer.schedule_send()
        return True

    def batch_update_pixels(self, indices: list[int], color: str) -> int:
        """
        Paint several cells one color as a single undo step.

        Returns:
            Number of cells painted

        Raises:
            IndexError: If any index is outside the grid (nothing is changed)
            InvalidColorError: If color is not a valid hex color
        """
        normalized = normalize_hex(color)
        indices = list(dict.fromkeys(indices))
        if not indices:
            return 0
        for index in indices:
            self.grid.get(index)

        self.history.record_snapshot(self.grid.cells)
        for index in indices:
            self.grid.set(index, normalized)
        self._persist()

        self._notify(DrawEvent.BATCH_UPDATED, indices=indices, color=normalized)
        self._notify_history()
        self.coalescer.schedule_send()
        return len(indices)

    def apply_full_array(self, colors: list[str]) -> None:
        """
        Replace the whole grid as a single undo step and send it now.

        ``colors`` is fitted to the grid size; malformed entries become black.
        """
        self.history.record_snapshot(self.grid.cells)
        self.grid.replace(colors)
        self._persist()

        self._notify_grid_replaced()
        self._notify_history()
        self.coalescer.send_immediate()

    def clear(self) -> None:
        """Blank the grid (undoable) and send it now."""
        self.history.record_snapshot(self.grid.cells)
        self.grid.fill_all(BLACK)
        self._persist()

        logger.info("Grid cleared")
        self._notify_grid_replaced()
        self._notify_history()
        self.coalescer.send_immediate()

    def undo(self) -> HistoryAction | None:
        """
        Revert the most recent edit and send the result now.

        Returns:
            The action that was reverted, or None if there was nothing to undo
        """
        action = self.history.undo(self.grid)
        if action is None:
            logger.debug("Nothing to undo")
            return None

        self._persist()
        if isinstance(action, DrawAction) and action.index < self.grid.size:
            self._notify(DrawEvent.PIXEL_UPDATED, index=action.index, color=self.grid.get(action.index))
        else:
            self._notify_grid_replaced()
        self._notify_history()
        self.coalescer.send_immediate()
        return action

    def draw_complete(self) -> None:
        """End of a stroke: deliver the final state without waiting for the timer."""
        self._notify(DrawEvent.DRAW_COMPLETE)
        self.coalescer.send_immediate()

    # =================================================================
    # Sending
    # =================================================================

    def schedule_send(self) -> None:
        self.coalescer.schedule_send()

    def flush(self) -> bool:
        """Send a pending change now. Returns True if a send happened and succeeded."""
        return self.coalescer.flush()

    def export_payload(self) -> str:
        """The JSON body for the current grid, as it would be POSTed."""
        encoder, cells = self._snapshot()
        return encoder.encode(cells)

    def _snapshot(self) -> tuple[PayloadEncoder, list[str]]:
        with self._frame_lock:
            return self.encoder, self.grid.cells

    def _send_frame(self) -> None:
        encoder, cells = self._snapshot()
        body = encoder.encode(cells)
        if self._sink is None:
            logger.debug("No frame sink attached, frame not delivered")
            return
        self._sink(body)

    def shutdown(self) -> None:
        """Deliver any pending change and stop the debounce timer."""
        self.coalescer.flush()
        self.coalescer.shutdown()

    # =================================================================
    # Settings
    # =================================================================

    def set_current_color(self, color: str) -> str:
        """
        Select the drawing color.

        A color that is not in the palette is put first and the last
        palette entry is dropped.

        Raises:
            InvalidColorError: If color is not a valid hex color
        """
        normalized = normalize_hex(color)
        self._current_color = normalized
        if normalized not in self._palette:
            self._palette = [normalized, *self._palette][:PALETTE_SIZE]
            self.store.set_palette(self._palette)
        self.store.set_current_color(normalized)
        self._notify(DrawEvent.COLOR_CHANGED, color=normalized, palette=self.palette)
        return normalized

    def set_debounce(self, delay_ms: int) -> None:
        """Change the coalescing delay (used from the next timer on)."""
        self.coalescer.delay_ms = delay_ms
        self.store.set_debounce_delay(delay_ms)

    def set_brightness(self, brightness: int) -> None:
        """Brightness for subsequent frames (0-255)."""
        if not 0 <= brightness <= 255:
            raise ValueError(f"Brightness must be 0-255, got {brightness}")
        self.encoder.brightness = brightness
        self.store.set_brightness(brightness)

    def set_nightlight_timer(self, minutes: int) -> None:
        """Nightlight duration for subsequent frames (0 disables it)."""
        if minutes < 0:
            raise ValueError(f"Nightlight timer must be >= 0, got {minutes}")
        self.encoder.nightlight_timer = minutes
        self.store.set_nightlight_timer(minutes)

    # =================================================================
    # Gradient and image import
    # =================================================================

    def apply_gradient(self, spec: GradientSpec | None = None) -> list[str]:
        """
        Render a gradient over the grid and apply it as one undo step.

        Args:
            spec: Gradient to render (defaults to the editor's current one)

        Returns:
            The applied colors, row-major
        """
        if spec is not None:
            self.gradient.set_spec(spec)
        colors = self.gradient.render(self.width, self.height)
        self.apply_full_array(colors)
        logger.info(f"Applied {self.gradient.spec.kind.value} gradient")
        return colors

    def apply_image(self, sampler: ImageSampler) -> list[str]:
        """Sample a picture at grid resolution and apply it as one undo step."""
        colors = sampler.render(self.width, self.height)
        self.apply_full_array(colors)
        logger.info(f"Applied image ({sampler.source_size[0]}x{sampler.source_size[1]} source)")
        return colors
