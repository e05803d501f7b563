"""Debounce and coalesce grid changes into device sends."""

import logging
import threading
from collections.abc import Callable
from threading import Lock
from typing import Protocol

from wleddraw.exceptions import NetworkError

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    """Single-shot timer, as returned by ``threading.Timer``."""

    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def thread_timer(delay_s: float, callback: Callable[[], None]) -> TimerHandle:
    """Default timer factory: a daemon ``threading.Timer``."""
    timer = threading.Timer(delay_s, callback)
    timer.daemon = True
    return timer


class UpdateCoalescer:
    """
    Turns a stream of grid edits into a small number of device sends.

    The ``send`` callable always serializes the *current* grid, so the
    coalescer only has to decide when to call it, never what to send:

    - schedule_send(): mark a change pending and start the debounce timer
      unless one is already running. When the timer expires a send happens
      if the change is still pending. Calls made while the timer runs are
      absorbed by it.
    - send_immediate(): send now, bypassing the timer (end of a stroke).
    - flush(): cancel the timer and send now if a change is pending.

    A failed send is not retried. It sets ``error`` and the next edit will
    schedule a new send.

    Only one send runs at a time. A send requested while another is in
    flight is deferred: the running send goes again once it finishes, so
    the last state always reaches the device.

    Threading:
        The default timer fires on a ``threading.Timer`` thread. Flags are
        protected by a lock that is released before ``send`` is called.
    """

    def __init__(
        self,
        send: Callable[[], None],
        delay_ms: int = 100,
        timer_factory: TimerFactory | None = None,
    ):
        """
        Initialize the coalescer.

        Args:
            send: Callable that pushes the current grid to the device.
                  Raises NetworkError on failure.
            delay_ms: Debounce delay in milliseconds
            timer_factory: Creates single-shot timers (defaults to threading.Timer)
        """
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        self._send = send
        self._delay_ms = delay_ms
        self._timer_factory = timer_factory or thread_timer
        self._lock = Lock()
        self._timer: TimerHandle | None = None
        self._pending_change = False
        self._in_flight = False
        self._error = False
        self._last_error: Exception | None = None
        self._send_count = 0

    # =================================================================
    # State
    # =================================================================

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    @delay_ms.setter
    def delay_ms(self, value: int) -> None:
        if value < 0:
            raise ValueError("delay_ms must be >= 0")
        # Takes effect for the next timer
        self._delay_ms = value

    @property
    def pending_change(self) -> bool:
        with self._lock:
            return self._pending_change

    @property
    def in_flight(self) -> bool:
        with self._lock:
            return self._in_flight

    @property
    def timer_running(self) -> bool:
        with self._lock:
            return self._timer is not None

    @property
    def error(self) -> bool:
        """True when the most recent send failed."""
        with self._lock:
            return self._error

    @property
    def last_error(self) -> Exception | None:
        with self._lock:
            return self._last_error

    @property
    def send_count(self) -> int:
        """Number of sends attempted so far."""
        with self._lock:
            return self._send_count

    # =================================================================
    # Operations
    # =================================================================

    def schedule_send(self) -> None:
        """Mark a change pending and start the debounce timer if idle."""
        with self._lock:
            self._pending_change = True
            if self._timer is not None:
                return
            self._timer = self._timer_factory(self._delay_ms / 1000.0, self._on_timer_expired)
            timer = self._timer
        timer.start()
        logger.debug(f"Debounce timer started ({self._delay_ms} ms)")

    def send_immediate(self) -> bool:
        """
        Send the current state now, regardless of the timer.

        Returns:
            True if the send succeeded or was deferred to the send in flight
        """
        with self._lock:
            self._pending_change = False
        return self._perform_send()

    def flush(self) -> bool:
        """
        Cancel the timer and deliver any pending change right away.

        Returns:
            True if a send happened and succeeded, False otherwise
        """
        with self._lock:
            timer, self._timer = self._timer, None
            pending, self._pending_change = self._pending_change, False
        if timer is not None:
            timer.cancel()
        if not pending:
            return False
        logger.debug("Flushing pending change")
        return self._perform_send()

    def shutdown(self) -> None:
        """Cancel the timer without sending."""
        with self._lock:
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

    def _on_timer_expired(self) -> None:
        with self._lock:
            self._timer = None
            if not self._pending_change:
                return
            self._pending_change = False
        self._perform_send()

    def _perform_send(self) -> bool:
        with self._lock:
            if self._in_flight:
                # Picked up by the running send when it finishes
                self._pending_change = True
                logger.debug("Send already in flight, deferring")
                return True
            self._in_flight = True

        while True:
            succeeded = self._send_once()
            with self._lock:
                # A running timer owns any pending change
                if not self._pending_change or self._timer is not None:
                    self._in_flight = False
                    return succeeded
                self._pending_change = False
            logger.debug("Change arrived during send, sending again")

    def _send_once(self) -> bool:
        with self._lock:
            self._send_count += 1
        try:
            self._send()
        except NetworkError as e:
            logger.warning(f"Send failed: {e.technical_message}")
            self._set_result(e)
            return False
        except Exception as e:
            logger.error(f"Unexpected error while sending: {e}", exc_info=True)
            self._set_result(e)
            return False
        self._set_result(None)
        return True

    def _set_result(self, error: Exception | None) -> None:
        with self._lock:
            self._error = error is not None
            self._last_error = error
