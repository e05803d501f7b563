"""JSON payload encoding for the WLED state API."""

import json
import logging

from wleddraw.models import BLACK, EncodingMode

from .mapper import MatrixMapper

logger = logging.getLogger(__name__)

_COMPACT = (",", ":")


class PayloadEncoder:
    """
    Builds the body POSTed to ``/json`` to paint the matrix.

    Shape (keys in this order)::

        {"on":true,"bri":128,"nl":{"on":true,"dur":5},"v":true,"seg":{"i":["ff0000",...]}}

    The ``nl`` (nightlight) clause is present only when the timer is > 0.
    ``seg.i`` lists every LED color in physical order without the '#'.
    """

    def __init__(
        self,
        width: int,
        height: int,
        mode: EncodingMode = EncodingMode.SERPENTINE,
        brightness: int = 128,
        nightlight_timer: int = 0,
    ):
        """
        Initialize the encoder.

        Args:
            width: Matrix width
            height: Matrix height
            mode: LED addressing order
            brightness: Device brightness (0-255)
            nightlight_timer: Nightlight duration in minutes, 0 disables it
        """
        if not 0 <= brightness <= 255:
            raise ValueError(f"Brightness must be 0-255, got {brightness}")
        if nightlight_timer < 0:
            raise ValueError(f"Nightlight timer must be >= 0, got {nightlight_timer}")
        self.mapper = MatrixMapper(width, height, mode)
        self.brightness = brightness
        self.nightlight_timer = nightlight_timer

    @property
    def mode(self) -> EncodingMode:
        return self.mapper.mode

    def led_colors(self, cells: list[str]) -> list[str]:
        """Cell colors in physical order, '#' stripped, empty cells sent as black."""
        return [(color or BLACK).lstrip("#") for color in self.mapper.to_physical(cells)]

    def build_state(self, cells: list[str]) -> dict:
        """Build the state object as a dict (insertion order is the wire order)."""
        state: dict = {"on": True, "bri": self.brightness}
        if self.nightlight_timer > 0:
            state["nl"] = {"on": True, "dur": self.nightlight_timer}
        state["v"] = True
        state["seg"] = {"i": self.led_colors(cells)}
        return state

    def encode(self, cells: list[str]) -> str:
        """Serialize the state object to the compact JSON body."""
        body = json.dumps(self.build_state(cells), separators=_COMPACT)
        logger.debug(f"Encoded {len(cells)} cells ({self.mode.value}), {len(body)} bytes")
        return body
