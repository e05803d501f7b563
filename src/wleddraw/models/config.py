"""Application configuration model."""

from pathlib import Path
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_serializer, field_validator

from wleddraw.model_manager.persistence import PydanticPersistence

from .enums import EncodingMode

CONFIG_DIR = Path.home() / ".wleddraw"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.json"


class AppConfig(BaseModel):
    """Application configuration and settings."""

    # Device
    api_url: str = Field(
        default="http://4.3.2.1/json",
        description="WLED JSON API endpoint (http://<device>/json)",
    )
    request_timeout: float = Field(
        default=2.0, gt=0, description="HTTP timeout for device requests (seconds)"
    )
    offline: bool = Field(
        default=False, description="Draw without contacting the device"
    )

    # Output
    brightness: int = Field(default=128, ge=0, le=255, description="Brightness sent with every frame")
    nightlight_timer: int = Field(
        default=0, ge=0, description="Nightlight duration in minutes (0 = disabled)"
    )
    encoding: EncodingMode = Field(
        default=EncodingMode.SERPENTINE,
        description="LED addressing order (serpentine or row_major)",
    )
    debounce_ms: int = Field(
        default=100, ge=0, description="Delay before coalesced pixel edits are sent (ms)"
    )

    # Grid used before the device reports its matrix size
    default_width: int = Field(default=16, gt=0, description="Grid width when the device is unknown")
    default_height: int = Field(default=16, gt=0, description="Grid height when the device is unknown")

    # Paths
    state_path: Path = Field(
        default_factory=lambda: CONFIG_DIR / "state.json",
        description="File holding the drawing, palette and undo history",
    )

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Require an absolute http(s) URL."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise ValueError("must be an absolute http(s) URL, e.g. http://4.3.2.1/json")
        return v

    @field_serializer("state_path")
    def serialize_path(self, path: Path) -> str:
        """Serialize Path to string."""
        return str(path)

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses ~/.wleddraw/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        return PydanticPersistence.load_json_or_default(path or DEFAULT_CONFIG_PATH, cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        PydanticPersistence.save_json(self, path or DEFAULT_CONFIG_PATH)
