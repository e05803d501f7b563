"""Shared utilities for file persistence.

Loads and saves Pydantic models (the application config) and raw text
documents (the key-value state file) with the same safety features:

    - Automatic .bak backups before overwriting files
    - Atomic writes using temp file + rename
    - Never auto-saves over corrupted files

Low-level Pydantic/IO errors are converted into WledDrawError exceptions
with recovery hints.
"""

import logging
import shutil
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from wleddraw.exceptions import ConfigFileInvalidError, ConfigurationError, wrap_pydantic_error

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def atomic_write_text(path: Path, content: str, backup: bool = True, create_parents: bool = True) -> None:
    """
    Write text to ``path`` atomically, optionally keeping a .bak of the old file.

    Raises:
        OSError: If the file cannot be written (permission denied, disk full, etc.)
    """
    if create_parents and path.parent:
        path.parent.mkdir(parents=True, exist_ok=True)

    if backup and path.exists():
        backup_path = path.with_suffix(path.suffix + ".bak")
        shutil.copy2(path, backup_path)
        logger.debug(f"Created backup: {backup_path}")

    temp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        temp_path.write_text(content, encoding="utf-8")
        temp_path.replace(path)
    finally:
        # Clean up temp file if it still exists (failed rename)
        if temp_path.exists():
            temp_path.unlink()


class PydanticPersistence:
    """
    Utility class providing shared Pydantic persistence operations.

    All methods are static and stateless.

    Example Usage:
        ```python
        config = PydanticPersistence.load_json(Path("config.json"), AppConfig)
        PydanticPersistence.save_json(config, Path("config.json"))
        ```
    """

    @staticmethod
    def load_json(path: Path, model_type: type[T]) -> T:
        """
        Load and validate a Pydantic model from a JSON file.

        Args:
            path: Path to the JSON file to load
            model_type: The Pydantic model class to validate against

        Returns:
            Validated model instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigFileInvalidError: If the JSON syntax is invalid
            ConfigValidationError: If the JSON content fails Pydantic validation
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            json_content = path.read_text(encoding="utf-8")

            if not json_content or not json_content.strip():
                raise ConfigFileInvalidError(str(path), "File is empty")

            model = model_type.model_validate_json(json_content)

            logger.debug(f"Loaded {model_type.__name__} from {path}")
            return model

        except ValidationError as e:
            logger.error(f"Validation error loading {model_type.__name__} from {path}: {e}")
            raise wrap_pydantic_error(e, str(path)) from e

        except ConfigurationError:
            raise

        except Exception as e:
            logger.error(f"Unexpected error loading {model_type.__name__} from {path}: {e}")
            raise ConfigFileInvalidError(str(path), f"Unexpected error: {e}") from e

    @staticmethod
    def save_json(data: BaseModel, path: Path, indent: int = 2, backup: bool = True) -> None:
        """
        Save a Pydantic model to a JSON file with automatic backup and atomic write.

        Raises:
            OSError: If the file cannot be written
            ConfigurationError: If serialization fails
        """
        try:
            atomic_write_text(path, data.model_dump_json(indent=indent), backup=backup)
            logger.debug(f"Saved {type(data).__name__} to {path}")

        except OSError as e:
            logger.error(f"OS error saving {type(data).__name__} to {path}: {e}")
            raise

        except Exception as e:
            logger.error(f"Unexpected error saving {type(data).__name__} to {path}: {e}")
            raise ConfigurationError(
                user_message=f"Failed to save configuration to {path}",
                technical_message=f"Failed to save {type(data).__name__}: {e}",
                recovery_hint="Check file permissions and disk space. Backup file (.bak) may be available.",
            ) from e

    @staticmethod
    def load_json_or_default(
        path: Path, model_type: type[T], default_factory: Callable | None = None
    ) -> T:
        """
        Load a model from JSON, or return a default if the file doesn't exist.

        Raises:
            ConfigFileInvalidError: If the file exists but has invalid JSON syntax
            ConfigValidationError: If the file exists but has invalid values

        Notes:
            Does not automatically save the default to disk.
        """
        try:
            return PydanticPersistence.load_json(path, model_type)
        except FileNotFoundError:
            logger.info(f"File not found: {path}, using default {model_type.__name__}")
            if default_factory:
                return default_factory()
            return model_type()
