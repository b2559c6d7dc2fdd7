"""
User configuration management for phashkit.

Three runtime settings can be changed without touching code. Each one is
resolved in this order:
1. Environment variable (PHASHKIT_WORKERS, PHASHKIT_MAX_PIXELS,
   PHASHKIT_PARALLEL_ALGORITHMS)
2. User config file ($PHASHKIT_CONFIG_DIR/config.json, default ~/.phashkit/)
3. Defaults from config.py

A value that cannot be parsed, or is out of range, is logged and replaced
by the default. Hashing constants (grid sizes, DCT precision) are not
configurable: changing them changes every hash.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional
import logging

from .config import (
    CONFIG_DIR,
    DEFAULT_WORKERS,
    DEFAULT_PARALLEL_ALGORITHMS,
    MAX_IMAGE_PIXELS,
)

logger = logging.getLogger(__name__)


def _positive_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("expected an integer, got a boolean")
    number = int(value)
    if number < 1:
        raise ValueError(f"must be at least 1, got {number}")
    return number


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ('1', 'true', 'yes', 'on'):
        return True
    if text in ('0', 'false', 'no', 'off', ''):
        return False
    raise ValueError(f"expected a boolean, got {value!r}")


@dataclass(frozen=True)
class Setting:
    key: str
    env_var: str
    default: Any
    parse: Callable[[Any], Any]


SETTINGS = {
    s.key: s for s in (
        Setting('default_workers', 'PHASHKIT_WORKERS', DEFAULT_WORKERS, _positive_int),
        Setting('max_image_pixels', 'PHASHKIT_MAX_PIXELS', MAX_IMAGE_PIXELS, _positive_int),
        Setting('parallel_algorithms', 'PHASHKIT_PARALLEL_ALGORITHMS', DEFAULT_PARALLEL_ALGORITHMS, _flag),
    )
}


class UserConfig:
    """Resolves SETTINGS from the environment and the config file."""

    def __init__(self):
        self._file_data: Optional[dict] = None

    @property
    def config_dir(self) -> Path:
        return Path(os.getenv('PHASHKIT_CONFIG_DIR') or CONFIG_DIR)

    @property
    def config_file_path(self) -> Path:
        return self.config_dir / 'config.json'

    def reload(self):
        """Drop the cached config file so the next lookup re-reads it."""
        self._file_data = None

    def _file(self) -> dict:
        if self._file_data is None:
            self._file_data = {}
            path = self.config_file_path
            if path.exists():
                try:
                    data = json.loads(path.read_text(encoding='utf-8'))
                except (OSError, json.JSONDecodeError) as e:
                    logger.warning(f"Failed to load config file {path}: {e}")
                else:
                    if isinstance(data, dict):
                        self._file_data = data
                        logger.debug(f"Loaded configuration from {path}")
                    else:
                        logger.warning(f"Ignoring config file {path}: expected a JSON object")
        return self._file_data

    def get(self, key: str) -> Any:
        """
        Resolve one setting.

        Raises:
            KeyError: If key is not a known setting
        """
        setting = SETTINGS[key]
        env_value = os.getenv(setting.env_var)
        if env_value is not None:
            raw, source = env_value, setting.env_var
        elif key in self._file():
            raw, source = self._file()[key], str(self.config_file_path)
        else:
            return setting.default

        try:
            return setting.parse(raw)
        except (TypeError, ValueError) as e:
            logger.warning(f"Invalid {key} from {source} ({raw!r}): {e}; using {setting.default!r}")
            return setting.default

    @property
    def default_workers(self) -> int:
        """Number of parallel workers for batch hashing."""
        return self.get('default_workers')

    @property
    def max_image_pixels(self) -> int:
        """Maximum image size in pixels accepted by the decoder."""
        return self.get('max_image_pixels')

    @property
    def parallel_algorithms(self) -> bool:
        """Run the four algorithms concurrently within one process() call."""
        return self.get('parallel_algorithms')

    def create_example_config(self) -> bool:
        """Write a config file holding every setting at its default."""
        example = {"_comment": "phashkit user configuration"}
        example.update({key: s.default for key, s in SETTINGS.items()})

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            self.config_file_path.write_text(json.dumps(example, indent=2), encoding='utf-8')
        except OSError as e:
            logger.error(f"Failed to create example config: {e}")
            return False
        logger.info(f"Created example config file at {self.config_file_path}")
        return True


_user_config = UserConfig()


def get_user_config() -> UserConfig:
    """Get the shared UserConfig instance."""
    return _user_config
