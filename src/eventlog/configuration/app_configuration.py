from __future__ import annotations
from pathlib import Path
from typing import Any, Dict
import yaml

from eventlog.util.logger import get_logger

logger = get_logger("app_configuration")


CONFIG_PATH = Path("./config/app_config.yml").resolve()

DEFAULT_EVENT_CONFIG_PATH = "config.json"
DEFAULT_EMBED_COLOR = 0x00AE86
DEFAULT_EMBED_TITLE = "New Event Log Submitted"
DEFAULT_EMBED_FOOTER = "Event Logger"


class EmbedSettings:
    """Typed accessors for the ``embed`` section of the application configuration."""

    def __init__(self, data: Dict[str, Any] | None = None) -> None:
        self.data: Dict[str, Any] = data or {}

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    @property
    def color(self) -> int:
        value = self.data.get("color", DEFAULT_EMBED_COLOR)
        if isinstance(value, str):
            try:
                return int(value.lstrip("#"), 16)
            except ValueError:
                logger.warning("[APP CONFIGURATION] Invalid embed color %r; using default.", value)
                return DEFAULT_EMBED_COLOR
        try:
            return int(value)
        except (TypeError, ValueError):
            return DEFAULT_EMBED_COLOR

    @property
    def title(self) -> str:
        return str(self.data.get("title") or DEFAULT_EMBED_TITLE)

    @property
    def footer(self) -> str:
        return str(self.data.get("footer") or DEFAULT_EMBED_FOOTER)


class AppConfig:
    """Accessor around the YAML operator configuration.

    The class caches the contents of ``./config/app_config.yml`` and exposes
    dictionary-like lookups plus typed shortcuts. Guild-facing state (log
    channel, event types) is not stored here; see
    :mod:`eventlog.configuration.event_config`.
    """

    def __init__(self, config_path: Path) -> None:
        self.config_path = config_path
        self._data: Dict[str, Any] = {}
        self.reload()

    # --------------------------
    # Private helpers
    # --------------------------
    def load_from_disk(self) -> Dict[str, Any]:
        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            logger.warning("[APP CONFIGURATION] Config file %s not found; using defaults.", self.config_path)
            return {}
        except (OSError, yaml.YAMLError) as exc:
            logger.error("[APP CONFIGURATION] Failed to load config %s: %s", self.config_path, exc)
            return {}

        if not isinstance(data, dict):
            if data is not None:
                logger.error("[APP CONFIGURATION] Config %s is not a mapping; ignoring it.", self.config_path)
            return {}
        return data

    # --------------------------
    # Public API
    # --------------------------
    def reload(self) -> Dict[str, Any]:
        """Re-read the YAML file, replace the in-memory cache and return it.

        The returned mapping is empty when the file is missing or invalid.
        """
        self._data = self.load_from_disk()
        return self._data

    @property
    def data(self) -> Dict[str, Any]:
        """Return the current cached configuration mapping."""
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        """Safe lookup for top-level configuration keys."""
        return self._data.get(key, default)

    # --------------------------
    # High-level shortcuts
    # --------------------------
    @property
    def event_config_path(self) -> Path:
        """Location of the JSON document holding the log channel and event types.

        Relative paths resolve against the working directory, which ``main``
        pins to the project base directory.
        """
        value = self._data.get("event_config_path") or DEFAULT_EVENT_CONFIG_PATH
        return Path(str(value)).resolve()

    @property
    def embed(self) -> EmbedSettings:
        settings = self._data.get("embed", {})
        if not isinstance(settings, dict):
            settings = {}
        return EmbedSettings(settings)
