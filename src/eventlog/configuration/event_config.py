"""
Persistent log channel and event type list.

The whole document is read once at startup and rewritten in full after every
mutation, so the file on disk always matches the in-memory state. The JSON
keys (``logChannelId``, ``eventTypes``) are kept stable so existing
``config.json`` files keep working.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from eventlog.util.logger import get_logger

logger = get_logger("event_config")

# Discord rejects autocomplete responses with more choices than this.
MAX_AUTOCOMPLETE_CHOICES = 25


class EventConfigError(Exception):
    """Raised when the event configuration file cannot be loaded."""


@dataclass(slots=True)
class EventConfig:
    """In-memory form of the event configuration document."""

    log_channel_id: Optional[str] = None
    event_types: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "EventConfig":
        raw_types = payload.get("eventTypes", [])
        if not isinstance(raw_types, list):
            raise EventConfigError("'eventTypes' must be a list of strings")

        event_types: List[str] = []
        for raw in raw_types:
            name = str(raw)
            if name not in event_types:
                event_types.append(name)

        channel_id = payload.get("logChannelId")
        return cls(
            log_channel_id=str(channel_id) if channel_id is not None else None,
            event_types=event_types,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"logChannelId": self.log_channel_id, "eventTypes": list(self.event_types)}


class EventConfigStore:
    """Write-through store for :class:`EventConfig`.

    Every mutating call builds the new document, rewrites the file and only
    then swaps it in, so a failed write leaves memory as it was.
    """

    def __init__(self, config_path: Path) -> None:
        self.config_path = Path(config_path)
        self._config = EventConfig()

    # --------------------------
    # Persistence
    # --------------------------
    def load(self) -> EventConfig:
        """Read the configuration file into memory.

        Raises
        ------
        EventConfigError
            If the file is missing or does not contain a valid document.
        """
        try:
            raw = self.config_path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise EventConfigError(f"Event config file {self.config_path} not found") from exc
        except OSError as exc:
            raise EventConfigError(f"Event config file {self.config_path} could not be read: {exc}") from exc

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise EventConfigError(f"Event config file {self.config_path} is not valid JSON: {exc}") from exc

        if not isinstance(payload, dict):
            raise EventConfigError(f"Event config file {self.config_path} must contain a JSON object")

        self._config = EventConfig.from_dict(payload)
        logger.info(
            "Loaded event config from %s (%d event types, log channel %s)",
            self.config_path,
            len(self._config.event_types),
            self._config.log_channel_id or "unset",
        )
        return self._config

    def save(self, config: Optional[EventConfig] = None) -> None:
        """Rewrite the whole document (``config`` or the current one) with two-space indentation."""
        document = config if config is not None else self._config
        self.config_path.write_text(
            json.dumps(document.to_dict(), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        logger.debug("Persisted event config to %s", self.config_path)

    # --------------------------
    # Accessors
    # --------------------------
    @property
    def config(self) -> EventConfig:
        return self._config

    @property
    def log_channel_id(self) -> Optional[str]:
        return self._config.log_channel_id

    @property
    def event_types(self) -> List[str]:
        return list(self._config.event_types)

    def matching_event_types(self, partial: str) -> List[str]:
        """Return event types starting with ``partial``, ignoring case, in stored order."""
        prefix = (partial or "").lower()
        matches = [name for name in self._config.event_types if name.lower().startswith(prefix)]
        return matches[:MAX_AUTOCOMPLETE_CHOICES]

    # --------------------------
    # Mutations
    # --------------------------
    def _commit(self, config: EventConfig) -> None:
        self.save(config)
        self._config = config

    def set_log_channel(self, channel_id: int | str) -> None:
        self._commit(EventConfig(str(channel_id), list(self._config.event_types)))
        logger.info("Log channel set to %s", channel_id)

    def add_event_type(self, name: str) -> bool:
        """Append ``name`` and persist.

        Returns ``False`` without touching the file when ``name`` is already present.
        """
        if name in self._config.event_types:
            return False
        self._commit(EventConfig(self._config.log_channel_id, [*self._config.event_types, name]))
        logger.info("Added event type %r", name)
        return True

    def remove_event_type(self, name: str) -> None:
        """Drop ``name`` if present; always persists, even when nothing changed."""
        remaining = [t for t in self._config.event_types if t != name]
        self._commit(EventConfig(self._config.log_channel_id, remaining))
        logger.info("Removed event type %r", name)
