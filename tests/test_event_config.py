import json
from pathlib import Path

import pytest

from eventlog.configuration.event_config import (
    MAX_AUTOCOMPLETE_CHOICES,
    EventConfig,
    EventConfigError,
    EventConfigStore,
)


def read_config(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


def test_load_reads_channel_and_event_types(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"logChannelId": "123", "eventTypes": ["Raid", "Meeting"]}), encoding="utf-8")

    store = EventConfigStore(path)
    config = store.load()

    assert config.log_channel_id == "123"
    assert store.log_channel_id == "123"
    assert store.event_types == ["Raid", "Meeting"]


def test_load_missing_file_raises(tmp_path: Path) -> None:
    store = EventConfigStore(tmp_path / "nope.json")

    with pytest.raises(EventConfigError):
        store.load()


@pytest.mark.parametrize("payload", ["{not json", "[1, 2]", json.dumps({"eventTypes": "Raid"})])
def test_load_malformed_file_raises(tmp_path: Path, payload: str) -> None:
    path = tmp_path / "config.json"
    path.write_text(payload, encoding="utf-8")

    with pytest.raises(EventConfigError):
        EventConfigStore(path).load()


def test_load_collapses_duplicate_event_types(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"eventTypes": ["Raid", "Patrol", "Raid"]}), encoding="utf-8")

    store = EventConfigStore(path)
    store.load()

    assert store.event_types == ["Raid", "Patrol"]
    assert store.log_channel_id is None


def test_add_event_type_appends_and_persists(config_store: EventConfigStore, event_config_path: Path) -> None:
    assert config_store.add_event_type("Patrol") is True

    assert config_store.event_types == ["Raid", "Meeting", "Patrol"]
    assert read_config(event_config_path) == {"logChannelId": None, "eventTypes": ["Raid", "Meeting", "Patrol"]}


def test_add_existing_event_type_is_rejected_without_write(config_store: EventConfigStore, event_config_path: Path) -> None:
    before = event_config_path.read_text(encoding="utf-8")

    assert config_store.add_event_type("Raid") is False

    assert config_store.event_types == ["Raid", "Meeting"]
    assert event_config_path.read_text(encoding="utf-8") == before


def test_add_event_type_is_case_sensitive(config_store: EventConfigStore) -> None:
    assert config_store.add_event_type("raid") is True
    assert config_store.event_types == ["Raid", "Meeting", "raid"]


def test_remove_event_type_present(config_store: EventConfigStore, event_config_path: Path) -> None:
    config_store.remove_event_type("Raid")

    assert config_store.event_types == ["Meeting"]
    assert read_config(event_config_path)["eventTypes"] == ["Meeting"]


def test_remove_event_type_absent_is_noop(config_store: EventConfigStore, event_config_path: Path) -> None:
    config_store.remove_event_type("Patrol")

    assert config_store.event_types == ["Raid", "Meeting"]
    assert read_config(event_config_path)["eventTypes"] == ["Raid", "Meeting"]


def test_set_log_channel_stores_string_id(config_store: EventConfigStore, event_config_path: Path) -> None:
    config_store.set_log_channel(987654321)

    assert config_store.log_channel_id == "987654321"
    assert read_config(event_config_path)["logChannelId"] == "987654321"


def test_saved_file_is_pretty_printed(config_store: EventConfigStore, event_config_path: Path) -> None:
    config_store.add_event_type("Patrol")

    text = event_config_path.read_text(encoding="utf-8")
    assert text == json.dumps(
        {"logChannelId": None, "eventTypes": ["Raid", "Meeting", "Patrol"]},
        indent=2,
    )


def test_changes_survive_reload(config_store: EventConfigStore, event_config_path: Path) -> None:
    config_store.set_log_channel("42")
    config_store.add_event_type("Patrol")
    config_store.remove_event_type("Meeting")

    reloaded = EventConfigStore(event_config_path)
    reloaded.load()

    assert reloaded.log_channel_id == "42"
    assert reloaded.event_types == ["Raid", "Patrol"]


@pytest.mark.parametrize(
    "mutate",
    [
        lambda store: store.set_log_channel("42"),
        lambda store: store.add_event_type("Patrol"),
        lambda store: store.remove_event_type("Raid"),
    ],
    ids=["set_log_channel", "add_event_type", "remove_event_type"],
)
def test_failed_write_leaves_memory_and_disk_unchanged(
    config_store: EventConfigStore,
    event_config_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    mutate,
) -> None:
    before_disk = event_config_path.read_text(encoding="utf-8")

    def fail_write(self, *args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(Path, "write_text", fail_write)

    with pytest.raises(OSError):
        mutate(config_store)

    monkeypatch.undo()
    assert config_store.log_channel_id is None
    assert config_store.event_types == ["Raid", "Meeting"]
    assert event_config_path.read_text(encoding="utf-8") == before_disk


def test_matching_event_types_prefix_case_insensitive(config_store: EventConfigStore) -> None:
    config_store.add_event_type("Recruitment")

    assert config_store.matching_event_types("r") == ["Raid", "Recruitment"]
    assert config_store.matching_event_types("MEE") == ["Meeting"]
    assert config_store.matching_event_types("") == ["Raid", "Meeting", "Recruitment"]
    assert config_store.matching_event_types("x") == []


def test_matching_event_types_caps_choices(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"eventTypes": [f"Type {i}" for i in range(40)]}), encoding="utf-8")
    store = EventConfigStore(path)
    store.load()

    assert len(store.matching_event_types("type")) == MAX_AUTOCOMPLETE_CHOICES


def test_event_types_accessor_returns_copy(config_store: EventConfigStore) -> None:
    types = config_store.event_types
    types.append("Injected")

    assert "Injected" not in config_store.event_types


def test_event_config_round_trips_wire_keys() -> None:
    config = EventConfig.from_dict({"logChannelId": 5, "eventTypes": ["A"]})

    assert config.to_dict() == {"logChannelId": "5", "eventTypes": ["A"]}
