"""
Pytest configuration and fixtures for event logger tests.
"""

import json
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock

# Add src directory to path so imports work
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

import pytest


class FakeUser:
    """Minimal stand-in for ``discord.Member`` / ``discord.User``."""

    def __init__(self, user_id=1, name="alice", administrator=False, guild_permissions=True):
        self.id = user_id
        self.name = name
        self.mention = f"<@{user_id}>"
        if guild_permissions:
            self.guild_permissions = SimpleNamespace(administrator=administrator)

    def __str__(self) -> str:
        return self.name


@pytest.fixture
def event_config_path(tmp_path: Path) -> Path:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"logChannelId": None, "eventTypes": ["Raid", "Meeting"]}), encoding="utf-8")
    return path


@pytest.fixture
def config_store(event_config_path: Path):
    from eventlog.configuration.event_config import EventConfigStore

    store = EventConfigStore(event_config_path)
    store.load()
    return store


@pytest.fixture
def pending_submissions():
    from eventlog.submissions.pending_submissions import PendingSubmissionTable

    return PendingSubmissionTable()


@pytest.fixture
def app_config(tmp_path: Path):
    from eventlog.configuration.app_configuration import AppConfig

    return AppConfig(tmp_path / "missing_app_config.yml")


def make_ctx(user: FakeUser, command_name: str = "logevent"):
    return SimpleNamespace(
        author=user,
        user=user,
        command=SimpleNamespace(name=command_name),
        respond=AsyncMock(),
        send_modal=AsyncMock(),
        followup=SimpleNamespace(send=AsyncMock()),
    )


def make_interaction(user: FakeUser):
    return SimpleNamespace(user=user, response=SimpleNamespace(send_message=AsyncMock()))
