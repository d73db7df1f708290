"""Pytest configuration and shared fixtures."""

import json
import os
from typing import List, Optional

import pytest

# pygame must never open a real window or audio device in tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from htpc_launcher.config.models import AppEntry  # noqa: E402
from htpc_launcher.errors import SpawnError  # noqa: E402
from htpc_launcher.home_screen.controller import LaunchController  # noqa: E402


class RecordingLauncher:
    """Process launcher that records commands instead of starting them."""

    def __init__(self, fail_with: Optional[BaseException] = None):
        self.commands: List[str] = []
        self.fail_with = fail_with

    def spawn_detached(self, command: str) -> None:
        self.commands.append(command)
        if self.fail_with is not None:
            raise SpawnError(command, self.fail_with)


@pytest.fixture
def temp_dir(tmp_path):
    """Provide a temporary directory for tests."""
    return tmp_path


@pytest.fixture
def mock_config_dir(temp_dir):
    """Provide a mock configuration directory."""
    config_dir = temp_dir / "config"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


@pytest.fixture
def sample_entries():
    """Five apps: a 2x3 grid with the last cell empty."""
    return [
        AppEntry(identifier="kodi", launch_command="~/scripts/kodi.sh", icon_path="~/icons/kodi.png"),
        AppEntry(identifier="steam", launch_command="~/scripts/steam.sh", icon_path="~/icons/steam.png"),
        AppEntry(identifier="retroarch", launch_command="/opt/retroarch.sh", icon_path=""),
        AppEntry(identifier="browser", launch_command="~/scripts/browser.sh", icon_path=""),
        AppEntry(identifier="spotify", launch_command="~/scripts/spotify.sh", icon_path=""),
    ]


@pytest.fixture
def recording_launcher():
    """Provide a recording process launcher."""
    return RecordingLauncher()


@pytest.fixture
def failing_launcher():
    """Provide a process launcher whose spawns always fail."""
    return RecordingLauncher(fail_with=FileNotFoundError("bash: not found"))


@pytest.fixture
def controller(sample_entries, recording_launcher):
    """Provide a 2x3 controller over the sample entries."""
    return LaunchController.construct(sample_entries, 2, 3, recording_launcher)


@pytest.fixture
def apps_file(mock_config_dir):
    """Write an apps.json in the reference list format."""
    path = mock_config_dir / "apps.json"
    path.write_text(json.dumps([
        {"name": "kodi", "run": "~/scripts/kodi.sh", "icon": "~/icons/kodi.png"},
        {"name": "steam", "run": "~/scripts/steam.sh", "icon": "~/icons/steam.png"},
        {"name": "retroarch", "run": "/opt/retroarch.sh", "icon": ""},
    ]))
    return path


# Markers for test categories
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
