"""Launcher error types.

Only the boundaries can fail: loading configuration, constructing the
controller, and starting an application. Navigation, debouncing and
animation timing never raise.
"""

from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    """Process exit codes used by the command line entry point."""

    SUCCESS = 0
    CONFIG_ERROR = 3
    CONSTRUCTION_ERROR = 4
    LAUNCH_ERROR = 5


class LauncherError(Exception):
    """Base class for all launcher errors."""

    exit_code = ExitCode.CONFIG_ERROR


class ConfigError(LauncherError):
    """Config file missing, unreadable or malformed."""

    exit_code = ExitCode.CONFIG_ERROR


class ConstructionError(LauncherError):
    """Controller built from an empty entry list or a zero-area grid."""

    exit_code = ExitCode.CONSTRUCTION_ERROR


class SpawnError(LauncherError):
    """Launch command could not be started."""

    exit_code = ExitCode.LAUNCH_ERROR

    def __init__(self, command: str, cause: Optional[BaseException] = None):
        """Initialize spawn error.

        Args:
            command: Expanded command that failed to start
            cause: Underlying OS error, if any
        """
        self.command = command
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Failed to launch '{command}'{detail}")
