"""Detached process launching.

The controller only needs something with ``spawn_detached(command)``;
ShellProcessRunner is the real implementation, tests pass a recording fake.
"""

import logging
import subprocess
from typing import List, Protocol

from ..errors import SpawnError

logger = logging.getLogger(__name__)


class ProcessLauncher(Protocol):
    """Starts a launch command without waiting for it."""

    def spawn_detached(self, command: str) -> None:
        """Start the command.

        Args:
            command: Launch command, leading ~ already expanded

        Raises:
            SpawnError: If the process could not be started
        """
        ...


class ShellProcessRunner:
    """Runs launch commands through a shell as detached children.

    The child gets its own session and no pipes, and the handle is dropped
    right away. The launcher never waits on it.
    """

    def __init__(self, shell: str = "bash"):
        """Initialize process runner.

        Args:
            shell: Shell binary the command is passed to
        """
        self.shell = shell

    def build_args(self, command: str) -> List[str]:
        """Argument vector for a launch command."""
        return [self.shell, command]

    def spawn_detached(self, command: str) -> None:
        """Start ``command`` via the shell and return immediately.

        Args:
            command: Launch command (script path)

        Raises:
            SpawnError: If the shell could not be started
        """
        args = self.build_args(command)
        try:
            subprocess.Popen(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
                close_fds=True,
            )
        except OSError as e:
            raise SpawnError(command, e) from e

        logger.debug(f"Spawned: {' '.join(args)}")
