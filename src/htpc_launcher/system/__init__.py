"""System services: path expansion, process launching, shutdown handling."""

from .paths import expand_tilde
from .process_runner import ProcessLauncher, ShellProcessRunner
from .shutdown_handler import ShutdownHandler

__all__ = [
    "expand_tilde",
    "ProcessLauncher",
    "ShellProcessRunner",
    "ShutdownHandler",
]
