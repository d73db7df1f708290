"""HTPC App Manager.

Fullscreen kiosk launcher that presents a grid of configured applications,
navigated with keyboard or gamepad, and starts the selected one as a
detached process.
"""

__version__ = "0.3.0"
