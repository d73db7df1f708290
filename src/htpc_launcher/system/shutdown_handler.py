"""Graceful shutdown on service signals.

When the launcher runs as a kiosk session (systemd unit, autostart), a
SIGTERM should close the window and release the display and gamepads
instead of killing the process mid-frame.
"""

import asyncio
import logging
import signal
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

HANDLED_SIGNALS = (signal.SIGTERM, signal.SIGINT, signal.SIGHUP)


class ShutdownHandler:
    """Turns termination signals into a stop request for the frame loop."""

    def __init__(self):
        """Initialize shutdown handler."""
        self.shutdown_callbacks: List[Callable] = []
        self.is_shutting_down = False
        self.reason: Optional[str] = None
        self._shutdown_event = asyncio.Event()
        self._previous_handlers: Dict[int, object] = {}

    def register_callback(self, callback: Callable) -> None:
        """Register a callback to run during shutdown.

        Args:
            callback: Sync or async function
        """
        self.shutdown_callbacks.append(callback)
        logger.debug(f"Registered shutdown callback: {callback.__name__}")

    def setup_signal_handlers(self) -> None:
        """Install handlers for SIGTERM, SIGINT and SIGHUP."""
        for signum in HANDLED_SIGNALS:
            self._previous_handlers[signum] = signal.signal(signum, self._signal_handler)

        logger.info("Signal handlers configured")

    def restore_signal_handlers(self) -> None:
        """Put back whatever handlers were installed before."""
        for signum, handler in self._previous_handlers.items():
            signal.signal(signum, handler)
        self._previous_handlers.clear()

    def _signal_handler(self, signum: int, frame) -> None:
        """Handle a termination signal.

        Args:
            signum: Signal number
            frame: Current stack frame
        """
        signal_name = signal.Signals(signum).name
        logger.info(f"Received signal: {signal_name}")
        self.request_shutdown(signal_name)

    def request_shutdown(self, reason: str) -> None:
        """Ask the frame loop to stop. Only the first request is recorded.

        Args:
            reason: What asked for the stop (signal name, close key, ...)
        """
        if self.is_shutting_down:
            return

        self.is_shutting_down = True
        self.reason = reason
        self._shutdown_event.set()

    async def wait_for_shutdown(self) -> None:
        """Block until a shutdown has been requested."""
        await self._shutdown_event.wait()

    async def shutdown(self) -> None:
        """Run the registered callbacks in order.

        A failing callback is logged and the rest still run.
        """
        self.request_shutdown(self.reason or "shutdown")
        logger.info(f"Shutting down ({self.reason})")

        for callback in self.shutdown_callbacks:
            try:
                if asyncio.iscoroutinefunction(callback):
                    await callback()
                else:
                    callback()
            except Exception as e:
                logger.error(f"Error in shutdown callback {callback.__name__}: {e}",
                             exc_info=True)

        self.shutdown_callbacks.clear()
        logger.info("Shutdown complete")

    def is_shutdown_requested(self) -> bool:
        """Check if shutdown has been requested.

        Returns:
            True once a signal or stop request arrived
        """
        return self.is_shutting_down
