"""Home Screen Launcher.

Window host for the launcher: owns the pygame window and the frame loop,
feeds keyboard and gamepad input to the LaunchController once per frame
and draws the result.
"""

import asyncio
import logging
import time
from typing import Optional, Sequence

import pygame

from ..config.models import AppEntry, LauncherSettings
from ..errors import SpawnError
from ..system.process_runner import ProcessLauncher, ShellProcessRunner
from ..system.shutdown_handler import ShutdownHandler
from .controller import LaunchController
from .gamepad import GamepadInput
from .keyboard import keyboard_snapshot
from .renderer import HomeScreenRenderer

logger = logging.getLogger(__name__)


class HomeScreenLauncher:
    """Fullscreen launcher window with an app grid."""

    def __init__(
        self,
        entries: Sequence[AppEntry],
        settings: Optional[LauncherSettings] = None,
        process_launcher: Optional[ProcessLauncher] = None,
        shutdown_handler: Optional[ShutdownHandler] = None,
    ):
        """Initialize launcher.

        Args:
            entries: Ordered app entries
            settings: Launcher settings (defaults if omitted)
            process_launcher: Starts launch commands (shell runner by default)
            shutdown_handler: Signal handling (a fresh handler by default)

        Raises:
            ConstructionError: If there are no entries or the grid is empty
        """
        self.settings = settings or LauncherSettings()
        self.controller = LaunchController.construct(
            entries,
            self.settings.rows,
            self.settings.cols,
            process_launcher or ShellProcessRunner(self.settings.shell),
            animation_duration=self.settings.animation_duration,
        )
        self.shutdown_handler = shutdown_handler or ShutdownHandler()
        self.renderer = HomeScreenRenderer(self.settings)
        self.gamepad = GamepadInput(self.settings.gamepad)

        self.screen: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None
        self.running = False

    async def start(self) -> None:
        """Open the window and run until closed."""
        try:
            logger.info("Starting home screen launcher")

            self.shutdown_handler.setup_signal_handlers()
            self.shutdown_handler.register_callback(self.stop)

            pygame.init()
            self.screen = self._open_window()
            pygame.display.set_caption("HTPC App Manager")
            pygame.mouse.set_visible(False)
            pygame.key.set_repeat()

            self.gamepad.start()
            self.clock = pygame.time.Clock()

            self.running = True
            await self._main_loop()

        finally:
            await self.shutdown_handler.shutdown()
            self.shutdown_handler.restore_signal_handlers()

    def _open_window(self) -> pygame.Surface:
        if self.settings.fullscreen:
            info = pygame.display.Info()
            return pygame.display.set_mode((info.current_w, info.current_h), pygame.FULLSCREEN)
        return pygame.display.set_mode(tuple(self.settings.window_size))

    async def stop(self) -> None:
        """Stop the launcher and release the display and gamepads."""
        if self.screen is None:
            return

        logger.info("Stopping home screen launcher")
        self.running = False
        self.gamepad.stop()
        pygame.quit()
        self.screen = None
        logger.info("Home screen launcher stopped")

    async def _main_loop(self) -> None:
        """Main UI loop: one controller tick and one frame per iteration."""
        while self.running:
            if self.shutdown_handler.is_shutdown_requested():
                break

            self.run_frame(time.monotonic())

            fps = self.settings.fps if self.controller.is_animating else self.settings.idle_fps
            self.clock.tick(fps)
            await asyncio.sleep(0)

    def run_frame(self, now: float) -> None:
        """Drain input, tick the controller and draw.

        Args:
            now: Monotonic time for this frame
        """
        events = pygame.event.get()
        for event in events:
            if event.type == pygame.QUIT:
                self.shutdown_handler.request_shutdown("window closed")
            else:
                self.gamepad.handle_event(event)

        keyboard = keyboard_snapshot(events)
        gamepad = self.gamepad.snapshot()
        focused = pygame.key.get_focused()

        try:
            self.controller.tick(keyboard, gamepad, focused, now)
        except SpawnError as e:
            if self.settings.fatal_launch_errors:
                raise
            logger.error(f"{e}; staying on the home screen")

        if self.controller.close_requested():
            self.shutdown_handler.request_shutdown("close key")
            return

        self.renderer.draw(self.screen, self.controller)
        pygame.display.flip()
