"""Launch controller.

Owns the selection and the launch-flash animation. Each tick applies at
most one Intent: a move goes through GridModel, an activation starts the
selected app and (re)starts the flash on its tile. The flash expires after
``animation_duration`` seconds.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..config.models import AppEntry
from ..errors import ConstructionError
from ..system.paths import expand_tilde
from ..system.process_runner import ProcessLauncher
from .grid import GridModel
from .input_arbiter import GamepadSnapshot, InputArbiter, Intent, KeyboardSnapshot

logger = logging.getLogger(__name__)

ANIMATION_DURATION = 0.25


@dataclass(frozen=True)
class AnimationState:
    """Flash on the most recently launched tile."""

    target_index: int
    started_at: float

    def elapsed(self, now: float) -> float:
        return now - self.started_at


class LaunchController:
    """Selection and launch state machine, driven once per frame.

    States are Idle (``animation is None``) and Animating. Time values are
    seconds from a monotonic clock supplied by the caller.
    """

    def __init__(
        self,
        entries: Sequence[AppEntry],
        grid: GridModel,
        process_launcher: ProcessLauncher,
        arbiter: Optional[InputArbiter] = None,
        animation_duration: float = ANIMATION_DURATION,
    ):
        """Initialize launch controller.

        Prefer :meth:`construct`, which validates the inputs and builds
        the grid.

        Args:
            entries: Ordered app entries
            grid: Grid geometry for the entries
            process_launcher: Starts launch commands
            arbiter: Input arbiter (a fresh one by default)
            animation_duration: Flash length in seconds
        """
        self.entries = tuple(entries)
        self.grid = grid
        self.process_launcher = process_launcher
        self.arbiter = arbiter or InputArbiter()
        self.animation_duration = animation_duration

        self._selected = 0
        self._animation: Optional[AnimationState] = None
        self._close_requested = False
        self._now: Optional[float] = None

    @classmethod
    def construct(
        cls,
        entries: Sequence[AppEntry],
        rows: int,
        cols: int,
        process_launcher: ProcessLauncher,
        animation_duration: float = ANIMATION_DURATION,
    ) -> "LaunchController":
        """Build a controller for ``entries`` laid out on a rows x cols grid.

        Entries past the grid capacity are kept but never selectable.

        Raises:
            ConstructionError: If there are no entries or the grid has no cells
        """
        if not entries:
            raise ConstructionError("No applications configured")
        if rows <= 0 or cols <= 0:
            raise ConstructionError(f"Grid must have at least one cell, got {rows}x{cols}")

        capacity = rows * cols
        if len(entries) > capacity:
            logger.warning(
                f"{len(entries)} apps configured but the {rows}x{cols} grid shows "
                f"{capacity}; the rest are ignored"
            )

        grid = GridModel(rows=rows, cols=cols, entry_count=min(len(entries), capacity))
        return cls(entries, grid, process_launcher, animation_duration=animation_duration)

    # Read-only view for the renderer

    def selected_index(self) -> int:
        return self._selected

    @property
    def selected_entry(self) -> AppEntry:
        return self.entries[self._selected]

    @property
    def animation(self) -> Optional[AnimationState]:
        return self._animation

    def animation_progress(self, now: Optional[float] = None) -> Optional[Tuple[int, float]]:
        """Flash target and alpha, or None when idle.

        Alpha fades linearly from 1.0 at activation to 0.0 at expiry.

        Args:
            now: Current time; defaults to the time of the last tick
        """
        if self._animation is None:
            return None

        if now is None:
            now = self._now if self._now is not None else self._animation.started_at

        elapsed = self._animation.elapsed(now)
        if elapsed >= self.animation_duration:
            return None

        alpha = min(1.0, max(0.0, 1.0 - elapsed / self.animation_duration))
        return self._animation.target_index, alpha

    @property
    def is_animating(self) -> bool:
        """Whether the host should repaint at full rate."""
        return self._animation is not None

    def close_requested(self) -> bool:
        """True only for the tick in which the close key was pressed."""
        return self._close_requested

    # Per-tick update

    def tick(
        self,
        keyboard: KeyboardSnapshot,
        gamepad: GamepadSnapshot,
        focused: bool,
        now: float,
    ) -> Intent:
        """Advance the state machine by one frame.

        Order within a tick: derive the intent, apply it, expire the
        animation. A close key press consumes the tick.

        Args:
            keyboard: Keys pressed this tick
            gamepad: Raw gamepad state this tick
            focused: Whether the window has input focus
            now: Current monotonic time in seconds

        Returns:
            The intent that was applied

        Raises:
            SpawnError: If activation failed to start the app. Selection and
                animation are left as they were.
        """
        self._now = now
        self._close_requested = False

        intent = self.arbiter.arbitrate(keyboard, gamepad, focused)

        if focused and keyboard.close:
            self._close_requested = True
            logger.info("Close key pressed")
            intent = Intent.NONE

        try:
            self._apply(intent, now)
        finally:
            self._expire_animation(now)

        return intent

    def _apply(self, intent: Intent, now: float) -> None:
        if intent is Intent.NONE:
            return

        if intent is Intent.ACTIVATE:
            self._launch(self._selected)
            self._animation = AnimationState(target_index=self._selected, started_at=now)
            return

        move = {
            Intent.MOVE_RIGHT: self.grid.move_right,
            Intent.MOVE_LEFT: self.grid.move_left,
            Intent.MOVE_DOWN: self.grid.move_down,
            Intent.MOVE_UP: self.grid.move_up,
        }[intent]

        new_index = move(self._selected)
        if new_index is not None:
            self._selected = new_index

    def _launch(self, index: int) -> None:
        entry = self.entries[index]
        command = expand_tilde(entry.launch_command)
        logger.info(f"Launching {entry.identifier}: {command}")
        self.process_launcher.spawn_detached(command)

    def _expire_animation(self, now: float) -> None:
        if self._animation is not None and self._animation.elapsed(now) >= self.animation_duration:
            self._animation = None
