"""Input arbitration.

Keyboard input arrives edge-triggered from the window host. Gamepad input
is the union of queued button events and polled button state, which is
level-triggered. The gamepad side is debounced so a held button fires
once per press-release cycle, then both sources are merged and reduced to
a single Intent per tick.
"""

import logging
from dataclasses import dataclass, fields
from enum import Enum
from typing import Tuple

logger = logging.getLogger(__name__)


class Intent(str, Enum):
    """Unified action derived from all input for one tick."""

    NONE = "none"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    ACTIVATE = "activate"


@dataclass(frozen=True)
class Actions:
    """Five per-tick booleans, one per logical action."""

    right: bool = False
    left: bool = False
    down: bool = False
    up: bool = False
    activate: bool = False

    def any(self) -> bool:
        return self.right or self.left or self.down or self.up or self.activate

    def union(self, other: "Actions") -> "Actions":
        """Per-action OR with another set of actions."""
        return Actions(
            right=self.right or other.right,
            left=self.left or other.left,
            down=self.down or other.down,
            up=self.up or other.up,
            activate=self.activate or other.activate,
        )

    def as_actions(self) -> "Actions":
        """Plain Actions copy, dropping any subclass-only fields."""
        return Actions(**{f.name: getattr(self, f.name) for f in fields(Actions)})


NO_ACTIONS = Actions()


@dataclass(frozen=True)
class KeyboardSnapshot(Actions):
    """Keys pressed this tick. ``close`` is the C key."""

    close: bool = False


@dataclass(frozen=True)
class GamepadSnapshot(Actions):
    """Raw gamepad state for this tick, events and polling already OR-ed."""


# Activate first so a simultaneous direction never swallows a launch.
INTENT_PRECEDENCE = (
    ("activate", Intent.ACTIVATE),
    ("right", Intent.MOVE_RIGHT),
    ("left", Intent.MOVE_LEFT),
    ("down", Intent.MOVE_DOWN),
    ("up", Intent.MOVE_UP),
)


def debounce(raw: Actions, last_any_pressed: bool) -> Tuple[Actions, bool]:
    """Convert level-triggered gamepad state into a single edge.

    Args:
        raw: Raw gamepad actions for this tick
        last_any_pressed: Whether anything was pressed last tick

    Returns:
        (debounced actions, any_pressed to remember for next tick)
    """
    any_pressed = raw.any()
    trigger = any_pressed and not last_any_pressed
    if trigger:
        return raw.as_actions(), any_pressed
    return NO_ACTIONS, any_pressed


def merge(keyboard: Actions, gamepad: Actions) -> Actions:
    """Effective actions: keyboard OR debounced gamepad."""
    return keyboard.as_actions().union(gamepad)


def select_intent(actions: Actions) -> Intent:
    """Pick one intent by fixed precedence: Activate > Right > Left > Down > Up."""
    for name, intent in INTENT_PRECEDENCE:
        if getattr(actions, name):
            return intent
    return Intent.NONE


class InputArbiter:
    """Produces one Intent per tick from keyboard and gamepad snapshots.

    Holds the only input memory: whether any gamepad action was active on
    the previous tick.
    """

    def __init__(self):
        """Initialize input arbiter."""
        self.last_any_pressed = False

    def arbitrate(
        self,
        keyboard: KeyboardSnapshot,
        gamepad: GamepadSnapshot,
        focused: bool,
    ) -> Intent:
        """Reduce this tick's raw input to a single intent.

        The gamepad edge memory is updated even when unfocused, so a button
        still held when focus returns does not fire.

        Args:
            keyboard: Edge-triggered keyboard snapshot
            gamepad: Raw gamepad snapshot
            focused: Whether the launcher window has input focus

        Returns:
            Intent for this tick, NONE when unfocused
        """
        debounced, self.last_any_pressed = debounce(gamepad, self.last_any_pressed)

        if not focused:
            return Intent.NONE

        intent = select_intent(merge(keyboard, debounced))
        if intent is not Intent.NONE:
            logger.debug(f"Intent: {intent.value}")
        return intent
