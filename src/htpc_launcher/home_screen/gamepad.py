"""Gamepad input via pygame.joystick.

The host creates one GamepadInput after ``pygame.init()`` and feeds it the
joystick events it drains each frame. ``snapshot()`` then returns the
union of those queued presses and the currently held D-pad/activate state
across all connected pads. Debouncing happens later, in the arbiter.
"""

import logging
from typing import Dict, List, Optional, Set

import pygame

from ..config.models import GamepadMapping
from .input_arbiter import GamepadSnapshot

logger = logging.getLogger(__name__)


def hat_directions(value) -> Set[str]:
    """Directions pressed for a hat value ``(x, y)``; y is +1 for up."""
    x, y = value
    pressed = set()
    if x < 0:
        pressed.add("left")
    elif x > 0:
        pressed.add("right")
    if y > 0:
        pressed.add("up")
    elif y < 0:
        pressed.add("down")
    return pressed


class GamepadInput:
    """Per-tick gamepad state for all connected joysticks."""

    def __init__(self, mapping: Optional[GamepadMapping] = None, joystick_module=None):
        """Initialize gamepad input.

        Args:
            mapping: Which hat/buttons count as D-pad and activate
            joystick_module: Joystick API (``pygame.joystick`` by default)
        """
        self.mapping = mapping or GamepadMapping()
        self.joystick_module = joystick_module or pygame.joystick
        self.joysticks: Dict[int, object] = {}
        self._pending: Set[str] = set()

        self._button_actions: Dict[int, Set[str]] = {}
        for button in self.mapping.activate_buttons:
            self._button_actions.setdefault(button, set()).add("activate")
        for direction, buttons in self.mapping.dpad_buttons.items():
            for button in buttons:
                self._button_actions.setdefault(button, set()).add(direction)

    def start(self) -> None:
        """Initialise the joystick subsystem and open connected pads."""
        self.joystick_module.init()
        for device_index in range(self.joystick_module.get_count()):
            self._open(device_index)

        if not self.joysticks:
            logger.info("No gamepads found")

    def stop(self) -> None:
        """Close all pads."""
        for joystick in self.joysticks.values():
            joystick.quit()
        self.joysticks.clear()
        self._pending.clear()

    def _open(self, device_index: int) -> None:
        joystick = self.joystick_module.Joystick(device_index)
        instance_id = joystick.get_instance_id()
        if instance_id in self.joysticks:
            return
        joystick.init()
        self.joysticks[instance_id] = joystick
        logger.info(f"Found gamepad: {joystick.get_name()}")

    def handle_event(self, event) -> bool:
        """Record a queued joystick event.

        Args:
            event: pygame event

        Returns:
            True if the event was a joystick event
        """
        if event.type == pygame.JOYHATMOTION:
            if event.hat == self.mapping.hat:
                self._pending |= hat_directions(event.value)
            return True

        if event.type == pygame.JOYBUTTONDOWN:
            self._pending |= self._button_actions.get(event.button, set())
            return True

        if event.type == pygame.JOYDEVICEADDED:
            self._open(event.device_index)
            return True

        if event.type == pygame.JOYDEVICEREMOVED:
            joystick = self.joysticks.pop(event.instance_id, None)
            if joystick is not None:
                logger.info(f"Gamepad disconnected: {joystick.get_name()}")
            return True

        return event.type in (pygame.JOYBUTTONUP, pygame.JOYAXISMOTION, pygame.JOYBALLMOTION)

    def _held(self) -> Set[str]:
        held: Set[str] = set()
        for joystick in self.joysticks.values():
            if self.mapping.hat < joystick.get_numhats():
                held |= hat_directions(joystick.get_hat(self.mapping.hat))

            num_buttons = joystick.get_numbuttons()
            for button, actions in self._button_actions.items():
                if button < num_buttons and joystick.get_button(button):
                    held |= actions
        return held

    def snapshot(self) -> GamepadSnapshot:
        """Queued presses since the last call OR currently held state.

        Clears the queued presses.
        """
        pressed = self._pending | self._held()
        self._pending = set()
        return GamepadSnapshot(
            right="right" in pressed,
            left="left" in pressed,
            down="down" in pressed,
            up="up" in pressed,
            activate="activate" in pressed,
        )

    @property
    def connected(self) -> List[str]:
        """Names of connected pads."""
        return [joystick.get_name() for joystick in self.joysticks.values()]
