"""Keyboard snapshot from pygame KEYDOWN events."""

from typing import Iterable

import pygame

from .input_arbiter import KeyboardSnapshot

KEY_ACTIONS = {
    pygame.K_RIGHT: "right",
    pygame.K_LEFT: "left",
    pygame.K_DOWN: "down",
    pygame.K_UP: "up",
    pygame.K_RETURN: "activate",
    pygame.K_KP_ENTER: "activate",
    pygame.K_c: "close",
}


def keyboard_snapshot(events: Iterable) -> KeyboardSnapshot:
    """Build this tick's keyboard snapshot.

    KEYDOWN is already an edge, so a held key only counts on the frame it
    went down (key repeat stays disabled in the host).
    """
    pressed = {
        KEY_ACTIONS[event.key]
        for event in events
        if event.type == pygame.KEYDOWN and event.key in KEY_ACTIONS
    }
    return KeyboardSnapshot(
        right="right" in pressed,
        left="left" in pressed,
        down="down" in pressed,
        up="up" in pressed,
        activate="activate" in pressed,
        close="close" in pressed,
    )
