"""Home screen: grid navigation, input arbitration and launching.

``grid``, ``input_arbiter`` and ``controller`` are pure state and do not
touch pygame; ``gamepad``, ``keyboard``, ``renderer`` and ``launcher`` are
the pygame side.
"""

from .controller import ANIMATION_DURATION, AnimationState, LaunchController
from .grid import GridModel
from .input_arbiter import (
    Actions,
    GamepadSnapshot,
    InputArbiter,
    Intent,
    KeyboardSnapshot,
    debounce,
    merge,
    select_intent,
)

__all__ = [
    "ANIMATION_DURATION",
    "Actions",
    "AnimationState",
    "GamepadSnapshot",
    "GridModel",
    "InputArbiter",
    "Intent",
    "KeyboardSnapshot",
    "LaunchController",
    "debounce",
    "merge",
    "select_intent",
]
