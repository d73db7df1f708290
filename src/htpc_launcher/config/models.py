"""Configuration models for the launcher.

AppEntry describes one tile; LauncherSettings holds grid geometry,
frame pacing, rendering and gamepad options.
"""

from pathlib import Path
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..system.paths import expand_tilde

CONFIG_DIR = "~/.config/htpc_app_manager"
DEFAULT_APPS_PATH = f"{CONFIG_DIR}/apps.json"
DEFAULT_SETTINGS_PATH = f"{CONFIG_DIR}/settings.yaml"
DEFAULT_BACKGROUND_PATH = f"{CONFIG_DIR}/background.jpg"

DIRECTIONS = ("left", "right", "up", "down")


class AppEntry(BaseModel):
    """A configured application tile. Immutable once loaded."""

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(..., min_length=1, description="Name from the apps file")
    launch_command: str = Field(..., min_length=1, description="Script or command to run")
    icon_path: str = Field("", description="Icon image path, may start with ~")


class GamepadMapping(BaseModel):
    """Which joystick inputs count as D-pad directions and activate."""

    hat: int = Field(0, ge=0, description="Hat index used as the D-pad")
    activate_buttons: List[int] = Field(
        default_factory=lambda: [0], description="Buttons treated as South/activate"
    )
    dpad_buttons: Dict[str, List[int]] = Field(
        default_factory=dict,
        description="Buttons per direction for pads exposing the D-pad as buttons",
    )

    @field_validator("dpad_buttons")
    @classmethod
    def validate_directions(cls, v: Dict[str, List[int]]) -> Dict[str, List[int]]:
        """Reject direction names other than left/right/up/down."""
        unknown = sorted(set(v) - set(DIRECTIONS))
        if unknown:
            raise ValueError(f"Unknown D-pad directions: {', '.join(unknown)}")
        return v


class LauncherSettings(BaseModel):
    """Launcher settings, loaded from the optional settings file."""

    rows: int = Field(2, ge=1, description="Grid rows")
    cols: int = Field(3, ge=1, description="Grid columns")
    animation_duration: float = Field(
        0.25, gt=0.0, description="Launch flash duration in seconds"
    )
    fps: int = Field(60, ge=1, description="Frame rate while animating")
    idle_fps: int = Field(30, ge=1, description="Frame rate when idle")
    fullscreen: bool = True
    window_size: List[int] = Field(
        default_factory=lambda: [1280, 720], description="Window size when not fullscreen"
    )
    background: str = Field(DEFAULT_BACKGROUND_PATH, description="Background image path")
    tint_alpha: int = Field(140, ge=0, le=255, description="Background tint opacity")
    clock_format: str = Field("%I:%M %p", description="strftime format for the clock")
    shell: str = Field("bash", min_length=1, description="Shell used to run launch commands")
    fatal_launch_errors: bool = Field(
        False, description="Exit the launcher when a launch command fails to start"
    )
    gamepad: GamepadMapping = Field(default_factory=GamepadMapping)

    @field_validator("window_size")
    @classmethod
    def validate_window_size(cls, v: List[int]) -> List[int]:
        """Window size must be two positive integers."""
        if len(v) != 2 or min(v) <= 0:
            raise ValueError(f"Invalid window size: {v}")
        return v

    @property
    def capacity(self) -> int:
        """Number of tiles the grid can display."""
        return self.rows * self.cols

    def background_path(self) -> Path:
        """Background path with ~ expanded."""
        return Path(expand_tilde(self.background))
