"""Unit tests for gamepad input."""

from unittest.mock import MagicMock

import pygame
import pytest

from htpc_launcher.config.models import GamepadMapping
from htpc_launcher.home_screen.gamepad import GamepadInput, hat_directions
from htpc_launcher.home_screen.input_arbiter import GamepadSnapshot


def make_joystick(instance_id=0, hat=(0, 0), buttons=(), num_buttons=12, name="Test Pad"):
    """Create a fake pygame joystick."""
    joystick = MagicMock()
    joystick.get_instance_id.return_value = instance_id
    joystick.get_name.return_value = name
    joystick.get_numhats.return_value = 1
    joystick.get_hat.return_value = hat
    joystick.get_numbuttons.return_value = num_buttons
    joystick.get_button.side_effect = lambda b: 1 if b in buttons else 0
    return joystick


def make_module(*joysticks):
    """Create a fake pygame.joystick module exposing ``joysticks``."""
    module = MagicMock()
    module.get_count.return_value = len(joysticks)
    module.Joystick.side_effect = lambda index: joysticks[index]
    return module


@pytest.mark.unit
class TestHatDirections:
    """Test hat value decoding."""

    @pytest.mark.parametrize("value,expected", [
        ((0, 0), set()),
        ((-1, 0), {"left"}),
        ((1, 0), {"right"}),
        ((0, 1), {"up"}),
        ((0, -1), {"down"}),
        ((1, 1), {"right", "up"}),
    ])
    def test_values(self, value, expected):
        """Test each hat position."""
        assert hat_directions(value) == expected


@pytest.mark.unit
class TestGamepadInput:
    """Test GamepadInput event and polling union."""

    def test_start_opens_connected_pads(self):
        """Test all connected pads are opened once."""
        pad = make_joystick(name="Xbox Controller")
        gamepad = GamepadInput(joystick_module=make_module(pad))

        gamepad.start()

        pad.init.assert_called_once()
        assert gamepad.connected == ["Xbox Controller"]

    def test_device_added_after_start_is_not_reopened(self):
        """Test the startup JOYDEVICEADDED does not open a pad twice."""
        pad = make_joystick()
        gamepad = GamepadInput(joystick_module=make_module(pad))
        gamepad.start()

        gamepad.handle_event(pygame.event.Event(pygame.JOYDEVICEADDED, device_index=0))

        pad.init.assert_called_once()
        assert len(gamepad.joysticks) == 1

    def test_no_pads_is_idle(self):
        """Test a snapshot without pads is empty."""
        gamepad = GamepadInput(joystick_module=make_module())
        gamepad.start()

        assert gamepad.snapshot() == GamepadSnapshot()

    def test_polled_hat(self):
        """Test a held D-pad shows up every snapshot."""
        gamepad = GamepadInput(joystick_module=make_module(make_joystick(hat=(1, 0))))
        gamepad.start()

        assert gamepad.snapshot() == GamepadSnapshot(right=True)
        assert gamepad.snapshot() == GamepadSnapshot(right=True)

    def test_polled_activate_button(self):
        """Test a held South button is reported."""
        gamepad = GamepadInput(joystick_module=make_module(make_joystick(buttons={0})))
        gamepad.start()

        assert gamepad.snapshot() == GamepadSnapshot(activate=True)

    def test_queued_events_survive_release(self):
        """Test a press released before the poll still counts once."""
        gamepad = GamepadInput(joystick_module=make_module(make_joystick()))
        gamepad.start()

        gamepad.handle_event(pygame.event.Event(pygame.JOYHATMOTION, joy=0, instance_id=0, hat=0, value=(0, -1)))
        gamepad.handle_event(pygame.event.Event(pygame.JOYBUTTONDOWN, joy=0, instance_id=0, button=0))

        assert gamepad.snapshot() == GamepadSnapshot(down=True, activate=True)
        assert gamepad.snapshot() == GamepadSnapshot()

    def test_unmapped_button_ignored(self):
        """Test buttons outside the mapping do nothing."""
        gamepad = GamepadInput(joystick_module=make_module(make_joystick(buttons={5})))
        gamepad.start()
        gamepad.handle_event(pygame.event.Event(pygame.JOYBUTTONDOWN, joy=0, instance_id=0, button=7))

        assert gamepad.snapshot() == GamepadSnapshot()

    def test_other_hat_ignored(self):
        """Test only the mapped hat counts as the D-pad."""
        gamepad = GamepadInput(joystick_module=make_module())
        gamepad.handle_event(pygame.event.Event(pygame.JOYHATMOTION, joy=0, instance_id=0, hat=1, value=(1, 0)))

        assert gamepad.snapshot() == GamepadSnapshot()

    def test_dpad_buttons_mapping(self):
        """Test pads that report the D-pad as buttons."""
        mapping = GamepadMapping(dpad_buttons={"up": [11], "left": [13]})
        pad = make_joystick(buttons={13}, num_buttons=15)
        gamepad = GamepadInput(mapping, joystick_module=make_module(pad))
        gamepad.start()
        gamepad.handle_event(pygame.event.Event(pygame.JOYBUTTONDOWN, joy=0, instance_id=0, button=11))

        assert gamepad.snapshot() == GamepadSnapshot(up=True, left=True)

    def test_union_across_pads(self):
        """Test state from several pads is combined."""
        module = make_module(make_joystick(instance_id=0, hat=(-1, 0)),
                             make_joystick(instance_id=1, buttons={0}))
        gamepad = GamepadInput(joystick_module=module)
        gamepad.start()

        assert gamepad.snapshot() == GamepadSnapshot(left=True, activate=True)

    def test_device_removed(self):
        """Test a removed pad is no longer polled."""
        gamepad = GamepadInput(joystick_module=make_module(make_joystick(instance_id=3, hat=(0, 1))))
        gamepad.start()

        gamepad.handle_event(pygame.event.Event(pygame.JOYDEVICEREMOVED, instance_id=3))

        assert gamepad.connected == []
        assert gamepad.snapshot() == GamepadSnapshot()

    def test_non_joystick_event(self):
        """Test other events are not consumed."""
        gamepad = GamepadInput(joystick_module=make_module())
        assert gamepad.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a)) is False

    def test_stop_closes_pads(self):
        """Test stop releases every pad."""
        pad = make_joystick()
        gamepad = GamepadInput(joystick_module=make_module(pad))
        gamepad.start()

        gamepad.stop()

        pad.quit.assert_called_once()
        assert gamepad.joysticks == {}
