"""Tests for ModeController."""

import pytest

from menushell.intents import Ignored, NavigateBack, ScrollMove, SwitchMode
from menushell.interpreter import InputInterpreter
from menushell.modes import Mode, ModeController
from menushell.tree import ROOT_ID, MenuTree


@pytest.fixture
def controller():
    tree = MenuTree("Main")
    tree.add_action(ROOT_ID, "Increment", lambda s, p: None, binding="i")
    return ModeController(InputInterpreter(tree))


class TestModeController:
    """Command/Scroll state machine."""

    def test_starts_in_command_mode(self, controller):
        assert controller.mode is Mode.COMMAND
        assert controller.mode.display_name == "COMMAND MODE"

    def test_switch_token_toggles_both_ways(self, controller):
        assert controller.route("tab", ROOT_ID) == SwitchMode()
        assert controller.mode is Mode.SCROLL
        assert controller.route("tab", ROOT_ID) == SwitchMode()
        assert controller.mode is Mode.COMMAND

    def test_scroll_mode_uses_keymap(self, controller):
        controller.toggle()
        assert isinstance(controller.route("j", ROOT_ID), ScrollMove)
        assert isinstance(controller.route("b", ROOT_ID), Ignored)

    def test_command_mode_uses_tokens(self, controller):
        assert controller.route("b", ROOT_ID) == NavigateBack()

    def test_toggle_clears_pending_chord(self, controller):
        controller.toggle()
        controller.route("g", ROOT_ID)
        assert controller.interpreter.pending_chord == "g"
        controller.toggle()
        assert controller.interpreter.pending_chord == ""

    def test_on_change_callback(self):
        changes = []
        tree = MenuTree("Main")
        tree.add_action(ROOT_ID, "X", lambda s, p: None, binding="x")
        controller = ModeController(InputInterpreter(tree), on_change=lambda a, b: changes.append((a, b)))
        controller.route("tab", ROOT_ID)
        assert changes == [(Mode.COMMAND, Mode.SCROLL)]
