"""Integration tests for MenuShell.

These drive the textual shell through a pilot and check that input reaches
the Application and that the widgets show the resulting snapshots.
"""

import pytest
from textual.widgets import Input, Static

from menushell.application import Application
from menushell.config import MenuConfig
from menushell.demo import DemoState, build_demo_tree
from menushell.modes import Mode
from menushell.shell import DetailView, MenuShell

pytestmark = pytest.mark.anyio


def make_shell(executor=None):
    application = Application(
        build_demo_tree(),
        DemoState(),
        config=MenuConfig(title="Demo", tick_interval=0.05),
        executor=executor,
    )
    return MenuShell(application)


async def submit(pilot, text):
    await pilot.press(*text)
    await pilot.press("enter")
    await pilot.pause()


class TestShellInstantiation:
    """The shell can be created and composed."""

    def test_has_bindings(self):
        shell = make_shell()
        keys = [b.key for b in shell.BINDINGS]
        assert "tab" in keys
        assert "f12" in keys
        shell.application.stop()

    async def test_can_mount(self):
        async with make_shell().run_test() as pilot:
            app = pilot.app
            assert app.is_running
            assert app.query_one("#control-input", Input) is not None
            assert app.query_one("#brand", Static) is not None
            assert app.query_one("#menu", Static) is not None
            assert app.query_one(DetailView) is not None
            assert app.application.renderer is app.shell_renderer
            assert app.shell_renderer.frames >= 1


class TestShellInput:
    """Commands typed in the input reach the Application."""

    async def test_command_runs(self, inline_executor):
        async with make_shell(inline_executor).run_test() as pilot:
            await submit(pilot, "inc 5")
            application = pilot.app.application
            assert application.state.count == 5
            assert application.output.last().text == "Counter: 5"
            assert pilot.app.query_one("#control-input", Input).value == ""

    async def test_navigation(self, inline_executor):
        async with make_shell(inline_executor).run_test() as pilot:
            await submit(pilot, "settings")
            application = pilot.app.application
            assert application.snapshot().breadcrumb == ("Demo", "Settings")
            await submit(pilot, "b")
            assert application.snapshot().at_root

    async def test_quit_exits_app(self, inline_executor):
        shell = make_shell(inline_executor)
        async with shell.run_test() as pilot:
            await pilot.press("q", "enter")
        assert not shell.application.running

    async def test_history_recall(self, inline_executor):
        async with make_shell(inline_executor).run_test() as pilot:
            await submit(pilot, "inc")
            await pilot.press("up")
            assert pilot.app.query_one("#control-input", Input).value == "inc"

    async def test_deferred_result_arrives_on_tick(self):
        async with make_shell().run_test() as pilot:
            await submit(pilot, "slow 0")
            application = pilot.app.application
            for _ in range(40):
                if not application.dispatcher.pending:
                    break
                await pilot.pause(0.05)
            assert application.output.last().source == "Slow increment"


class TestScrollMode:
    """Tab switches to Scroll mode and keys go to the scroll keymap."""

    async def test_tab_toggles_mode(self, inline_executor):
        async with make_shell(inline_executor).run_test() as pilot:
            application = pilot.app.application
            await pilot.press("tab")
            assert application.mode is Mode.SCROLL
            assert pilot.app.query_one("#control-input", Input).disabled
            await pilot.press("tab")
            assert application.mode is Mode.COMMAND
            assert not pilot.app.query_one("#control-input", Input).disabled

    async def test_scroll_keys(self, inline_executor):
        async with make_shell(inline_executor).run_test() as pilot:
            application = pilot.app.application
            for i in range(30):
                application.add_output(f"line {i}")
            await pilot.press("tab")
            await pilot.press("g", "g")
            assert application.output.cursor == 0
            assert not application.session.follow
            await pilot.press("G")
            assert application.output.cursor == 29
            assert application.session.follow
            assert application.state.count == 0

    async def test_key_events_recorded(self, inline_executor):
        async with make_shell(inline_executor).run_test() as pilot:
            await pilot.press("tab")
            await pilot.press("j")
            assert any(event.startswith("j ") for event in pilot.app.diagnostics.key_events)


class TestDiagnostics:
    async def test_f12_exports(self, inline_executor, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        async with make_shell(inline_executor).run_test() as pilot:
            await pilot.press("f12")
            last = pilot.app.application.output.last()
            assert last.source == "shell"
            assert "Diagnostics saved" in last.text
        assert list((tmp_path / ".menushell").glob("diagnostics_*.txt"))
