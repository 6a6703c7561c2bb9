"""Tests for the menushell-demo command."""

from typer.testing import CliRunner

from menushell.cli import app

runner = CliRunner()


class TestDemoCli:
    """The text front end is fully scriptable through stdin."""

    def test_text_ui_counter_session(self):
        result = runner.invoke(app, ["--ui", "text"], input="inc\ninc 5\nzzz\nq\n")
        assert result.exit_code == 0, result.output
        assert "== Demo ==" in result.output
        assert "Counter: 1" in result.output
        assert "Counter: 6" in result.output
        assert "unknown command: zzz" in result.output

    def test_end_of_input_stops(self):
        result = runner.invoke(app, ["--ui", "text"], input="inc\n")
        assert result.exit_code == 0
        assert "Counter: 1" in result.output

    def test_custom_title(self):
        result = runner.invoke(app, ["--ui", "text", "--title", "Counter"], input="q\n")
        assert result.exit_code == 0
        assert "== Counter ==" in result.output

    def test_bad_precedence(self):
        result = runner.invoke(app, ["--ui", "text", "--precedence", "random"], input="q\n")
        assert result.exit_code != 0

    def test_bad_ui_choice(self):
        result = runner.invoke(app, ["--ui", "gui"])
        assert result.exit_code != 0
