"""Tests for OutputHistory and CommandHistory."""

from menushell.history import CommandHistory, OutputHistory


def filled(count):
    history = OutputHistory()
    for i in range(count):
        history.append(f"line {i}")
    return history


class TestOutputHistory:
    """Append-only log with a clamped cursor."""

    def test_sequence_numbers_start_at_one(self):
        history = filled(3)
        assert [e.seq for e in history] == [1, 2, 3]
        assert history.last().text == "line 2"

    def test_entries_keep_source_and_error_flag(self):
        history = OutputHistory()
        entry = history.append("Error: boom", source="Slow", is_error=True)
        assert entry.is_error
        assert entry.display_text() == "[Slow] Error: boom"

    def test_cursor_on_empty_history(self):
        history = OutputHistory()
        assert history.cursor == 0
        assert history.scroll(5) == 0
        assert history.jump_bottom() == 0
        assert history.window(10) == (0, ())

    def test_scroll_clamps(self):
        history = filled(5)
        assert history.scroll(-3) == 0
        assert history.scroll(100) == 4
        assert history.scroll(-1) == 3

    def test_jump_top_and_bottom(self):
        history = filled(5)
        assert history.jump_bottom() == 4
        assert history.jump_top() == 0

    def test_append_does_not_move_cursor(self):
        history = filled(5)
        history.scroll(2)
        history.append("more")
        assert history.cursor == 2

    def test_window_follow_shows_newest(self):
        history = filled(30)
        start, visible = history.window(10, follow=True)
        assert start == 20
        assert [e.text for e in visible][-1] == "line 29"

    def test_window_starts_at_cursor(self):
        history = filled(30)
        history.scroll(5)
        start, visible = history.window(10)
        assert start == 5
        assert visible[0].text == "line 5"

    def test_window_stays_full_near_end(self):
        history = filled(30)
        history.jump_bottom()
        start, visible = history.window(10)
        assert start == 20
        assert len(visible) == 10

    def test_has_new_output_resets(self):
        history = OutputHistory()
        assert not history.has_new_output()
        history.append("x")
        assert history.has_new_output()
        assert not history.has_new_output()


class TestCommandHistory:
    """Bounded command recall."""

    def test_up_walks_back_and_stops_at_oldest(self):
        commands = CommandHistory()
        for c in ("inc", "dec", "settings"):
            commands.add(c)
        assert commands.up() == "settings"
        assert commands.up() == "dec"
        assert commands.up() == "inc"
        assert commands.up() == "inc"

    def test_down_leaves_browsing(self):
        commands = CommandHistory()
        commands.add("inc")
        commands.add("dec")
        commands.up()
        commands.up()
        assert commands.down() == "dec"
        assert commands.down() is None
        assert not commands.browsing

    def test_consecutive_duplicates_skipped(self):
        commands = CommandHistory()
        commands.add("inc")
        commands.add("inc")
        commands.add("")
        assert commands.entries == ["inc"]

    def test_oldest_evicted(self):
        commands = CommandHistory(max_size=2)
        for c in ("a", "b", "c"):
            commands.add(c)
        assert commands.entries == ["b", "c"]

    def test_add_exits_browsing(self):
        commands = CommandHistory()
        commands.add("a")
        commands.up()
        commands.add("b")
        assert not commands.browsing
