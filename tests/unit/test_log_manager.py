"""Tests for LogManager category buffers."""

from menushell.log_manager import LogManager


class TestLogManager:
    def test_categories_and_tail(self):
        logs = LogManager(timestamps=False)
        for i in range(5):
            logs.add("events", f"event {i}")
        assert logs.tail("events", 2) == ["event 3", "event 4"]
        assert logs.lines("errors") == []
        assert logs.text("debug") == ""

    def test_bounded(self):
        logs = LogManager(max_lines=3, timestamps=False)
        logs.add("debug", "a\nb\nc\nd")
        assert logs.lines("debug") == ["b", "c", "d"]

    def test_debug_logger_callback(self):
        logs = LogManager()
        logs.debug_logger("hello")
        assert logs.lines("debug")[0].endswith(" hello")
