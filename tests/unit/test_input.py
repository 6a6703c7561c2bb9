"""Tests for raw input units and input sources."""

import io
import time

from menushell.input import EndOfInput, Key, Line, QueueInputSource, StreamInputSource


class TestInputSources:
    def test_key_tokens(self):
        assert Key("j", "j").token == "j"
        assert Key("ctrl+a", "\x01").token == "ctrl+a"
        assert Key("tab").token == "tab"
        assert Key("space", " ").printable == " "

    def test_queue_source(self):
        source = QueueInputSource()
        assert source.poll() is None
        source.put("inc")
        source.put_keys("gg")
        assert source.pending()
        assert source.poll() == Line("inc")
        assert source.poll() == Key("g", "g")

    def test_stream_source_reports_end(self):
        source = StreamInputSource(io.StringIO("inc\r\nq\n"))
        source.start()
        received = []
        deadline = time.monotonic() + 5
        while time.monotonic() < deadline:
            item = source.poll()
            if item is not None:
                received.append(item)
                if isinstance(item, EndOfInput):
                    break
            else:
                time.sleep(0.01)
        assert received == [Line("inc"), Line("q"), EndOfInput()]
