"""Tests for the in-place progress spinner."""

from __future__ import annotations

import io
import time

import pytest

from drycc_cli import progress
from drycc_cli.progress import BACKSPACES, FRAMES, ProgressToken


class TestProgressToken:
    """Frames are always erased before stop() returns."""

    def test_every_frame_is_cleared(self):
        out = io.StringIO()
        token = progress.start(out, interval=0.01)
        time.sleep(0.05)
        token.stop()
        text = out.getvalue()
        written = text.replace(BACKSPACES, "")
        assert text.count(BACKSPACES) * 3 == len(written)
        assert text.endswith(BACKSPACES)

    def test_only_known_frames(self):
        out = io.StringIO()
        with ProgressToken(out, interval=0.01):
            time.sleep(0.03)
        chunks = [c for c in out.getvalue().split(BACKSPACES) if c]
        assert chunks
        assert all(chunk in FRAMES for chunk in chunks)

    def test_first_frame_is_dots(self):
        out = io.StringIO()
        with ProgressToken(out, interval=0.01):
            pass
        assert out.getvalue().startswith(FRAMES[0])

    def test_nothing_written_after_stop(self):
        out = io.StringIO()
        token = progress.start(out, interval=0.01)
        token.stop()
        snapshot = out.getvalue()
        time.sleep(0.03)
        assert out.getvalue() == snapshot

    def test_stop_twice_raises(self):
        token = progress.start(io.StringIO(), interval=0.01)
        token.stop()
        assert token.stopped
        with pytest.raises(RuntimeError):
            token.stop()

    def test_context_manager_stops_on_error(self):
        out = io.StringIO()
        with pytest.raises(KeyError):
            with ProgressToken(out, interval=0.01) as token:
                raise KeyError("x")
        assert token.stopped
        assert out.getvalue().endswith(BACKSPACES)
