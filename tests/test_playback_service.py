"""Tests for PlaybackController and BrowserAudioSink."""

from __future__ import annotations

import time
from typing import Callable

import numpy as np
import pytest

from models.audio import FloatAudioBuffer
from services.errors import MalformedAudioError
from services.playback_service import (
    BrowserAudioSink,
    PlaybackController,
    PlaybackState,
)


# ---------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------

class FakeHandle:
    def __init__(self, buffer: FloatAudioBuffer) -> None:
        self.buffer = buffer
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


class FakeSink:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.handles: list[FakeHandle] = []
        self.finishers: list[Callable[[], None]] = []

    def start(self, buffer: FloatAudioBuffer, on_finished: Callable[[], None]) -> FakeHandle:
        if self.fail:
            raise RuntimeError("no output device")
        handle = FakeHandle(buffer)
        self.handles.append(handle)
        self.finishers.append(on_finished)
        return handle


def _buffer(frames: int = 240, sample_rate: int = 24000) -> FloatAudioBuffer:
    return FloatAudioBuffer(sample_rate=sample_rate, channels=[np.zeros(frames, dtype=np.float32)])


# ---------------------------------------------------------------
# Toggle semantics
# ---------------------------------------------------------------

def test_play_starts_from_idle() -> None:
    sink = FakeSink()
    controller = PlaybackController(sink)

    assert controller.play(_buffer()) == PlaybackState.PLAYING
    assert controller.is_playing is True
    assert controller.active_handle is sink.handles[0]


def test_second_play_toggles_to_idle() -> None:
    sink = FakeSink()
    controller = PlaybackController(sink)

    controller.play(_buffer())
    state = controller.play(_buffer())

    assert state == PlaybackState.IDLE
    assert controller.active_handle is None
    assert sink.handles[0].stopped is True
    assert len(sink.handles) == 1


def test_natural_completion_returns_to_idle() -> None:
    sink = FakeSink()
    controller = PlaybackController(sink)
    controller.play(_buffer())

    sink.finishers[0]()

    assert controller.state == PlaybackState.IDLE
    assert controller.active_handle is None


def test_late_completion_of_old_handle_is_ignored() -> None:
    sink = FakeSink()
    controller = PlaybackController(sink)
    controller.play(_buffer())
    controller.play(_buffer())  # stop
    controller.play(_buffer())  # start again

    sink.finishers[0]()

    assert controller.state == PlaybackState.PLAYING
    assert controller.active_handle is sink.handles[1]


def test_replace_stops_previous_before_starting() -> None:
    sink = FakeSink()
    controller = PlaybackController(sink)
    controller.play(_buffer())

    controller.replace(_buffer(480))

    assert sink.handles[0].stopped is True
    assert controller.active_handle is sink.handles[1]
    assert controller.is_playing is True


def test_stop_when_idle_is_noop() -> None:
    controller = PlaybackController(FakeSink())
    controller.stop()

    assert controller.state == PlaybackState.IDLE


def test_sink_failure_surfaces_and_stays_idle() -> None:
    controller = PlaybackController(FakeSink(fail=True))

    with pytest.raises(MalformedAudioError):
        controller.play(_buffer())

    assert controller.state == PlaybackState.IDLE
    assert controller.active_handle is None


def test_state_changes_are_reported() -> None:
    sink = FakeSink()
    transitions: list[tuple[PlaybackState, PlaybackState]] = []
    controller = PlaybackController(sink, on_state_change=lambda f, t: transitions.append((f, t)))

    controller.play(_buffer())
    sink.finishers[0]()

    assert transitions == [
        (PlaybackState.IDLE, PlaybackState.PLAYING),
        (PlaybackState.PLAYING, PlaybackState.IDLE),
    ]


# ---------------------------------------------------------------
# BrowserAudioSink
# ---------------------------------------------------------------

def test_browser_sink_reports_completion_after_duration() -> None:
    controller = PlaybackController(BrowserAudioSink())
    buffer = _buffer(frames=240)  # 10ms

    controller.play(buffer)
    assert controller.active_handle.buffer is buffer

    deadline = time.time() + 3.0
    while controller.is_playing and time.time() < deadline:
        time.sleep(0.01)

    assert controller.state == PlaybackState.IDLE


def test_browser_sink_stop_cancels_completion() -> None:
    finished: list[bool] = []
    handle = BrowserAudioSink().start(_buffer(frames=2400), lambda: finished.append(True))

    handle.stop()
    time.sleep(0.2)

    assert finished == []
