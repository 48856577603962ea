from __future__ import annotations

import pytest

from spaceloop.api.frames import FrameHost
from spaceloop.api.geometry import Pt
from spaceloop.runtime.bitmap_space import BitmapSpace
from spaceloop.runtime.frame_host import ManualFrameHost, TimerFrameHost
from tests.spaceloop.conftest import RecordingPlayer


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def time(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def test_manual_host_satisfies_frame_host_protocol() -> None:
    assert isinstance(ManualFrameHost(), FrameHost)


def test_manual_host_runs_pending_callbacks_once() -> None:
    host = ManualFrameHost()
    calls: list[float] = []
    host.request_frame(calls.append)
    host.request_frame(calls.append)

    assert host.tick(16.0) == 2
    assert calls == [16.0, 16.0]
    assert host.tick(32.0) == 0
    assert host.tick_count == 2
    assert host.last_timestamp == 32.0


def test_manual_host_defers_callbacks_requested_during_tick() -> None:
    host = ManualFrameHost()
    calls: list[float] = []

    def again(timestamp: float) -> None:
        calls.append(timestamp)
        host.request_frame(again)

    host.request_frame(again)
    assert host.tick(1.0) == 1
    assert host.tick(2.0) == 1
    assert calls == [1.0, 2.0]


def test_manual_host_cancel_is_idempotent_and_respected_mid_tick() -> None:
    host = ManualFrameHost()
    calls: list[str] = []
    second: int = 0

    def first(timestamp: float) -> None:
        _ = timestamp
        calls.append("first")
        host.cancel_frame(second)

    host.request_frame(first)
    second = host.request_frame(lambda timestamp: calls.append("second"))
    assert host.is_pending(second)

    assert host.tick(0.0) == 1
    assert calls == ["first"]
    host.cancel_frame(second)
    host.cancel_frame(999)


def test_timer_host_paces_ticks_at_fps() -> None:
    clock = FakeClock()
    host = TimerFrameHost(fps=10.0, time_source=clock.time, sleep_fn=clock.sleep)
    stamps: list[float] = []

    def frame(timestamp: float) -> None:
        stamps.append(timestamp)
        if len(stamps) < 3:
            host.request_frame(frame)

    host.request_frame(frame)
    assert host.run() == 3
    assert stamps == pytest.approx([0.0, 100.0, 200.0])
    assert clock.sleeps == pytest.approx([0.1, 0.1])
    assert host.running is False


def test_timer_host_honors_max_frames() -> None:
    clock = FakeClock()
    host = TimerFrameHost(fps=60.0, time_source=clock.time, sleep_fn=clock.sleep)

    def forever(timestamp: float) -> None:
        _ = timestamp
        host.request_frame(forever)

    host.request_frame(forever)
    assert host.run(max_frames=5) == 5
    assert host.pending_count == 1


def test_timer_host_returns_immediately_when_idle() -> None:
    clock = FakeClock()
    host = TimerFrameHost(time_source=clock.time, sleep_fn=clock.sleep)
    assert host.run() == 0
    assert clock.sleeps == []


def test_timer_host_validates_arguments() -> None:
    with pytest.raises(ValueError):
        TimerFrameHost(fps=0.0)
    with pytest.raises(ValueError):
        TimerFrameHost().run(max_frames=-1)


def test_timer_host_drives_play_once_to_completion() -> None:
    clock = FakeClock()
    host = TimerFrameHost(fps=100.0, time_source=clock.time, sleep_fn=clock.sleep)
    space = BitmapSpace(frame_host=host)
    player = RecordingPlayer()
    space.add(player).setup(Pt(40, 30))

    space.play_once(55)
    assert host.run() == 7
    assert space.state == "stopped"
    assert len(player.frames) == 8
