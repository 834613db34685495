"""
Autoplay Scheduler Tests
========================

Ticks go through the inversion-aware next move, notifications fire before
the first tick, and nothing ticks after a stop.
"""

import threading
import time

import pytest

from spinview.core.autoplay import AutoplayScheduler
from spinview.core.events import AutoplayStartEvent, AutoplayStopEvent, FrameChangeEvent


class TestAutoplayScheduler:

    def test_tick_is_noop_until_started(self):
        calls = []
        scheduler = AutoplayScheduler(period_ms=60_000, on_tick=lambda: calls.append(1))
        assert scheduler.tick() is False
        scheduler.start()
        try:
            assert scheduler.tick() is True
        finally:
            scheduler.stop()
        assert scheduler.tick() is False
        assert calls == [1]

    def test_stop_is_idempotent(self):
        scheduler = AutoplayScheduler(period_ms=60_000, on_tick=lambda: None)
        scheduler.stop()
        scheduler.start()
        scheduler.stop()
        scheduler.stop()
        assert not scheduler.is_running

    def test_restart_after_stop(self):
        scheduler = AutoplayScheduler(period_ms=60_000, on_tick=lambda: None)
        scheduler.start()
        scheduler.stop()
        scheduler.start()
        try:
            assert scheduler.is_running
        finally:
            scheduler.stop()

    def test_tick_duration_does_not_shift_schedule(self, monkeypatch):
        clock = [0.0]
        waits = []

        class FakeStop:
            def wait(self, timeout):
                waits.append(timeout)
                clock[0] += timeout
                return len(waits) > 3

            def is_set(self):
                return False

        def slow_tick():
            clock[0] += 0.015

        monkeypatch.setattr("spinview.core.autoplay.time.monotonic", lambda: clock[0])
        scheduler = AutoplayScheduler(period_ms=50, on_tick=slow_tick)
        scheduler.run(FakeStop())

        assert scheduler.tick_count == 3
        assert waits == pytest.approx([0.05, 0.035, 0.035, 0.035])
        assert clock[0] == pytest.approx(0.2)


class TestViewerAutoplay:

    @pytest.mark.parametrize("k", [1, 5, 13])
    def test_k_ticks_advance_k_frames(self, make_viewer, k):
        viewer = make_viewer(frames=6)
        viewer.toggle_autoplay(True)
        for _ in range(k):
            viewer.autoplay.tick()
        viewer.toggle_autoplay(False)

        assert viewer.index == k % 6
        assert viewer.autoplay.tick() is False
        assert viewer.index == k % 6

    def test_inverse_ticks_retreat(self, make_viewer):
        viewer = make_viewer(frames=6, inverse=True)
        viewer.toggle_autoplay(True)
        for _ in range(4):
            viewer.autoplay.tick()
        viewer.toggle_autoplay(False)
        assert viewer.index == (0 - 4) % 6

    def test_starts_on_construction_when_configured(self, make_viewer, recorder):
        viewer = make_viewer(autoplay=True)
        assert viewer.is_autoplay_running
        assert recorder.types[0] == "autoplay_start"

    def test_duplicate_toggles_do_not_renotify(self, make_viewer, recorder):
        viewer = make_viewer()
        viewer.toggle_autoplay(False)
        viewer.toggle_autoplay(True)
        viewer.toggle_autoplay(True)
        viewer.toggle_autoplay(False)
        viewer.toggle_autoplay(False)
        assert recorder.types == ["autoplay_start", "autoplay_stop"]

    def test_timer_ticks_then_stops(self, make_viewer, recorder):
        viewer = make_viewer(frames=100, autoplay_speed=5)
        three_frames = threading.Event()

        def on_frame(event):
            if len(recorder.of(FrameChangeEvent)) >= 3:
                three_frames.set()

        viewer.subscribe(on_frame, FrameChangeEvent)
        viewer.toggle_autoplay(True)
        assert three_frames.wait(timeout=5)
        viewer.toggle_autoplay(False)

        stopped_at = viewer.index
        time.sleep(0.1)
        assert viewer.index == stopped_at
        assert isinstance(recorder.events[0], AutoplayStartEvent)
        assert isinstance(recorder.events[-1], AutoplayStopEvent)

    def test_close_tears_down_timer(self, make_viewer):
        viewer = make_viewer(frames=100, autoplay_speed=5)
        viewer.toggle_autoplay(True)
        viewer.close()
        stopped_at = viewer.index
        time.sleep(0.05)
        assert viewer.index == stopped_at
        assert not viewer.is_autoplay_running
