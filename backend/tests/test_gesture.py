"""
Gesture Interpreter Tests
=========================

Quantized drag ticks: a sample only ticks on an exact multiple of the
active interval, and only once two samples are buffered.
"""

from spinview.core.gesture import GestureInterpreter, MoveBuffer, PointerEvent, PointerKind, Tick


def make_interpreter(drag_interval=1, touch_drag_interval=2):
    ticks = []
    interpreter = GestureInterpreter(
        on_next=lambda: ticks.append("next"),
        on_prev=lambda: ticks.append("prev"),
        drag_interval=drag_interval,
        touch_drag_interval=touch_drag_interval,
    )
    return interpreter, ticks


def mouse(x):
    return PointerEvent(x=x, y=0, kind=PointerKind.MOUSE)


def touch(x):
    return PointerEvent(x=x, y=0, kind=PointerKind.TOUCH)


class TestMoveBuffer:

    def test_keeps_two_most_recent(self):
        buf = MoveBuffer()
        for coord in (1, 2, 3):
            buf.push(coord)
        assert buf.samples == (2, 3)
        assert buf.full

    def test_reset_empties(self):
        buf = MoveBuffer()
        buf.push(4)
        buf.reset()
        assert len(buf) == 0


class TestGestureInterpreter:

    def test_first_sample_never_ticks(self):
        interpreter, ticks = make_interpreter()
        assert interpreter.feed(mouse(10)) is None
        assert ticks == []

    def test_every_integer_ticks_with_unit_interval(self):
        interpreter, ticks = make_interpreter()
        for x in (10, 9, 8, 7):
            interpreter.feed(mouse(x))
        assert ticks == ["next", "next", "next"]

    def test_moving_right_ticks_backward(self):
        interpreter, ticks = make_interpreter()
        interpreter.feed(mouse(3))
        assert interpreter.feed(mouse(4)) is Tick.PREV
        assert ticks == ["prev"]

    def test_no_tick_without_motion(self):
        interpreter, ticks = make_interpreter()
        interpreter.feed(mouse(6))
        assert interpreter.feed(mouse(6)) is None
        assert ticks == []

    def test_only_multiples_of_interval_tick(self):
        interpreter, ticks = make_interpreter(drag_interval=5)
        results = [interpreter.feed(mouse(x)) for x in (16, 15, 14, 13, 12, 11, 10)]
        assert results == [None, Tick.NEXT, None, None, None, None, Tick.NEXT]
        assert ticks == ["next", "next"]

    def test_coordinates_are_relative_to_viewer_origin(self):
        interpreter, ticks = make_interpreter(drag_interval=5)
        interpreter.feed(mouse(103), origin_x=100)
        # 107 - 100 = 7, not a multiple of 5
        assert interpreter.feed(mouse(107), origin_x=100) is None
        assert interpreter.feed(mouse(110), origin_x=100) is Tick.PREV

    def test_touch_uses_touch_interval_and_rounds(self):
        interpreter, ticks = make_interpreter(drag_interval=1, touch_drag_interval=2)
        interpreter.feed(touch(12.2))
        assert interpreter.feed(touch(11.4)) is None  # rounds to 11, odd
        assert interpreter.feed(touch(9.6)) is Tick.NEXT  # rounds to 10
        assert ticks == ["next"]

    def test_reset_requires_two_fresh_samples(self):
        interpreter, ticks = make_interpreter()
        interpreter.feed(mouse(5))
        interpreter.reset()
        assert interpreter.feed(mouse(4)) is None
        assert ticks == []
