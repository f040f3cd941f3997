from datetime import timedelta

from simplege.events import EventTrigger, Timing


def test_trigger_calls_handlers_in_order_with_args():
    calls = []
    event = EventTrigger()
    event.register(lambda frame: calls.append(("a", frame)))
    event.register(lambda frame: calls.append(("b", frame)))
    event.trigger(7)
    assert calls == [("a", 7), ("b", 7)]


def test_trigger_without_handlers_does_nothing():
    event = EventTrigger()
    event.trigger(1, 2)
    assert event.handlers == []


def test_trigger_passes_several_arguments():
    seen = []
    event = EventTrigger()
    event.register(lambda *args: seen.append(args))
    event.trigger("x", 3)
    event.trigger()
    assert seen == [("x", 3), ()]


def test_same_handler_registered_twice_runs_twice():
    count = []
    event = EventTrigger()

    def handler():
        count.append(1)

    event.register(handler)
    event.register(handler)
    assert event.handlers == [handler, handler]
    event.trigger()
    assert count == [1, 1]


def test_timing_holds_values():
    timing = Timing(timedelta(milliseconds=25), 4)
    assert timing.delta == timedelta(milliseconds=25)
    assert timing.frame == 4