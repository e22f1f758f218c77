import pytest

from genebattle.battle.tasks import TaskRegistry


class FakeTimer:
    def __init__(self, delay, fn):
        self.delay = delay
        self.fn = fn
        self.daemon = False
        self.cancelled = False

    def start(self):
        pass

    def cancel(self):
        self.cancelled = True


def registry():
    timers = []
    def factory(delay, fn):
        timers.append(FakeTimer(delay, fn))
        return timers[-1]
    return TaskRegistry(timer_factory=factory), timers


def test_task_fires_once():
    reg, timers = registry()
    calls = []
    task = reg.schedule("ai_turn", 2.0, lambda: calls.append(1))
    assert timers[0].delay == 2.0
    assert reg.pending() == [task]
    timers[0].fn()
    timers[0].fn()
    assert calls == [1]
    assert not task.pending
    assert reg.pending() == []


def test_cancel_by_name():
    reg, timers = registry()
    calls = []
    reg.schedule("advance", 1.0, lambda: calls.append("a"))
    reg.schedule("ai_turn", 1.0, lambda: calls.append("b"))
    assert reg.cancel("advance") == 1
    assert timers[0].cancelled
    for t in timers:
        t.fn()
    assert calls == ["b"]


def test_cancel_all_disowns_stale_callbacks():
    reg, timers = registry()
    calls = []
    tasks = [reg.schedule("ai_turn", 1.0, lambda: calls.append(1)) for _ in range(3)]
    assert reg.cancel_all() == 3
    assert reg.generation == 1
    assert all(not t.pending for t in tasks)
    for t in timers:
        t.fn()
    assert calls == []
    assert tasks[0].cancel() is False


def test_negative_delay_is_clamped():
    reg, timers = registry()
    reg.schedule("advance", -1, lambda: None)
    assert timers[0].delay == 0.0


def test_callback_errors_propagate():
    reg, timers = registry()
    def boom():
        raise RuntimeError("boom")
    task = reg.schedule("advance", 0, boom)
    with pytest.raises(RuntimeError):
        timers[0].fn()
    assert not task.pending
