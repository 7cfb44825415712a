from wave_picking import timer
from wave_picking.timer import Stopwatch


def test_elapsed_before_start_is_zero():
    assert Stopwatch().elapsed() == 0.0


def test_elapsed_after_start(monkeypatch):
    now = [1000.0]
    monkeypatch.setattr(timer.time, "time", lambda: now[0])
    stopwatch = Stopwatch().start()
    now[0] = 1012.5
    assert stopwatch.elapsed() == 12.5
