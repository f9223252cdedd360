from pixelgate.app_info import AppInfo
from pixelgate.clock import AppClock

import pytest


class FakeTimer:
    def __init__(self, now=0):
        self.now = now
        self.delays = []

    def ticks(self):
        return self.now

    def delay(self, millis):
        self.delays.append(millis)
        self.now += millis


def _info(fps=50.0, workload=False):
    info = AppInfo.with_max_dims(10.0, 10.0).with_target_fps(fps)
    return info.with_workload_info() if workload else info


def test_fast_frame_waits_until_frame_duration():
    timer = FakeTimer()
    clock = AppClock(_info(50.0), timer)
    timer.now = 5
    elapsed = clock.step()
    assert elapsed == pytest.approx(1 / 50.0)
    assert elapsed * 1000 == pytest.approx(5 + sum(timer.delays))


def test_slow_frame_does_not_wait():
    timer = FakeTimer()
    clock = AppClock(_info(50.0), timer)
    timer.now = 100
    assert clock.step() == pytest.approx(0.1)
    assert timer.delays == []


def test_steps_measure_from_previous_step():
    timer = FakeTimer()
    clock = AppClock(_info(50.0), timer)
    timer.now = 100
    clock.step()
    timer.now = 160
    assert clock.step() == pytest.approx(0.06)


def test_frame_duration_follows_target_fps():
    clock = AppClock(_info(50.0), FakeTimer())
    assert clock.frame_dur_millis == 1000 // 50


def test_workload_printed_when_enabled(capsys):
    timer = FakeTimer()
    clock = AppClock(_info(50.0, workload=True), timer)
    timer.now = 4000
    clock.step()
    out = capsys.readouterr().out
    assert out.startswith("Work Load: Average ")
    average = out.split("Average ")[1].split("%")[0]
    maximum = out.split("Max ")[1].split("%")[0]
    assert average == maximum


def test_workload_not_reprinted_within_interval(capsys):
    timer = FakeTimer()
    clock = AppClock(_info(50.0, workload=True), timer)
    timer.now = 4000
    clock.step()
    capsys.readouterr()
    timer.now += 30
    clock.step()
    assert capsys.readouterr().out == ""


def test_workload_silent_when_disabled(capsys):
    timer = FakeTimer()
    clock = AppClock(_info(50.0), timer)
    timer.now = 4000
    clock.step()
    assert capsys.readouterr().out == ""