# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_base_clock_driver.py

import pytest

from parmul.shared.dv import base_clock_driver
from parmul.shared.dv.base_clock_driver import BaseClockDriver


class _FakeTask:
    def __init__(self, coro):
        self.coro = coro
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class _FakeClock:
    def __init__(self, signal, period, unit):
        self.args = (signal, period, unit)

    def start(self, start_high=True):
        return ("clock", self.args, start_high)


@pytest.fixture
def started(monkeypatch):
    tasks = []

    def start_soon(coro):
        tasks.append(_FakeTask(coro))
        return tasks[-1]

    monkeypatch.setattr(base_clock_driver.cocotb, "start_soon", start_soon)
    monkeypatch.setattr(base_clock_driver, "Clock", _FakeClock)
    return tasks


def test_final_phase_cancels_the_clock_task_itself(started):
    drv = BaseClockDriver("clock_driver_cancel", None)
    drv._clk = object()
    drv.clock_heartbeat_cycles = 0
    drv.clock_period_ps = 2_000
    drv.start_of_simulation_phase()

    assert len(started) == 1
    clock_task = started[0]
    assert clock_task.coro == ("clock", (drv._clk, 2_000, "ps"), False)
    assert drv._task is clock_task

    drv.final_phase()
    assert clock_task.cancelled
    assert drv._task is None
