# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/base_monitor_out.py

"""Base monitor for DUT outputs (falling edge)."""

from __future__ import annotations

from typing import Generic, TypeVar

from .base_item import BaseItem
from .base_monitor import BaseMonitor

T = TypeVar("T", bound=BaseItem)


class BaseMonitorOut(BaseMonitor[T], Generic[T]):  # pylint: disable=too-many-ancestors
    """Sample DUT outputs on the falling edge, in ReadOnly.

    Registered outputs change on the rising edge; half a period later they
    are settled. Input-side work of the same cycle (predictions, queue
    clears) has already run in the rising-edge ReadOnly phase.
    """

    async def sample_dut_edge(self) -> None:
        await self.clock_sample_falling()
