# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/base_reset_sink.py

"""Forwards reset events into the scoreboard and coverage."""

from __future__ import annotations

from typing import Generic, TypeVar

import pyuvm

from . import utils_dv
from .base_coverage import BaseCoverage
from .base_reset_item import BaseResetItem
from .base_sb import BaseSb

T = TypeVar("T", bound=BaseResetItem)


class BaseResetSink(pyuvm.uvm_subscriber, Generic[T]):
    """Fan a reset monitor out to reset_change(value, active) callbacks.

    BaseEnv fills in `sb` and `cov` when it builds them; either may stay None.
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self.sb: BaseSb | None = None
        self.cov: BaseCoverage | None = None

    def write(self, tt: T) -> None:
        if tt.value is None or tt.active is None:
            return
        if self.sb is not None:
            self.sb.reset_change(tt.value, tt.active)
        if self.cov is not None:
            self.cov.reset_change(tt.value, tt.active)
