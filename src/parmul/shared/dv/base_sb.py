# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/base_sb.py

"""Top level scoreboard."""

from __future__ import annotations

from typing import Generic, TypeVar

import pyuvm

from . import utils_dv
from .base_item import BaseItem
from .base_sb_comparator import BaseSbComparator
from .base_sb_predictor import BaseSbPredictor

T = TypeVar("T", bound=BaseItem)


class BaseSb(pyuvm.uvm_scoreboard, Generic[T]):
    """Predictor plus comparator.

        input monitor -> prd -> cmp.exp_imp  (expected, rising edge)
        output monitor ------> cmp           (actual, falling edge)

    Both children come from the factory, so a bench overrides either type.
    Reset changes go to both: the predictor's model and the comparator queue.

    Reference:
        C.E. Cummings, "OVM/UVM Scoreboards - Fundamental Architectures,"
        SNUG 2013 (Silicon Valley)
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        create = pyuvm.uvm_factory().create_component_by_type
        path = self.get_full_name()
        self.prd: BaseSbPredictor[T] = create(
            BaseSbPredictor, parent_inst_path=path, name="prd", parent=self
        )
        self.cmp: BaseSbComparator[T] = create(
            BaseSbComparator, parent_inst_path=path, name="cmp", parent=self
        )

    def connect_phase(self) -> None:
        super().connect_phase()
        self.prd.results_ap.connect(self.cmp.exp_imp.analysis_export)

    def reset_change(self, value: int, active: bool) -> None:
        self.prd.reset_change(value, active)
        self.cmp.reset_change(value, active)
