# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/base_sb_predictor.py

"""Reusable predictor."""

from __future__ import annotations

from typing import Generic, TypeVar

import pyuvm

from . import utils_dv
from .base_item import BaseItem
from .base_ref_model import BaseRefModel

T = TypeVar("T", bound=BaseItem)


class BaseSbPredictor(pyuvm.uvm_subscriber, Generic[T]):
    """Turn observed input items into expected items.

    Flow:
        input item -> clone -> ref_model.calc_exp() -> results_ap

    The clone keeps the broadcast item untouched for other subscribers. When
    the reference model returns None nothing is published, which is how
    inputs without a DUT response stay out of the comparator queue.

    The reference model is created through the factory as BaseRefModel, so a
    bench supplies its own with set_type_override_by_type().
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self.results_ap: pyuvm.uvm_analysis_port = pyuvm.uvm_analysis_port(
            "results_ap", self
        )
        self.ref_model: BaseRefModel[T] = pyuvm.uvm_factory().create_object_by_type(
            BaseRefModel, name="ref_model"
        )
        self.predicted: int = 0

    def reset_change(self, value: int, active: bool) -> None:
        self.ref_model.reset_change(value, active)

    def write(self, tt: T) -> None:
        exp = self.ref_model.calc_exp(tt.clone())
        if exp is None:
            return
        self.predicted += 1
        self.results_ap.write(exp)
