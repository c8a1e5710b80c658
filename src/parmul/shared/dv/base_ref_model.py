# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/base_ref_model.py

"""Reference model of DUT."""

import logging
from typing import Generic, Optional, TypeVar

import pyuvm

from . import utils_dv
from .base_item import BaseItem

T = TypeVar("T", bound=BaseItem)


class BaseRefModel(pyuvm.uvm_object, Generic[T]):
    """Golden model that fills in the expected outputs of an input item.

    calc_exp() receives a private clone of an observed input item. It sets the
    output fields and returns the item, or returns None when the input
    produces no DUT response; such items are never queued for comparison.

    reset_change(value, active) is called on every observed reset change so
    that stateful models can clear themselves.

    Reference:
        R. Salemi, "Python for RTL Verification"
        C.E. Cummings, "OVM/UVM Scoreboards - Fundamental Architectures,"
        SNUG 2013
    """

    def __init__(self, name: str = "ref_model") -> None:
        super().__init__(name)
        self._logger: logging.Logger = logging.getLogger(f"uvm.obj.{name}")
        utils_dv.configure_non_component_logger(self._logger)
        self._reset_active: bool = False

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def reset_change(self, value: int, active: bool) -> None:
        self._reset_active = active
        self.logger.debug("reset_change: value=%d active=%s", value, active)

    def calc_exp(self, tr: T) -> Optional[T]:
        raise NotImplementedError
