# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/base_coverage.py

"""Base functional coverage subscriber (cocotb-coverage + pyuvm)."""

from __future__ import annotations

from typing import Generic, TypeVar

import pyuvm
from cocotb.triggers import Event
from cocotb_coverage.coverage import coverage_db

from . import utils_cli, utils_dv
from .base_item import BaseItem

T = TypeVar("T", bound=BaseItem)


class BaseCoverage(pyuvm.uvm_subscriber, Generic[T]):
    """Coverage subscriber with a closure event.

    write() hands every item to sample(), then asks is_closed(). The first
    time it answers True, `closed_event` is set. The event is published in
    config_db as "coverage_closed" so tests and sequences can stop early.
    Coverage is observational only; nothing here touches the verdict.

    Subclasses implement:
        sample(tt): record one item (cocotb-coverage decorated functions)
        is_closed(): True once every goal is hit
        reset_change(value, active): optional, for reset-aware goals

    Configuration:
        coverage_en (config_db bool): sample at all (default True)
        COV_YAML (setting): export coverage_db to this YAML file
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self.yaml_path: str = utils_cli.get_str_setting("COV_YAML", "")
        self.closed_event: Event = Event()
        self.samples: int = 0
        self._coverage_en: bool = True

    def build_phase(self) -> None:
        super().build_phase()
        utils_dv.uvm_config_db_set(None, "*", "coverage_closed", self.closed_event)

    def end_of_elaboration_phase(self) -> None:
        super().end_of_elaboration_phase()
        cvrg = utils_dv.uvm_config_db_get_try(self, "coverage_en")
        if isinstance(cvrg, bool):
            self._coverage_en = cvrg

    def write(self, tt: T) -> None:
        if not self._coverage_en:
            return
        self.samples += 1
        self.sample(tt)
        self._check_closure()

    def _check_closure(self) -> None:
        if not self.closed_event.is_set() and self.is_closed():
            self.logger.info("Coverage closed after %d samples", self.samples)
            self.closed_event.set()

    def sample(self, tt: T) -> None:  # pragma: no cover - abstract hook
        raise NotImplementedError("Override in subclass and decorate with coverpoints")

    def is_closed(self) -> bool:
        return False

    def reset_change(self, value: int, active: bool) -> None:
        """Reset hook; no-op by default."""

    def report_phase(self) -> None:
        super().report_phase()
        if not self._coverage_en:
            return
        coverage_db.report_coverage(self.logger.debug)
        if self.yaml_path:
            coverage_db.export_to_yaml(self.yaml_path)
            self.logger.info("Coverage YAML written to %s", self.yaml_path)
