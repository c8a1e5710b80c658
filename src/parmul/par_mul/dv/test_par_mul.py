# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/par_mul/dv/test_par_mul.py

"""Tests for par_mul verification."""

from __future__ import annotations

import pyuvm

from parmul.shared.dv import (
    BaseCoverage,
    BaseDriver,
    BaseItem,
    BaseMonitorIn,
    BaseMonitorOut,
    BaseRefModel,
    BaseSbComparator,
    BaseSequence,
    BaseTest,
    utils_cli,
    utils_dv,
)

from .par_mul_coverage import ParMulCoverage
from .par_mul_driver import ParMulDriver
from .par_mul_item import ParMulItem
from .par_mul_monitor_in import ParMulMonitorIn
from .par_mul_monitor_out import ParMulMonitorOut
from .par_mul_ref_model import ParMulRefModel
from .par_mul_sb import ParMulSbComparator
from .par_mul_sequence import (
    ParMulClosureSequence,
    ParMulDirectedSequence,
    ParMulSequence,
)


class ParMulBaseTest(BaseTest):
    """Common par_mul bench; subclasses choose the sequence."""

    sequence_type: type[BaseSequence] = ParMulSequence

    def set_factory_overrides(self) -> None:
        override = pyuvm.uvm_factory().set_type_override_by_type
        override(BaseCoverage, ParMulCoverage)
        override(BaseDriver, ParMulDriver)
        override(BaseItem, ParMulItem)
        override(BaseMonitorIn, ParMulMonitorIn)
        override(BaseMonitorOut, ParMulMonitorOut)
        override(BaseRefModel, ParMulRefModel)
        override(BaseSbComparator, ParMulSbComparator)
        override(BaseSequence, self.sequence_type)

    def build_config(self) -> None:
        super().build_config()
        utils_dv.uvm_config_db_set(
            self,
            "env*",
            "par_mul_response_timeout_cycles",
            utils_cli.get_int_setting("PAR_MUL_RESPONSE_TIMEOUT_CYCLES", 0),
        )

    def require_closure(self) -> None:
        """Fail the test unless every coverage goal was hit."""
        cov = self.env.cov
        if not isinstance(cov, ParMulCoverage):
            return
        missing = cov.model.missing()
        if missing:
            raise AssertionError(f"coverage goals not hit: {missing}")


@pyuvm.test()
class ParMulRandomTest(ParMulBaseTest):
    """PAR_MUL_SEQ_LEN weighted-random requests (COVERAGE_STOP ends early)."""


@pyuvm.test()
class ParMulDirectedTest(ParMulBaseTest):
    """Corner operands, parity faults and a reset; must close coverage."""

    sequence_type = ParMulDirectedSequence

    def check_phase(self) -> None:
        super().check_phase()
        self.require_closure()


@pyuvm.test()
class ParMulClosureTest(ParMulBaseTest):
    """Random requests until coverage closes."""

    sequence_type = ParMulClosureSequence

    def build_envs(self) -> None:
        super().build_envs()
        self.coverage_stop = True

    def check_phase(self) -> None:
        super().check_phase()
        self.require_closure()
