# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/par_mul/dv/par_mul_coverage.py

"""Coverage."""

from __future__ import annotations

import itertools

import pyuvm
from cocotb_coverage.coverage import CoverCross, CoverPoint, coverage_section

from parmul.shared.dv import BaseCoverage

from .par_mul_cov_model import (
    CORNER_GOALS,
    OP_CLASSES,
    OPERAND_CLASSES,
    PARITY_CLASSES,
    CoverageModel,
    classify_operand,
    classify_parity,
)
from .par_mul_item import ParMulItem
from .par_mul_types import MulRequest

# Only the goal cells of the 5x5 operand cross are bins; the rest are ignored.
_CORNER_IGNORED = [
    cell
    for cell in itertools.product(OPERAND_CLASSES, OPERAND_CLASSES)
    if cell not in CORNER_GOALS
]

ParMulTransactionCoverage = coverage_section(
    CoverPoint(
        "par_mul.corner_a",
        xf=lambda req: classify_operand(req.operand_a),
        bins=list(OPERAND_CLASSES),
    ),
    CoverPoint(
        "par_mul.corner_b",
        xf=lambda req: classify_operand(req.operand_b),
        bins=list(OPERAND_CLASSES),
    ),
    CoverCross(
        "par_mul.corner_cross",
        items=["par_mul.corner_a", "par_mul.corner_b"],
        ign_bins=_CORNER_IGNORED,
    ),
    CoverPoint(
        "par_mul.parity",
        xf=classify_parity,
        bins=list(PARITY_CLASSES),
    ),
)


@ParMulTransactionCoverage
def _sample_transaction(req: MulRequest) -> None:
    pass


# One sample can hit several op-sequence classes at once.
@CoverPoint(
    "par_mul.op_seq",
    xf=lambda hits: hits,
    bins=list(OP_CLASSES),
    rel=lambda hits, b: b in hits,
    inj=False,
)
def _sample_op_seq(hits: frozenset[str]) -> None:
    pass


class ParMulCoverage(BaseCoverage[ParMulItem]):
    """Feed CoverageModel for closure and coverage_db for the report.

    Transactions come from the input monitor's cov_ap, one per A/B pair once
    it is known to be a MULTIPLY or a RESET. Reset assertions come through
    reset_change() and count as a RESET operation in the op-sequence history.
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        self.model = CoverageModel()

    def sample(self, tt: ParMulItem) -> None:
        req = tt.to_request()
        hits = self.model.sample_transaction(req)
        _sample_transaction(req)
        if hits:
            _sample_op_seq(hits)

    def reset_change(self, value: int, active: bool) -> None:
        if not active or not self._coverage_en:
            return
        hits = self.model.sample_reset()
        if hits:
            _sample_op_seq(hits)
        self._check_closure()

    def is_closed(self) -> bool:
        return self.model.closed

    def report_phase(self) -> None:
        super().report_phase()
        if not self._coverage_en:
            return
        self.logger.info(
            "ParMulCoverage summary: %.1f%% of goals, transactions=%d resets=%d",
            self.model.percent,
            self.model.transactions,
            self.model.resets,
        )
        missing = self.model.missing()
        if missing:
            self.logger.info("ParMulCoverage missing: %s", missing)
