# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/base_sb_comparator.py

"""In-order comparator fed by the predictor (expected) and a monitor (actual)."""

from __future__ import annotations

from typing import Generic, TypeVar

import pyuvm

from . import utils_cli, utils_dv
from .base_item import BaseItem
from .sb_checker import (
    FieldDiff,
    InOrderChecker,
    ScoreboardUnderflowError,
    Verdict,
)

T = TypeVar("T", bound=BaseItem)

DIAG_MODES = ("mismatch", "all")


class _ExpectedImp(pyuvm.uvm_subscriber):
    """Receives expected items for the parent comparator."""

    def write(self, tt: BaseItem) -> None:
        self.get_parent().expect(tt)


class BaseSbComparator(pyuvm.uvm_subscriber, Generic[T]):
    """Scoreboard comparator with an in-order expected queue.

    Architecture:
        predictor.results_ap -> exp_imp.analysis_export -> expect() -> queue
        output monitor.ap    -> analysis_export -> write() -> check()

    Expected items are queued when they arrive. Each actual item pops the
    oldest expected item and the output fields are compared. Both sides are
    called synchronously from monitor tasks that run in different clock
    phases, so the queue needs no locking.

    - mismatch: error diagnostic, verdict FAILED for the rest of the run
    - match: debug diagnostic, info when sb_diag_mode is "all"
    - actual with nothing queued: ScoreboardUnderflowError, logged as an
      internal error and propagated so the run aborts
    - reset asserted: queue cleared, counts and verdict kept

    Configuration (config_db):
        sb_fail_on_error (bool): final_phase raises on FAILED (default True)
        sb_error_quit_count (int): abort after this many mismatches
            (default 0, disabled)
        sb_diag_mode (str): "mismatch" or "all" (default "mismatch")

    Reference:
        C.E. Cummings, "OVM/UVM Scoreboards - Fundamental Architectures,"
        SNUG 2013 (Silicon Valley)
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self.exp_imp = _ExpectedImp("exp_imp", self)
        self.checker: InOrderChecker[T] = InOrderChecker(self.diff)
        self.fail_on_error: bool = True
        self.error_quit_count: int = 0
        self.diag_mode: str = "mismatch"

    def end_of_elaboration_phase(self) -> None:
        super().end_of_elaboration_phase()
        v = utils_dv.uvm_config_db_get_try(self, "sb_fail_on_error")
        if isinstance(v, bool):
            self.fail_on_error = v
        v = utils_dv.uvm_config_db_get_try(self, "sb_error_quit_count")
        if isinstance(v, int):
            self.error_quit_count = max(0, v)
        v = utils_dv.uvm_config_db_get_try(self, "sb_diag_mode")
        if isinstance(v, str):
            if v in DIAG_MODES:
                self.diag_mode = v
            else:
                utils_cli.config_log.error(
                    "config error: sb_diag_mode=%r not one of %s, using %r",
                    v,
                    DIAG_MODES,
                    self.diag_mode,
                )

    @property
    def verdict(self) -> Verdict:
        return self.checker.verdict

    @property
    def vect_cnt(self) -> int:
        return self.checker.vect_cnt

    @property
    def pass_cnt(self) -> int:
        return self.checker.pass_cnt

    @property
    def err_cnt(self) -> int:
        return self.checker.err_cnt

    def diff(self, exp: T, act: T) -> list[FieldDiff]:
        return exp.diff_out(act)

    def expect(self, exp: T) -> None:
        self.checker.expect(exp)
        self.logger.debug("queued expected (%d outstanding)", self.checker.outstanding)

    def write(self, tt: T) -> None:
        try:
            exp, diffs = self.checker.check(tt)
        except ScoreboardUnderflowError as e:
            self.logger.critical("INTERNAL ERROR: %s; actual=%s", e, tt)
            raise
        if diffs:
            self.logger.error("MISMATCH %s", self.describe_mismatch(exp, tt, diffs))
            if self.error_quit_count and self.err_cnt >= self.error_quit_count:
                raise AssertionError(
                    f"Scoreboard error_quit_count reached "
                    f"(errors={self.err_cnt}, threshold={self.error_quit_count})"
                )
        elif self.diag_mode == "all":
            self.logger.info("PASS %s", self.describe_match(exp, tt))
        else:
            self.logger.debug("PASS %s", self.describe_match(exp, tt))

    def reset_change(self, value: int, active: bool) -> None:
        if not active:
            return
        n = self.checker.reset()
        if n:
            self.logger.debug("reset: dropped %d outstanding expected item(s)", n)

    def describe_mismatch(self, exp: T, act: T, diffs: list[FieldDiff]) -> str:
        fields = ", ".join(
            f"{d.field}: expected={d.expected} observed={d.actual}" for d in diffs
        )
        return f"inputs={exp.inputs_str()} {fields}"

    def describe_match(self, exp: T, act: T) -> str:
        return f"inputs={exp.inputs_str()} outputs={act.outputs_str()}"

    def report_phase(self) -> None:
        super().report_phase()
        if self.checker.outstanding:
            self.logger.warning(
                "%d expected item(s) never answered", self.checker.outstanding
            )
        if self.vect_cnt == 0:
            self.logger.warning("Scoreboard compared no transactions")
        if self.verdict is Verdict.PASSED:
            self.logger.info(
                "*** TEST PASSED - %d ran, %d passed ***", self.vect_cnt, self.pass_cnt
            )
        else:
            self.logger.error(
                "*** TEST FAILED - %d ran, %d passed, %d failed ***",
                self.vect_cnt,
                self.pass_cnt,
                self.err_cnt,
            )

    def final_phase(self) -> None:
        super().final_phase()
        if self.fail_on_error and self.verdict is Verdict.FAILED:
            raise AssertionError(
                f"Scoreboard saw {self.err_cnt} error(s); sb_fail_on_error is enabled"
            )
