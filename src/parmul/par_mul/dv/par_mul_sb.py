# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/par_mul/dv/par_mul_sb.py

"""Scoreboard comparator with par_mul diagnostics."""

from __future__ import annotations

from parmul.shared.dv import BaseSbComparator
from parmul.shared.dv.sb_checker import FieldDiff

from .par_mul_item import ParMulItem


def mismatch_text(exp: ParMulItem, act: ParMulItem, diffs: list[FieldDiff]) -> str:
    """Inputs as A/B values, then every output field; differing ones end in '<-'."""
    bad = {d.field for d in diffs}
    fields = " ".join(
        f"{f}: expected={getattr(exp, f)} observed={getattr(act, f)}"
        f"{' <-' if f in bad else ''};"
        for f in exp._out_fields()  # pylint: disable=protected-access
    )
    return f"{exp.to_request().describe()} | {fields}"


def match_text(exp: ParMulItem, act: ParMulItem) -> str:
    return (
        f"{exp.to_request().describe()} | product={act.product} "
        f"product_parity={act.product_parity} "
        f"input_parity_error={act.input_parity_error}"
    )


class ParMulSbComparator(BaseSbComparator[ParMulItem]):  # pylint: disable=too-many-ancestors
    """Name the inputs as A/B values and every output field in each line."""

    def describe_mismatch(
        self, exp: ParMulItem, act: ParMulItem, diffs: list[FieldDiff]
    ) -> str:
        return mismatch_text(exp, act, diffs)

    def describe_match(self, exp: ParMulItem, act: ParMulItem) -> str:
        return match_text(exp, act)
