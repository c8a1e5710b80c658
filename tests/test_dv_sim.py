# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_dv_sim.py

"""End-to-end runs of the bench under Icarus (skipped without iverilog)."""

import shutil
import subprocess
import sys

import pytest

pytestmark = [
    pytest.mark.sim,
    pytest.mark.skipif(shutil.which("iverilog") is None, reason="iverilog not installed"),
]


def _dv(tmp_path, *args: str) -> int:
    cmd = [
        sys.executable,
        "-m",
        "parmul.tools.dv",
        "--sim=icarus",
        "--waves=0",
        f"--outdir={tmp_path / 'out_dv'}",
        *args,
    ]
    return subprocess.run(cmd, check=False).returncode


@pytest.mark.parametrize(
    "args",
    [
        ("--testcase=ParMulDirectedTest",),
        ("--testcase=ParMulRandomTest", "--seq-len=300", "--seeds", "1", "2"),
        ("--testcase=ParMulClosureTest", "--coverage-stop=1"),
    ],
)
def test_good_dut_passes(tmp_path, args):
    assert _dv(tmp_path, *args) == 0


def test_missing_parity_check_fails(tmp_path):
    args = (
        "--testcase=ParMulDirectedTest",
        "--build-arg=-DPAR_MUL_BUG_NO_PARITY_CHECK",
    )
    assert _dv(tmp_path, *args, "--expect=FAIL") == 0
    assert _dv(tmp_path, *args) != 0
