# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/__init__.py

"""parmul: a self-checking testbench for a parity-guarded signed multiplier.

The bench drives two 16-bit signed operands, each with a declared parity bit,
into the multiplier over a two-beat valid/busy handshake. It predicts the
32-bit product, its parity, and the input-parity-error flag, and it checks
every response in submission order. Functional coverage over operation
sequencing, operand corners, and parity combinations is tracked alongside.

Main Components:

par_mul:
    The multiplier RTL (rtl/) and its cocotb/pyuvm testbench (dv/).

shared:
    Generic UVM-style base classes built on cocotb and pyuvm.

tools:
    The dv and dv-regress command-line runners.

utils:
    Small helpers shared by the command-line tools.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

try:
    __version__ = pkg_version("parmul")
except PackageNotFoundError:
    __version__ = "0+local"
