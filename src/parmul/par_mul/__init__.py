# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/par_mul/__init__.py

"""Parity-guarded 16x16 signed multiplier.

Subpackages:
- rtl: SystemVerilog implementation and its srclist.f
- dv: design verification testbench (cocotb/pyuvm)
"""
