# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/par_mul/dv/__init__.py

"""Design verification testbench for par_mul.

Simulator-free model (importable without cocotb running):
- par_mul_types: operand/product widths, MulOp, MulRequest, MulResponse
- par_mul_calc: reference arithmetic and parity
- par_mul_stimulus: weighted random requests
- par_mul_cov_model: coverage classes, goals and closure
- par_mul_beat: pairing of accepted beats into transactions

pyuvm components:
- par_mul_item: transaction item
- par_mul_driver: two-beat handshake driver, owns reset
- par_mul_monitor_in: commits requests on rising edges
- par_mul_monitor_out: samples responses on falling edges
- par_mul_ref_model: expected response per MULTIPLY
- par_mul_sb: comparator diagnostics
- par_mul_coverage: coverage subscriber and early-stop event
- par_mul_sequence: random, closure and directed sequences
- test_par_mul: the cocotb/pyuvm tests

To run tests:
    dv --design=par_mul --test=test_par_mul
    dv-regress --file=src/parmul/par_mul/dv/dv_regress.yaml
"""
