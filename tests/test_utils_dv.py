# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_utils_dv.py

import pytest
from cocotb.types import Logic, LogicArray

from parmul.shared.dv import utils_dv


@pytest.mark.parametrize(
    "bits, value",
    [
        ("0000000000000101", 5),
        ("1111111111111101", -3),
        ("1000000000000000", -32768),
        ("0111111111111111", 32767),
    ],
)
def test_signed_bus_values(bits, value):
    assert utils_dv.get_signal_value_signed(LogicArray(bits)) == value


def test_product_width_sign():
    assert utils_dv.get_signal_value_signed(LogicArray("1" * 28 + "0001")) == -15


def test_unresolvable_values_read_as_none():
    assert utils_dv.get_signal_value_signed(LogicArray("X" * 16)) is None
    assert utils_dv.get_signal_value_int(LogicArray("0Z01")) is None


def test_single_bit_reads_unsigned():
    assert utils_dv.get_signal_value_signed(Logic("1")) == 1
    assert utils_dv.get_signal_value_int(Logic("0")) == 0
