# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_utils.py

import random

import pytest

from parmul import utils


def test_srclist_is_flattened_and_absolute(tmp_path):
    (tmp_path / "rtl").mkdir()
    (tmp_path / "rtl" / "inner.f").write_text("rtl/b.sv\n")
    top = tmp_path / "rtl" / "top.f"
    top.write_text(
        "// comment\n"
        "\n"
        "+define+FOO=1\n"
        "+incdir+rtl/inc\n"
        "rtl/a.sv\n"
        "-f rtl/inner.f\n"
        "-f rtl/missing.f\n"
    )
    out = utils.absolutize_srclist(top, tmp_path, tmp_path)
    assert out.read_text().splitlines() == [
        "+define+FOO=1",
        f"+incdir+{(tmp_path / 'rtl' / 'inc').resolve()}",
        str((tmp_path / "rtl" / "a.sv").resolve()),
        str((tmp_path / "rtl" / "b.sv").resolve()),
        "-f rtl/missing.f",
    ]


def test_srclist_cycle_is_rejected(tmp_path):
    loop = tmp_path / "loop.f"
    loop.write_text("-f loop.f\n")
    with pytest.raises(ValueError):
        utils.absolutize_srclist(loop, tmp_path, tmp_path)


@pytest.mark.parametrize("token, value", [("7", 7), ("0x10", 16), ("-1", 0xFFFF_FFFF)])
def test_normalize_seed_parses(token, value):
    assert utils.normalize_seed(random.Random(0), token) == value


def test_normalize_seed_random_is_reproducible():
    a = utils.normalize_seed(random.Random(5), "RANDOM")
    b = utils.normalize_seed(random.Random(5), "auto")
    assert a == b
    assert 0 <= a <= 0xFFFF_FFFF


def test_normalize_seed_rejects_garbage():
    with pytest.raises(SystemExit):
        utils.normalize_seed(random.Random(0), "seven")


def test_colors_wrap_and_reset():
    assert utils.green("ok").startswith("\033[32m")
    assert utils.red("x").endswith("\033[0m")
