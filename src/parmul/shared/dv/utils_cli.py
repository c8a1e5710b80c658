# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/utils_cli.py

"""Bench settings from the environment and plusargs.

Lookup order for a setting NAME:
    1. environment NAME
    2. environment PARMUL_NAME
    3. plusarg +NAME=value (bare +NAME means true)
    4. the caller's default

Plusargs are read from the first non-empty of PLUSARGS, COCOTB_PLUSARGS and
PARMUL_PLUSARGS. A value that cannot be parsed is a configuration error: it
is logged on the "parmul.config" logger and the lookup moves on, so a bad
setting never changes a verdict.

Factory overrides follow uvm_cmdline_processor:
    +uvm_set_type_override=req,over[,replace]
    +uvm_set_inst_override=req,over,path
"""

from __future__ import annotations

import logging
import os
from typing import Callable, Iterable, Sequence, Tuple, TypeVar

import pyuvm

T = TypeVar("T")

ENV_PREFIX = "PARMUL_"
PLUSARG_VARS = ("PLUSARGS", "COCOTB_PLUSARGS", "PARMUL_PLUSARGS")

_TRUE_SET = {"1", "true", "yes", "y", "on"}
_FALSE_SET = {"0", "false", "no", "n", "off"}

# pyuvm raises one of these for an unknown type or path
_FACTORY_EXC: Tuple[type[BaseException], ...] = (KeyError, ValueError, TypeError)

config_log = logging.getLogger("parmul.config")


def _parse_bool(s: str) -> bool | None:
    v = s.strip().lower()
    if v in _TRUE_SET:
        return True
    if v in _FALSE_SET:
        return False
    return None


def _parse_int(s: str) -> int | None:
    try:
        return int(s.strip(), 0)
    except ValueError:
        return None


def iter_plusargs() -> Iterable[str]:
    for var in PLUSARG_VARS:
        s = os.environ.get(var, "")
        if s:
            return s.split()
    return []


def _get_plusarg(name: str) -> str | None:
    """Value of +NAME=val, "1" for a bare +NAME, else None."""
    prefix = f"+{name}="
    for tok in iter_plusargs():
        if tok.startswith(prefix):
            return tok[len(prefix) :]
        if tok == f"+{name}":
            return "1"
    return None


def _candidates(name: str) -> Iterable[Tuple[str, str]]:
    for key in (name, f"{ENV_PREFIX}{name}"):
        v = os.environ.get(key)
        if v is not None:
            yield key, v
    v = _get_plusarg(name)
    if v is not None:
        yield f"+{name}", v


def _resolve(
    name: str, default: T, parse: Callable[[str], T | None], kind: str
) -> T:
    for source, raw in _candidates(name):
        parsed = parse(raw)
        if parsed is not None:
            return parsed
        config_log.error(
            "config error: %s=%r is not a valid %s, ignored", source, raw, kind
        )
    return default


def get_bool_setting(name: str, default: bool) -> bool:
    return _resolve(name, default, _parse_bool, "boolean")


def get_int_setting(name: str, default: int) -> int:
    """Integer setting; 0x/0o/0b prefixes accepted."""
    return _resolve(name, default, _parse_int, "integer")


def get_str_setting(name: str, default: str) -> str:
    for _source, raw in _candidates(name):
        return raw
    return default


def get_choice_setting(name: str, choices: Sequence[str], default: str) -> str:
    """String setting restricted to choices (case-insensitive)."""
    allowed = {c.lower(): c for c in choices}

    def parse(raw: str) -> str | None:
        return allowed.get(raw.strip().lower())

    return _resolve(name, default, parse, f"choice of {', '.join(choices)}")


def apply_factory_overrides_from_plusargs(logger: logging.Logger | None = None) -> None:
    """Apply +uvm_set_type_override / +uvm_set_inst_override plusargs."""
    log = logger or logging.getLogger("parmul.utils_cli.factory")
    f = pyuvm.uvm_factory()

    for tok in iter_plusargs():
        if tok.startswith("+uvm_set_type_override="):
            parts = [p.strip() for p in tok.split("=", 1)[1].split(",")]
            if len(parts) not in (2, 3):
                log.warning("Bad +uvm_set_type_override: %s", tok)
                continue
            req, over = parts[0], parts[1]
            replace = len(parts) == 2 or parts[2] != "0"
            try:
                f.set_type_override_by_name(req, over, replace=replace)
                log.debug("Factory: type override %s -> %s", req, over)
            except _FACTORY_EXC as e:  # pragma: no cover
                log.warning("Override failed (%s): %s", tok, e)

        elif tok.startswith("+uvm_set_inst_override="):
            parts = [p.strip() for p in tok.split("=", 1)[1].split(",")]
            if len(parts) != 3:
                log.warning("Bad +uvm_set_inst_override: %s", tok)
                continue
            req, over, path = parts
            try:
                f.set_inst_override_by_name(req, over, path)
                log.debug("Factory: inst override %s @ %s -> %s", req, path, over)
            except _FACTORY_EXC as e:  # pragma: no cover
                log.warning("Override failed (%s): %s", tok, e)
