# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/utils_dv.py

"""Helpers at the pyuvm config_db and cocotb handle boundaries.

Config DB:
    uvm_config_db_get_try(): value or None when the key is missing
    uvm_config_db_get(): value or ConfigKeyError
    uvm_config_db_set(): publish a value

Signals:
    get_signal(): resolve dut.<name>, RuntimeError when absent
    get_signal_value_int(): unsigned int from Logic/LogicArray, None on X/Z
    get_signal_value_signed(): two's complement reading of a bus, None on X/Z

Logging:
    desired_log_level(): level named by COCOTB_LOG_LEVEL
    configure_component_logger() / configure_non_component_logger()
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Any, Union, cast

import pyuvm
from cocotb.handle import SimHandleBase
from cocotb.types import Logic, LogicArray
from pyuvm import error_classes


class ConfigKeyError(KeyError):
    """A component asked config_db for a key nobody published."""


def desired_log_level(default: int = logging.INFO) -> int:
    name = (os.getenv("COCOTB_LOG_LEVEL") or "INFO").upper()
    return getattr(logging, name, default)


def configure_component_logger(comp: pyuvm.uvm_component) -> None:
    comp.set_logging_level(desired_log_level())


def configure_non_component_logger(logger: logging.Logger) -> None:
    logger.setLevel(desired_log_level())
    # Reuse cocotb's root handlers
    logger.propagate = True


@lru_cache(maxsize=1)
def uvm_config_db() -> Any:
    """pyuvm's ConfigDB singleton."""
    return pyuvm.ConfigDB()


def uvm_config_db_get_try(
    comp: pyuvm.uvm_component, key: str, inst: str = ""
) -> Any | None:
    """Return the value for key or None.

    pyuvm only accepts wildcards on set(), so "*" is treated as "".
    """
    if inst == "*":
        inst = ""
    try:
        return uvm_config_db().get(comp, inst, key)
    except error_classes.UVMConfigItemNotFound:
        return None


def uvm_config_db_get(comp: pyuvm.uvm_component, key: str) -> Any:
    val = uvm_config_db_get_try(comp, key)
    if val is None:
        raise ConfigKeyError(
            f"config_db[{key!r}] not set for '{comp.get_full_name()}'"
        )
    return val


def uvm_config_db_set(
    ctx: pyuvm.uvm_component | None, inst_name: str, key: str, value: Any
) -> None:
    uvm_config_db().set(ctx, inst_name, key, value)


def get_signal(dut: Any, signal_name: str) -> SimHandleBase:
    """Return dut.<signal_name>; RuntimeError if the DUT has no such signal."""
    signal = getattr(dut, signal_name, None)
    if signal is None:
        raise RuntimeError(f"Signal '{signal_name}' not found on DUT")
    if not hasattr(signal, "value"):
        raise TypeError(f"Signal '{signal_name}' has no .value property")
    return cast(SimHandleBase, signal)


def get_signal_value_int(sig: Union[Logic, LogicArray]) -> int | None:
    if isinstance(sig, Logic):
        return int(sig) if sig.is_resolvable else None
    return sig.to_unsigned() if sig.is_resolvable else None


def get_signal_value_signed(sig: Union[Logic, LogicArray]) -> int | None:
    if isinstance(sig, Logic):
        return get_signal_value_int(sig)
    return sig.to_signed() if sig.is_resolvable else None
