# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/__init__.py

"""UVM-style testbench building blocks on cocotb and pyuvm.

A bench subclasses these and registers its subclasses as factory
overrides; BaseTest, BaseEnv and BaseAgent only ever create the base types.

Structure:
- BaseTest, BaseEnv, BaseAgent: hierarchy and wiring
- BaseDriver, BaseSequencer, BaseSequence, BaseItem: stimulus
- BaseMonitorIn, BaseMonitorOut: rising-edge inputs, falling-edge outputs
- BaseSb, BaseSbPredictor, BaseRefModel, BaseSbComparator: checking
- BaseCoverage: cocotb-coverage sampling with a closure event
- BaseClockDriver, BaseClockMixin: clock and heartbeat
- BaseResetMonitor, BaseResetSink, BaseResetItem: reset distribution

Utilities:
- sb_checker: simulator-free in-order checking engine
- utils_dv: config_db and signal helpers
- utils_cli: settings from env vars and plusargs
"""

from __future__ import annotations

from parmul import __version__

from . import sb_checker, utils_cli, utils_dv
from .base_agent import BaseAgent
from .base_clock_driver import BaseClockDriver
from .base_clock_mixin import BaseClockMixin
from .base_coverage import BaseCoverage
from .base_driver import BaseDriver, HandshakeTimeoutError
from .base_env import BaseEnv
from .base_item import BaseItem
from .base_monitor import BaseMonitor
from .base_monitor_in import BaseMonitorIn
from .base_monitor_out import BaseMonitorOut
from .base_ref_model import BaseRefModel
from .base_reset_item import BaseResetItem
from .base_reset_monitor import BaseResetMonitor
from .base_reset_sink import BaseResetSink
from .base_sb import BaseSb
from .base_sb_comparator import BaseSbComparator
from .base_sb_predictor import BaseSbPredictor
from .base_sequence import BaseSequence
from .base_sequencer import BaseSequencer
from .base_test import BaseTest

__all__ = (
    "BaseAgent",
    "BaseClockDriver",
    "BaseClockMixin",
    "BaseCoverage",
    "BaseDriver",
    "BaseEnv",
    "BaseItem",
    "BaseMonitor",
    "BaseMonitorIn",
    "BaseMonitorOut",
    "BaseRefModel",
    "BaseResetItem",
    "BaseResetMonitor",
    "BaseResetSink",
    "BaseSb",
    "BaseSbComparator",
    "BaseSbPredictor",
    "BaseSequence",
    "BaseSequencer",
    "BaseTest",
    "HandshakeTimeoutError",
    "sb_checker",
    "utils_dv",
    "utils_cli",
    "__version__",
)
