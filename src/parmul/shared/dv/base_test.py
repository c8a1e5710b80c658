# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/base_test.py

"""Base test scaffold (factory-friendly config + env creation)."""

from __future__ import annotations

import logging
import os

import cocotb
import pyuvm
from cocotb.triggers import Timer
from pyuvm import ConfigDB

from . import utils_cli, utils_dv
from .base_clock_driver import BaseClockDriver
from .base_env import BaseEnv
from .base_sb_comparator import DIAG_MODES
from .base_sequence import BaseSequence


class BaseTest(pyuvm.uvm_test):
    """Base test: settings into config_db, factory overrides, env, sequence.

    UVM phases:
        build_phase: publish the DUT, apply factory overrides (code first,
            then +uvm_set_*_override plusargs), publish settings, build the
            clock driver and the environment
        end_of_elaboration_phase: apply the log level to the whole hierarchy
        start_of_simulation_phase: log the seed; dump config_db and factory
            at debug level
        run_phase: run one BaseSequence (as resolved by the factory) on the
            first agent's sequencer, then drain

    Subclasses implement:
        set_factory_overrides()

    Optional overrides:
        build_config(), build_clocks(), build_resets(), build_envs(),
        configure_sequence(seq), drain(time_ps)

    Settings (utils_cli precedence: env > PARMUL_ env > plusargs > default):
        Clock: CLOCK_ENABLE, CLOCK_NAME, CLOCK_PERIOD_PS, CLOCK_START_HIGH,
               CLOCK_INIT_DELAY_PS, CLOCK_HEARTBEAT_CYCLES
        Reset: RESET_NAME, RESET_ACTIVE_LOW, RESET_CYCLES
        Environment: CHECK_EN, COVERAGE_EN, COVERAGE_STOP, SB_FAIL_ON_ERROR,
                     SB_ERROR_QUIT_COUNT, SB_DIAG_MODE
        Test: DRAIN_TIME_PS

    Reference:
        UVM Class Reference Manual (Accellera)
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self.clock_driver: BaseClockDriver
        self.env: BaseEnv
        self.coverage_stop: bool = False

    def build_phase(self) -> None:
        self.publish_dut()
        self.set_factory_overrides()
        utils_cli.apply_factory_overrides_from_plusargs(self.logger)
        super().build_phase()
        self.build_config()
        self.build_clocks()
        self.build_resets()
        self.build_envs()

    def end_of_elaboration_phase(self) -> None:
        super().end_of_elaboration_phase()
        self.set_logging_level_hier(utils_dv.desired_log_level())

    def start_of_simulation_phase(self) -> None:
        super().start_of_simulation_phase()
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug("printing uvm_config_db")
            print(ConfigDB())
            self.logger.debug("printing factory")
            pyuvm.uvm_factory().print(debug_level=1)
        self._log_run_seed()

    async def run_phase(self) -> None:
        self.raise_objection()
        seq = pyuvm.uvm_factory().create_object_by_type(BaseSequence, name="seq")
        self.configure_sequence(seq)
        await seq.start(self.env.agents[0].sqr)
        await self.drain()
        self.drop_objection()

    def publish_dut(self) -> None:
        utils_dv.uvm_config_db_set(self, "*", "dut", cocotb.top)

    def set_factory_overrides(self) -> None:
        raise NotImplementedError("Implement set_factory_overrides here")

    def configure_sequence(self, seq: BaseSequence) -> None:
        """Hand the coverage closure event to the sequence when early stop is on."""
        if not self.coverage_stop:
            return
        ev = utils_dv.uvm_config_db_get_try(self, "coverage_closed")
        if ev is None:
            self.logger.warning("COVERAGE_STOP set but coverage is disabled")
            return
        seq.stop_event = ev

    def build_config(self) -> None:
        drain_time_ps = utils_cli.get_int_setting("DRAIN_TIME_PS", 10_000)
        if drain_time_ps > 0:
            utils_dv.uvm_config_db_set(self, "", "drain_time_ps", drain_time_ps)

    def build_clocks(self) -> None:
        """Single clock; bench-level values go under "*"."""
        settings = {
            "clock_enable": utils_cli.get_bool_setting("CLOCK_ENABLE", True),
            "clock_name": utils_cli.get_str_setting("CLOCK_NAME", "clk"),
            "clock_period_ps": utils_cli.get_int_setting("CLOCK_PERIOD_PS", 1_000),
            "clock_start_high": utils_cli.get_bool_setting("CLOCK_START_HIGH", False),
            "clock_init_delay_ps": utils_cli.get_int_setting("CLOCK_INIT_DELAY_PS", 0),
            "clock_heartbeat_cycles": utils_cli.get_int_setting(
                "CLOCK_HEARTBEAT_CYCLES", 1000
            ),
        }
        for key, val in settings.items():
            utils_dv.uvm_config_db_set(self, "*", key, val)
        self.clock_driver = pyuvm.uvm_factory().create_component_by_type(
            BaseClockDriver,
            parent_inst_path=self.get_full_name(),
            name="clock_driver",
            parent=self,
        )

    def build_resets(self) -> None:
        """Single reset owned by the driver and watched by the reset monitor."""
        utils_dv.uvm_config_db_set(
            self, "*", "reset_name", utils_cli.get_str_setting("RESET_NAME", "rst_n")
        )
        utils_dv.uvm_config_db_set(
            self,
            "*",
            "reset_active_low",
            utils_cli.get_bool_setting("RESET_ACTIVE_LOW", True),
        )
        utils_dv.uvm_config_db_set(
            self, "*", "reset_cycles", utils_cli.get_int_setting("RESET_CYCLES", 1)
        )

    def build_envs(self) -> None:
        self.coverage_stop = utils_cli.get_bool_setting("COVERAGE_STOP", False)
        settings = {
            "check_en": utils_cli.get_bool_setting("CHECK_EN", True),
            "coverage_en": utils_cli.get_bool_setting("COVERAGE_EN", True),
            "sb_fail_on_error": utils_cli.get_bool_setting("SB_FAIL_ON_ERROR", True),
            "sb_error_quit_count": utils_cli.get_int_setting("SB_ERROR_QUIT_COUNT", 0),
            "sb_diag_mode": utils_cli.get_choice_setting(
                "SB_DIAG_MODE", DIAG_MODES, "mismatch"
            ),
        }
        for key, val in settings.items():
            utils_dv.uvm_config_db_set(self, "env*", key, val)
        self.env = pyuvm.uvm_factory().create_component_by_type(
            BaseEnv, parent_inst_path=self.get_full_name(), name="env", parent=self
        )

    def _log_run_seed(self) -> None:
        seed = os.getenv("COCOTB_RANDOM_SEED") or os.getenv("RANDOM_SEED")
        self.logger.info("Run seed: %s", seed if seed else "(unset)")

    async def drain(self, time_ps: int | None = None) -> None:
        """Let in-flight responses arrive after the sequence ends.

        pyuvm has no set_drain_time(), so this waits simulation time
        (drain_time_ps from config_db unless time_ps is given).
        """
        if time_ps is None:
            dt = utils_dv.uvm_config_db_get_try(self, "drain_time_ps")
            time_ps = dt if isinstance(dt, int) else 0
        n = max(0, int(time_ps))
        if n:
            self.logger.debug("drain: %s ps", format(n, "_d"))
            await Timer(n, unit="ps")
