# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/base_sequence.py

"""Unified base for item-generating sequences (UVM-style)."""

from __future__ import annotations

import logging
from typing import Generic, Type, TypeVar, cast

import pyuvm
from cocotb.triggers import Event

from . import utils_dv
from .base_item import BaseItem
from .base_sequencer import BaseSequencer

T = TypeVar("T", bound=BaseItem)


class BaseSequence(pyuvm.uvm_sequence, Generic[T]):
    """Item-generating sequence with a length and an early-stop hook.

    Execution flow:
        1. body_pre()
        2. up to seq_len times, unless stop_requested() says otherwise:
           make_item(i), start_item(), set_item_inputs(item, i), finish_item()
        3. body_post()

    The concrete item type is whatever the factory resolves BaseItem to, so a
    bench registers its item with set_type_override_by_type(BaseItem, ...).
    It is looked up once per body() call.

    Subclasses implement:
        set_item_inputs(item, index)

    Optional hooks:
        body_pre(), body_post(), stop_requested()
    """

    def __init__(self, name: str = "seq", seq_len: int = 100) -> None:
        super().__init__(name)
        self.logger: logging.Logger = logging.getLogger(f"uvm.{name}")
        utils_dv.configure_non_component_logger(self.logger)
        self.sequencer: BaseSequencer
        self._item_class_constructor: Type[T] | None = None
        self.seq_len: int = max(0, int(seq_len))
        self.sent: int = 0
        self.stop_event: Event | None = None

    async def body(self) -> None:
        self.logger.debug("body begin: length = %d", self.seq_len)
        await self.body_pre()
        probe = pyuvm.uvm_factory().create_object_by_type(BaseItem, name="probe_for_type")
        self._item_class_constructor = cast(Type[T], type(probe))
        make = self.make_item
        set_inputs = self.set_item_inputs
        for i in range(self.seq_len):
            if self.stop_requested():
                self.logger.info("Stopping after %d of %d items", i, self.seq_len)
                break
            item = make(i)
            await self.start_item(item)
            await set_inputs(item, i)
            await self.finish_item(item)
            self.sent += 1
        await self.body_post()
        self.logger.debug("body end: sent = %d", self.sent)

    async def body_pre(self) -> None:
        """Hook; nothing by default."""

    def make_item(self, index: int) -> T:
        assert self._item_class_constructor is not None, "make_item outside body()"
        return self._item_class_constructor(f"tr{index}")

    async def set_item_inputs(self, item: T, index: int) -> None:
        raise NotImplementedError

    def stop_requested(self) -> bool:
        """Checked before each item; True ends the sequence early.

        By default the sequence stops once stop_event (if any) is set.
        """
        return self.stop_event is not None and self.stop_event.is_set()

    async def body_post(self) -> None:
        """Hook; nothing by default."""
