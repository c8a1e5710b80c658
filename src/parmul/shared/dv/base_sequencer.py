# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/base_sequencer.py

"""Base sequencer, extendable."""

from __future__ import annotations

import pyuvm

from . import utils_dv


class BaseSequencer(pyuvm.uvm_sequencer):
    """pyuvm sequencer with the bench's log level applied."""

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
