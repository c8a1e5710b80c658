# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/base_reset_item.py

"""Observed reset level."""

from __future__ import annotations

from .base_item import BaseItem


class BaseResetItem(BaseItem):
    """One observed reset level.

    value is the raw pin level; active is that level resolved against the
    configured polarity (True means the DUT is in reset).
    """

    def __init__(self, name: str = "reset_tr") -> None:
        super().__init__(name)
        self.value: int | None = None
        self.active: bool | None = None

    def _in_fields(self) -> tuple[str, ...]:
        return ("value", "active")
