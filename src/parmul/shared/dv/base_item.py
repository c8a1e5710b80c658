# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/shared/dv/base_item.py

"""Base sequence item split into input and output fields."""

from __future__ import annotations

import copy
import json
from typing import Iterable, Self

import pyuvm

from .sb_checker import FieldDiff, diff_fields


class BaseItem(pyuvm.uvm_sequence_item):
    """Transaction item with declared input and output fields.

    Input fields are what a sequence chooses and the driver puts on the pins.
    Output fields are what the DUT answers with; the reference model fills
    them in on a clone of the input item, and the output monitor fills them
    in from the pins. The scoreboard compares output fields only.

    Subclasses declare:
        _in_fields(): names of input fields, in display order
        _out_fields(): names of output fields, in display order

    Example:
        >>> class AddItem(BaseItem):
        ...     def __init__(self, name="add_item"):
        ...         super().__init__(name)
        ...         self.a = 0
        ...         self.b = 0
        ...         self.sum = 0
        ...
        ...     def _in_fields(self):
        ...         return ("a", "b")
        ...
        ...     def _out_fields(self):
        ...         return ("sum",)
    """

    def _in_fields(self) -> Iterable[str]:
        return ()

    def _out_fields(self) -> Iterable[str]:
        return ()

    def _all_fields(self) -> tuple[str, ...]:
        out: list[str] = []
        for f in (*self._in_fields(), *self._out_fields()):
            if f not in out:
                out.append(f)
        return tuple(out)

    def clone(self) -> Self:
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, object]:
        return {f: _plain(getattr(self, f)) for f in self._all_fields()}

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    def inputs_str(self) -> str:
        return json.dumps({f: _plain(getattr(self, f)) for f in self._in_fields()})

    def outputs_str(self) -> str:
        return json.dumps({f: _plain(getattr(self, f)) for f in self._out_fields()})

    def diff_out(self, other: Self) -> list[FieldDiff]:
        """Output fields of other that differ from self (self is expected)."""
        if type(self) is not type(other):
            raise TypeError(
                f"diff_out: {type(other).__name__} vs {type(self).__name__}"
            )
        return diff_fields(self, other, self._out_fields())


def _plain(v: object) -> object:
    """Enum members are shown by value so items stay JSON-friendly."""
    return getattr(v, "value", v)
