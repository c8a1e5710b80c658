# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/par_mul/dv/par_mul_beat.py

"""Two-beat input tracking for the scoreboard front end and coverage.

Each rising edge is fed to BeatTracker.step() with the values sampled on the
pins. Beats alternate A, B. An edge can report two things:

    accepted: the pair whose B beat the DUT took on this edge. Its kind is
        not known yet, so it is reported as MULTIPLY. This is what the
        scoreboard queues, so a response on the very next falling edge
        already has an expected entry.
    committed: the pair accepted on the previous edge, with its kind
        settled. If reset is asserted on this edge it was a RESET
        transaction, otherwise a MULTIPLY. This is what coverage samples.

A RESET pair is queued like any other and dropped again when the reset
assertion on the committing edge clears the scoreboard queue. Reset clears
any partial or uncommitted pair in the tracker.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .par_mul_types import MulOp, MulRequest


@dataclass(frozen=True)
class BeatEdge:
    accepted: MulRequest | None = None
    committed: MulRequest | None = None


class BeatTracker:
    def __init__(self) -> None:
        self._first: tuple[int, int] | None = None
        self._pending: MulRequest | None = None

    @property
    def phase(self) -> int:
        """0 when waiting for operand A, 1 when waiting for operand B."""
        return 0 if self._first is None else 1

    @property
    def pending(self) -> bool:
        """A pair was accepted and its kind is settled on the next edge."""
        return self._pending is not None

    def clear(self) -> None:
        self._first = None
        self._pending = None

    def step(self, *, reset: bool, valid: bool, value: int, parity: int) -> BeatEdge:
        """Advance one rising edge."""
        committed: MulRequest | None = None
        if self._pending is not None:
            committed = self._pending
            if reset:
                committed = replace(committed, op=MulOp.RESET)
            self._pending = None
        if reset:
            self.clear()
            return BeatEdge(committed=committed)

        accepted: MulRequest | None = None
        if valid:
            if self._first is None:
                self._first = (value, parity)
            else:
                accepted = MulRequest(*self._first, value, parity, op=MulOp.MULTIPLY)
                self._pending = accepted
                self._first = None
        return BeatEdge(accepted=accepted, committed=committed)
