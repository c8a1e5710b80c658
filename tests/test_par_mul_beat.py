# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_par_mul_beat.py

from parmul.par_mul.dv.par_mul_beat import BeatEdge, BeatTracker
from parmul.par_mul.dv.par_mul_types import MulOp, MulRequest


def _edge(bt: BeatTracker, *, reset=False, valid=False, value=0, parity=0) -> BeatEdge:
    return bt.step(reset=reset, valid=valid, value=value, parity=parity)


def test_pair_is_accepted_on_the_second_beat_and_committed_next_edge():
    bt = BeatTracker()
    assert _edge(bt, valid=True, value=5, parity=0) == BeatEdge()
    assert bt.phase == 1
    edge = _edge(bt, valid=True, value=-3, parity=1)
    assert edge.accepted == MulRequest(5, 0, -3, 1, MulOp.MULTIPLY)
    assert edge.committed is None
    assert bt.pending and bt.phase == 0
    edge = _edge(bt)
    assert edge.accepted is None
    assert edge.committed == MulRequest(5, 0, -3, 1, MulOp.MULTIPLY)
    assert not bt.pending


def test_idle_edges_between_beats_are_ignored():
    bt = BeatTracker()
    _edge(bt, valid=True, value=1, parity=1)
    for _ in range(3):
        assert _edge(bt) == BeatEdge()
    assert _edge(bt, valid=True, value=2, parity=1).accepted == MulRequest(1, 1, 2, 1)
    assert _edge(bt).committed == MulRequest(1, 1, 2, 1)


def test_reset_after_second_beat_commits_a_reset_transaction():
    bt = BeatTracker()
    _edge(bt, valid=True, value=1234, parity=1)
    accepted = _edge(bt, valid=True, value=-4321, parity=0).accepted
    # queued as a multiply; the kind is only known one edge later
    assert accepted is not None and accepted.op is MulOp.MULTIPLY
    edge = _edge(bt, reset=True)
    assert edge.committed == MulRequest(1234, 1, -4321, 0, MulOp.RESET)
    assert edge.accepted is None
    assert bt.phase == 0 and not bt.pending


def test_reset_drops_a_partial_pair():
    bt = BeatTracker()
    _edge(bt, valid=True, value=7, parity=1)
    assert _edge(bt, reset=True) == BeatEdge()
    assert bt.phase == 0
    # the next beat is operand A again
    _edge(bt, valid=True, value=8, parity=1)
    assert _edge(bt, valid=True, value=9, parity=0).accepted == MulRequest(8, 1, 9, 0)


def test_beats_during_reset_are_not_accepted():
    bt = BeatTracker()
    assert _edge(bt, reset=True, valid=True, value=1, parity=1) == BeatEdge()
    assert bt.phase == 0


def test_back_to_back_pairs():
    bt = BeatTracker()
    _edge(bt, valid=True, value=1, parity=1)
    _edge(bt, valid=True, value=2, parity=1)
    # first pair commits on the same edge that accepts the next A
    edge = _edge(bt, valid=True, value=3, parity=0)
    assert edge == BeatEdge(committed=MulRequest(1, 1, 2, 1))
    assert bt.phase == 1
    edge = _edge(bt, valid=True, value=4, parity=1)
    assert edge == BeatEdge(accepted=MulRequest(3, 0, 4, 1))
    assert _edge(bt).committed == MulRequest(3, 0, 4, 1)


def test_clear():
    bt = BeatTracker()
    _edge(bt, valid=True, value=1, parity=1)
    _edge(bt, valid=True, value=2, parity=1)
    bt.clear()
    assert not bt.pending and bt.phase == 0
    assert _edge(bt) == BeatEdge()
