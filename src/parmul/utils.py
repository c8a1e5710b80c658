# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/utils.py

"""Helpers shared by the dv and dv-regress command line tools."""

from __future__ import annotations

import random
import time
from pathlib import Path

_ANSI = {"red": "\033[31m", "green": "\033[32m", "yellow": "\033[33m"}
_ANSI_OFF = "\033[0m"

SEED_MASK = 0xFFFF_FFFF
RANDOM_SEED_TOKENS = frozenset({"rand", "random", "auto"})


def _paint(color: str, s: str) -> str:
    return f"{_ANSI[color]}{s}{_ANSI_OFF}"


def green(s: str) -> str:
    return _paint("green", s)


def red(s: str) -> str:
    return _paint("red", s)


def yellow(s: str) -> str:
    return _paint("yellow", s)


def _srclist_entry(entry: str, repo_root: Path) -> str:
    """One srclist entry with any repo-relative path made absolute."""
    for prefix in ("+incdir+", "-y "):
        if entry.startswith(prefix):
            return prefix + str((repo_root / entry[len(prefix) :].strip()).resolve())
    if entry.startswith(("-", "+")):
        return entry
    return str((repo_root / entry).resolve())


def absolutize_srclist(infile: Path, repo_root: Path, out_dir: Path) -> Path:
    """Flatten infile into out_dir/srclist.abs.f with absolute paths.

    Entries in the input are relative to repo_root. ``-f other.f`` lines are
    inlined in place; a missing nested file is kept as-is so the simulator
    reports it. Switches such as ``+define+`` are copied unchanged.
    """
    entries: list[str] = []
    seen: set[Path] = set()

    def walk(path: Path) -> None:
        if path in seen:
            raise ValueError(f"srclist includes itself: {path}")
        seen.add(path)
        for line in (raw.strip() for raw in path.read_text().splitlines()):
            if not line or line.startswith("//"):
                continue
            if line.startswith("-f "):
                nested = (repo_root / line[3:].strip()).resolve()
                if nested.exists():
                    walk(nested)
                    continue
            entries.append(_srclist_entry(line, repo_root))
        seen.discard(path)

    walk(infile.resolve())

    out = out_dir / "srclist.abs.f"
    out.write_text("".join(f"{e}\n" for e in entries))
    return out


def get_repo_root() -> Path:
    """Nearest ancestor of this file holding pyproject.toml.

    Without one (an installed wheel), fall back to the parent of ``src``,
    then to the filesystem root.
    """
    here = Path(__file__).resolve()
    marked = [p for p in (here, *here.parents) if (p / "pyproject.toml").exists()]
    if marked:
        return marked[0]
    beside_src = [p.parent for p in here.parents if p.name == "src"]
    return beside_src[0] if beside_src else here.parents[-1]


def iso_utc() -> str:
    """Current UTC time, e.g. 2025-01-31T12:00:00Z."""
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


def normalize_seed(rng: random.Random, token: str) -> int:
    """Seed token to a 32-bit int.

    ``rand``, ``random`` and ``auto`` draw from rng; anything int() accepts
    with base 0 is parsed and masked. Bad tokens exit with a CLI message.
    """
    if token.lower() in RANDOM_SEED_TOKENS:
        return rng.getrandbits(32)
    try:
        return int(token, 0) & SEED_MASK
    except ValueError as exc:
        raise SystemExit(
            f"[dv] bad seed {token!r}: expected decimal, 0x... or 'random'"
        ) from exc
