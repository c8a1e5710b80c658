# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/tools/dv.py

"""Build the par_mul RTL and run its pyuvm bench under cocotb and pytest.

The simulator build happens once per fingerprint (simulator, waves and extra
build args) under ``<outdir>/builds``; each seed then runs the selected test
module in its own directory under ``<outdir>/tests`` with a manifest.json and
a copy-pasteable replay command.

Typical usage:
    dv                                   # random test, seed 42, verilator
    dv --sim=icarus --seeds 1 2 3
    dv --testcase=ParMulDirectedTest
    dv --testcase=ParMulClosureTest --coverage-stop=1 --nseeds=4
    dv --build-arg=-DPAR_MUL_BUG_NO_PARITY_CHECK --expect=FAIL

The exit status is 0 when every seed ended the way --expect says.
"""

from __future__ import annotations

import argparse
import dataclasses
import hashlib
import json
import logging
import os
import random
import shlex
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final, Sequence

import pytest
from cocotb_tools.runner import get_runner

# Path mode (python path/to/dv.py) has neither __package__ nor __spec__.
if (__package__ in (None, "")) and (__spec__ is None):
    print("[dv] ERROR: Please run as 'dv'", file=sys.stderr)
    raise SystemExit(2)

from parmul import utils  # isort:skip pylint: disable=wrong-import-position

PROJ_DIR: Final[Path] = utils.get_repo_root()
PKG_ROOT: Final[Path] = PROJ_DIR / "src" / "parmul"
DEFAULT_OUT_DIR = "out_dv"
BUILDS_SUBDIR = "builds"
TESTS_SUBDIR = "tests"
FRAMEWORK_SELECTOR = f"{Path(__file__).resolve()}::test_framework"
PYTEST_OPTS: tuple[str, ...] = ("-vv", "-s", "-ra", "-x")
DEFAULT_DESIGN = "par_mul"
DEFAULT_TEST = "test_par_mul"
DEFAULT_SEED = 42
WAVE_FORMATS = ("fst", "vcd")
LOG_LEVELS = ("critical", "error", "warning", "info", "debug", "notset")

log = logging.getLogger("parmul.dv")


@dataclass(frozen=True)
class DvContext:  # pylint: disable=too-many-instance-attributes
    """Everything one dv invocation decided, for one seed."""

    cmd: str = "both"
    sim: str = "verilator"
    outdir: str = DEFAULT_OUT_DIR
    verbosity: str = "info"
    waves: bool = False
    waves_fmt: str = "fst"
    design: str = DEFAULT_DESIGN
    build_force: bool = False
    build_args: tuple[str, ...] = ()
    test: str = DEFAULT_TEST
    testcase: str = ""
    expect: str = "PASS"
    check_en: bool = True
    coverage_en: bool = True
    coverage_stop: bool = False
    seq_len: int | None = None
    plusargs: tuple[str, ...] = ()
    seed: int = DEFAULT_SEED
    test_dir: Path | None = None
    argv: tuple[str, ...] = ()

    @classmethod
    def from_args(cls, args: argparse.Namespace, argv: Sequence[str]) -> DvContext:
        if args.waves == "1" and args.sim == "icarus" and args.waves_fmt != "fst":
            log.warning(
                "Icarus only supports FST waveforms with the cocotb runner; "
                "overriding waves_fmt=%s -> fst",
                args.waves_fmt,
            )
        return cls(
            cmd=args.cmd,
            sim=args.sim,
            outdir=args.outdir,
            verbosity=args.verbosity,
            waves=args.waves == "1",
            waves_fmt=args.waves_fmt,
            design=args.design,
            build_force=bool(args.build_force),
            build_args=tuple(args.build_args or ()),
            test=args.test,
            testcase=args.testcase,
            expect=args.expect,
            check_en=args.check_en == "1",
            coverage_en=args.coverage_en == "1",
            coverage_stop=args.coverage_stop == "1",
            seq_len=args.seq_len,
            plusargs=tuple(args.plusargs or ()),
            argv=tuple(argv),
        )

    @property
    def wave_format(self) -> str:
        """The format the simulator will really write."""
        fmt = self.waves_fmt.lower()
        if fmt not in WAVE_FORMATS:
            return "fst"
        if self.waves and self.sim == "icarus":
            return "fst"
        return fmt

    @property
    def run_name(self) -> str:
        return self.testcase or self.test


@dataclass(frozen=True)
class BuildCfg:  # pylint: disable=too-many-instance-attributes
    """What the simulator compiles, and where."""

    sim: str
    waves: bool
    waves_fmt: str
    design: str
    build_dir: Path
    build_args: list[str]
    build_log_file: Path
    build_force: bool


@dataclass(frozen=True)
class TestCfg:  # pylint: disable=too-many-instance-attributes
    """One seed of one test module against a finished build."""

    sim: str
    waves: bool
    design: str
    build_dir: Path
    test: str
    test_module: str
    seed: int
    test_dir: Path
    test_log_file: Path
    wave_file: Path
    test_args: list[str] = field(default_factory=list)
    plusargs: list[str] = field(default_factory=list)
    extra_env: dict[str, str] = field(default_factory=dict)
    results_xml: Path | None = None


# === Command line ===


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse the dv command line.

    Most options fall back to an environment variable of the same name in
    upper case, so a shell session can pin e.g. SIM=icarus.
    """
    env = os.getenv
    ap = argparse.ArgumentParser(
        description="Run the par_mul pyuvm bench via cocotb and pytest",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    ap.add_argument(
        "--cmd",
        choices=["build", "test", "both"],
        default=env("CMD", "both"),
        help="build the simulator, run tests on an existing build, or both",
    )
    ap.add_argument(
        "--sim",
        choices=["verilator", "icarus"],
        default=env("SIM", "verilator"),
        help="simulator",
    )
    ap.add_argument("--outdir", default=DEFAULT_OUT_DIR, help="where builds and runs go")
    ap.add_argument(
        "--verbosity",
        choices=list(LOG_LEVELS),
        default=env("VERBOSITY", "info"),
        help="log level (also handed to the simulator as COCOTB_LOG_LEVEL)",
    )
    ap.add_argument("--waves", choices=["0", "1"], default=env("WAVES", "0"))
    ap.add_argument(
        "--waves_fmt", choices=list(WAVE_FORMATS), default=env("WAVES_FMT", "fst")
    )

    bld = ap.add_argument_group("build")
    bld.add_argument("--design", default=DEFAULT_DESIGN, help="RTL under src/parmul/")
    bld.add_argument("--build-force", action="store_true", help="rebuild even if up to date")
    bld.add_argument(
        "--build-arg",
        dest="build_args",
        action="append",
        default=[],
        help="verbatim simulator build argument (repeatable), "
        "e.g. --build-arg=-DPAR_MUL_BUG_NO_PARITY_CHECK",
    )

    tst = ap.add_argument_group("test")
    tst.add_argument(
        "--test",
        default=DEFAULT_TEST,
        help="test module, imported as parmul.<design>.dv.<test>",
    )
    tst.add_argument(
        "--testcase",
        default=env("TESTCASE", ""),
        help="run only the pyuvm test class with this name",
    )
    tst.add_argument(
        "--expect",
        choices=["PASS", "FAIL"],
        default="PASS",
        help="outcome that counts as success for every seed",
    )
    tst.add_argument(
        "--seeds",
        nargs="+",
        metavar="SEED",
        help="explicit seed list (decimal, 0x... or 'random'); overrides --nseeds",
    )
    tst.add_argument(
        "--nseeds", type=int, default=0, help="generate N seeds if --seeds not given"
    )
    tst.add_argument(
        "--seed-base",
        type=int,
        default=1999,
        help="seed for the generator behind --nseeds and 'random'",
    )
    tst.add_argument(
        "--seed-out",
        type=Path,
        default=None,
        help="write the final seed list to a file (one per line)",
    )

    knobs = ap.add_argument_group("bench knobs (passed as plusargs)")
    knobs.add_argument(
        "--check-en", choices=["0", "1"], default=env("CHECK_EN", "1"),
        help="build the scoreboard",
    )
    knobs.add_argument(
        "--coverage-en", choices=["0", "1"], default=env("COVERAGE_EN", "1"),
        help="collect coverage",
    )
    knobs.add_argument(
        "--coverage-stop", choices=["0", "1"], default=env("COVERAGE_STOP", "0"),
        help="end the stimulus once every coverage goal is hit",
    )
    knobs.add_argument(
        "--seq-len", type=int, default=None,
        help="number of random requests per test (PAR_MUL_SEQ_LEN)",
    )
    knobs.add_argument(
        "--plusarg",
        dest="plusargs",
        action="append",
        default=[],
        help="extra plusarg for the bench (repeatable), e.g. --plusarg=+SB_DIAG_MODE=all",
    )
    return ap.parse_args(argv)


def validate_args(args: argparse.Namespace) -> None:
    """Fail fast on option combinations that cannot work."""
    if not args.design:
        raise SystemExit("[dv]: error: argument --design required")
    if args.cmd != "build" and not args.test:
        raise SystemExit(f"[dv]: error: --test is required with --cmd={args.cmd}")
    if args.seq_len is not None and args.seq_len < 0:
        raise SystemExit("[dv]: error: --seq-len must be >= 0")
    for p in args.plusargs:
        if not p.startswith("+"):
            raise SystemExit(f"[dv]: error: plusarg {p!r} must start with '+'")


def strip_seed_args(argv: Sequence[str]) -> list[str]:
    """Return argv without --seeds/--nseeds so a replay can pin one seed."""
    out: list[str] = []
    skipping_seeds = False
    skip_next = False
    for tok in argv:
        if skip_next:
            skip_next = False
            continue
        if skipping_seeds:
            if not tok.startswith("-"):
                continue
            skipping_seeds = False
        if tok == "--nseeds":
            skip_next = True
        elif tok == "--seeds":
            skipping_seeds = True
        elif not tok.startswith(("--nseeds=", "--seeds=")):
            out.append(tok)
    return out


def derive_seeds(args: argparse.Namespace) -> list[int]:
    """Explicit --seeds, else --nseeds drawn from --seed-base, else one fixed seed."""
    gen = random.Random(args.seed_base & 0xFFFF_FFFF)
    if args.seeds:
        seeds = [utils.normalize_seed(gen, tok) for tok in args.seeds]
    elif args.nseeds > 0:
        seeds = [utils.normalize_seed(gen, "random") for _ in range(args.nseeds)]
    else:
        seeds = [DEFAULT_SEED]
    print(f"\n[dv] using seeds: {seeds}")
    return seeds


def _configure_logging(verbosity: str) -> None:
    """Root logger format and level; COCOTB_REDUCED_LOG_FMT=1 drops timestamps."""
    lvl = logging.getLevelName((verbosity or "info").strip().upper())
    if not isinstance(lvl, int):
        lvl = logging.INFO
    if os.getenv("COCOTB_REDUCED_LOG_FMT") == "1":
        fmt, datefmt = "%(levelname).1s %(name)s: %(message)s", None
    else:
        fmt, datefmt = "%(asctime)s %(levelname)s %(name)s: %(message)s", "%H:%M:%S"
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=lvl, format=fmt, datefmt=datefmt)
    root.setLevel(lvl)


# === Build and test configuration ===


def build_dir_for(ctx: DvContext) -> Path:
    """<outdir>/builds/<design>.<hash10>, hashed over what changes the binary."""
    fingerprint = {
        "sim": ctx.sim,
        "waves": ctx.waves,
        "waves_fmt": ctx.wave_format if ctx.waves else "",
        "user_build_args": list(ctx.build_args),
    }
    digest = hashlib.sha1(
        json.dumps(fingerprint, sort_keys=True, separators=(",", ":")).encode()
    ).hexdigest()[:10]
    return (PROJ_DIR / ctx.outdir / BUILDS_SUBDIR / f"{ctx.design}.{digest}").resolve()


def tests_root_for(ctx: DvContext) -> Path:
    return (PROJ_DIR / ctx.outdir / TESTS_SUBDIR).resolve()


def srclist_for_design(design: str) -> Path:
    return PKG_ROOT / design / "rtl" / "srclist.f"


def make_build_cfg(ctx: DvContext) -> BuildCfg:
    """runner.build() arguments for ctx."""
    build_dir = build_dir_for(ctx)
    build_dir.mkdir(parents=True, exist_ok=True)
    waves_fmt = ctx.wave_format

    args: list[str] = []
    if ctx.sim == "verilator":
        args += ["--timing", "--autoflush"]
        if ctx.waves:
            args.append("--trace-fst" if waves_fmt == "fst" else "--trace")
    srclist = utils.absolutize_srclist(srclist_for_design(ctx.design), PROJ_DIR, build_dir)
    args += ["-f", str(srclist)]
    # user args last so they can override the defaults above
    args += list(ctx.build_args)

    return BuildCfg(
        sim=ctx.sim,
        waves=ctx.waves,
        waves_fmt=waves_fmt,
        design=ctx.design,
        build_dir=build_dir,
        build_args=args,
        build_log_file=build_dir / "build.log",
        build_force=ctx.build_force,
    )


def bench_plusargs(ctx: DvContext) -> list[str]:
    """Bench knobs rendered as +NAME=value plusargs."""
    plusargs = [
        f"+CHECK_EN={int(ctx.check_en)}",
        f"+COVERAGE_EN={int(ctx.coverage_en)}",
        f"+COVERAGE_STOP={int(ctx.coverage_stop)}",
    ]
    if ctx.seq_len is not None:
        plusargs.append(f"+PAR_MUL_SEQ_LEN={ctx.seq_len}")
    plusargs += ctx.plusargs
    return plusargs


def make_test_cfg(ctx: DvContext) -> TestCfg:
    """runner.test() arguments for ctx.seed."""
    build_dir = build_dir_for(ctx)
    waves_fmt = ctx.wave_format
    test_dir = ctx.test_dir or (
        tests_root_for(ctx) / f"{build_dir.name}.{ctx.run_name}.{ctx.seed}"
    )
    test_dir.mkdir(parents=True, exist_ok=True)
    wave_file = test_dir / f"waves.{waves_fmt}"

    test_args: list[str] = []
    plusargs = bench_plusargs(ctx)
    if ctx.waves and ctx.sim == "verilator":
        test_args = ["--trace-file", str(wave_file)]
    elif ctx.waves and ctx.sim == "icarus":
        # must be a plusarg so it lands after the .vvp file
        plusargs.append(f"+dumpfile_path={wave_file}")

    env = {
        "RANDOM_SEED": str(ctx.seed),
        "COCOTB_RANDOM_SEED": str(ctx.seed),
        "COCOTB_LOG_LEVEL": ctx.verbosity.upper(),
        "COCOTB_PLUSARGS": " ".join(plusargs),
    }
    if ctx.testcase:
        env["COCOTB_TEST_FILTER"] = ctx.testcase

    # under an outer pytest run the runner manages results.xml itself
    standalone = os.getenv("PYTEST_CURRENT_TEST") is None

    return TestCfg(
        sim=ctx.sim,
        waves=ctx.waves,
        design=ctx.design,
        build_dir=build_dir,
        test=ctx.test,
        test_module=f"parmul.{ctx.design}.dv.{ctx.test}",
        seed=ctx.seed,
        test_dir=test_dir,
        test_log_file=test_dir / "test.log",
        wave_file=wave_file,
        test_args=test_args,
        plusargs=plusargs,
        extra_env=env,
        results_xml=test_dir / "results.xml" if standalone else None,
    )


def _write_build_manifest(cfg: BuildCfg, status: str) -> None:
    """status: started, built or failed."""
    cfg.build_dir.mkdir(parents=True, exist_ok=True)
    (cfg.build_dir / "manifest.json").write_text(
        json.dumps(
            {
                "status": status,
                "updated_at": utils.iso_utc(),
                "fingerprint": cfg.build_dir.name,
                **{k: str(v) if isinstance(v, Path) else v
                   for k, v in dataclasses.asdict(cfg).items()},
            },
            indent=2,
        )
    )


# === Simulator actions ===


def run_build(cfg: BuildCfg) -> None:
    print(f"\n[dv] building {cfg.design} with {cfg.sim} in {cfg.build_dir}\n")
    _write_build_manifest(cfg, "started")
    try:
        get_runner(cfg.sim).build(
            hdl_toplevel=cfg.design,
            timescale=("1ns", "1ps"),
            waves=cfg.waves,
            build_dir=cfg.build_dir,
            build_args=cfg.build_args,
            log_file=str(cfg.build_log_file),
            always=cfg.build_force,
        )
    except BaseException:
        _write_build_manifest(cfg, "failed")
        raise
    _write_build_manifest(cfg, "built")


def run_test(cfg: TestCfg) -> None:
    print(f"\n[dv] running {cfg.test_module} seed={cfg.seed}\n")
    get_runner(cfg.sim).test(
        hdl_toplevel_lang="verilog",
        hdl_toplevel=cfg.design,
        waves=cfg.waves,
        build_dir=str(cfg.build_dir),
        test_module=cfg.test_module,
        log_file=str(cfg.test_log_file),
        test_args=cfg.test_args,
        plusargs=cfg.plusargs,
        extra_env=cfg.extra_env,
        results_xml=str(cfg.results_xml) if cfg.results_xml else None,
    )


# === pytest hand-off ===


class _Handoff:
    """The context main() prepared for the next test_framework() call."""

    ctx: DvContext | None = None


def test_framework() -> None:
    """Build and/or run one seed, as described by the handed-off context.

    pytest collects this function from FRAMEWORK_SELECTOR. A failing cocotb
    test surfaces here as an exception from the runner, which pytest turns
    into a non-zero exit status.
    """
    ctx = _Handoff.ctx
    if ctx is None:
        raise RuntimeError("[dv] internal context not set")

    bcfg = make_build_cfg(ctx)
    print(
        f"\n\n[dv] sim={ctx.sim} cmd={ctx.cmd} design={ctx.design} "
        f"test={ctx.run_name} seed={ctx.seed}"
    )

    if ctx.cmd in {"both", "build"}:
        run_build(bcfg)
    elif not (bcfg.build_dir / "manifest.json").exists():
        raise RuntimeError(
            f"[dv] no build at {bcfg.build_dir}; run with --cmd build first"
        )

    if ctx.cmd == "build":
        return
    run_test(make_test_cfg(ctx))


def _report_line(status: str, expect: str, replay: str) -> str:
    label = f"{status} ({'EXPECTED' if status == expect else 'UNEXPECTED'})"
    paint = utils.green if status == expect else utils.red
    return f"{paint(label)}: {replay}"


def run_seed(ctx: DvContext) -> int:
    """Run test_framework under pytest for ctx; 0 when the outcome matches expect."""
    assert ctx.test_dir is not None
    ctx.test_dir.mkdir(parents=True, exist_ok=True)
    _Handoff.ctx = ctx
    # pytest imports this file again by path; let it find this module object
    sys.modules.setdefault("parmul.tools.dv", sys.modules[__name__])

    selector_args = [*PYTEST_OPTS, FRAMEWORK_SELECTOR]
    print(f"\n[dv] pytest {' '.join(selector_args)} -> {ctx.test_dir}\n")
    t0 = time.time()
    rc = pytest.main(selector_args)
    elapsed = time.time() - t0

    status = "PASS" if rc == 0 else "FAIL"
    replay = " ".join(
        shlex.quote(a)
        for a in ["dv", *strip_seed_args(ctx.argv), "--seeds", str(ctx.seed)]
    )
    manifest = {
        "status": status,
        "expect": ctx.expect,
        "duration_s": round(elapsed, 3),
        "cmd": "python -m pytest " + " ".join(selector_args),
        "replay_cmd": replay,
        "build_dir": str(build_dir_for(ctx)),
        "test_dir": str(ctx.test_dir),
        "ctx": dataclasses.asdict(ctx),
    }
    (ctx.test_dir / "manifest.json").write_text(
        json.dumps(manifest, indent=2, default=str), encoding="utf-8"
    )

    print(f"\n[dv] {ctx.test_dir}: {status} (rc={rc}, expect {ctx.expect}) "
          f"in {elapsed:.2f}s\n")
    print(_report_line(status, ctx.expect, replay))
    return 0 if status == ctx.expect else 1


def main(argv: Sequence[str] | None = None) -> int:
    """dv entry point; returns 0 when every seed met its expectation."""
    orig_argv = list(sys.argv[1:] if argv is None else argv)
    args = parse_args(argv)
    validate_args(args)
    _configure_logging(args.verbosity)

    base = DvContext.from_args(args, orig_argv)
    root = tests_root_for(base)
    leaf = build_dir_for(base).name

    # cmd=build still goes through pytest once; the framework skips the test
    if base.cmd == "build":
        return run_seed(
            dataclasses.replace(base, seed=0, test_dir=root / f"{leaf}.build_only")
        )

    seeds = derive_seeds(args)
    rc = 0
    for idx, seed in enumerate(seeds):
        # one build per invocation: later seeds reuse it
        cmd = "test" if base.cmd == "both" and idx > 0 else base.cmd
        rc |= run_seed(
            dataclasses.replace(
                base,
                cmd=cmd,
                seed=seed,
                test_dir=root / f"{leaf}.{base.run_name}.{seed}",
            )
        )
    if args.seed_out:
        args.seed_out.write_text("".join(f"{s}\n" for s in seeds), encoding="utf-8")
    return rc


if __name__ == "__main__":
    raise SystemExit(main())
