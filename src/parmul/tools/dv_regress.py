# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/parmul/tools/dv_regress.py

"""Run a list of dv jobs described in YAML and report PASS/FAIL per job.

YAML layout:
    defaults:
      args: ["--sim=icarus", "--waves=0"]     # prepended to every job
    jobs:
      - name: random
        args: ["--testcase=ParMulRandomTest", "--nseeds=3"]
      - name: directed
        args: "--testcase=ParMulDirectedTest"  # a single string is split shell-style

Job args come after the defaults, so a job can override any of them.
Seeds, expectations and everything else are plain dv options.

Usage:
    dv-regress [--file=path/to/dv_regress.yaml] [--outdir=out_dv] [--only NAME ...]
"""

from __future__ import annotations

import argparse
import shlex
import subprocess
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

import yaml

from parmul import utils

DEFAULT_OUT_DIR = "out_dv"
DEFAULT_FILE = Path(__file__).resolve().parents[1] / "par_mul" / "dv" / "dv_regress.yaml"


@dataclass(frozen=True)
class Job:
    """A named set of dv arguments."""

    name: str
    args: list[str]


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        description="YAML-driven dv regression",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    ap.add_argument("--file", type=Path, default=DEFAULT_FILE, help="regression YAML")
    ap.add_argument("--outdir", default=DEFAULT_OUT_DIR, help="output directory")
    ap.add_argument(
        "--only",
        nargs="+",
        metavar="NAME",
        default=None,
        help="run only the jobs with these names",
    )
    ap.add_argument(
        "--dry-run", action="store_true", help="print the dv commands without running"
    )
    return ap.parse_args(argv)


def as_str_list(x: Any) -> list[str]:
    """None -> [], a string -> shell-split words, a list -> list of str."""
    if x is None:
        return []
    if isinstance(x, str):
        return shlex.split(x)
    if isinstance(x, (list, tuple)):
        return [str(t) for t in x]
    raise ValueError(f"args must be a string or a list, got {type(x).__name__}")


def load_config(path: Path) -> tuple[list[str], list[Job]]:
    """Read (default_args, jobs) from the regression YAML.

    Raises:
        ValueError: The document is not a mapping, 'jobs' is missing or empty,
            a job is not a mapping, or two jobs share a name.
    """
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path.name} must be a mapping")

    defaults = data.get("defaults") or {}
    if not isinstance(defaults, dict):
        raise ValueError("'defaults' must be a mapping")
    default_args = as_str_list(defaults.get("args"))

    jobs_raw = data.get("jobs")
    if not isinstance(jobs_raw, list) or not jobs_raw:
        raise ValueError("'jobs' must be a non-empty list")

    jobs: list[Job] = []
    seen: set[str] = set()
    for idx, j in enumerate(jobs_raw):
        if not isinstance(j, dict):
            raise ValueError(f"jobs[{idx}] must be a mapping")
        name = str(j.get("name") or f"job{idx}")
        if name in seen:
            raise ValueError(f"duplicate job name {name!r}")
        seen.add(name)
        jobs.append(Job(name=name, args=as_str_list(j.get("args"))))

    return default_args, jobs


def job_cmd(job: Job, default_args: Sequence[str], outdir: str) -> list[str]:
    return ["dv", *default_args, *job.args, f"--outdir={outdir}"]


@dataclass(frozen=True)
class JobResult:
    name: str
    cmd: str
    passed: bool
    seconds: float


def select_jobs(jobs: list[Job], only: Sequence[str] | None) -> list[Job]:
    """Jobs named in only, in file order; KeyError for names not in the file."""
    if not only:
        return jobs
    unknown = sorted(set(only) - {j.name for j in jobs})
    if unknown:
        raise KeyError(f"unknown jobs: {unknown}")
    return [j for j in jobs if j.name in only]


def run_job(
    job: Job, default_args: Sequence[str], outdir: str, dry_run: bool
) -> JobResult | None:
    cmd = job_cmd(job, default_args, outdir)
    pretty = " ".join(shlex.quote(x) for x in cmd)
    print(f"\n[dv_regress] job: {job.name}")
    print(f"[dv_regress] cmd: {pretty}\n")
    if dry_run:
        return None
    t0 = time.time()
    rc = subprocess.run(cmd, check=False).returncode
    return JobResult(job.name, pretty, rc == 0, time.time() - t0)


def report(results: Sequence[JobResult], outdir: str) -> bool:
    """Print the jobs report; True when every job passed."""
    print("\n[dv_regress] JOBS REPORT\n")
    for res in sorted(results, key=lambda r: not r.passed):
        tag = utils.green("PASS") if res.passed else utils.red("FAIL")
        print(f"{tag} [{res.name} {res.seconds:.1f}s]: {res.cmd}")
    print(f"\n[dv_regress] per-seed manifests: {utils.yellow(outdir + '/tests')}")

    failed = sum(1 for r in results if not r.passed)
    verdict = utils.red("FAIL") if failed else utils.green("PASS")
    print(
        f"\n[dv_regress] SUMMARY: {verdict} "
        f"({len(results) - failed} passed, {failed} failed of {len(results)})"
    )
    return failed == 0


def run_regress(args: argparse.Namespace) -> int:
    """Run every selected job in order; 0 only when all of them passed."""
    yaml_path = args.file.resolve()
    if not yaml_path.is_file():
        print(f"\n[dv_regress] No file found at {yaml_path}", file=sys.stderr)
        return 1
    print(f"\n[dv_regress] file: {yaml_path}")

    try:
        default_args, jobs = load_config(yaml_path)
    except (ValueError, yaml.YAMLError) as exc:
        print(f"[dv_regress] invalid {yaml_path.name}: {exc}", file=sys.stderr)
        return 1
    try:
        jobs = select_jobs(jobs, args.only)
    except KeyError as exc:
        print(f"[dv_regress] {exc.args[0]}", file=sys.stderr)
        return 1

    results = [
        res
        for job in jobs
        if (res := run_job(job, default_args, args.outdir, args.dry_run)) is not None
    ]
    if args.dry_run:
        return 0
    return 0 if report(results, args.outdir) else 1


def main(argv: Sequence[str] | None = None) -> int:
    return run_regress(parse_args(argv))


if __name__ == "__main__":
    raise SystemExit(main())
