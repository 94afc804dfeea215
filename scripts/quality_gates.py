#!/usr/bin/env python3
"""
Quality Gates Runner.

Runs the build-time checks and writes evidence artifacts.

Gates:
1. Rules gate: rules.yaml loads and matches the shape set
2. Lint gate: ruff linting
3. Format gate: ruff formatting (warning only)
4. Type gate: mypy --strict over the package
5. Exhaustiveness gate: an unmatched fourth variant must fail mypy
6. Test gate: full pytest suite
"""

from __future__ import annotations

import argparse
import datetime
import json
import subprocess
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

# --- Configuration ---

PROJECT_ROOT = Path(__file__).parent.parent
ARTIFACTS_DIR = PROJECT_ROOT / "artifacts"

GateStatus = Literal["pass", "fail", "warn", "skip"]


@dataclass(frozen=True)
class GateConfig:
    """Configuration for a quality gate."""

    name: str
    description: str
    command: list[str]
    required: bool = True
    timeout_seconds: int = 300


GATES: list[GateConfig] = [
    GateConfig(
        name="rules",
        description="Rules schema validation",
        command=[sys.executable, "-m", "pytest", "tests/unit/test_rules.py", "-q"],
    ),
    GateConfig(
        name="lint",
        description="Code linting (ruff)",
        command=[sys.executable, "-m", "ruff", "check", "."],
    ),
    GateConfig(
        name="format",
        description="Code formatting check (ruff)",
        command=[sys.executable, "-m", "ruff", "format", "--check", "."],
        required=False,
    ),
    GateConfig(
        name="types",
        description="Type checking (mypy --strict)",
        command=[sys.executable, "-m", "mypy", "shape_area", "--strict"],
    ),
    GateConfig(
        name="exhaustiveness",
        description="Unmatched shape variants fail type checking",
        command=[
            sys.executable,
            "-m",
            "pytest",
            "tests/unit/test_exhaustiveness.py",
            "-q",
        ],
        timeout_seconds=600,
    ),
    GateConfig(
        name="tests",
        description="All tests (pytest)",
        command=[sys.executable, "-m", "pytest", "tests/", "-q"],
        timeout_seconds=600,
    ),
]


# --- Result Types ---


@dataclass
class GateResult:
    """Result from running a gate."""

    name: str
    status: GateStatus
    exit_code: int
    duration_seconds: float
    stdout: str
    stderr: str
    command: list[str]
    required: bool


@dataclass
class GatesReport:
    """Full quality gates report."""

    timestamp_utc: str
    overall_status: Literal["pass", "fail"]
    gates: list[GateResult]
    summary: str

    def count(self, status: GateStatus) -> int:
        return sum(1 for g in self.gates if g.status == status)

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp_utc": self.timestamp_utc,
            "overall_status": self.overall_status,
            "total_gates": len(self.gates),
            "passed_gates": self.count("pass"),
            "failed_gates": self.count("fail"),
            "warned_gates": self.count("warn"),
            "skipped_gates": self.count("skip"),
            "gates": [
                {
                    "name": g.name,
                    "status": g.status,
                    "exit_code": g.exit_code,
                    "duration_seconds": g.duration_seconds,
                    "required": g.required,
                    "command": g.command,
                }
                for g in self.gates
            ],
        }


# --- Gate Runner ---


def run_gate(config: GateConfig) -> GateResult:
    """Run a single quality gate."""
    print(f"[{config.name}] {config.description}...", end="", flush=True)

    start_time = time.monotonic()
    status: GateStatus
    try:
        proc = subprocess.run(
            config.command,
            capture_output=True,
            text=True,
            timeout=config.timeout_seconds,
            cwd=PROJECT_ROOT,
        )
    except subprocess.TimeoutExpired:
        status = "fail"
        exit_code, stdout = -1, ""
        stderr = f"Timeout after {config.timeout_seconds}s"
    except OSError as e:
        status = "fail"
        exit_code, stdout, stderr = -1, "", str(e)
    else:
        exit_code, stdout, stderr = proc.returncode, proc.stdout, proc.stderr
        if exit_code == 0:
            status = "pass"
        else:
            status = "fail" if config.required else "warn"

    duration = time.monotonic() - start_time
    print(f" {status.upper()} ({duration:.1f}s)")

    return GateResult(
        name=config.name,
        status=status,
        exit_code=exit_code,
        duration_seconds=duration,
        stdout=stdout,
        stderr=stderr,
        command=config.command,
        required=config.required,
    )


def run_all_gates(
    gates: list[GateConfig] | None = None,
    skip_gates: list[str] | None = None,
) -> list[GateResult]:
    """Run all configured gates."""
    gates = gates or GATES
    skip_gates = skip_gates or []

    results = []
    for config in gates:
        if config.name in skip_gates:
            results.append(
                GateResult(
                    name=config.name,
                    status="skip",
                    exit_code=0,
                    duration_seconds=0.0,
                    stdout="",
                    stderr="Skipped by user",
                    command=config.command,
                    required=config.required,
                )
            )
            print(f"[{config.name}] SKIPPED")
        else:
            results.append(run_gate(config))

    return results


# --- Report Generation ---


def generate_report(results: list[GateResult]) -> GatesReport:
    """Generate gates report from results."""
    timestamp = datetime.datetime.now(datetime.UTC).isoformat()

    # Overall status: fail if any required gate failed
    required_failures = [r for r in results if r.status == "fail" and r.required]
    overall_status: Literal["pass", "fail"] = "fail" if required_failures else "pass"

    summary_lines = [
        "# Quality Gates Summary",
        "",
        f"**Status**: {overall_status.upper()}",
        f"**Timestamp**: {timestamp}",
        "",
        "| Gate | Status | Duration | Required |",
        "|------|--------|----------|----------|",
    ]
    for r in results:
        required_str = "Yes" if r.required else "No"
        summary_lines.append(
            f"| {r.name} | {r.status.upper()} | {r.duration_seconds:.1f}s | {required_str} |"
        )

    for r in required_failures:
        summary_lines.extend(
            [
                "",
                f"## {r.name}",
                "",
                f"Command: `{' '.join(r.command)}`",
                "",
                "```",
                r.stderr or r.stdout or "No output",
                "```",
            ]
        )

    return GatesReport(
        timestamp_utc=timestamp,
        overall_status=overall_status,
        gates=results,
        summary="\n".join(summary_lines),
    )


def write_artifacts(report: GatesReport, out_dir: Path = ARTIFACTS_DIR) -> None:
    """Write JSON report and Markdown summary."""
    out_dir.mkdir(parents=True, exist_ok=True)

    json_path = out_dir / "quality_gates_run.json"
    with open(json_path, "w") as f:
        json.dump(report.to_dict(), f, indent=2)
    print(f"\nJSON report: {json_path}")

    md_path = out_dir / "quality_gates_summary.md"
    with open(md_path, "w") as f:
        f.write(report.summary)
    print(f"Markdown summary: {md_path}")


# --- CLI ---


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run quality gates and generate evidence artifacts."
    )
    parser.add_argument(
        "--skip",
        nargs="*",
        default=[],
        help="Gates to skip (e.g., --skip lint format)",
    )
    parser.add_argument(
        "--only",
        nargs="*",
        help="Only run specified gates (e.g., --only types exhaustiveness)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available gates and exit",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=ARTIFACTS_DIR,
        help="Directory for report artifacts",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    if args.list:
        print("Available gates:")
        for gate in GATES:
            req = "required" if gate.required else "optional"
            print(f"  - {gate.name}: {gate.description} ({req})")
        return 0

    gates_to_run = GATES
    if args.only:
        gates_to_run = [g for g in GATES if g.name in args.only]
        if not gates_to_run:
            print(f"Error: No gates found matching: {args.only}")
            return 1

    results = run_all_gates(gates_to_run, skip_gates=args.skip)
    report = generate_report(results)
    write_artifacts(report, args.out)

    print()
    if report.overall_status == "pass":
        print("SUCCESS: All required quality gates passed.")
        return 0
    print("FAILURE: One or more required quality gates failed.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
