"""Run lint, format, type and test checks and print one JSON report.

Usage:
    python scripts/quality_gate.py              # every check
    python scripts/quality_gate.py --skip-tests # lint/format/types only
    python scripts/quality_gate.py --fix        # let ruff fix what it can first
"""

from __future__ import annotations

import argparse
import json
import re
import subprocess
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent

# The MCP package is optional, so mypy only covers the core.
MYPY_TARGETS = [
    "trelli_cli/api.py",
    "trelli_cli/client.py",
    "trelli_cli/config.py",
    "trelli_cli/exceptions.py",
    "trelli_cli/formatters/",
    "trelli_cli/models.py",
    "trelli_cli/resolver.py",
]


def _run(cmd: list[str]) -> subprocess.CompletedProcess:
    return subprocess.run(cmd, capture_output=True, text=True, cwd=str(ROOT), timeout=300)


def _count(lines: list[str], pattern: str) -> int:
    return sum(1 for line in lines if re.search(pattern, line))


def _report(r: subprocess.CompletedProcess, started: float, **counts: int) -> dict:
    result: dict = {
        "status": "pass" if r.returncode == 0 else "fail",
        **counts,
        "duration_s": round(time.monotonic() - started, 1),
    }
    if r.returncode != 0:
        result["output"] = (r.stdout + r.stderr).strip()[-2000:]
    return result


def check_ruff_lint(fix: bool = False) -> dict:
    started = time.monotonic()
    if fix:
        _run([sys.executable, "-m", "ruff", "check", "--fix", "."])
    r = _run([sys.executable, "-m", "ruff", "check", "."])
    return _report(r, started, errors=_count(r.stdout.splitlines(), r"^\S+:\d+:\d+:"))


def check_ruff_format() -> dict:
    started = time.monotonic()
    r = _run([sys.executable, "-m", "ruff", "format", "--check", "."])
    lines = r.stdout.splitlines() + r.stderr.splitlines()
    return _report(r, started, files_to_reformat=_count(lines, r"^Would reformat"))


def check_mypy() -> dict:
    started = time.monotonic()
    r = _run([sys.executable, "-m", "mypy", *MYPY_TARGETS])
    return _report(r, started, errors=_count(r.stdout.splitlines(), r": error:"))


def check_pytest() -> dict:
    started = time.monotonic()
    r = _run([sys.executable, "-m", "pytest", "tests/", "-q", "--no-header", "--tb=short"])
    # Summary line looks like "3 failed, 120 passed in 1.2s"
    lines = reversed(r.stdout.splitlines())
    summary = next((line for line in lines if re.search(r"\d+ (passed|failed)", line)), "")
    passed = re.search(r"(\d+) passed", summary)
    failed = re.search(r"(\d+) failed", summary)
    return _report(
        r,
        started,
        passed=int(passed.group(1)) if passed else 0,
        failed=int(failed.group(1)) if failed else 0,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Run all quality checks")
    parser.add_argument("--skip-tests", action="store_true", help="Skip pytest")
    parser.add_argument("--fix", action="store_true", help="Auto-fix ruff issues first")
    args = parser.parse_args()

    started = time.monotonic()
    checks: dict[str, dict] = {}
    print("Running ruff lint...", file=sys.stderr)
    checks["ruff_lint"] = check_ruff_lint(fix=args.fix)
    print("Running ruff format...", file=sys.stderr)
    checks["ruff_format"] = check_ruff_format()
    print("Running mypy...", file=sys.stderr)
    checks["mypy"] = check_mypy()
    if args.skip_tests:
        checks["pytest"] = {"status": "skip", "reason": "--skip-tests"}
    else:
        print("Running pytest...", file=sys.stderr)
        checks["pytest"] = check_pytest()

    ok = all(c["status"] in ("pass", "skip") for c in checks.values())
    report = {
        "overall": "pass" if ok else "fail",
        "checks": checks,
        "total_duration_s": round(time.monotonic() - started, 1),
    }
    print(json.dumps(report, indent=2))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
