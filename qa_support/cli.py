#!/usr/bin/env python3
"""
Dummy QA App suite runner.

Single entry point for running the browser suites and reading their
results. It builds a pytest command line and exits with pytest's exit
code, so any failed assertion makes the run fail.

Usage:
    qa-suite                                  # Full suite, chromium, headless
    qa-suite core --browser firefox           # Core checks on one engine
    qa-suite healing --apply-changes 1,3      # Healing run with /dev changes applied
    qa-suite e2e --headed                     # Journeys in a visible browser
    qa-suite all --debug                      # Playwright inspector, long tracebacks
    qa-suite all --ui                         # Headed, slowed down, with inspector
    qa-suite show-report --open-trace         # Summarise results, open a failure trace
    qa-suite core -- -k modal                 # Anything after -- goes to pytest
"""

from __future__ import annotations

import argparse
import logging
import os
import subprocess
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from xml.etree import ElementTree

from qa_support.config import BASE_DIR, get_config, parse_change_list

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

BROWSERS = ("chromium", "firefox", "webkit")
UI_MODE_SLOWMO_MS = 500


class Suite(Enum):
    """Selectable test subsets."""

    ALL = "all"
    CORE = "core"
    HEALING = "healing"
    E2E = "e2e"
    SMOKE = "smoke"
    UNIT = "unit"


SUITE_ARGS: dict[Suite, list[str]] = {
    Suite.ALL: ["tests/"],
    Suite.CORE: ["tests/e2e", "-m", "core"],
    Suite.HEALING: ["tests/e2e", "-m", "healing"],
    Suite.E2E: ["tests/e2e", "-m", "journeys"],
    Suite.SMOKE: ["tests/e2e", "-m", "smoke"],
    Suite.UNIT: ["tests/unit"],
}


@dataclass
class RunOptions:
    """Options for one suite run."""

    suite: Suite = Suite.ALL
    browsers: list[str] = field(default_factory=list)
    headed: bool = False
    debug: bool = False
    ui: bool = False
    base_url: str | None = None
    apply_changes: tuple[int, ...] = ()
    workers: int | None = None
    fail_fast: bool = False
    verbose: bool = False
    results_dir: Path = field(default_factory=lambda: get_config().ARTIFACTS_DIR)
    extra: list[str] = field(default_factory=list)


def build_pytest_command(options: RunOptions, python: str = sys.executable) -> list[str]:
    """
    Translate run options into a pytest command line.

    Args:
        options: Parsed run options.
        python: Interpreter used to launch pytest.

    Returns:
        Command as a list of arguments.
    """
    cmd = [python, "-m", "pytest", *SUITE_ARGS[options.suite]]

    if options.suite is not Suite.UNIT:
        for browser in options.browsers:
            cmd.extend(["--browser", browser])
        if options.headed or options.debug or options.ui:
            cmd.append("--headed")
        if options.ui:
            cmd.extend(["--slowmo", str(UI_MODE_SLOWMO_MS)])

    if options.workers:
        cmd.extend(["-n", str(options.workers)])

    if options.debug:
        cmd.extend(["--tb=long", "-s"])
    else:
        cmd.append("--tb=short")

    if options.fail_fast:
        cmd.append("-x")

    cmd.append("-v" if options.verbose else "-q")
    cmd.append(f"--junitxml={options.results_dir / 'junit.xml'}")
    cmd.extend(options.extra)
    return cmd


def build_environment(options: RunOptions, base_env: dict[str, str] | None = None) -> dict[str, str]:
    """Environment for the pytest subprocess."""
    env = dict(os.environ if base_env is None else base_env)
    if options.base_url:
        env["TEST_BASE_URL"] = options.base_url
    env["E2E_ARTIFACTS_DIR"] = str(options.results_dir)
    if options.apply_changes:
        env["HEALING_APPLY_CHANGES"] = ",".join(str(c) for c in options.apply_changes)
    if options.debug or options.ui:
        # Opens the Playwright inspector and pauses on each action
        env["PWDEBUG"] = "1"
    return env


def run_suite(options: RunOptions) -> int:
    """Run pytest for the selected suite and return its exit code."""
    options.results_dir.mkdir(parents=True, exist_ok=True)
    cmd = build_pytest_command(options)
    logger.info("Running %s suite: %s", options.suite.value, " ".join(cmd))
    result = subprocess.run(cmd, env=build_environment(options), cwd=BASE_DIR, check=False)
    if result.returncode == 0:
        logger.info("All %s tests passed", options.suite.value)
    else:
        logger.error("%s suite failed with exit code %d", options.suite.value, result.returncode)
    return result.returncode


# -----------------------------------------------------------------------------
# Report viewer
# -----------------------------------------------------------------------------

@dataclass
class ReportSummary:
    total: int = 0
    skipped: int = 0
    failures: list[tuple[str, str]] = field(default_factory=list)

    @property
    def passed(self) -> int:
        return self.total - self.skipped - len(self.failures)


def summarize_junit(path: Path) -> ReportSummary:
    """
    Read a JUnit XML report written by pytest.

    Args:
        path: Location of the junit.xml file.

    Returns:
        Counts plus (test id, first line of message) for each failure or error.
    """
    summary = ReportSummary()
    root = ElementTree.parse(path).getroot()
    for case in root.iter("testcase"):
        summary.total += 1
        test_id = f"{case.get('classname', '')}::{case.get('name', '')}"
        problem = case.find("failure")
        if problem is None:
            problem = case.find("error")
        if problem is not None:
            message = (problem.get("message") or "").splitlines()
            summary.failures.append((test_id, message[0] if message else ""))
        elif case.find("skipped") is not None:
            summary.skipped += 1
    return summary


def find_trace(results_dir: Path, name_filter: str | None = None) -> Path | None:
    """Newest saved trace, optionally restricted to names containing a filter."""
    traces = sorted(
        (results_dir / "traces").glob("*.zip"),
        key=lambda trace: trace.stat().st_mtime,
        reverse=True,
    )
    for trace in traces:
        if name_filter is None or name_filter in trace.name:
            return trace
    return None


def show_report(results_dir: Path, open_trace: bool = False, name_filter: str | None = None) -> int:
    """Print the last run's results; optionally open a failure trace."""
    junit_path = results_dir / "junit.xml"
    if not junit_path.exists():
        logger.error("No report at %s; run a suite first", junit_path)
        return 1

    summary = summarize_junit(junit_path)
    print(
        f"{summary.total} tests: {summary.passed} passed, "
        f"{len(summary.failures)} failed, {summary.skipped} skipped"
    )
    for test_id, message in summary.failures:
        print(f"  FAILED {test_id}: {message}")

    if open_trace:
        trace = find_trace(results_dir, name_filter)
        if trace is None:
            logger.error("No trace found in %s", results_dir / "traces")
            return 1
        logger.info("Opening trace %s", trace)
        return subprocess.run(["playwright", "show-trace", str(trace)], check=False).returncode
    return 0 if not summary.failures else 1


# -----------------------------------------------------------------------------
# Argument parsing
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qa-suite",
        description="Run the Dummy QA App browser suites",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Usage:")[1] if __doc__ else None,
    )
    parser.add_argument(
        "suite",
        nargs="?",
        default=Suite.ALL.value,
        choices=[s.value for s in Suite] + ["show-report"],
        help="Test subset to run, or show-report to read the last results",
    )

    # Browser options
    parser.add_argument(
        "--browser",
        action="append",
        choices=BROWSERS,
        default=[],
        help="Browser engine; repeat to run on several (default: chromium)",
    )
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    parser.add_argument("--debug", action="store_true", help="Playwright inspector and long tracebacks")
    parser.add_argument("--ui", action="store_true", help="Headed, slowed down, with the inspector")

    # Target application
    parser.add_argument("--base-url", help="URL of the app under test (sets TEST_BASE_URL)")
    parser.add_argument(
        "--apply-changes",
        default="",
        help="Comma-separated /dev changes to apply before healing scenarios, e.g. 1,3",
    )

    # Execution
    parser.add_argument(
        "--workers",
        type=int,
        help="Parallel workers (requires pytest-xdist and an app that is already running, e.g. --base-url)",
    )
    parser.add_argument("--fail-fast", "-x", action="store_true", help="Stop on first failure")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument(
        "--results-dir",
        type=Path,
        default=get_config().ARTIFACTS_DIR,
        help="Directory for junit.xml, screenshots and traces",
    )

    # Report viewer
    parser.add_argument("--open-trace", action="store_true", help="show-report: open a failure trace")
    parser.add_argument("--trace", help="show-report: only traces whose name contains this text")
    return parser


def parse_arguments(argv: list[str] | None = None) -> tuple[argparse.Namespace, list[str]]:
    """Split argv at ``--`` and parse the runner's own options."""
    argv = list(sys.argv[1:] if argv is None else argv)
    extra: list[str] = []
    if "--" in argv:
        split = argv.index("--")
        argv, extra = argv[:split], argv[split + 1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.apply_changes = parse_change_list(args.apply_changes)
    except ValueError as exc:
        parser.error(str(exc))
    return args, extra


def options_from_args(args: argparse.Namespace, extra: list[str]) -> RunOptions:
    return RunOptions(
        suite=Suite(args.suite),
        browsers=args.browser,
        headed=args.headed,
        debug=args.debug,
        ui=args.ui,
        base_url=args.base_url,
        apply_changes=args.apply_changes,
        workers=args.workers,
        fail_fast=args.fail_fast,
        verbose=args.verbose,
        results_dir=args.results_dir,
        extra=extra,
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args, extra = parse_arguments(argv)
    if args.suite == "show-report":
        return show_report(args.results_dir, open_trace=args.open_trace, name_filter=args.trace)
    try:
        return run_suite(options_from_args(args, extra))
    except KeyboardInterrupt:
        logger.info("Test execution interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
