"""CLI entry point for the wealth planner."""

from __future__ import annotations

import argparse
from functools import partial
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
import logging
from pathlib import Path
import sys
import threading

from .report import format_money, render_report, write_report
from .schema import Plan, SchemaError, load_plan
from .simulation import SimulationResult, run_simulation
from .validate import validate_plan

LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Wealth Planner")
    parser.add_argument("plan", help="Path to plan JSON file")
    parser.add_argument("-o", "--output", default="report.html", help="Output HTML path")
    parser.add_argument("--validate", action="store_true", help="Validate JSON only")
    parser.add_argument("--summary", action="store_true", help="Print text summary to stdout")
    parser.add_argument("--server", action="store_true", help="Watch plan file, regenerate output, and serve via local web server")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind local web server (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port for local web server (default: 8000)")
    parser.add_argument("--watch-interval", type=float, default=1.0, help="Plan file watch interval in seconds (default: 1.0)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT, datefmt=DATE_FORMAT)


def _print_validation(errors: list[str], warnings: list[str]) -> None:
    for warning in warnings:
        print(f"WARNING: {warning}")
    for error in errors:
        print(f"ERROR: {error}", file=sys.stderr)


def _print_summary(plan: Plan, result: SimulationResult) -> None:
    money = partial(format_money, display=plan.display)
    summary = result.summary
    if summary is None:
        print("Please enter your retirement details to see your summary.")
    else:
        inputs = result.projection_input
        print(f"Ages: {inputs.current_age}-{result.rows[-1].age}")
        print(f"Corpus at retirement ({inputs.retirement_age}): {money(summary.corpus_at_retirement)}")
        print(f"Money lasts until age: {summary.money_lasts_until_age}")
        print(f"Coverage: {summary.coverage_pct:.1f}% ({summary.years_covered} of {summary.years_needed} years)")
        print(f"Readiness: {summary.readiness.label}")
        if summary.shortfall_years > 0:
            print(f"Shortfall years: {summary.shortfall_years}")
        else:
            print(f"Legacy amount: {money(summary.legacy_amount)}")
    if result.insurance is not None:
        print(f"Additional life cover required: {money(result.insurance.additional_cover_required)}")
    if result.goals:
        funded = sum(1 for goal in result.goals if goal.is_funded)
        print(f"Goals funded: {funded} of {len(result.goals)}")
    if result.risk_profile.category is not None:
        print(f"Risk profile: {result.risk_profile.category}")
    print(f"Net worth: {money(result.net_worth.net_worth)}")


def _write_report_for_plan(plan: Plan, args: argparse.Namespace, *, print_header: bool = True) -> None:
    result = run_simulation(plan)
    html_content = render_report(plan, result, plan_path=args.plan)
    write_report(args.output, html_content)

    if args.summary and print_header:
        _print_summary(plan, result)

    print(f"Wrote report to {Path(args.output)}")


def _load_valid_plan(plan_path: str) -> tuple[Plan | None, int]:
    """Load and validate ``plan_path``; the int is the CLI exit code on failure."""
    try:
        plan = load_plan(plan_path)
    except (SchemaError, OSError, ValueError) as exc:
        print(f"Failed to load plan: {exc}", file=sys.stderr)
        return None, 2

    validation = validate_plan(plan)
    _print_validation(validation.errors, validation.warnings)
    if not validation.is_valid:
        return None, 1
    return plan, 0


def _plan_mtime_ns(plan_path: str) -> int | None:
    try:
        return Path(plan_path).stat().st_mtime_ns
    except OSError:
        return None


class PlanWatcher(threading.Thread):
    """Polls the plan file and rewrites the report after each valid edit.

    A plan that fails to load or validate leaves the last report in place.
    """

    def __init__(self, args: argparse.Namespace) -> None:
        super().__init__(name="plan-watcher", daemon=True)
        self.args = args
        self.last_mtime_ns = _plan_mtime_ns(args.plan)
        self.regenerations = 0
        self._stop_event = threading.Event()

    def run(self) -> None:
        while not self._stop_event.wait(self.args.watch_interval):
            self.poll()

    def poll(self) -> bool:
        mtime_ns = _plan_mtime_ns(self.args.plan)
        if mtime_ns is None or mtime_ns == self.last_mtime_ns:
            return False
        self.last_mtime_ns = mtime_ns
        logger.info("plan %s changed; regenerating %s", self.args.plan, self.args.output)

        try:
            plan = load_plan(self.args.plan)
        except (SchemaError, OSError, ValueError) as exc:
            logger.error("cannot load updated plan %s: %s", self.args.plan, exc)
            return False

        validation = validate_plan(plan)
        for warning in validation.warnings:
            logger.warning("%s", warning)
        if not validation.is_valid:
            for error in validation.errors:
                logger.error("%s", error)
            logger.error("keeping previous report; updated plan has %d validation errors", len(validation.errors))
            return False

        _write_report_for_plan(plan, self.args, print_header=False)
        self.regenerations += 1
        return True

    def stop(self) -> None:
        self._stop_event.set()
        if self.is_alive():
            self.join(timeout=max(self.args.watch_interval * 2, 0.1))


def _run_server_mode(args: argparse.Namespace) -> int:
    if args.validate:
        print("--validate cannot be used with --server", file=sys.stderr)
        return 2
    if args.watch_interval <= 0:
        print("--watch-interval must be > 0", file=sys.stderr)
        return 2

    plan, code = _load_valid_plan(args.plan)
    if plan is None:
        return code
    _write_report_for_plan(plan, args)

    output_path = Path(args.output).resolve()
    handler = partial(SimpleHTTPRequestHandler, directory=str(output_path.parent))
    server = ThreadingHTTPServer((args.host, args.port), handler)
    watcher = PlanWatcher(args)
    watcher.start()
    logger.debug("watching %s every %.2fs", args.plan, args.watch_interval)

    print(f"Serving {output_path.name} at http://{args.host}:{server.server_port}/{output_path.name}")
    print("Press Ctrl+C to stop.")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("server stopped after %d regenerations", watcher.regenerations)
    finally:
        watcher.stop()
        server.server_close()
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.server:
        return _run_server_mode(args)

    plan, code = _load_valid_plan(args.plan)
    if plan is None:
        return code

    if args.validate:
        print("Plan is valid.")
        return 0

    _write_report_for_plan(plan, args)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
