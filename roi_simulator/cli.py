"""Command line access to the calculator and the PDF report.

    roi-simulator simulate --monthly-invoice-volume 2000 --num-ap-staff 3 ...
    roi-simulator report --scenario-id <uuid> --email cfo@example.com -o out.pdf
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from roi_simulator.config import Settings
from roi_simulator.db import SessionLocal, init_db
from roi_simulator.errors import RoiSimulatorError
from roi_simulator.logger import setup_logging
from roi_simulator.services.report_pdf import build_report_data, build_report_pdf_bytes
from roi_simulator.services.roi import (
    INPUT_FIELDS,
    ScenarioInputs,
    compute,
    inputs_as_dict,
    json_safe,
    results_as_dict,
)
from roi_simulator.services.scenarios import get_scenario

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="roi-simulator")
    sub = parser.add_subparsers(dest="command", required=True)

    sim = sub.add_parser("simulate", help="Print results for the given inputs as JSON")
    defaults = ScenarioInputs()
    for name in INPUT_FIELDS:
        sim.add_argument(
            f"--{name.replace('_', '-')}",
            dest=name,
            type=float,
            default=getattr(defaults, name),
        )

    rep = sub.add_parser("report", help="Render the PDF report of a saved scenario")
    rep.add_argument("--scenario-id", required=True)
    rep.add_argument("--email", required=True)
    rep.add_argument("-o", "--output", type=Path, required=True)
    return parser


def run_simulate(args: argparse.Namespace) -> int:
    inputs = ScenarioInputs(**{name: getattr(args, name) for name in INPUT_FIELDS})
    results = compute(inputs)
    payload = {
        "inputs": json_safe(inputs_as_dict(inputs)),
        "results": json_safe(results_as_dict(results)),
    }
    print(json.dumps(payload, indent=2))
    return 0


def run_report(args: argparse.Namespace, settings: Settings) -> int:
    init_db(settings)
    try:
        with SessionLocal() as session:
            scenario = get_scenario(session, args.scenario_id)
            data = build_report_data(scenario, args.email, title=settings.report_title)
    except RoiSimulatorError as exc:
        logger.error("cannot render report: %s", exc.message)
        return 1
    args.output.write_bytes(build_report_pdf_bytes(data))
    logger.info("report written to %s", args.output)
    return 0


def main(argv: list[str] | None = None) -> int:
    settings = Settings()
    setup_logging(settings.log_level)
    args = build_parser().parse_args(argv)
    if args.command == "simulate":
        return run_simulate(args)
    return run_report(args, settings)


if __name__ == "__main__":
    sys.exit(main())
