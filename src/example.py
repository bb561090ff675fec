"""
Module with example code for running the coverage evaluator.

There are three ways to run the code:

1. Run the code with default options. This will generate
    a synthetic roster from the config and evaluate it.
2. Run the code with a small roster defined via code.
3. Run the code with shifts, requirements and assignments from a JSON file.

Usage via cli:
    python3 -m src.example --option 1
"""

from __future__ import annotations

import argparse
from datetime import date, datetime
from pathlib import Path

from staffing import Config, InputData, run_evaluation
from staffing.config import add_requirement, clear_requirements
from staffing.input_data import input_from_json
from staffing.main import default_input_builder
from staffing.reporting import Reporter
from staffing.models import Assignment, ShiftTemplate
from staffing.windows import ZeroLengthPolicy

cfg = Config(
    N=30,
    DAYS=7,
    START_DATE=datetime(2024, 1, 1),
    SHIFTS_PER_DAY=22,
    SUPERVISOR_SHARE=0.2,
    SEED=11,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run coverage examples.")
    parser.add_argument(
        "--option",
        type=int,
        default=3,
        choices=(1, 2, 3),
        help="Example scenario to run (default: 3).",
    )
    return parser.parse_args()


def run_option(option: int) -> None:
    print(f"Running example code with option {option}")

    # Synthetic roster over the config horizon.
    if option == 1:

        # equivalent to: run_evaluation(cfg)
        run_evaluation(
            config=cfg,
            validate_config=True,
            input_builder=default_input_builder,
            reporter=Reporter(cfg),
            enable_reporting=True,
        )

    # Small roster defined via code.
    elif option == 2:

        clear_requirements(cfg)
        add_requirement(cfg, "06:00", "14:00", min_total_staff=2, min_supervisors=1)
        add_requirement(cfg, "22:00", "06:00", min_total_staff=1, min_supervisors=0)
        cfg.ZERO_LENGTH_POLICY = ZeroLengthPolicy.EMPTY

        day = ShiftTemplate("day", "Day", "06:00", "14:00")
        night = ShiftTemplate("night", "Night", "22:00", "06:00")
        when = date(2024, 1, 1)
        assignments = [
            Assignment("a1", "E001", when, shift=day, is_supervisor_shift=True),
            Assignment("a2", "E002", when, shift=day),
            Assignment("a3", "E003", when, shift=night),
        ]

        run_evaluation(
            cfg,
            data=InputData(
                shifts={"day": day, "night": night},
                requirements=list(cfg.REQUIREMENTS),
                assignments=assignments,
            ),
        )

    # JSON exported from the scheduling database. Typical production use.
    elif option == 3:

        data = input_from_json(Path("src/example_input.json"), cfg)
        run_evaluation(cfg, data=data)
    else:
        raise SystemExit(f"Unknown option {option}")


def main() -> None:
    args = parse_args()
    run_option(args.option)


if __name__ == "__main__":
    main()
