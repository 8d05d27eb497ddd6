"""Command-line interface for the lunch-rush rotation generator."""

from __future__ import annotations

import argparse
import datetime
import sys
from pathlib import Path

from rotation.config import DEFAULT_HISTORY_PATH
from rotation.engine.generator import generate_schedule


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate today's lunch-rush station rotation from the roster and staff preferences."
    )
    parser.add_argument(
        "roster_csv",
        type=Path,
        help="CSV file listing who is working today (id, name, duration).",
    )
    parser.add_argument(
        "staff_csv",
        type=Path,
        help="CSV file with staff profiles: id, name, seniority and 1-5 station preferences.",
    )
    parser.add_argument(
        "--history",
        type=Path,
        default=Path(DEFAULT_HISTORY_PATH),
        help=f"JSON file holding the last 7 days of rotations (default: {DEFAULT_HISTORY_PATH}).",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional destination for an Excel copy of the rotation.",
    )
    parser.add_argument(
        "--date",
        default=None,
        metavar="YYYY-MM-DD",
        help="Day being scheduled (default: today). Only earlier days count as history.",
    )
    parser.add_argument(
        "--one-griller",
        action="store_true",
        help="Run a single grill station all day (slow days).",
    )
    parser.add_argument(
        "--grill-opener",
        default=None,
        metavar="STAFF_ID",
        help="Staff id of whoever did grill prep before open; kept off hot stations in the first hour.",
    )
    parser.add_argument(
        "--explain",
        action="store_true",
        help="Print the score breakdown behind every pick.",
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not record this rotation in the history file.",
    )
    return parser


def _parse_date(raw: str | None) -> str | None:
    if raw is None:
        return None
    try:
        return datetime.date.fromisoformat(raw.strip()).isoformat()
    except ValueError:
        raise ValueError(f"Invalid --date value '{raw}'. Expected YYYY-MM-DD.") from None


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        output_path = args.output
        if output_path is not None and not str(output_path).lower().endswith(".xlsx"):
            output_path = output_path.with_name(output_path.name + ".xlsx")
        generate_schedule(
            roster_csv=args.roster_csv,
            staff_csv=args.staff_csv,
            history_path=args.history,
            output_path=output_path,
            date=_parse_date(args.date),
            reduced_risk_mode=args.one_griller,
            hazard_exempt=args.grill_opener.strip() if args.grill_opener else None,
            explain=args.explain,
            save=not args.no_save,
        )
    except Exception as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
