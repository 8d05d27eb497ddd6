"""Excel export helpers for generated rotations."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Sequence

import pandas as pd

from rotation.config import ALL_POSITIONS, TIME_SLOTS
from rotation.domain.models import Assignment, DailyStaff
from rotation.reporting.stats import assignment_lookup, summarize_staff


def build_rotation_frame(schedule: Mapping[str, Sequence[Assignment]]) -> pd.DataFrame:
    """Position x slot grid; closed or unfilled cells are blank, rows nobody works are dropped."""
    lookup = assignment_lookup(schedule)
    rows = []
    for position in ALL_POSITIONS:
        cells = []
        for slot in TIME_SLOTS:
            assignment = lookup.get((slot, position))
            cells.append(assignment.staff_name if assignment is not None and not assignment.is_unfilled else "")
        if any(cells):
            rows.append([position, *cells])
    return pd.DataFrame(rows, columns=["Position", *TIME_SLOTS])


def build_summary_frame(
    schedule: Mapping[str, Sequence[Assignment]],
    people: Sequence[DailyStaff],
) -> pd.DataFrame:
    rows = []
    for stats in summarize_staff(schedule, people).values():
        rows.append(
            [
                stats["name"],
                *[stats["positions"][slot] or "" for slot in TIME_SLOTS],
                stats["slots_worked"],
                stats["slots_available"],
                stats["hot_count"],
            ]
        )
    columns = ["Staff", *TIME_SLOTS, "Slots Worked", "Slots Available", "Hot Stations"]
    return pd.DataFrame(rows, columns=columns)


def build_details_frame(schedule: Mapping[str, Sequence[Assignment]]) -> pd.DataFrame:
    rows = []
    for slot in TIME_SLOTS:
        for assignment in schedule.get(slot, []):
            b = assignment.breakdown
            rows.append(
                [
                    slot,
                    assignment.position,
                    assignment.staff_name,
                    b.preference if b else "",
                    b.variety_bonus if b else "",
                    b.history_penalty if b else "",
                    b.same_slot_yesterday_penalty if b else "",
                    b.hazard_penalty if b else "",
                    b.total if b else "",
                ]
            )
    columns = [
        "Slot",
        "Position",
        "Staff",
        "Preference",
        "Variety Bonus",
        "History Penalty",
        "Same Slot Yesterday",
        "Hot Penalty",
        "Total",
    ]
    return pd.DataFrame(rows, columns=columns)


def export_schedule_to_excel(
    schedule: Mapping[str, Sequence[Assignment]],
    people: Sequence[DailyStaff],
    output_path: Path,
):
    """Export the rotation to an Excel workbook with a grid, a staff summary and score details."""
    sheets = [
        ("Rotation", build_rotation_frame(schedule)),
        ("Staff Summary", build_summary_frame(schedule, people)),
        ("Score Details", build_details_frame(schedule)),
    ]
    with pd.ExcelWriter(output_path, engine="xlsxwriter") as writer:
        for sheet_name, frame in sheets:
            frame.to_excel(writer, sheet_name=sheet_name, index=False)
            _autosize_columns(writer, sheet_name, frame)


def _autosize_columns(writer: pd.ExcelWriter, sheet_name: str, dataframe: pd.DataFrame):
    worksheet = writer.sheets[sheet_name]
    for idx, column in enumerate(dataframe.columns):
        max_len = max([len(str(column))] + [len(str(cell)) for cell in dataframe[column]])
        worksheet.set_column(idx, idx, max_len + 2)
