"""
Tests for the console and Excel reports.
"""

import zipfile

import pytest

from rotation.config import TIME_SLOTS
from rotation.domain.models import Assignment, DailyStaff
from rotation.engine.allocator import allocate
from rotation.engine.positions import positions_by_slot
from rotation.reporting.console import print_schedule
from rotation.reporting.export import (
    build_details_frame,
    build_rotation_frame,
    build_summary_frame,
    export_schedule_to_excel,
)
from rotation.reporting.stats import count_unfilled, summarize_staff, unfilled_positions


@pytest.fixture
def crew():
    return [
        DailyStaff(str(i), f"Staff {i}", 4, {}, tuple(TIME_SLOTS))
        for i in range(1, 7)
    ]


@pytest.fixture
def schedule(crew):
    return allocate(crew, positions_by_slot(len(crew), False))


def test_summary_counts_every_slot(crew, schedule):
    summary = summarize_staff(schedule, crew)

    assert set(summary) == {p.staff_id for p in crew}
    assert all(stats["slots_worked"] == 3 for stats in summary.values())
    assert sum(stats["hot_count"] for stats in summary.values()) == 2 * len(TIME_SLOTS)


def test_unfilled_helpers():
    schedule = {
        "12pm-1pm": [Assignment.unfilled("12pm-1pm", "Fries")],
        "11am-12pm": [Assignment("11am-12pm", "P.O.S.", "7", "Ana"), Assignment.unfilled("11am-12pm", "Expo 2")],
    }
    assert count_unfilled(schedule) == 2
    assert unfilled_positions(schedule) == [("11am-12pm", "Expo 2"), ("12pm-1pm", "Fries")]


def test_print_schedule_shows_grid_and_summary(crew, schedule, capsys):
    print_schedule(schedule, crew, date="2026-10-19", hazard_exempt_name="Staff 2")
    out = capsys.readouterr().out

    assert "ROTATION SCHEDULE - 2026-10-19" in out
    assert "Grill opener: Staff 2" in out
    assert "STAFF SUMMARY" in out
    assert "Lobby/Dish 1" in out
    assert "Grill 2" not in out
    assert "SCORE DETAILS" not in out


def test_print_schedule_lists_unfilled_and_explains(crew, capsys):
    schedule = {"11am-12pm": [Assignment.unfilled("11am-12pm", "Fries")]}
    print_schedule(schedule, crew, explain=True)
    out = capsys.readouterr().out

    assert "Unfilled:" in out
    assert "11am-12pm: Fries" in out
    assert "SCORE DETAILS" in out


def test_rotation_frame_drops_closed_rows(schedule):
    frame = build_rotation_frame(schedule)

    assert list(frame.columns) == ["Position", *TIME_SLOTS]
    assert len(frame) == 6
    assert "Grill 2" not in set(frame["Position"])


def test_details_frame_has_one_row_per_assignment(schedule):
    frame = build_details_frame(schedule)
    assert len(frame) == 6 * len(TIME_SLOTS)
    assert (frame["Variety Bonus"] == 2.0).all()


def test_export_writes_three_sheets(tmp_path, crew, schedule):
    output = tmp_path / "rotation.xlsx"
    export_schedule_to_excel(schedule, crew, output)

    with zipfile.ZipFile(output) as workbook:
        listing = workbook.read("xl/workbook.xml").decode("utf-8")
    positions = [listing.index(f'name="{name}"') for name in ("Rotation", "Staff Summary", "Score Details")]
    assert positions == sorted(positions)


def test_summary_frame_columns(crew, schedule):
    frame = build_summary_frame(schedule, crew)
    assert list(frame["Staff"]) == [p.name for p in crew]
    assert (frame["Slots Worked"] == 3).all()
