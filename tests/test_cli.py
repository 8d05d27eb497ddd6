"""
End-to-end tests for the command-line entry point.
"""

import json

import pytest

from rotation.cli import main


@pytest.fixture
def inputs(tmp_path):
    roster = tmp_path / "roster.csv"
    roster.write_text(
        "id,name,duration\n1,Ana,11-2pm\n2,Ben,11-2pm\n3,Cal,11-2pm\n4,Dee,11-2pm\n5,Eli,11-2pm\n6,Fay,12-2pm\n",
        encoding="utf-8",
    )
    staff = tmp_path / "staff.csv"
    staff.write_text(
        "id,name,seniority,Grill 1,Fries,P.O.S.\n1,Ana,GM,5,4,1\n2,Ben,Captain,2,,5\n3,Cal,,,,\n",
        encoding="utf-8",
    )
    return roster, staff, tmp_path / "history.json"


def test_generates_and_records_history(inputs, capsys):
    roster, staff, history = inputs
    main([str(roster), str(staff), "--history", str(history), "--date", "2026-10-19", "--grill-opener", "2"])

    captured = capsys.readouterr()
    assert "ROTATION SCHEDULE - 2026-10-19" in captured.out
    assert "No staff profile for Dee, Eli, Fay" in captured.err

    saved = json.loads(history.read_text(encoding="utf-8"))
    assert saved[0]["date"] == "2026-10-19"
    assert saved[0]["grillOpener"] == "2"
    assert set(saved[0]["schedule"]) == {"11am-12pm", "12pm-1pm", "1pm-2pm"}


def test_regenerating_a_day_replaces_it(inputs):
    roster, staff, history = inputs
    args = [str(roster), str(staff), "--history", str(history)]
    main(args + ["--date", "2026-10-18"])
    main(args + ["--date", "2026-10-19"])
    main(args + ["--date", "2026-10-19"])

    saved = json.loads(history.read_text(encoding="utf-8"))
    assert [day["date"] for day in saved] == ["2026-10-19", "2026-10-18"]


def test_no_save_leaves_history_alone(inputs):
    roster, staff, history = inputs
    main([str(roster), str(staff), "--history", str(history), "--no-save"])
    assert not history.exists()


def test_output_gets_xlsx_suffix(inputs, tmp_path):
    roster, staff, history = inputs
    main([str(roster), str(staff), "--history", str(history), "--no-save", "--output", str(tmp_path / "today")])
    assert (tmp_path / "today.xlsx").exists()


def test_missing_roster_exits_with_error(inputs, tmp_path, capsys):
    _, staff, history = inputs
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "missing.csv"), str(staff), "--history", str(history)])

    assert excinfo.value.code == 1
    assert "ERROR: Roster CSV not found" in capsys.readouterr().err


def test_short_staffed_exits_with_error(tmp_path, capsys):
    roster = tmp_path / "roster.csv"
    roster.write_text("id,name\n1,Ana\n2,Ben\n", encoding="utf-8")
    staff = tmp_path / "staff.csv"
    staff.write_text("id,name\n1,Ana\n", encoding="utf-8")

    with pytest.raises(SystemExit):
        main([str(roster), str(staff), "--history", str(tmp_path / "h.json")])
    assert "You have 2 staff members" in capsys.readouterr().err


def test_invalid_date_exits_with_error(inputs, capsys):
    roster, staff, history = inputs
    with pytest.raises(SystemExit):
        main([str(roster), str(staff), "--history", str(history), "--date", "19/10/2026"])
    assert "Invalid --date value" in capsys.readouterr().err
