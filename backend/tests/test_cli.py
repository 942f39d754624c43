import json

import pytest

from fittrack.main import create_parser, main

NOW_ARG = "2026-01-22T15:30:00"


@pytest.fixture
def run(database_url, capsys):
    """Run the CLI against a temporary database and return (code, stdout)."""

    def _run(*argv):
        code = main(["--db", database_url, "--now", NOW_ARG, *argv])
        return code, capsys.readouterr().out

    return _run


def run_json(run, *argv):
    code, out = run("--json", *argv)
    assert code == 0
    return json.loads(out)


def test_log_then_today(run):
    workout = run_json(run, "log", "cardio", "30", "--intensity", "moderate", "--notes", "Run")

    assert workout["calories"] == 240
    assert workout["exerciseCategory"] == "cardio"
    assert workout["notes"] == "Run"

    today = run_json(run, "today")

    assert today["summary"] == {"count": 1, "totalMinutes": 30, "totalCalories": 240}
    assert today["goal"] == {"targetMinutes": 30, "targetCalories": 500}
    assert today["progress"]["minutesProgress"] == 1.0
    assert today["checkIn"] is None


def test_progress_week(run):
    run_json(run, "log", "cardio", "30")
    run_json(run, "log", "strength", "40", "--at", "2026-01-21T08:00:00")
    run_json(run, "log", "sports", "60", "--at", "2026-01-10T08:00:00")

    stats = run_json(run, "progress", "--period", "week")

    assert stats["totalWorkouts"] == 2
    assert stats["totalMinutes"] == 70
    assert stats["currentStreak"] == 2
    assert stats["exerciseBreakdown"]["sports"] == 0


def test_goal_update_keeps_unspecified_target(run):
    goal = run_json(run, "goal", "--minutes", "60")

    assert goal == {"targetMinutes": 60, "targetCalories": 500}
    assert run_json(run, "goal") == goal


def test_checkin_shows_in_today(run):
    run_json(run, "checkin", "4", "high", "--notes", "Slept well")

    today = run_json(run, "today")

    assert today["checkIn"]["mood"] == 4
    assert today["checkIn"]["energy"] == "high"


def test_list_and_delete(run):
    workout = run_json(run, "log", "flexibility", "20", "--intensity", "easy")

    assert [w["id"] for w in run_json(run, "list")] == [workout["id"]]
    assert run_json(run, "list", "--date", "2026-01-21") == []

    assert run_json(run, "delete", workout["id"])["deleted"] is True
    assert run_json(run, "list") == []


def test_delete_unknown_workout_fails(run):
    code, out = run("delete", "missing")

    assert code == 1
    assert "No workout" in out


def test_text_output(run):
    run("log", "sports", "90", "--intensity", "intense")

    code, out = run("progress", "--period", "month")

    assert code == 0
    assert "Total time:   1h 30m" in out
    assert "Streak:       1 day(s)" in out


def test_reset(run):
    run_json(run, "log", "cardio", "30")
    run_json(run, "goal", "--minutes", "90")

    run_json(run, "reset")

    assert run_json(run, "list") == []
    assert run_json(run, "goal")["targetMinutes"] == 30


def test_invalid_goal_reports_error(database_url, capsys):
    code = main(["--db", database_url, "goal", "--minutes", "0"])

    assert code == 1
    assert "Error" in capsys.readouterr().err


def test_parser_rejects_unknown_category():
    with pytest.raises(SystemExit):
        create_parser().parse_args(["log", "swimming", "30"])
