"""Tests for the liftplan command line."""

import json
from datetime import date, datetime, timedelta, timezone

import pytest

from liftplan.cli import create_parser, main
from liftplan.repositories.persistence import JsonFilePersistence
from liftplan.repositories.progress_repository import ProgressRepository
from liftplan.repositories.session_repository import SessionRepository

from tests.conftest import make_log, make_session


@pytest.fixture
def run(tmp_path, capsys):
    """Run the CLI against a temporary data directory and return (code, stdout)."""

    def invoke(*argv):
        code = main(["--data-dir", str(tmp_path), *argv])
        return code, capsys.readouterr().out

    return invoke


def write_session(tmp_path, session):
    path = tmp_path / "session.json"
    path.write_text(session.model_dump_json(), encoding="utf-8")
    return path


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage: liftplan" in capsys.readouterr().out


def test_targets_for_stored_plan(run):
    code, out = run("targets", "--day", "0")

    assert code == 0
    data = json.loads(out)
    assert data["day_type"] == "upper"
    assert data["recommended_duration"] == 65
    assert data["targets"]["chest_lower"] == 5.0


def test_targets_for_template_plan(run):
    code, out = run("targets", "--split", "push_pull_legs", "--training-days", "6", "--day", "1")

    assert code == 0
    data = json.loads(out)
    assert data["split_type"] == "push_pull_legs"
    assert data["day_type"] == "pull"


def test_targets_day_out_of_range(run):
    code, out = run("targets", "--day", "9")
    assert code == 1
    assert "❌ Day 9 is outside the plan" in out


def test_generate_for_date(run):
    code, out = run("generate", "--date", "2024-03-11")

    assert code == 0
    data = json.loads(out)
    assert data["day_type"] == "upper"
    assert data["exercises"]
    assert data["attempts"][0]["duration_minutes"] == 65
    assert all(e["sets"] >= 1 for e in data["exercises"])


def test_generate_rejects_bad_date():
    with pytest.raises(SystemExit):
        create_parser().parse_args(["generate", "--date", "next tuesday"])


def test_complete_saves_session_and_progress(run, tmp_path):
    session = make_session(datetime.now(), make_log("Bench Press", reps=(10, 10, 10), weight=100))
    path = write_session(tmp_path, session)

    code, out = run("complete", "--file", str(path))

    assert code == 0
    assert "✅ Session saved (3/3 sets completed)" in out
    assert "Bench Press: advance 100 -> 105 lb" in out

    persistence = JsonFilePersistence(tmp_path)
    assert [s.id for s in SessionRepository(persistence).fetch_all()] == [session.id]
    assert ProgressRepository(persistence).get("bench press").next_weight == 105


def test_utc_session_then_generate_and_volume(run, tmp_path):
    stamp = (datetime.now(timezone.utc) - timedelta(days=1)).strftime("%Y-%m-%dT%H:%M:%SZ")
    path = tmp_path / "utc_session.json"
    path.write_text(
        json.dumps(
            {
                "date": stamp,
                "exercises": [{"name": "Squat", "sets": [{"weight": 185, "reps": 5}] * 3}],
            }
        ),
        encoding="utf-8",
    )

    assert run("complete", "--file", str(path))[0] == 0
    (stored,) = SessionRepository(JsonFilePersistence(tmp_path)).fetch_all()
    assert stored.date.tzinfo is None

    code, out = run("generate", "--date", date.today().isoformat())
    assert code == 0
    assert json.loads(out)["exercises"]

    code, out = run("volume")
    assert code == 0
    rows = {row["muscle"]: row for row in json.loads(out)}
    assert rows["quads"]["sets"] == 3.0


def test_complete_rejects_invalid_file(run, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text('{"exercises": []}', encoding="utf-8")

    code, out = run("complete", "--file", str(path))
    assert code == 1
    assert "❌ Invalid session file" in out


def test_complete_missing_file(run, tmp_path):
    code, out = run("complete", "--file", str(tmp_path / "missing.json"))
    assert code == 1
    assert "❌ Cannot read" in out


def test_volume_counts_recent_sessions(run, tmp_path):
    session = make_session(
        datetime.now() - timedelta(hours=2), make_log("Bench Press", reps=(8, 8, 8), weight=100)
    )
    SessionRepository(JsonFilePersistence(tmp_path)).save(session)

    code, out = run("volume")

    assert code == 0
    rows = {row["muscle"]: row for row in json.loads(out)}
    assert rows["chest_lower"]["sets"] == 3.0
    assert rows["chest_lower"]["total_volume"] == 2400.0
    assert rows["triceps"]["sets"] == 1.5
    assert rows["quads"]["sets"] == 0.0


def test_catalog_filters(run):
    code, out = run(
        "catalog", "--muscle", "abs", "--equipment", "bodyweight", "--difficulty", "advanced"
    )

    assert code == 0
    assert "=== Exercises (2) ===" in out
    assert "Hanging Leg Raise" in out
    assert "Hip Airplane" in out


def test_catalog_rejects_unknown_muscle():
    with pytest.raises(SystemExit):
        create_parser().parse_args(["catalog", "--muscle", "wings"])
