import argparse
import io
import json

import pytest

import extract_tasks

TRANSCRIPT = "I need to submit the report tomorrow at 14:30. The weather was nice. todo call vendor."


@pytest.fixture
def transcript_file(tmp_path):
    path = tmp_path / "meeting.txt"
    path.write_text(TRANSCRIPT, encoding="utf-8")
    return path


@pytest.fixture
def env_file(tmp_path):
    return str(tmp_path / "missing.env")


def test_json_output(transcript_file, env_file, capsys):
    code = extract_tasks.main([
        str(transcript_file), "--now", "2024-03-10T08:00", "--json", "--env-file", env_file,
    ])
    assert code == 0

    data = json.loads(capsys.readouterr().out)
    assert data["extracted_at"] == "2024-03-10T08:00:00"
    assert [t["title"] for t in data["tasks"]] == [
        "I need to submit the report tomorrow at 14:30",
        "todo call vendor",
    ]
    assert data["tasks"][0]["scheduled_at"] == "2024-03-11T14:30:00"
    assert "calendar_events" not in data


def test_text_summary_with_calendar(transcript_file, env_file, capsys):
    code = extract_tasks.main([
        str(transcript_file), "--now", "2024-03-10T08:00", "--calendar", "--env-file", env_file,
    ])
    assert code == 0

    out = capsys.readouterr().out
    assert "=== EXTRACTED TASKS ===" in out
    assert "  Date: Mar 11, 2024 14:30" in out
    assert "=== CALENDAR REQUESTS (2) ===" in out
    assert "- todo call vendor: 2024-03-10 08:00 → 09:00" in out


def test_reads_stdin(env_file, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("todo call vendor"))
    assert extract_tasks.main(["--json", "--env-file", env_file]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["tasks"][0]["title"] == "todo call vendor"


def test_writes_daily_task_file(transcript_file, env_file, tmp_path, capsys):
    tasks_dir = tmp_path / "Tasks"
    code = extract_tasks.main([
        str(transcript_file), "--now", "2024-03-10T08:00",
        "--tasks-dir", str(tasks_dir), "--env-file", env_file,
    ])
    assert code == 0

    content = (tasks_dir / "2024-03-10.md").read_text(encoding="utf-8")
    assert "### From: meeting.txt" in content
    assert "- [ ] I need to submit the report tomorrow at 14:30 (📅 2024-03-11 14:30)" in content


def test_missing_file(tmp_path, env_file, capsys):
    assert extract_tasks.main([str(tmp_path / "nope.txt"), "--env-file", env_file]) == 1
    assert "File not found" in capsys.readouterr().err


def test_bad_now_value(transcript_file, env_file):
    with pytest.raises(SystemExit):
        extract_tasks.main([str(transcript_file), "--now", "yesterday", "--env-file", env_file])


def test_tasks_dir_from_environment(transcript_file, env_file, tmp_path, monkeypatch):
    tasks_dir = tmp_path / "Tasks"
    monkeypatch.setenv("TASKS_DIR", str(tasks_dir))

    code = extract_tasks.main([str(transcript_file), "--now", "2024-03-10T08:00", "--env-file", env_file])
    assert code == 0
    assert (tasks_dir / "2024-03-10.md").exists()


def test_no_tasks_overrides_environment(transcript_file, env_file, tmp_path, monkeypatch):
    tasks_dir = tmp_path / "Tasks"
    monkeypatch.setenv("TASKS_DIR", str(tasks_dir))

    code = extract_tasks.main([
        str(transcript_file), "--now", "2024-03-10T08:00", "--no-tasks", "--env-file", env_file,
    ])
    assert code == 0
    assert not tasks_dir.exists()


def test_bad_now_error_is_not_chained():
    with pytest.raises(argparse.ArgumentTypeError) as excinfo:
        extract_tasks._parse_now("yesterday")
    assert excinfo.value.__cause__ is None
    assert excinfo.value.__suppress_context__
