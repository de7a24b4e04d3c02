"""Tests for the click console, run against the built-in seed data."""

import pytest
import csv
from click.testing import CliRunner

from worktrack.cli import main
from worktrack.data import DataCore


@pytest.fixture
def env(tmp_path):
    return {
        "WORKTRACK_LOG_DIR": str(tmp_path / "logs"),
        "WORKTRACK_SEED_FILE": "",
        "WORKTRACK_EXPORT_DIR": str(tmp_path / "exports"),
    }


@pytest.fixture
def invoke(env):
    runner = CliRunner()

    def _invoke(args, input=None):
        DataCore.reset_context()
        return runner.invoke(main, args, input=input, env=env)

    return _invoke


def _lines(*answers):
    return "\n".join(str(a) for a in answers) + "\n"


class TestCommands:
    """Test the non-interactive commands."""

    def test_version(self, invoke):
        result = invoke(["--version"])
        assert result.exit_code == 0
        assert "worktrack" in result.output

    def test_tasks(self, invoke):
        result = invoke(["tasks"])
        assert result.exit_code == 0
        assert "Fix Bug #101" in result.output
        assert "Recruitment Drive" in result.output

    def test_tasks_filtered(self, invoke):
        result = invoke(["tasks", "--employee", "2"])
        assert "Recruitment Drive" in result.output
        assert "Fix Bug #101" not in result.output

        result = invoke(["tasks", "--status", "inprogress"])
        assert "Develop Feature X" in result.output
        assert "Recruitment Drive" not in result.output

        result = invoke(["tasks", "--search", "nothing like this"])
        assert "No tasks found" in result.output

    def test_overdue_none_in_seed(self, invoke):
        result = invoke(["overdue"])
        assert result.exit_code == 0
        assert "No overdue tasks" in result.output

    def test_reports(self, invoke):
        result = invoke(["report", "dashboard"])
        assert result.exit_code == 0
        assert "Tasks: 3" in result.output

        result = invoke(["report", "top"])
        assert "1. Shiv" in result.output

        result = invoke(["report", "group"])
        assert "Ganesh Bhutekar (IT) - 0 task(s)" in result.output

        result = invoke(["report", "weekly"])
        assert "Hours this week" in result.output

        result = invoke(["report", "timesheet", "--employee", "1", "--period", "month"])
        assert result.exit_code == 0
        assert "Timesheet for Shiv" in result.output

    def test_timesheet_unknown_employee(self, invoke):
        result = invoke(["report", "timesheet", "--employee", "99"])
        assert result.exit_code != 0
        assert "Employee 99 not found" in result.output

    def test_export(self, invoke, tmp_path):
        result = invoke(["export", "--output", str(tmp_path / "out")])
        assert result.exit_code == 0
        with open(tmp_path / "out" / "tasks.csv", newline="", encoding="utf-8") as f:
            assert len(list(csv.reader(f))) == 4
        assert (tmp_path / "out" / "summary.yml").exists()

    def test_export_default_dir(self, invoke, env):
        result = invoke(["export"])
        assert result.exit_code == 0
        assert "summary.yml" in result.output

    def test_invalid_seed_file(self, invoke, tmp_path):
        seed = tmp_path / "seed.yml"
        seed.write_text("employees:\n  - id: 1\n")
        result = invoke(["--seed-file", str(seed), "tasks"])
        assert result.exit_code != 0
        assert "Invalid seed document" in result.output


class TestSession:
    """Test the interactive session menus."""

    def test_quit_immediately(self, invoke):
        result = invoke(["session"], input=_lines(""))
        assert result.exit_code == 0
        assert "Goodbye" in result.output

    def test_invalid_credentials(self, invoke):
        result = invoke(["session"], input=_lines("shiv@gbsoft.com", "nope", ""))
        assert "Invalid credentials" in result.output
        assert "Welcome" not in result.output

    def test_employee_creates_comments_and_deletes(self, invoke):
        answers = _lines(
            "SHIV@gbsoft.com", "123",
            1, "Write report", 2, 0, "2030-01-01",      # create -> task 4
            5, 4, 1, "First draft done",                # comment
            5, 4, 2, 2,                                 # complete
            2, 4, "Final report", "", "", "",           # rename only
            4,                                          # view mine
            3, 3,                                       # delete someone else's task
            3, 4,                                       # delete own
            7, "",                                      # logout, quit
        )
        result = invoke(["session"], input=answers)

        assert result.exit_code == 0, result.output
        assert "Welcome, Shiv! Role: Employee" in result.output
        assert "Task 4 created successfully" in result.output
        assert "Comment added successfully" in result.output
        assert "Status updated" in result.output
        assert "Task updated successfully" in result.output
        assert "Final report" in result.output
        assert "Task 3 not found" in result.output
        assert "Task deleted successfully" in result.output

    def test_employee_validation_error_keeps_menu_running(self, invoke):
        answers = _lines(
            "shiv@gbsoft.com", "123",
            1, "Bad hours", -3, 0, "2030-01-01",
            7, "",
        )
        result = invoke(["session"], input=answers)
        assert result.exit_code == 0
        assert "Hours cannot be negative" in result.output

    def test_manager_assigns_and_reviews(self, invoke, tmp_path):
        out = tmp_path / "manager-export"
        answers = _lines(
            "ganesh@gbsoft.com", "admin",
            1, 2, "Plan interviews", 3, "2020-01-01",   # assign overdue task to Bhagwat
            1, 42, "Ghost", 1, "2030-01-01",            # unknown employee
            2, "", "Pending", "",                       # filter
            6,                                          # overdue
            7,                                          # dashboard
            8, str(out),                                # export
            9, "",
        )
        result = invoke(["session"], input=answers)

        assert result.exit_code == 0, result.output
        assert "Welcome, Ganesh Bhutekar! Role: Manager" in result.output
        assert "Task 4 assigned successfully" in result.output
        assert "Employee 42 not found" in result.output
        assert "Plan interviews (Emp: Bhagwat) Due: 2020-01-01" in result.output
        assert "Overdue: 1" in result.output
        assert (out / "tasks.csv").exists()

    def test_invalid_menu_option(self, invoke):
        result = invoke(["session"], input=_lines("shiv@gbsoft.com", "123", 12, 7, ""))
        assert "Invalid option" in result.output
