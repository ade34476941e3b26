"""
Smoke Tests for CLI Commands.

These tests verify that CLI commands run without errors and produce output.
They don't validate correctness deeply - just that commands work.

Usage:
    pytest tests/smoke/test_cli_commands.py -v
"""

import pytest
from typer.testing import CliRunner

from examprep.cli.main import app

# Mark all tests in this module as smoke tests
pytestmark = pytest.mark.smoke

runner = CliRunner()


@pytest.fixture
def db(tmp_path):
    return str(tmp_path / "cli.db")


def run(db: str, *args: str):
    return runner.invoke(app, ["--db", db, *args])


class TestCLIHelp:

    def test_main_help(self):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "review" in result.output

    def test_review_help(self):
        result = runner.invoke(app, ["review", "--help"])
        assert result.exit_code == 0


class TestCLIFlow:

    def test_card_review_flow(self, db):
        result = run(db, "add-card", "-s", "Math", "-t", "Algebra", "-q", "2+2?", "-a", "4")
        assert result.exit_code == 0, result.output
        assert "Added" in result.output

        result = run(db, "due")
        assert result.exit_code == 0
        assert "Algebra" in result.output

        result = run(db, "review", "1", "1")
        assert result.exit_code == 0, result.output
        assert "Next review" in result.output
        assert "Weak area" in result.output

        result = run(db, "progress")
        assert result.exit_code == 0
        assert "Level" in result.output

    def test_invalid_score_exits_with_error(self, db):
        run(db, "add-card", "-s", "Math", "-t", "Algebra", "-q", "2+2?", "-a", "4")

        result = run(db, "review", "1", "9")

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_unknown_card(self, db):
        result = run(db, "review", "77", "4")
        assert result.exit_code == 1

    def test_tests_and_series(self, db):
        result = run(db, "add-test", "-s", "Math", "-t", "Algebra", "--questions", "10",
                     "--correct", "7")
        assert result.exit_code == 0, result.output

        result = run(db, "series")
        assert result.exit_code == 0
        assert "70%" in result.output

    def test_malformed_test_rejected(self, db):
        result = run(db, "add-test", "-s", "Math", "-t", "Algebra", "--questions", "5",
                     "--correct", "8")
        assert result.exit_code == 1

    def test_check_in(self, db):
        result = run(db, "check-in")
        assert result.exit_code == 0
        assert "Streak" in result.output

    def test_empty_views(self, db):
        assert "caught up" in run(db, "due").output
        assert "No tests" in run(db, "series").output

    def test_each_invocation_uses_its_own_database(self, tmp_path):
        first = str(tmp_path / "first.db")
        second = str(tmp_path / "second.db")

        run(first, "add-card", "-s", "Math", "-t", "Algebra", "-q", "2+2?", "-a", "4")

        assert "Algebra" in run(first, "due").output
        assert "caught up" in run(second, "due").output
