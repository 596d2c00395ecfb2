"""Tests for the changelog CLI."""

import pytest
from typer.testing import CliRunner

from content_changelog.cli import main as cli
from content_changelog.services import ChangeLogReader

runner = CliRunner()


@pytest.fixture(autouse=True)
def _use_test_reader(monkeypatch: pytest.MonkeyPatch, reader: ChangeLogReader) -> None:
    monkeypatch.setattr(cli, "_reader", lambda: reader)


class TestList:
    def test_all(self) -> None:
        result = runner.invoke(cli.app, ["list"])
        assert result.exit_code == 0, result.output
        assert "9 of 9" in result.output

    def test_by_content_record(self) -> None:
        result = runner.invoke(cli.app, ["list", "--content-type", "pages", "--content-id", "42", "--limit", "2"])
        assert result.exit_code == 0, result.output
        assert "2 of 5" in result.output

    def test_unknown_content_type(self) -> None:
        result = runner.invoke(cli.app, ["list", "--content-type", "nope"])
        assert result.exit_code == 1
        assert "Unknown content type" in result.output

    def test_bad_direction(self) -> None:
        result = runner.invoke(cli.app, ["list", "--order", "date", "--direction", "UP"])
        assert result.exit_code == 1


class TestShow:
    def test_entry_with_neighbours(self) -> None:
        result = runner.invoke(cli.app, ["show", "pages", "42", "3"])
        assert result.exit_code == 0, result.output
        assert "Change Log Entry 3" in result.output
        assert "STATUS_CHANGE" in result.output
        assert "Previous" in result.output
        assert "Next" in result.output

    def test_missing_entry(self) -> None:
        result = runner.invoke(cli.app, ["show", "pages", "42", "99"])
        assert result.exit_code == 1
        assert "No change log entry" in result.output


class TestInitDb:
    @pytest.fixture(autouse=True)
    def _use_test_engine(self, monkeypatch: pytest.MonkeyPatch, engine) -> None:
        from content_changelog.database import connection

        monkeypatch.setattr(connection, "get_engine", lambda: engine)

    def test_existing_table(self) -> None:
        result = runner.invoke(cli.app, ["init-db"])
        assert result.exit_code == 0, result.output
        assert "bolt_log_change already present" in result.output

    def test_force_recreates(self, reader: ChangeLogReader) -> None:
        result = runner.invoke(cli.app, ["init-db", "--force"])
        assert result.exit_code == 0, result.output
        assert "Recreated bolt_log_change" in result.output
        assert reader.count() == 0
