"""
Tests for the command line interface (mock mode, no Google access).
"""

from typer.testing import CliRunner

from calstats import __version__
from calstats.cli.app import app

runner = CliRunner()

HEADER = "email,tz,free slots,personal,ignored,declined,not accepted,hiring,meeting,meeting hours,% meetings"


def _csv_lines(output: str):
    return [line for line in output.splitlines() if line.startswith(("email,", "mock.user@example.com,"))]


def test_report_with_mock_data(tmp_path):
    ignorelist = tmp_path / "ignorelist"
    ignorelist.write_text("1:1.*\n", encoding="utf-8")

    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(app, [
            "report", "mock.user@example.com",
            "--mock",
            "--ignorelist", str(ignorelist),
            "--start", "2024/11/25 07:00:00",
        ])

    assert result.exit_code == 0, result.output
    assert _csv_lines(result.stdout) == [
        HEADER,
        "mock.user@example.com,Europe/Berlin,7,3.0,0.5,3.0,1.0,1.0,1.5,2.5,6%",
    ]


def test_report_without_ignore_list_counts_everything_as_meeting(tmp_path):
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(app, [
            "report", "mock.user@example.com", "--mock", "--start", "2024/11/25 07:00:00",
        ])

    assert result.exit_code == 0, result.output
    assert _csv_lines(result.stdout)[1] == (
        "mock.user@example.com,Europe/Berlin,6,3.0,0.0,3.0,1.0,1.0,2.0,3.0,7%"
    )


def test_report_invalid_start_fails(tmp_path):
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(app, [
            "report", "mock.user@example.com", "--mock", "--start", "tomorrow",
        ])

    assert result.exit_code == 1
    assert "does not match format" in result.output


def test_report_requires_calendars(tmp_path):
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(app, ["report", "--mock"])

    assert result.exit_code == 1
    assert "No calendars" in result.output


def test_report_missing_explicit_ignore_list(tmp_path):
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(app, [
            "report", "mock.user@example.com", "--mock", "--ignorelist", "missing.txt",
        ])

    assert result.exit_code == 1
    assert "Unable to read ignore list" in result.output


def test_slots_command(tmp_path):
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(app, [
            "slots", "--start", "2024/11/22 07:00:00", "--days", "2",
        ])

    assert result.exit_code == 0, result.output
    assert "Fri Nov 22 Morning" in result.output
    assert "Mon Nov 25 Afternoon" in result.output
    assert "Sat" not in result.output


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output
