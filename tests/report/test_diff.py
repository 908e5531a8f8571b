import logging
import pytest
from unittest.mock import Mock, patch
from norma_eval.exceptions import DriverInvocationError
from norma_eval.report.diff import build_diff_command, run_diff

DRIVER = ["go", "run", "./driver/norma"]


class TestBuildDiffCommand:
    def test_paths_in_collection_order(self):
        cmd = build_diff_command(DRIVER, ["/tmp/b.csv", "/tmp/a.csv"])
        assert cmd == ["go", "run", "./driver/norma", "diff", "/tmp/b.csv", "/tmp/a.csv"]

    def test_empty_paths_are_kept(self):
        cmd = build_diff_command(DRIVER, ["/tmp/a.csv", "", "/tmp/c.csv"])
        assert cmd[4:] == ["/tmp/a.csv", "", "/tmp/c.csv"]


class TestRunDiff:
    @patch("norma_eval.report.diff.subprocess.run")
    def test_runs_driver_diff(self, mock_run, capsys):
        mock_run.return_value = Mock(returncode=0)

        assert run_diff(DRIVER, ["/tmp/a.csv", "/tmp/b.csv"]) == 0

        mock_run.assert_called_once_with(
            ["go", "run", "./driver/norma", "diff", "/tmp/a.csv", "/tmp/b.csv"]
        )
        assert capsys.readouterr().out == (
            "Running go run ./driver/norma diff /tmp/a.csv /tmp/b.csv ..\n"
        )

    @patch("norma_eval.report.diff.subprocess.run")
    def test_forwards_empty_paths(self, mock_run, capsys, caplog):
        mock_run.return_value = Mock(returncode=0)

        run_diff(DRIVER, ["", "/tmp/b.csv", ""])

        assert mock_run.call_args[0][0][4:] == ["", "/tmp/b.csv", ""]
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert warnings[0].name == "norma_eval.report"
        assert warnings[0].getMessage().startswith("2 of 3 runs exported no raw data")
        assert warnings[0].missing == 2
        assert warnings[0].total == 3

    @patch("norma_eval.report.diff.subprocess.run")
    def test_no_warning_when_all_paths_present(self, mock_run, capsys, caplog):
        mock_run.return_value = Mock(returncode=0)

        run_diff(DRIVER, ["/tmp/a.csv", "/tmp/b.csv"])

        assert [r for r in caplog.records if r.levelno >= logging.WARNING] == []

    @patch("norma_eval.report.diff.subprocess.run")
    def test_returns_driver_status(self, mock_run, capsys):
        mock_run.return_value = Mock(returncode=1)

        assert run_diff(DRIVER, ["/tmp/a.csv"]) == 1

    def test_missing_driver(self, capsys):
        with pytest.raises(DriverInvocationError):
            run_diff(["no-such-driver-binary"], ["/tmp/a.csv"])

    def test_real_child(self, python_command, capsys):
        driver = python_command("import sys; sys.exit(0 if sys.argv[1:] == ['diff', 'x', ''] else 5)")

        assert run_diff(driver, ["x", ""]) == 0
