import json
import logging

import pytest
from norma_eval.logging_config import JsonFormatter, get_logger, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestGetLogger:
    def test_prefixes_name(self):
        assert get_logger("runner").name == "norma_eval.runner"

    def test_keeps_qualified_name(self):
        assert get_logger("norma_eval.report").name == "norma_eval.report"


class TestJsonFormatter:
    def test_includes_extra_fields(self):
        record = logging.LogRecord(
            "norma_eval.runner", logging.WARNING, __file__, 10,
            "Run %s exited", ("geth/4",), None,
        )
        record.returncode = 3

        entry = json.loads(JsonFormatter().format(record))

        assert entry["level"] == "WARNING"
        assert entry["logger"] == "norma_eval.runner"
        assert entry["message"] == "Run geth/4 exited"
        assert entry["returncode"] == 3
        assert "msg" not in entry


class TestSetupLogging:
    def test_console_only_by_default(self, restore_root_logger, monkeypatch):
        monkeypatch.delenv("NORMA_EVAL_LOG_DIR", raising=False)

        setup_logging(level="debug")

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1

    def test_file_handlers_with_log_dir(self, restore_root_logger, tmp_path):
        setup_logging(level="INFO", log_dir=str(tmp_path / "logs"))

        get_logger("runner").error("boom", extra={"returncode": 3})

        assert len(restore_root_logger.handlers) == 3
        assert (tmp_path / "logs" / "norma_eval.log").exists()
        errors = (tmp_path / "logs" / "norma_eval_errors.log").read_text().splitlines()
        entry = json.loads(errors[-1])
        assert entry["message"] == "boom"
        assert entry["returncode"] == 3

    def test_reads_environment(self, restore_root_logger, monkeypatch, tmp_path):
        monkeypatch.setenv("NORMA_EVAL_LOG_LEVEL", "warning")
        monkeypatch.setenv("NORMA_EVAL_LOG_DIR", str(tmp_path / "env_logs"))

        setup_logging()

        assert restore_root_logger.level == logging.WARNING
        assert len(restore_root_logger.handlers) == 3
        assert (tmp_path / "env_logs").is_dir()

    def test_module_level_override(self, restore_root_logger, monkeypatch):
        monkeypatch.setenv("NORMA_EVAL_LOG_LEVEL_PROCESS", "error")

        setup_logging(level="INFO", enable_file=False)

        assert logging.getLogger("norma_eval.process").level == logging.ERROR
        logging.getLogger("norma_eval.process").setLevel(logging.NOTSET)
