from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest
import yaml

from pwcheck.dispatch.task import ConsoleFeedback
from pwcheck.results.writer import ResultLogger


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo handlers installed by configure_logging during CLI tests."""

    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        if handler not in saved_handlers and type(handler) in (logging.StreamHandler, logging.FileHandler):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(saved_level)
    logging.getLogger("pwcheck").setLevel(logging.NOTSET)


@pytest.fixture
def result_log_path(tmp_path: Path) -> Path:
    return tmp_path / "logs" / "registro.txt"


@pytest.fixture
def result_logger(result_log_path: Path) -> ResultLogger:
    return ResultLogger(result_log_path)


@pytest.fixture
def console() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def feedback(console: io.StringIO) -> ConsoleFeedback:
    return ConsoleFeedback(console)


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A throwaway project root with its own configs/settings.yaml."""

    root = tmp_path / "project"
    (root / "configs").mkdir(parents=True)
    settings = {
        "paths": {
            "result_log_file": "./registro.txt",
            "artifacts_root": "./artifacts",
            "logs_root": "./logs",
        },
        "dispatcher": {"workers": 2},
    }
    (root / "configs" / "settings.yaml").write_text(yaml.safe_dump(settings), encoding="utf-8")
    monkeypatch.chdir(root)
    for name in ("PWCHECK_SETTINGS_FILE", "PWCHECK_DISPATCHER__WORKERS", "PWCHECK_PATHS__RESULT_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    return root
