from __future__ import annotations

import logging
from pathlib import Path

import pytest

from common.base.logging import (
    ROOT_LOGGER_NAME,
    SanitizeRichHandler,
    get_logger,
    normalize_level,
    normalize_use_rich,
    setup_logging,
)


def test_get_logger_is_namespaced() -> None:
    child = get_logger("sanitize.scheduler")
    assert child.name == f"{ROOT_LOGGER_NAME}.sanitize.scheduler"
    assert get_logger().name == ROOT_LOGGER_NAME


@pytest.mark.parametrize(
    ("value", "expected"),
    [("debug", "DEBUG"), (" Error ", "ERROR"), (logging.INFO, "INFO"), ("loud", "WARNING"), (None, "WARNING")],
)
def test_normalize_level(value: object, expected: str) -> None:
    assert normalize_level(value) == expected


def test_normalize_use_rich() -> None:
    assert normalize_use_rich("auto") is None
    assert normalize_use_rich("on") is True
    assert normalize_use_rich("No") is False
    assert normalize_use_rich(True) is True


def test_setup_logging_writes_log_file(tmp_path: Path) -> None:
    logger = setup_logging("info", use_rich=False, log_dir=tmp_path / "logs", file_prefix="unit")

    get_logger("tests").warning("something happened")

    assert logger.log_file is not None
    assert logger.log_file.parent == tmp_path / "logs"
    assert logger.log_file.name.startswith("unit_")
    for handler in logger.handlers:
        handler.flush()
    content = logger.log_file.read_text(encoding="utf-8")
    assert "[WARNING] sanitizefs.tests: something happened" in content


def test_setup_logging_console_only_by_default(capsys: pytest.CaptureFixture[str]) -> None:
    logger = setup_logging(use_rich=False)

    get_logger("tests").info("hidden at default level")
    get_logger("tests").warning("shown on stderr")

    assert logger.log_file is None
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "shown on stderr" in captured.err
    assert "hidden at default level" not in captured.err


def test_setup_logging_rich_handler() -> None:
    logger = setup_logging("DEBUG", use_rich=True)
    assert logger.rich_enabled is True
    assert any(isinstance(handler, SanitizeRichHandler) for handler in logger.handlers)
