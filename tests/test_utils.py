from __future__ import annotations

import sys

import pytest
from loguru import logger

from forklift_sim import utils


@pytest.mark.parametrize("raw, expected", [("1", True), ("Yes", True), (" on ", True), ("0", False), ("", False)])
def test_ignore_case_flag(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv(utils.ENV_IGNORE_CASE, raw)
    assert utils.ignore_case_enabled() is expected


def test_inventory_path(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(utils.ENV_INVENTORY, raising=False)
    assert utils.inventory_path_from_env() is None
    monkeypatch.setenv(utils.ENV_INVENTORY, "  ")
    assert utils.inventory_path_from_env() is None
    monkeypatch.setenv(utils.ENV_INVENTORY, "/tmp/forklifts.json")
    assert utils.inventory_path_from_env() == "/tmp/forklifts.json"


def test_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(utils.ENV_LOG_LEVEL, raising=False)
    assert utils.log_level_from_env() == "WARNING"
    monkeypatch.setenv(utils.ENV_LOG_LEVEL, "debug")
    assert utils.log_level_from_env() == "DEBUG"


def test_configure_logging_filters_by_level() -> None:
    messages = []
    sink_id = utils.configure_logging("ERROR", sink=lambda msg: messages.append(msg.record["message"]))
    try:
        logger.warning("dropped")
        logger.error("kept")
    finally:
        logger.remove(sink_id)
        logger.add(sys.__stderr__)

    assert messages == ["kept"]
