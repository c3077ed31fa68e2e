from __future__ import annotations

import os as _os
import sys
from typing import Optional

from loguru import logger

ENV_IGNORE_CASE = "FORKLIFT_SIM_IGNORE_CASE"
ENV_INVENTORY = "FORKLIFT_SIM_INVENTORY"
ENV_LOG_LEVEL = "FORKLIFT_SIM_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{line} | {message}"

_TRUTHY = ("1", "true", "yes", "on")


def env_flag(name: str) -> bool:
    return _os.environ.get(name, "").strip().lower() in _TRUTHY


def ignore_case_enabled() -> bool:
    return env_flag(ENV_IGNORE_CASE)


def inventory_path_from_env() -> Optional[str]:
    """Inventory JSON path from the environment, or None if unset/blank."""
    raw = _os.environ.get(ENV_INVENTORY, "").strip()
    return raw or None


def log_level_from_env() -> str:
    return _os.environ.get(ENV_LOG_LEVEL, "").strip().upper() or DEFAULT_LOG_LEVEL


def configure_logging(level: Optional[str] = None, sink=None) -> int:
    """Replace loguru's default sink with a single sink, stderr unless given.

    Returns the sink id so callers can remove it again.
    """
    logger.remove()
    return logger.add(
        sink if sink is not None else sys.stderr,
        level=level or log_level_from_env(),
        format=LOG_FORMAT,
        backtrace=False,
        diagnose=False,
    )
