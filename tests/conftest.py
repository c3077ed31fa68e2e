from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, Iterator, List

import pytest
from loguru import logger

BASE_DIR = Path(__file__).resolve().parent.parent
SRC_DIR = (BASE_DIR / "src").resolve()

if str(BASE_DIR) not in sys.path:
    sys.path.append(str(BASE_DIR))
if str(SRC_DIR) not in sys.path:
    sys.path.append(str(SRC_DIR))


def pytest_collection_modifyitems(
    session: pytest.Session,
    config: pytest.Config,
    items: List[pytest.Item],
) -> None:
    """Fail fast if pytest ever generates duplicate node IDs."""
    del session
    del config

    seen: Dict[str, int] = {}
    duplicates: List[str] = []
    for item in items:
        nodeid = item.nodeid
        if nodeid in seen:
            duplicates.append(nodeid)
            continue
        seen[nodeid] = 1

    if not duplicates:
        return

    lines = "\n".join(f"- {nodeid}" for nodeid in sorted(set(duplicates)))
    raise pytest.UsageError(
        "Duplicate pytest nodeids detected during collection:\n" f"{lines}"
    )


@pytest.fixture
def log_messages() -> Iterator[List[str]]:
    """Collect WARNING+ loguru messages emitted during one test."""
    messages: List[str] = []
    sink_id = logger.add(
        lambda msg: messages.append(msg.record["message"]),
        level="WARNING",
    )
    try:
        yield messages
    finally:
        logger.remove(sink_id)


@pytest.fixture(autouse=True)
def _fresh_prompt_toolkit_session() -> Iterator[None]:
    """Give each test its own prompt_toolkit app session so its cached
    output binds to the current (possibly capsys-replaced) sys.stdout."""
    from prompt_toolkit.application import create_app_session

    with create_app_session():
        yield
