"""Per-session history of successful simulation runs."""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from loguru import logger

from .types import SimulationRun


class Ledger:
    """Append-only history of simulation runs, newest first.

    There is no way to remove or replace an entry; a fresh
    session starts a fresh ledger.
    """

    def __init__(self) -> None:
        self._runs: List[SimulationRun] = []

    def append(self, run: SimulationRun) -> None:
        if not isinstance(run, SimulationRun):
            raise TypeError(f"expected SimulationRun, got {type(run).__name__}")

        self._runs.insert(0, run)
        logger.info("ledger: recorded {!r} ({} total)", run, len(self._runs))

    @property
    def runs(self) -> Tuple[SimulationRun, ...]:
        return tuple(self._runs)

    def latest(self) -> Optional[SimulationRun]:
        return self._runs[0] if self._runs else None

    def __len__(self) -> int:
        return len(self._runs)

    def __iter__(self) -> Iterator[SimulationRun]:
        return iter(tuple(self._runs))

    def __getitem__(self, index: int) -> SimulationRun:
        return self._runs[index]

    def __bool__(self) -> bool:
        return bool(self._runs)

    def __repr__(self) -> str:
        return f"<Ledger runs={len(self._runs)}>"
