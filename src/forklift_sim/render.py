"""Plain-text rendering of simulation history and inventory."""

from __future__ import annotations

from typing import Iterable, List

from .inventory import Forklift
from .types import SimulationRun

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_run(run: SimulationRun) -> List[str]:
    if run.equipment is not None:
        head = f"Forklift: {run.equipment.label()}"
    else:
        head = "Forklift: unresolved"

    lines = [
        head,
        f'Command: "{run.raw_command}" - {run.timestamp.strftime(TIMESTAMP_FORMAT)}',
    ]

    for action in run.actions:
        lines.append(f"  {action.glyph.symbol} {action.description}")

    return lines


def format_history(runs: Iterable[SimulationRun]) -> str:
    blocks = ["\n".join(format_run(run)) for run in runs]
    if not blocks:
        return "No simulations yet."
    return "\n\n".join(blocks)


def format_inventory(snapshot: Iterable[Forklift]) -> str:
    lines = [f"{f.label()} manufactured {f.manufacturing_date}" for f in snapshot]
    return "\n".join(lines) if lines else "No forklifts in inventory."
