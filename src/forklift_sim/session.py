"""Simulation session: explicit state plus the command pipeline.

gate -> lexer -> validator -> action compiler -> equipment lookup -> ledger.
The ledger is touched exactly once per invocation and only when every stage
succeeded.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional, Sequence

from loguru import logger

from .actions import compile_actions
from .grammar import check_format
from .inventory import Forklift, resolve_equipment
from .ledger import Ledger
from .lexer_rd import LexError, TokenStream
from .notify import NullNotifier
from .types import (
    Actions,
    FormatError,
    Notifier,
    SelectionMissing,
    SimulationError,
    SimulationOutcome,
    SimulationRun,
    SUCCESS_MESSAGE,
)
from .validator import validate_tokens

InventoryProvider = Callable[[], Sequence[Forklift]]


def interpret(raw: str, case_sensitive: bool = True) -> Actions:
    """Turn a command string into actions or raise a SimulationError."""
    check_format(raw, case_sensitive)

    try:
        tokens = validate_tokens(TokenStream(raw, case_sensitive=case_sensitive))
    except LexError as exc:
        raise FormatError(raw, detail=str(exc)) from exc

    return compile_actions(tokens)


def _empty_inventory() -> Sequence[Forklift]:
    return ()


class SimulationSession:
    def __init__(
        self,
        inventory: Optional[InventoryProvider] = None,
        notifier: Optional[Notifier] = None,
        case_sensitive: bool = True,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.inventory = inventory or _empty_inventory
        self.notifier = notifier or NullNotifier()
        self.case_sensitive = case_sensitive
        self.clock = clock
        self.ledger = Ledger()
        self.selected_model = ""
        self.command_text = ""

    # ---------- state mutations ----------

    def select_equipment(self, model_number: str) -> None:
        self.selected_model = model_number.strip()

    def set_command_text(self, text: str) -> None:
        self.command_text = text

    def append_run(self, run: SimulationRun) -> None:
        self.ledger.append(run)

    # ---------- queries ----------

    def snapshot(self) -> Sequence[Forklift]:
        return tuple(self.inventory())

    def selected_equipment(self) -> Optional[Forklift]:
        if not self.selected_model:
            return None
        return resolve_equipment(self.selected_model, self.snapshot())

    # ---------- pipeline ----------

    def simulate(self, model_number: Optional[str] = None, command: Optional[str] = None) -> SimulationOutcome:
        model = (self.selected_model if model_number is None else model_number).strip()
        raw = self.command_text if command is None else command

        try:
            run = self._run_pipeline(model, raw)
        except SimulationError as exc:
            logger.debug("simulation of {!r} failed: {}", raw, exc.kind.value)
            self.notifier.notify_error(exc.user_message)
            return SimulationOutcome(error=exc)

        self.append_run(run)
        self.notifier.notify_success(SUCCESS_MESSAGE)
        return SimulationOutcome(run=run)

    def _run_pipeline(self, model: str, raw: str) -> SimulationRun:
        if not model:
            raise SelectionMissing()

        actions = interpret(raw, self.case_sensitive)
        equipment = resolve_equipment(model, self.snapshot())

        if equipment is None:
            logger.warning("model {!r} not in current inventory; recording run without equipment", model)

        return SimulationRun(
            timestamp=self.clock(),
            equipment=equipment,
            raw_command=raw,
            actions=actions,
        )
