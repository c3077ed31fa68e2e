"""Simulation records, the error family and the outcome returned to callers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from typing_extensions import Protocol, TypeAlias

from .actions import Action
from .inventory import Forklift
from .token_types import Tok

# ---------- Simulation records ----------

Actions: TypeAlias = Tuple[Action, ...]

@dataclass(frozen=True)
class SimulationRun:
    timestamp: datetime
    equipment: Optional[Forklift]
    raw_command: str
    actions: Actions

    def __post_init__(self) -> None:
        if not self.actions:
            raise ValueError("a simulation run needs at least one action")

    @property
    def model_number(self) -> Optional[str]:
        return self.equipment.model_number if self.equipment is not None else None

    def __repr__(self) -> str:
        return f"<run {self.raw_command!r} actions={len(self.actions)} at {self.timestamp.isoformat()}>"

# ---------- Errors ----------

class ErrorKind(Enum):
    SELECTION_MISSING = "selection-missing"
    FORMAT = "format"
    LINEAR_RANGE = "linear-range"
    ROTATIONAL_RANGE = "rotational-range"

class SimulationError(Exception):
    """Terminal failure of one simulation attempt.

    ``user_message`` is the single line shown to the operator; anything more
    detailed belongs in the log.
    """
    kind: ErrorKind
    user_message: str = "Simulation failed."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.user_message)

class SelectionMissing(SimulationError):
    kind = ErrorKind.SELECTION_MISSING
    user_message = "Please select a forklift before simulating."

class FormatError(SimulationError):
    kind = ErrorKind.FORMAT
    user_message = "Invalid command format. Use like: F10R90L90B5"

    def __init__(self, raw: str = "", detail: Optional[str] = None):
        super().__init__()
        self.raw = raw
        self.detail = detail

class TokenRangeError(SimulationError):
    def __init__(self, invalid: Tuple[Tok, ...] = ()):
        super().__init__()
        self.invalid = invalid

class LinearRangeError(TokenRangeError):
    kind = ErrorKind.LINEAR_RANGE
    user_message = "Invalid meter command: Metres must be 0 or greater."

class RotationalRangeError(TokenRangeError):
    kind = ErrorKind.ROTATIONAL_RANGE
    user_message = "Invalid turn command: Degrees must be a multiple of 90, between 0 and 360."

# ---------- Outcome ----------

@dataclass(frozen=True)
class SimulationOutcome:
    run: Optional[SimulationRun] = None
    error: Optional[SimulationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None

    @property
    def message(self) -> str:
        if self.error is not None:
            return self.error.user_message
        return SUCCESS_MESSAGE

SUCCESS_MESSAGE = "Send operate commands to Forklift."

# ---------- Collaborators ----------

class Notifier(Protocol):
    def notify_error(self, message: str) -> None: ...
    def notify_success(self, message: str) -> None: ...
