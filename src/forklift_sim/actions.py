"""Action compiler: validated tokens -> display-ready motion actions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple

from .token_types import Direction, Tok


class Glyph(Enum):
    """Directional icon references, valued by their terminal symbol."""

    ARROW_UP = "↑"
    ARROW_DOWN = "↓"
    ARROW_BACK = "←"
    ARROW_FORWARD = "→"

    @property
    def symbol(self) -> str:
        return self.value


@dataclass(frozen=True)
class Action:
    kind: Direction
    magnitude: int
    description: str
    glyph: Glyph

    def __repr__(self) -> str:
        return f"<{self.kind.name} {self.magnitude}>"


# Direction -> (description template, glyph)
_ACTION_TABLE = {
    Direction.FORWARD: ("Move Forward by {n} metres", Glyph.ARROW_UP),
    Direction.BACKWARD: ("Move Backward by {n} metres", Glyph.ARROW_DOWN),
    Direction.TURN_LEFT: ("Turn Left by {n} degrees", Glyph.ARROW_BACK),
    Direction.TURN_RIGHT: ("Turn Right by {n} degrees", Glyph.ARROW_FORWARD),
}


def compile_action(tok: Tok) -> Action:
    template, glyph = _ACTION_TABLE[tok.direction]
    return Action(
        kind=tok.direction,
        magnitude=tok.magnitude,
        description=template.format(n=tok.magnitude),
        glyph=glyph,
    )


def compile_actions(tokens: Iterable[Tok]) -> Tuple[Action, ...]:
    """Map validated tokens 1:1 onto actions, preserving source order."""
    return tuple(compile_action(tok) for tok in tokens)
