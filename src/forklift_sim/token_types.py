"""
Token Types for the movement-command language

Shared between the grammar gate, the lexer and the validator to avoid
circular dependencies.
"""

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    """Movement directions - mirrors the grammar's letter terminal"""

    FORWARD = 'F'
    BACKWARD = 'B'
    TURN_LEFT = 'L'
    TURN_RIGHT = 'R'

    @property
    def is_linear(self) -> bool:
        return self in (Direction.FORWARD, Direction.BACKWARD)

    @property
    def is_rotational(self) -> bool:
        return self in (Direction.TURN_LEFT, Direction.TURN_RIGHT)

    @classmethod
    def from_letter(cls, letter: str) -> 'Direction':
        return cls(letter)


LETTERS = frozenset(d.value for d in Direction)
DIGITS = frozenset('0123456789')


@dataclass(frozen=True)
class Tok:
    """Token with position info"""

    direction: Direction
    magnitude: int
    text: str = ''
    column: int = 0

    def __repr__(self):
        return f"Tok({self.direction.name}, {self.magnitude}, col {self.column})"
