from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import pytest

from forklift_sim.lexer_rd import LexError, Lexer, TokenStream, tokenize
from forklift_sim.token_types import Direction

F, B, L, R = (
    Direction.FORWARD,
    Direction.BACKWARD,
    Direction.TURN_LEFT,
    Direction.TURN_RIGHT,
)


@dataclass(frozen=True)
class Case:
    """Unified lexer case payload."""

    name: str
    source: str
    expected: Optional[Tuple[Tuple[Direction, int], ...]] = None
    err_col: Optional[int] = None
    case_sensitive: bool = True


TOKEN_CASES: List[Case] = [
    Case("forward", "F10", expected=((F, 10),)),
    Case("backward", "B5", expected=((B, 5),)),
    Case("left", "L90", expected=((L, 90),)),
    Case("right", "R270", expected=((R, 270),)),
    Case("zero", "F0", expected=((F, 0),)),
    Case("leading-zeros", "F007", expected=((F, 7),)),
    Case("big-magnitude", "B123456789012", expected=((B, 123456789012),)),
    Case(
        "sequence",
        "F10R90L90B5",
        expected=((F, 10), (R, 90), (L, 90), (B, 5)),
    ),
    Case("rotation-out-of-range-still-lexes", "R45", expected=((R, 45),)),
    Case("repeat-letter", "F1F2F3", expected=((F, 1), (F, 2), (F, 3))),
    Case("empty", "", expected=()),
    Case("lowercase-folded", "f10r90", expected=((F, 10), (R, 90)), case_sensitive=False),
    Case("mixed-case-folded", "F1b2L3r4", expected=((F, 1), (B, 2), (L, 3), (R, 4)), case_sensitive=False),
]

ERROR_CASES: List[Case] = [
    Case("lowercase-strict", "f10", err_col=1),
    Case("dangling-letter", "F10R", err_col=5),
    Case("digits-first", "10F", err_col=1),
    Case("space", "F10 R90", err_col=4),
    Case("unknown-letter", "X5", err_col=1),
    Case("negative", "F-5", err_col=2),
    Case("decimal", "F1.5", err_col=3),
]


@pytest.mark.parametrize("case", TOKEN_CASES, ids=lambda c: c.name)
def test_token_cases(case: Case) -> None:
    toks = tokenize(case.source, case_sensitive=case.case_sensitive)
    assert tuple((t.direction, t.magnitude) for t in toks) == case.expected


@pytest.mark.parametrize("case", ERROR_CASES, ids=lambda c: c.name)
def test_error_cases(case: Case) -> None:
    with pytest.raises(LexError) as exc_info:
        tokenize(case.source, case_sensitive=case.case_sensitive)
    assert exc_info.value.column == case.err_col


def test_token_text_and_columns() -> None:
    toks = tokenize("F10R90B5")
    assert [t.text for t in toks] == ["F10", "R90", "B5"]
    assert [t.column for t in toks] == [1, 4, 7]


def test_folded_token_keeps_source_text() -> None:
    (tok,) = tokenize("l180", case_sensitive=False)
    assert tok.direction is L
    assert tok.text == "l180"


def test_iter_tokens_is_lazy() -> None:
    it = Lexer("F1Z").iter_tokens()
    first = next(it)
    assert (first.direction, first.magnitude) == (F, 1)
    with pytest.raises(LexError):
        next(it)


def test_token_stream_is_restartable() -> None:
    stream = TokenStream("F10R90L90B5")
    first = list(stream)
    second = list(stream)
    assert first == second
    assert len(first) == 4


def test_token_stream_defers_errors_until_iteration() -> None:
    stream = TokenStream("F10?")
    with pytest.raises(LexError):
        list(stream)


def test_direction_classes() -> None:
    assert F.is_linear and B.is_linear
    assert L.is_rotational and R.is_rotational
    assert not F.is_rotational
    assert not R.is_linear
