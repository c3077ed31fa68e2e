from __future__ import annotations

from typing import List

import pytest

from forklift_sim.lexer_rd import TokenStream, tokenize
from forklift_sim.token_types import Direction, Tok
from forklift_sim.types import ErrorKind, LinearRangeError, RotationalRangeError
from forklift_sim.validator import linear_magnitude_ok, rotational_magnitude_ok, validate_tokens


@pytest.mark.parametrize("degrees", [0, 90, 180, 270, 360])
def test_rotation_multiples_of_90_accepted(degrees: int) -> None:
    assert rotational_magnitude_ok(degrees)


@pytest.mark.parametrize("degrees", [1, 45, 89, 91, 359, 361, 450, 720, -90])
def test_rotation_out_of_range_rejected(degrees: int) -> None:
    assert not rotational_magnitude_ok(degrees)


def test_linear_guard() -> None:
    assert linear_magnitude_ok(0)
    assert linear_magnitude_ok(10_000)
    assert not linear_magnitude_ok(-1)


def test_valid_tokens_returned_unchanged() -> None:
    toks = tokenize("F10R90L90B5")
    assert validate_tokens(toks) == tuple(toks)


def test_accepts_restartable_stream() -> None:
    stream = TokenStream("F1L180")
    assert len(validate_tokens(stream)) == 2
    assert len(validate_tokens(stream)) == 2


@pytest.mark.parametrize(
    "source",
    [
        pytest.param("R45", id="not-multiple"),
        pytest.param("R450", id="over-360"),
        pytest.param("F10R45B5", id="one-bad-among-good"),
        pytest.param("L90R91", id="last-bad"),
    ],
)
def test_rotational_failure_rejects_whole_command(source: str) -> None:
    with pytest.raises(RotationalRangeError) as exc_info:
        validate_tokens(tokenize(source))
    assert exc_info.value.kind is ErrorKind.ROTATIONAL_RANGE


def test_scan_continues_after_first_failure(log_messages: List[str]) -> None:
    with pytest.raises(RotationalRangeError) as exc_info:
        validate_tokens(tokenize("R45F1L10R90L370"))

    invalid = exc_info.value.invalid
    assert [t.text for t in invalid] == ["R45", "L10", "L370"]
    assert len(log_messages) == 3
    assert all("Invalid turn command" in m for m in log_messages)


def test_linear_failure_takes_priority() -> None:
    # Hand-built tokens: the grammar itself can never yield a negative magnitude.
    toks = [
        Tok(Direction.TURN_LEFT, 45, "L45", 1),
        Tok(Direction.FORWARD, -3, "F-3", 4),
    ]
    with pytest.raises(LinearRangeError) as exc_info:
        validate_tokens(toks)

    err = exc_info.value
    assert err.kind is ErrorKind.LINEAR_RANGE
    assert [t.text for t in err.invalid] == ["F-3"]
    assert err.user_message == "Invalid meter command: Metres must be 0 or greater."


def test_only_one_class_message(log_messages: List[str]) -> None:
    toks = [
        Tok(Direction.BACKWARD, -1, "B-1", 1),
        Tok(Direction.TURN_RIGHT, 10, "R10", 4),
    ]
    with pytest.raises(LinearRangeError) as exc_info:
        validate_tokens(toks)

    # Both tokens were diagnosed, only the linear class is reported.
    assert len(log_messages) == 2
    assert str(exc_info.value) == LinearRangeError.user_message


def test_validator_is_pure() -> None:
    toks = tokenize("F10R90")
    assert validate_tokens(toks) == validate_tokens(toks)
