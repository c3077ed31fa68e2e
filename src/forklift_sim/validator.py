"""Range validation of lexed movement tokens.

The whole token sequence is always scanned. Linear and rotational tokens are
tracked by two independent flags, every offending token goes to the log, and
only then is the command accepted or rejected as a whole. A linear failure is
reported in preference to a rotational one.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

from loguru import logger

from .token_types import Tok
from .types import LinearRangeError, RotationalRangeError

MAX_DEGREES = 360
DEGREE_STEP = 90


def linear_magnitude_ok(magnitude: int) -> bool:
    # The grammar cannot express a sign; kept as an explicit guard.
    return magnitude >= 0


def rotational_magnitude_ok(magnitude: int) -> bool:
    return 0 <= magnitude <= MAX_DEGREES and magnitude % DEGREE_STEP == 0


def validate_tokens(tokens: Iterable[Tok]) -> Tuple[Tok, ...]:
    """Return the tokens unchanged if every one is in range, else raise."""
    scanned = tuple(tokens)
    bad_linear: List[Tok] = []
    bad_rotational: List[Tok] = []

    for tok in scanned:
        if tok.direction.is_linear:
            if not linear_magnitude_ok(tok.magnitude):
                bad_linear.append(tok)
                logger.warning(
                    "Invalid meter command: {} at col {}. Should be 0 or greater.",
                    tok.text, tok.column,
                )
        elif not rotational_magnitude_ok(tok.magnitude):
            bad_rotational.append(tok)
            logger.warning(
                "Invalid turn command: {} at col {}. Degrees must be a multiple of 90, between 0 and 360.",
                tok.text, tok.column,
            )

    if bad_linear:
        raise LinearRangeError(tuple(bad_linear))

    if bad_rotational:
        raise RotationalRangeError(tuple(bad_rotational))

    return scanned
