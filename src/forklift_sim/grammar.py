"""Grammar gate: whole-string surface check of a movement command.

The gate only answers "is this shaped like ``{letter}{digits}+``"; range
rules are the validator's business.
"""

from __future__ import annotations

from functools import lru_cache

from lark import Lark, Tree, UnexpectedInput
from loguru import logger

from .types import FormatError

GRAMMAR_TEMPLATE = r"""
start: move+

move: DIRECTION MAGNITUDE

DIRECTION: {letters}
MAGNITUDE: /[0-9]+/
"""


def grammar_text(case_sensitive: bool = True) -> str:
    flag = "" if case_sensitive else "i"
    letters = " | ".join(f'"{ch}"{flag}' for ch in "FBLR")
    return GRAMMAR_TEMPLATE.format(letters=letters)


@lru_cache(maxsize=None)
def make_parser(case_sensitive: bool = True) -> Lark:
    # No %ignore: whitespace and separators are grammar errors.
    return Lark(grammar_text(case_sensitive), parser="lalr", lexer="basic")


def check_format(raw: str, case_sensitive: bool = True) -> Tree:
    """Return the parse tree for an accepted command, raise FormatError otherwise."""
    if not isinstance(raw, str):
        raise FormatError(repr(raw), detail=f"expected str, got {type(raw).__name__}")

    try:
        return make_parser(case_sensitive).parse(raw)
    except UnexpectedInput as exc:
        logger.debug("gate rejected {!r}: {}", raw, exc)
        raise FormatError(raw, detail=str(exc)) from None


def is_well_formed(raw: str, case_sensitive: bool = True) -> bool:
    try:
        check_format(raw, case_sensitive)
    except FormatError:
        return False
    return True


def count_moves(tree: Tree) -> int:
    return sum(1 for _ in tree.find_data("move"))
