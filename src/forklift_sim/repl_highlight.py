"""prompt_toolkit lexer for live movement-command highlighting in the REPL."""

from __future__ import annotations

from typing import Callable

from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer

from .lexer_rd import Lexer as CmdLexer, LexError
from .token_types import Tok

# Map highlight groups → prompt_toolkit style strings.
GROUP_STYLE = {
    "linear": "bold ansicyan",
    "rotational": "bold ansiyellow",
    "number": "ansimagenta",
    "slash": "bold ansiblue",
    "error": "bold ansired",
}


def _token_spans(tok: Tok) -> StyleAndTextTuples:
    group = "linear" if tok.direction.is_linear else "rotational"
    return [
        (GROUP_STYLE[group], tok.text[0]),
        (GROUP_STYLE["number"], tok.text[1:]),
    ]


def _highlight_line(text: str, case_sensitive: bool = True) -> StyleAndTextTuples:
    """Tokenize a single line and return styled fragments."""
    if not text:
        return [("", "")]

    if text.startswith("/"):
        head, sep, rest = text.partition(" ")
        return [(GROUP_STYLE["slash"], head), ("", sep + rest)]

    lexer = CmdLexer(text, case_sensitive=case_sensitive)
    result: StyleAndTextTuples = []
    consumed = 0

    try:
        for tok in lexer.iter_tokens():
            result.extend(_token_spans(tok))
            consumed = lexer.pos
    except LexError:
        # Everything from the first bad token onwards is shown as an error.
        result.append((GROUP_STYLE["error"], text[consumed:]))

    return result if result else [("", text)]


class CommandLexer(Lexer):
    """prompt_toolkit Lexer that highlights movement commands using the RD lexer."""

    def __init__(self, case_sensitive: Callable[[], bool] = lambda: True):
        self.case_sensitive = case_sensitive

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = document.lines
        case_sensitive = self.case_sensitive()

        # Pre-compute highlights for all lines.
        cache: dict[int, StyleAndTextTuples] = {}

        def get_line(lineno: int) -> StyleAndTextTuples:
            if lineno not in cache:
                if lineno < len(lines):
                    cache[lineno] = _highlight_line(lines[lineno], case_sensitive)
                else:
                    cache[lineno] = [("", "")]

            return cache[lineno]

        return get_line
