"""
Lexer for movement commands

Tokenizes a command string such as ``F10R90L90B5`` into a stream of
(direction, magnitude) tokens.

Features:
- Single-pass tokenization, left to right
- Position tracking (column)
- Case mode shared with the grammar gate
- Restartable lazy token stream
"""

from typing import Iterator, List

from loguru import logger

from .token_types import DIGITS, LETTERS, Direction, Tok

# ============================================================================
# Lexer Implementation
# ============================================================================

class Lexer:
    """
    Movement-command lexer.

    Each token is a direction letter followed by one or more decimal digits.
    There are no separators: the next letter ends the current magnitude.
    """

    def __init__(self, source: str, case_sensitive: bool = True):
        self.source = source
        self.case_sensitive = case_sensitive
        self.pos = 0
        self.column = 1

    # ========================================================================
    # Main Tokenization
    # ========================================================================

    def tokenize(self) -> List[Tok]:
        """Tokenize entire source, return token list"""
        return list(self.iter_tokens())

    def iter_tokens(self) -> Iterator[Tok]:
        """Yield tokens lazily until the source is exhausted"""
        while self.pos < len(self.source):
            yield self.scan_token()

    def scan_token(self) -> Tok:
        """Scan one letter+digits pair"""
        start_column = self.column
        start = self.pos
        direction = self.scan_letter()

        if self.peek() not in DIGITS:
            raise LexError(
                f"Expected digits after '{self.source[start]}' at col {self.column}",
                self.column,
            )

        digits = ''
        while self.peek() in DIGITS:
            digits += self.advance()

        tok = Tok(
            direction=direction,
            magnitude=int(digits, 10),
            text=self.source[start:self.pos],
            column=start_column,
        )
        logger.debug("lexed {!r}", tok)
        return tok

    def scan_letter(self) -> Direction:
        ch = self.peek()
        letter = ch if self.case_sensitive else ch.upper()

        if letter not in LETTERS:
            raise LexError(f"Unexpected character {ch!r} at col {self.column}", self.column)

        self.advance()
        return Direction.from_letter(letter)

    # ========================================================================
    # Utilities
    # ========================================================================

    def peek(self, offset: int = 0) -> str:
        """Look ahead at character, '' past the end"""
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return ''

    def advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        self.column += 1
        return ch


class LexError(Exception):
    """Lexical analysis error"""

    def __init__(self, message: str, column: int = 0):
        self.column = column
        super().__init__(message)


class TokenStream:
    """Finite, restartable lazy sequence of tokens over one source string.

    Every iteration starts a fresh scan, so the stream can be walked any
    number of times and always yields the same tokens.
    """

    def __init__(self, source: str, case_sensitive: bool = True):
        self.source = source
        self.case_sensitive = case_sensitive

    def __iter__(self) -> Iterator[Tok]:
        return Lexer(self.source, case_sensitive=self.case_sensitive).iter_tokens()

    def __repr__(self) -> str:
        return f"TokenStream({self.source!r})"


def tokenize(source: str, case_sensitive: bool = True) -> List[Tok]:
    """Convenience function to tokenize source"""
    return Lexer(source, case_sensitive=case_sensitive).tokenize()


if __name__ == '__main__':
    for tok in tokenize('F10R90L90B5'):
        print(tok)
