"""
Lexer for mathexpr

Tokenizes expression text into a flat token stream.

Features:
- Single-pass tokenization
- Context-sensitive: an expectation set computed from the previous token
  decides which token kinds may come next (so '-' is infix after an
  operand and prefix everywhere else)
- Column tracking for error messages and highlighting
"""

from __future__ import annotations

import logging
from enum import Flag, auto
from typing import Callable, List, Optional, Tuple

from .errors import UnexpectedToken
from .ops import INFIX_CHARS, POSTFIX_CHARS, PREFIX_CHARS
from .token_types import TT, Tok

logger = logging.getLogger(__name__)

# ============================================================================
# Grammar state
# ============================================================================

class Expect(Flag):
    """Token kinds that may legally follow the previous token."""

    PAREN = auto()
    NAME = auto()
    NUMBER = auto()
    PREFIX = auto()
    INFIX = auto()
    POSTFIX = auto()
    COMMA = auto()

    # Start of input, after '(' / ',' / any infix or prefix operator.
    OPERAND = PAREN | NAME | NUMBER | PREFIX
    AFTER_NUMBER = PAREN | COMMA | INFIX | POSTFIX | NAME
    AFTER_NAME = PAREN | COMMA | INFIX | NAME | POSTFIX | NUMBER
    # After ')' or a postfix operator.
    AFTER_CLOSED = PAREN | COMMA | INFIX | POSTFIX | NAME | NUMBER


def expectation_after(last: Optional[Tok]) -> Expect:
    """Return the expectation set that applies after ``last`` (None = start of input)."""
    if last is None:
        return Expect.OPERAND

    match last.type:
        case TT.NUMBER:
            return Expect.AFTER_NUMBER
        case TT.NAME:
            return Expect.AFTER_NAME
        case TT.RPAR | TT.POSTFIX:
            return Expect.AFTER_CLOSED
        case _:
            return Expect.OPERAND

# ============================================================================
# Lexer Implementation
# ============================================================================

class Lexer:
    """
    mathexpr lexer.

    Scanners are tried in a fixed order; a scanner only runs when its kind
    is in the current expectation set. The first scanner that matches wins.
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.tokens: List[Tok] = []
        self.expect = Expect.OPERAND

        self._scanners: Tuple[Tuple[Expect, Callable[[], Optional[Tok]]], ...] = (
            (Expect.PAREN, self.scan_paren),
            (Expect.COMMA, self.scan_comma),
            (Expect.INFIX, self.scan_infix),
            (Expect.POSTFIX, self.scan_postfix),
            (Expect.NAME, self.scan_name),
            (Expect.NUMBER, self.scan_number),
            (Expect.PREFIX, self.scan_prefix),
        )

    # ========================================================================
    # Main Tokenization
    # ========================================================================

    def tokenize(self) -> List[Tok]:
        """Tokenize entire source, return token list"""
        while True:
            self.skip_whitespace()
            if self.pos >= len(self.source):
                break
            self.scan_token()

        logger.debug("tokens for %r: %s", self.source, self.tokens)
        return self.tokens

    def scan_token(self) -> None:
        """Scan the next token allowed by the current expectation set"""
        for kind, scanner in self._scanners:
            if not (self.expect & kind):
                continue

            tok = scanner()
            if tok is not None:
                self.tokens.append(tok)
                self.expect = expectation_after(tok)
                return

        raise UnexpectedToken(self.peek(), column=self.pos + 1)

    # ========================================================================
    # Token Scanners
    # ========================================================================

    def scan_paren(self) -> Optional[Tok]:
        ch = self.peek()
        if ch == '(':
            return self.emit(TT.LPAR, ch, 1)
        if ch == ')':
            return self.emit(TT.RPAR, ch, 1)
        return None

    def scan_comma(self) -> Optional[Tok]:
        if self.peek() == ',':
            return self.emit(TT.COMMA, ',', 1)
        return None

    def scan_infix(self) -> Optional[Tok]:
        op = INFIX_CHARS.get(self.peek())
        if op is None:
            return None
        return self.emit(TT.INFIX, op, 1)

    def scan_prefix(self) -> Optional[Tok]:
        op = PREFIX_CHARS.get(self.peek())
        if op is None:
            return None
        return self.emit(TT.PREFIX, op, 1)

    def scan_postfix(self) -> Optional[Tok]:
        op = POSTFIX_CHARS.get(self.peek())
        if op is None:
            return None
        return self.emit(TT.POSTFIX, op, 1)

    def scan_name(self) -> Optional[Tok]:
        """Scan a name: letters and underscores, no digits"""
        end = self.pos
        while end < len(self.source) and (self.source[end].isalpha() or self.source[end] == '_'):
            end += 1

        if end == self.pos:
            return None
        return self.emit(TT.NAME, self.source[self.pos:end], end - self.pos)

    def scan_number(self) -> Optional[Tok]:
        """Scan number literal: digits with at most one decimal point"""
        end = self.pos
        seen_dot = False
        digits = 0

        while end < len(self.source):
            ch = self.source[end]
            if '0' <= ch <= '9':
                digits += 1
            elif ch == '.' and not seen_dot:
                seen_dot = True
            else:
                break
            end += 1

        # A bare '.' is not a number
        if digits == 0:
            return None
        return self.emit(TT.NUMBER, self.source[self.pos:end], end - self.pos)

    # ========================================================================
    # Utilities
    # ========================================================================

    def peek(self, offset: int = 0) -> str:
        """Look ahead at character"""
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return '\0'

    def skip_whitespace(self) -> None:
        while self.pos < len(self.source) and self.source[self.pos].isspace():
            self.pos += 1

    def emit(self, token_type: TT, value, length: int) -> Tok:
        """Build a token for the next ``length`` characters and consume them"""
        tok = Tok(
            type=token_type,
            value=value,
            column=self.pos + 1,
            lexeme=self.source[self.pos:self.pos + length],
        )
        self.pos += length
        return tok


def tokenize(source: str) -> List[Tok]:
    """Convenience function to tokenize source"""
    return Lexer(source).tokenize()
