"""prompt_toolkit lexer for live expression highlighting in the REPL."""

from __future__ import annotations

import re
from typing import Callable, Collection, List, Optional

from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer

from .errors import UnexpectedToken
from .lexer import Lexer as ExprLexer
from .token_types import TT, Tok

# Map highlight groups → prompt_toolkit style strings.
GROUP_STYLE = {
    "number": "ansimagenta",
    "identifier": "",
    "function": "bold ansiyellow",
    "operator": "ansicyan",
    "punctuation": "",
    "assign": "bold",
    "command": "bold ansiblue",
    "error": "bold ansired",
}

# Token type → highlight group.
_TT_GROUP = {
    TT.NUMBER: "number",
    TT.NAME: "identifier",
    TT.INFIX: "operator",
    TT.PREFIX: "operator",
    TT.POSTFIX: "operator",
    TT.LPAR: "punctuation",
    TT.RPAR: "punctuation",
    TT.COMMA: "punctuation",
}

# "name = " at the start of a REPL assignment line.
ASSIGN_RE = re.compile(r"^(\s*)([^\W\d]+)(\s*=(?!=)\s*)")


def _scan(text: str) -> tuple[List[Tok], Optional[int]]:
    """Tokenize as far as possible; return the tokens and the 0-based offset of the first bad character."""
    lexer = ExprLexer(text)
    try:
        return lexer.tokenize(), None
    except UnexpectedToken:
        return lexer.tokens, lexer.pos


def _is_call(tokens: List[Tok], idx: int) -> bool:
    nxt = idx + 1
    return nxt < len(tokens) and tokens[nxt].type == TT.LPAR


def highlight_expression(text: str, functions: Collection[str] = ()) -> StyleAndTextTuples:
    """Return styled fragments for one expression. Names in ``functions`` that are called are styled as functions."""
    if not text:
        return [("", "")]

    tokens, bad_offset = _scan(text)
    result: StyleAndTextTuples = []
    pos = 0

    for i, tok in enumerate(tokens):
        start = tok.column - 1
        if start > pos:
            result.append(("", text[pos:start]))

        group = _TT_GROUP.get(tok.type, "")
        if tok.type == TT.NAME and tok.value in functions and _is_call(tokens, i):
            group = "function"
        result.append((GROUP_STYLE.get(group, ""), tok.lexeme))
        pos = start + len(tok.lexeme)

    if bad_offset is not None:
        if bad_offset > pos:
            result.append(("", text[pos:bad_offset]))
        result.append((GROUP_STYLE["error"], text[bad_offset:]))
        pos = len(text)

    # Trailing whitespace.
    if pos < len(text):
        result.append(("", text[pos:]))

    return result if result else [("", text)]


def _highlight_line(text: str, functions: Collection[str]) -> StyleAndTextTuples:
    if text.lstrip().startswith("/"):
        return [(GROUP_STYLE["command"], text)]

    match = ASSIGN_RE.match(text)
    if match is None:
        return highlight_expression(text, functions)

    lead, name, eq = match.groups()
    head: StyleAndTextTuples = [
        ("", lead),
        (GROUP_STYLE["identifier"], name),
        (GROUP_STYLE["assign"], eq),
    ]
    rest = text[match.end():]
    return head + (highlight_expression(rest, functions) if rest else [])


class ExpressionLexer(Lexer):
    """prompt_toolkit Lexer that highlights expressions using the mathexpr lexer."""

    def __init__(self, functions: Optional[Callable[[], Collection[str]]] = None):
        # Called per document so functions added mid-session are picked up
        self._functions = functions or (lambda: ())

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = document.lines
        functions = self._functions()

        cache: dict[int, StyleAndTextTuples] = {}

        def get_line(lineno: int) -> StyleAndTextTuples:
            if lineno not in cache:
                if lineno < len(lines):
                    cache[lineno] = _highlight_line(lines[lineno], functions)
                else:
                    cache[lineno] = [("", "")]

            return cache[lineno]

        return get_line
