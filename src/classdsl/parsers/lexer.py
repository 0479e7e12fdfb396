"""Tokenizer for the class diagram notation.

Patterns are tried in a fixed priority order at every position: relationship
operators and the association arrow come before the generic identifier, so
that ``o--*`` or ``x--`` never lex as the start of a name.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto

from classdsl.errors import LexError


class TokenKind(Enum):
    Newline = auto()
    Ident = auto()
    String = auto()
    Number = auto()  # 12, -3.5
    Angle = auto()  # 90deg, 1.5rad
    RealizeAtoB = auto()  # ..|>
    RealizeBtoA = auto()  # <|..
    GeneralizeAtoB = auto()  # --|>
    GeneralizeBtoA = auto()  # <|--
    DependAtoB = auto()  # ..>
    DependBtoA = auto()  # <..
    Association = auto()  # o--*, x-->, --
    MetaOpen = auto()  # #[
    RBracket = auto()
    LParen = auto()
    RParen = auto()
    LBrace = auto()
    RBrace = auto()
    Comma = auto()
    Colon = auto()
    Plus = auto()
    Minus = auto()
    Tilde = auto()
    Hash = auto()
    Eof = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    offset: int
    line: int
    column: int

    def describe(self) -> str:
        if self.kind is TokenKind.Eof:
            return "end of input"
        if self.kind is TokenKind.Newline:
            return "newline"
        return repr(self.text)


# ─── Patterns ────────────────────────────────────────────────────────────────

_SKIP_RE = re.compile(r"[^\S\r\n]+|//[^\r\n]*|/\*.*?\*/", re.DOTALL)
_NEWLINE_RE = re.compile(r"\r\n|\n|\r")

# Left mark: diamond with optional inner cross, or a lone `<` / `x`.
# Right mark: diamond with optional inner cross, or a lone `x` / `>`.
_ASSOCIATION_RE = r"(?:[o*](?:-x)?|<|x)?--(?:(?:x-)?[o*]|x|>)?"

# Order is priority: the first pattern matching at a position wins.
_TOKEN_PATTERNS: list[tuple[TokenKind, re.Pattern[str]]] = [
    (TokenKind.RealizeAtoB, re.compile(re.escape("..|>"))),
    (TokenKind.RealizeBtoA, re.compile(re.escape("<|.."))),
    (TokenKind.GeneralizeAtoB, re.compile(re.escape("--|>"))),
    (TokenKind.GeneralizeBtoA, re.compile(re.escape("<|--"))),
    (TokenKind.DependAtoB, re.compile(re.escape("..>"))),
    (TokenKind.DependBtoA, re.compile(re.escape("<.."))),
    (TokenKind.Association, re.compile(_ASSOCIATION_RE)),
    (TokenKind.MetaOpen, re.compile(re.escape("#["))),
    (TokenKind.Angle, re.compile(r"[+-]?\d+(?:\.\d+)?[^\W\d]\w*")),
    (TokenKind.Number, re.compile(r"[+-]?\d+(?:\.\d+)?")),
    (TokenKind.String, re.compile(r'"[^"\\\r\n]*"')),
    (TokenKind.RBracket, re.compile(re.escape("]"))),
    (TokenKind.LParen, re.compile(re.escape("("))),
    (TokenKind.RParen, re.compile(re.escape(")"))),
    (TokenKind.LBrace, re.compile(re.escape("{"))),
    (TokenKind.RBrace, re.compile(re.escape("}"))),
    (TokenKind.Comma, re.compile(re.escape(","))),
    (TokenKind.Colon, re.compile(re.escape(":"))),
    (TokenKind.Plus, re.compile(re.escape("+"))),
    (TokenKind.Minus, re.compile(re.escape("-"))),
    (TokenKind.Tilde, re.compile(re.escape("~"))),
    (TokenKind.Hash, re.compile(re.escape("#"))),
    # identifier start is a letter or underscore; hyphens may continue a name
    (TokenKind.Ident, re.compile(r"[^\W\d][\w-]*")),
]


@dataclass
class _Lexer:
    """Cursor over the input string that tracks line and column."""

    src: str
    pos: int = 0
    line: int = 1
    line_start: int = 0

    def eof(self) -> bool:
        return self.pos >= len(self.src)

    def column(self) -> int:
        return self.pos - self.line_start + 1

    def advance_to(self, end: int) -> None:
        # only comments and newlines can span lines
        for m in _NEWLINE_RE.finditer(self.src, self.pos, end):
            self.line += 1
            self.line_start = m.end()
        self.pos = end

    def skip_insignificant(self) -> None:
        while True:
            m = _SKIP_RE.match(self.src, self.pos)
            if not m:
                return
            self.advance_to(m.end())

    def make(self, kind: TokenKind, end: int) -> Token:
        token = Token(kind, self.src[self.pos : end], self.pos, self.line, self.column())
        self.advance_to(end)
        return token

    def next_token(self) -> Token:
        self.skip_insignificant()
        if self.eof():
            return Token(TokenKind.Eof, "", self.pos, self.line, self.column())
        m = _NEWLINE_RE.match(self.src, self.pos)
        if m:
            return self.make(TokenKind.Newline, m.end())
        for kind, pattern in _TOKEN_PATTERNS:
            m = pattern.match(self.src, self.pos)
            if m:
                return self.make(kind, m.end())
        raise LexError(self.unexpected(), self.pos, self.line, self.column())

    def unexpected(self) -> str:
        if self.src.startswith("/*", self.pos):
            return "unterminated block comment"
        if self.src.startswith('"', self.pos):
            return "unterminated or invalid string literal"
        return f"unexpected character {self.src[self.pos]!r}"


def iter_tokens(src: str) -> Iterator[Token]:
    """Yield tokens of ``src`` one at a time, ending with a single Eof token.

    A LexError is raised only when the scan reaches the offending position.
    """
    lexer = _Lexer(src=src)
    while True:
        token = lexer.next_token()
        yield token
        if token.kind is TokenKind.Eof:
            return


def tokenize(src: str) -> list[Token]:
    """Split ``src`` into tokens, ending with a single Eof token.

    Whitespace other than line breaks and both comment forms are dropped.

    Raises:
        LexError: If no token matches at some position.
    """
    return list(iter_tokens(src))
