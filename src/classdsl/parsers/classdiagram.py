"""Class diagram parser — recursive descent over the token stream.

Parses the notation into the AST types from syntax.types. The first error
aborts the parse; there is no recovery.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import TypeVar

from classdsl.errors import GrammarError, LiteralError
from classdsl.parsers.lexer import Token, TokenKind, iter_tokens
from classdsl.parsers.literals import DEFAULT_DECODERS, LiteralDecoders
from classdsl.syntax.types import (
    Association,
    Attribute,
    Bend,
    Classifier,
    Dependency,
    Diagram,
    Edge,
    EdgeKind,
    Generalization,
    Meta,
    MetaMap,
    Operation,
    Parameter,
    Point,
    Position,
    Realization,
    Statement,
    Via,
    meta_map,
)
from classdsl.types import ClassifierKind, Direction, MetaKey, Visibility

log = logging.getLogger(__name__)

T = TypeVar("T")

# keyword -> (kind, stereotype)
CLASSIFIER_KEYWORDS: dict[str, tuple[ClassifierKind, str | None]] = {
    "class": (ClassifierKind.Class, None),
    "dataType": (ClassifierKind.DataType, None),
    "enumeration": (ClassifierKind.Enumeration, None),
    "interface": (ClassifierKind.Interface, None),
    "primitive": (ClassifierKind.Primitive, None),
    "annotation": (ClassifierKind.Interface, "annotation"),
    "exception": (ClassifierKind.Class, "exception"),
    "struct": (ClassifierKind.Class, "struct"),
}

_VISIBILITIES: dict[TokenKind, Visibility] = {
    TokenKind.Minus: Visibility.Private,
    TokenKind.Tilde: Visibility.Package,
    TokenKind.Hash: Visibility.Protected,
    TokenKind.Plus: Visibility.Public,
}

_EDGE_OPERATORS: dict[TokenKind, EdgeKind] = {
    TokenKind.RealizeAtoB: Realization(Direction.AtoB),
    TokenKind.RealizeBtoA: Realization(Direction.BtoA),
    TokenKind.GeneralizeAtoB: Generalization(Direction.AtoB),
    TokenKind.GeneralizeBtoA: Generalization(Direction.BtoA),
    TokenKind.DependAtoB: Dependency(Direction.AtoB),
    TokenKind.DependBtoA: Dependency(Direction.BtoA),
}


@dataclass
class _Parser:
    """Stateful cursor pulling tokens from the lexer as the grammar needs them.

    Only a few lookahead tokens are buffered, so a lexical error further on
    cannot mask an earlier grammar error.
    """

    tokens: Iterator[Token]
    decoders: LiteralDecoders = field(default=DEFAULT_DECODERS)
    lookahead: list[Token] = field(default_factory=list)

    # ── Primitive helpers ─────────────────────────────────────────────────────

    def peek(self, ahead: int = 0) -> Token:
        while len(self.lookahead) <= ahead:
            if self.lookahead and self.lookahead[-1].kind is TokenKind.Eof:
                return self.lookahead[-1]
            self.lookahead.append(next(self.tokens))
        return self.lookahead[ahead]

    def at(self, kind: TokenKind) -> bool:
        return self.peek().kind is kind

    def at_keyword(self, word: str, ahead: int = 0) -> bool:
        token = self.peek(ahead)
        return token.kind is TokenKind.Ident and token.text == word

    def advance(self) -> Token:
        token = self.peek()
        if token.kind is not TokenKind.Eof:
            self.lookahead.pop(0)
        return token

    def accept(self, kind: TokenKind) -> Token | None:
        if self.at(kind):
            return self.advance()
        return None

    def accept_keyword(self, word: str) -> bool:
        if self.at_keyword(word):
            self.advance()
            return True
        return False

    def expect(self, kind: TokenKind, what: str) -> Token:
        if not self.at(kind):
            raise self.error(f"expected {what}")
        return self.advance()

    def error(self, message: str, token: Token | None = None) -> GrammarError:
        token = token or self.peek()
        return GrammarError(f"{message}, found {token.describe()}", token.offset, token.line, token.column)

    def decode(self, decoder: Callable[[str], T], token: Token) -> T:
        """Run a literal decoder, locating any failure at ``token``."""
        try:
            return decoder(token.text)
        except LiteralError as e:
            raise LiteralError(e.message, token.offset, token.line, token.column) from e

    def skip_newlines(self) -> int:
        count = 0
        while self.accept(TokenKind.Newline):
            count += 1
        return count

    def expect_newlines(self, what: str) -> None:
        if not self.skip_newlines():
            raise self.error(f"expected newline after {what}")

    def comma_list(self, item: Callable[[], T], close: TokenKind, what: str, allow_empty: bool) -> list[T]:
        """Parse ``item (, item)* ,?`` up to and including ``close``."""
        items: list[T] = []
        if allow_empty and self.accept(close):
            return items
        while True:
            items.append(item())
            if self.accept(close):
                return items
            if not self.accept(TokenKind.Comma):
                raise self.error(f"expected ',' or closing bracket in {what}")
            if self.accept(close):
                return items

    # ── Literals ──────────────────────────────────────────────────────────────

    def parse_name(self, what: str = "name") -> str:
        return self.expect(TokenKind.Ident, what).text

    def parse_name_or_string(self) -> str:
        token = self.peek()
        if token.kind is TokenKind.Ident:
            return self.advance().text
        if token.kind is TokenKind.String:
            return self.decode(self.decoders.string, self.advance())
        raise self.error("expected type name or string")

    def parse_number(self) -> float:
        return self.decode(self.decoders.number, self.expect(TokenKind.Number, "number"))

    def parse_point(self) -> Point:
        self.expect(TokenKind.LParen, "'('")
        x = self.parse_number()
        self.expect(TokenKind.Comma, "','")
        y = self.parse_number()
        self.expect(TokenKind.RParen, "')'")
        return (x, y)

    # ── Metadata ──────────────────────────────────────────────────────────────

    def parse_meta(self) -> Meta:
        key_token = self.expect(TokenKind.Ident, "metadata key")
        key = key_token.text
        if key == MetaKey.POS.value:
            x, y = self.parse_point()
            return Position(x, y)
        if key == MetaKey.VIA.value:
            self.expect(TokenKind.LParen, "'('")
            points = self.comma_list(self.parse_point, TokenKind.RParen, "via()", allow_empty=False)
            return Via(tuple(points))
        if key == MetaKey.BEND.value:
            self.expect(TokenKind.LParen, "'('")
            angle = self.decode(self.decoders.angle, self.expect(TokenKind.Angle, "angle with rad or deg unit"))
            self.expect(TokenKind.RParen, "')'")
            return Bend(angle)
        raise GrammarError(
            f"unknown metadata key {key!r}, expected pos, via or bend",
            key_token.offset,
            key_token.line,
            key_token.column,
        )

    def parse_metas(self) -> MetaMap:
        if not self.accept(TokenKind.MetaOpen):
            return meta_map(())
        metas = self.comma_list(self.parse_meta, TokenKind.RBracket, "metadata block", allow_empty=False)
        self.skip_newlines()
        return meta_map(metas)

    # ── Members ───────────────────────────────────────────────────────────────

    def parse_visibility(self) -> Visibility | None:
        visibility = _VISIBILITIES.get(self.peek().kind)
        if visibility is not None:
            self.advance()
        return visibility

    def parse_parameter(self) -> Parameter:
        name = self.parse_name("parameter name")
        type_ = self.parse_name_or_string() if self.accept(TokenKind.Colon) else None
        return Parameter(name, type_)

    def parse_member(self) -> Attribute | Operation:
        visibility = self.parse_visibility()
        name = self.parse_name("member name")
        if self.accept(TokenKind.LParen):
            parameters = self.comma_list(self.parse_parameter, TokenKind.RParen, "parameter list", allow_empty=True)
            return_type = self.parse_name_or_string() if self.accept(TokenKind.Colon) else None
            return Operation(name, visibility, tuple(parameters), return_type)
        type_ = self.parse_name_or_string() if self.accept(TokenKind.Colon) else None
        return Attribute(name, visibility, type_)

    def parse_body(self) -> tuple[list[Attribute], list[Operation]]:
        attributes: list[Attribute] = []
        operations: list[Operation] = []
        if not self.accept(TokenKind.LBrace):
            return attributes, operations
        if self.accept(TokenKind.RBrace):
            return attributes, operations
        self.expect_newlines("'{'")
        while not self.accept(TokenKind.RBrace):
            start = self.peek()
            member = self.parse_member()
            if isinstance(member, Operation):
                operations.append(member)
            elif operations:
                raise GrammarError(
                    "attributes must come before operations",
                    start.offset,
                    start.line,
                    start.column,
                )
            else:
                attributes.append(member)
            self.expect_newlines("member")
        return attributes, operations

    # ── Classifier ────────────────────────────────────────────────────────────

    def at_classifier(self) -> bool:
        """True if the statement opens with ``[abstract] [final] <kind> <name>``."""
        ahead = 0
        for modifier in ("abstract", "final"):
            if self.at_keyword(modifier, ahead) and self.peek(ahead + 1).kind is TokenKind.Ident:
                ahead += 1
        keyword = self.peek(ahead)
        return (
            keyword.kind is TokenKind.Ident
            and keyword.text in CLASSIFIER_KEYWORDS
            and self.peek(ahead + 1).kind is TokenKind.Ident
        )

    def parse_classifier(self, meta: MetaMap) -> Classifier:
        is_abstract = self.accept_keyword("abstract")
        is_final = self.accept_keyword("final")
        keyword = self.parse_name("classifier keyword")
        kind, stereotype = CLASSIFIER_KEYWORDS[keyword]
        name = self.parse_name("classifier name")
        id_ = self.parse_name("alias") if self.accept_keyword("as") else None
        attributes, operations = self.parse_body()
        return Classifier(
            kind=kind,
            name=name,
            id=id_,
            is_abstract=is_abstract,
            is_final=is_final,
            stereotype=stereotype,
            attributes=tuple(attributes),
            operations=tuple(operations),
            meta=meta,
        )

    # ── Edge ──────────────────────────────────────────────────────────────────

    def parse_association(self, token: Token) -> Association:
        marks = token.text.split("--")
        if len(marks) != 2:
            raise GrammarError(
                f"malformed association arrow {token.text!r}",
                token.offset,
                token.line,
                token.column,
            )
        left, right = marks
        a_end = self.decode(self.decoders.mark, _mark_token(token, left))
        b_end = self.decode(self.decoders.mark, _mark_token(token, right))
        return Association(a_end=a_end, b_end=b_end)

    def parse_edge_kind(self) -> EdgeKind:
        token = self.peek()
        if token.kind in _EDGE_OPERATORS:
            self.advance()
            return _EDGE_OPERATORS[token.kind]
        if token.kind is TokenKind.Association:
            self.advance()
            return self.parse_association(token)
        raise self.error("expected relationship arrow")

    def parse_edge(self, meta: MetaMap) -> Edge:
        a = self.parse_name("classifier declaration or edge source")
        kind = self.parse_edge_kind()
        b = self.parse_name("edge target")
        return Edge(a=a, b=b, kind=kind, meta=meta)

    # ── Statements ────────────────────────────────────────────────────────────

    def parse_statement(self) -> Statement:
        meta = self.parse_metas()
        if self.at_classifier():
            classifier = self.parse_classifier(meta)
            log.debug("Parsed %s %s", classifier.kind.value, classifier.name)
            return classifier
        edge = self.parse_edge(meta)
        log.debug("Parsed edge %s -> %s (%s)", edge.a, edge.b, type(edge.kind).__name__)
        return edge

    def parse_diagram(self) -> Diagram:
        statements: list[Statement] = []
        self.skip_newlines()
        while not self.at(TokenKind.Eof):
            statements.append(self.parse_statement())
            if self.at(TokenKind.Eof):
                break
            self.expect_newlines("statement")
        diagram = Diagram.from_statements(statements)
        log.debug("Parsed diagram: %d classifiers, %d edges", len(diagram.classifiers), len(diagram.edges))
        return diagram


def _mark_token(token: Token, mark: str) -> Token:
    return Token(token.kind, mark, token.offset, token.line, token.column)


class ClassDiagramParser:
    """Parser for the class diagram notation.

    Args:
        decoders: Literal decoding functions; defaults to the standard ones.
    """

    def __init__(self, decoders: LiteralDecoders = DEFAULT_DECODERS) -> None:
        self.decoders = decoders

    def parse(self, src: str) -> Diagram:
        """Parse ``src`` into a Diagram.

        Raises:
            LexError: If the input contains text no token matches.
            GrammarError: If the tokens do not form a valid diagram.
            LiteralError: If a number, angle or string fails to decode.
        """
        return _Parser(iter_tokens(src), self.decoders).parse_diagram()
