"""Grammar-driven parser for the Runel language.

This module is an alternative to the hand-written recursive-descent
parser in `runel.interpreter`. The grammar below is compiled by Lark into
an LALR(1) table. Lark's own lexer is not used: every terminal is
declared, and the tokens produced by `runel.lexer.tokenize` are fed to
Lark's interactive parser one at a time.

The grammar mirrors the hand-written parser exactly, including its
quirks:

* an expression holds at most one operator;
* anything after the right operand of a binary expression is accepted
  and thrown away (the `trailing` rule).

Lark's parse errors are translated into `ParseError` with the same
messages the hand-written parser produces, so both front ends are
interchangeable.
"""

from __future__ import annotations

from typing import Dict, List

from lark import Lark, Token as LarkToken, Transformer
from lark.exceptions import UnexpectedToken

from .ast import (
    Program, Assignment, ExpressionStatement, Binary, ValueLiteral, Variable,
    Operation, Statement, Term,
)
from .errors import ParseError, RunelError
from .lexer import Token, TokenKind, tokenize, source_lines
from .types import NumberVal, StringVal


TOKEN_OPERATIONS: Dict[TokenKind, Operation] = {
    TokenKind.PLUS: Operation.ADDITION,
    TokenKind.STAR: Operation.MULTIPLICATION,
}


def literal_term(token: Token) -> Term:
    """Build the term for a number, string or identifier token."""
    if token.kind is TokenKind.NUMBER:
        return ValueLiteral(NumberVal(token.value))
    if token.kind is TokenKind.STRING:
        return ValueLiteral(StringVal(token.value))
    if token.kind is TokenKind.IDENTIFIER:
        return Variable(token.value)
    raise ParseError.expected('term', token)


RUNEL_GRAMMAR = r"""
    ?start: assignment
          | expression_statement

    assignment: LET IDENTIFIER EQUALS expression
    expression_statement: expression

    expression: term
              | term operation term trailing
    operation: PLUS | STAR
    term: NUMBER | STRING | IDENTIFIER

    // Tokens after a complete binary expression are ignored
    trailing: _any*
    _any: NUMBER | STRING | IDENTIFIER | PLUS | STAR | LET | EQUALS

    %declare NUMBER STRING IDENTIFIER PLUS STAR LET EQUALS
"""


RUNEL_PARSER = Lark(
    RUNEL_GRAMMAR,
    parser='lalr',
    lexer='basic',
    maybe_placeholders=False,
)


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST.

    Terminal values in the tree are the `runel.lexer.Token`
    objects.
    """

    def assignment(self, items):
        name = items[1].value
        return Assignment(name=name.value, value=items[3])

    def expression_statement(self, items):
        return ExpressionStatement(items[0])

    def expression(self, items):
        if len(items) == 1:
            return items[0]
        left, op, right = items[0], items[1], items[2]
        return Binary(left=left, op=op, right=right)

    def operation(self, items):
        return TOKEN_OPERATIONS[items[0].value.kind]

    def term(self, items):
        return literal_term(items[0].value)

    def trailing(self, items):
        return None


def _expected_what(expected) -> str:
    if 'EQUALS' in expected:
        return "'='"
    if 'IDENTIFIER' in expected and 'NUMBER' not in expected:
        return 'identifier'
    if 'PLUS' in expected:
        return 'operation'
    return 'term'


def _syntax_error(exc: UnexpectedToken) -> ParseError:
    what = _expected_what(exc.expected)
    if exc.token.type == '$END':
        return ParseError.expected(what)
    return ParseError.expected(what, exc.token.value)


def parse_tokens(tokens: List[Token]) -> Statement:
    """Parse the tokens of one line into a statement."""
    if not tokens:
        raise ParseError.expected('term')
    interactive = RUNEL_PARSER.parse_interactive()
    last = None
    try:
        for token in tokens:
            last = LarkToken(token.kind.name, token, column=token.column)
            interactive.feed_token(last)
        tree = interactive.feed_eof(last)
    except UnexpectedToken as exc:
        raise _syntax_error(exc) from None
    return ASTTransformer().transform(tree)


def parse_line(line: str) -> Statement:
    return parse_tokens(tokenize(line))


def parse_program(source: str) -> Program:
    """Parse Runel source into a Program AST using the Lark grammar.

    Lexical and syntax errors are raised with the offending line number.
    """
    body: List[Statement] = []
    lines: List[int] = []
    for line_num, line in source_lines(source):
        try:
            body.append(parse_line(line))
        except RunelError as e:
            e.at_line(line_num)
            raise
        lines.append(line_num)
    return Program(body=body, lines=lines)
