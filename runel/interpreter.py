"""Parser and interpreter for the Runel language.

This module implements the Runel pipeline on top of the tokenizer in
`runel.lexer`: a single-lookahead recursive-descent parser producing one
statement per source line, and a tree-walking interpreter that evaluates
statements against a `Scope`.

A program is run line by line. Each non-blank line is tokenized, parsed
and evaluated before the next one is looked at, and the first error
aborts the whole run. The result of a run is the value of the last
expression statement, or None if no expression statement was executed.
"""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    Program, Assignment, ExpressionStatement, Binary, ValueLiteral, Variable,
    Operation, Expression, Statement, Term, Node,
)
from .errors import ParseError, EvaluationError, RunelError
from .lexer import Token, TokenKind, tokenize, source_lines
from .parser import TOKEN_OPERATIONS, literal_term, parse_tokens
from .scope import Scope
from .types import NumberVal, StringVal, Value, fits_int64, debug_repr, to_string

###############################################################################
# Parser implementation
###############################################################################


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Optional[Token]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> Optional[Token]:
        token = self.peek()
        if token is not None:
            self.pos += 1
        return token

    def consume(self, kind: TokenKind, what: str) -> Token:
        token = self.advance()
        if token is None or token.kind is not kind:
            raise ParseError.expected(what, token)
        return token

    def parse_statement(self) -> Statement:
        token = self.peek()
        if token is not None and token.kind is TokenKind.LET:
            return self.parse_assignment()
        return ExpressionStatement(self.parse_expression())

    def parse_assignment(self) -> Assignment:
        self.consume(TokenKind.LET, "'let'")
        name = self.consume(TokenKind.IDENTIFIER, 'identifier')
        self.consume(TokenKind.EQUALS, "'='")
        return Assignment(name=name.value, value=self.parse_expression())

    def parse_expression(self) -> Expression:
        left = self.parse_term()
        token = self.advance()
        if token is None:
            return left
        op = TOKEN_OPERATIONS.get(token.kind)
        if op is None:
            raise ParseError.expected('operation', token)
        right = self.parse_term()
        # Anything after the right operand is left unconsumed
        return Binary(left=left, op=op, right=right)

    def parse_term(self) -> Term:
        token = self.advance()
        if token is None:
            raise ParseError.expected('term')
        return literal_term(token)


def parse_line(line: str) -> Statement:
    """Parse a single line of source into a statement."""
    return Parser(tokenize(line)).parse_statement()


def parse_program(source: str) -> Program:
    """Parse the given source code into a Program AST using the custom parser."""
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


###############################################################################
# Interpreter implementation
###############################################################################


class Interpreter:
    """Core interpreter that executes Runel statements.

    The interpreter itself holds no program state; every run gets its own
    `Scope` unless the caller passes one in.
    """
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt', use_grammar: bool = False):
        self.debug_level = debug_level
        self.use_grammar = use_grammar
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def parse(self, line: str) -> Statement:
        tokens = tokenize(line)
        if self.debug_level >= 2:
            self.debug(f"tokens {tokens}")
        if self.use_grammar:
            statement = parse_tokens(tokens)
        else:
            statement = Parser(tokens).parse_statement()
        if self.debug_level >= 2:
            self.debug(f"statement {statement}")
        return statement

    def run_source(self, source: str, scope: Optional[Scope] = None) -> Optional[Value]:
        """Tokenize, parse and execute the source one line at a time."""
        if scope is None:
            scope = Scope()
        result = None
        for line_num, line in source_lines(source):
            if self.debug_level >= 1:
                self.debug(f"line {line_num}: {line}")
            try:
                value = self.execute(self.parse(line), scope)
            except RunelError as e:
                e.at_line(line_num)
                raise
            if value is not None:
                result = value
        return result

    def run(self, program: Program, scope: Optional[Scope] = None) -> Optional[Value]:
        """Execute an already parsed program."""
        if scope is None:
            scope = Scope()
        lines = program.lines or list(range(1, len(program.body) + 1))
        if len(lines) != len(program.body):
            raise ValueError(f"program has {len(program.body)} statements but {len(lines)} line numbers")
        result = None
        for line_num, statement in zip(lines, program.body):
            if self.debug_level >= 1:
                self.debug(f"line {line_num}: {statement}")
            try:
                value = self.execute(statement, scope)
            except RunelError as e:
                e.at_line(line_num)
                raise
            if value is not None:
                result = value
        return result

    def execute(self, node: Node, scope: Scope) -> Optional[Value]:
        if isinstance(node, Assignment):
            value = self.evaluate(node.value, scope)
            scope.set(node.name, value)
            if self.debug_level >= 3:
                self.debug(f"let {node.name} = {debug_repr(value)}")
            return None
        if isinstance(node, ExpressionStatement):
            value = self.evaluate(node.expression, scope)
            if self.debug_level >= 3:
                self.debug(f"value {debug_repr(value)}")
            return value
        raise TypeError(f"unknown statement {node!r}")

    def evaluate(self, node: Node, scope: Scope) -> Value:
        if isinstance(node, ValueLiteral):
            return node.value
        if isinstance(node, Variable):
            return scope.get(node.name)
        if isinstance(node, Binary):
            left = self.evaluate(node.left, scope)
            right = self.evaluate(node.right, scope)
            return self.apply_binary_op(node.op, left, right)
        raise TypeError(f"unknown expression {node!r}")

    def apply_binary_op(self, op: Operation, a: Value, b: Value) -> Value:
        if op is Operation.ADDITION:
            if isinstance(a, NumberVal) and isinstance(b, NumberVal):
                return self.checked_number(a.value + b.value)
            # A number next to a string is rendered in decimal and concatenated
            if isinstance(a, NumberVal) and isinstance(b, StringVal):
                return StringVal(to_string(a) + b.value)
            if isinstance(a, StringVal) and isinstance(b, NumberVal):
                return StringVal(a.value + to_string(b))
        elif op is Operation.MULTIPLICATION:
            if isinstance(a, NumberVal) and isinstance(b, NumberVal):
                return self.checked_number(a.value * b.value)
            if isinstance(a, NumberVal) and isinstance(b, StringVal):
                return self.repeat(b.value, a.value)
            if isinstance(a, StringVal) and isinstance(b, NumberVal):
                return self.repeat(a.value, b.value)
        raise EvaluationError(f"'{op.value}' between {debug_repr(a)} and {debug_repr(b)} not supported")

    def checked_number(self, n: int) -> NumberVal:
        if not fits_int64(n):
            raise EvaluationError(f'integer overflow: {n} does not fit in a signed 64-bit integer')
        return NumberVal(n)

    def repeat(self, s: str, count: int) -> StringVal:
        if count < 0:
            raise EvaluationError(f'cannot repeat a string a negative number of times ({count})')
        return StringVal(s * count)


def run_program(source: str, debug_level: int = 0, use_grammar: bool = False) -> Optional[Value]:
    """Convenience function to run a Runel program from source string."""
    interpreter = Interpreter(debug_level=debug_level, use_grammar=use_grammar)
    try:
        return interpreter.run_source(source)
    finally:
        interpreter.close()
