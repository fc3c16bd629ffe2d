"""Abstract Syntax Tree (AST) definitions for the Runel language.

A Runel program is a list of statements, one per non-blank source line.
A statement is either an assignment (`let NAME = EXPR`) or a bare
expression. An expression is a single term or exactly one binary
operation over two terms; a term is a literal value or a variable
reference that is resolved each time it is evaluated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union

from .types import Value


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


class Operation(Enum):
    ADDITION = '+'
    MULTIPLICATION = '*'


@dataclass
class ValueLiteral(Node):
    value: Value


@dataclass
class Variable(Node):
    name: str


Term = Union[ValueLiteral, Variable]


@dataclass
class Binary(Node):
    left: Term
    op: Operation
    right: Term


Expression = Union[ValueLiteral, Variable, Binary]


@dataclass
class Assignment(Node):
    name: str
    value: Expression


@dataclass
class ExpressionStatement(Node):
    expression: Expression


Statement = Union[Assignment, ExpressionStatement]


@dataclass
class Program(Node):
    body: List[Statement]
    lines: List[int] = field(default_factory=list)  # 1-based source line per statement
