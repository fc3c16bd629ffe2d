# Runel language package
# This package provides a tokenizer, parsers and an interpreter for the Runel language.
from .interpreter import run_program, parse_program, Interpreter
from .errors import RunelError, LexerError, ParseError, EvaluationError
from .scope import Scope
from .types import NumberVal, StringVal

__all__ = [
    'run_program',
    'parse_program',
    'Interpreter',
    'RunelError',
    'LexerError',
    'ParseError',
    'EvaluationError',
    'Scope',
    'NumberVal',
    'StringVal',
]
