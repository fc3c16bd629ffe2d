from typing import Any, Optional
from runel.types import ErrorVal


class RunelError(Exception):
    """Exception type used to propagate Runel errors.

    Every error is fatal to the run that raised it. The runner fills in
    `line` so callers can report where the program failed.
    """
    name = 'Error'

    def __init__(self, message: str, line: Optional[int] = None):
        self.err = ErrorVal(self.name, message)
        self.line = line
        super().__init__(str(self))

    def at_line(self, line: int) -> 'RunelError':
        if self.line is None:
            self.line = line
            self.args = (str(self),)
        return self

    def __str__(self) -> str:
        text = f"{self.err.name}: {self.err.message}"
        if self.line is not None:
            return f"line {self.line}: {text}"
        return text


class LexerError(RunelError):
    """A character that belongs to no token class."""
    name = 'LexicalError'


class ParseError(RunelError):
    """An expected token was missing or the line ended too early."""
    name = 'SyntaxError'

    @classmethod
    def expected(cls, what: str, token: Optional[Any] = None) -> 'ParseError':
        if token is None:
            return cls(f"unexpected end of input, expected {what}")
        return cls(f"expected {what}, got {token!r} at column {token.column}")


class EvaluationError(RunelError):
    """Unbound variable, unsupported operands or an out-of-range result."""
    name = 'RuntimeError'
