"""Runtime value types for Runel.

This module defines the two runtime value kinds of the language, numbers
and strings, plus the helpers used to render them. Numbers are signed
64-bit integers; the interpreter reports any arithmetic result outside
that range as an error instead of wrapping it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union
import json

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class NumberVal:
    """A signed 64-bit integer value."""
    value: int

    def __repr__(self) -> str:
        return f"Number({self.value})"


@dataclass(frozen=True)
class StringVal:
    """A string value. Strings are immutable and never aliased."""
    value: str

    def __repr__(self) -> str:
        return f"String({json.dumps(self.value, ensure_ascii=False)})"


Value = Union[NumberVal, StringVal]


@dataclass
class ErrorVal:
    """Describes a Runel error.

    Every failure carries a name (`LexicalError`, `SyntaxError` or
    `RuntimeError`) and a human-readable message naming the offending
    character, token or variable.
    """
    name: str
    message: str


def fits_int64(n: int) -> bool:
    return INT64_MIN <= n <= INT64_MAX


def to_string(value: Value) -> str:
    """Render a value the way it appears inside a concatenated string."""
    if isinstance(value, NumberVal):
        return str(value.value)
    return value.value


def debug_repr(value: Value) -> str:
    """Tagged-variant form of a value, e.g. ``Number(6)`` or ``String("ab")``."""
    return repr(value)

