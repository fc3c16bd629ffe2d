from typing import Dict, Iterator
from runel.errors import EvaluationError
from runel.types import Value


class Scope:
    """Flat mapping of variable names to fully evaluated values.

    One scope belongs to exactly one program run. There is no nesting:
    assigning an existing name simply replaces its value.
    """
    def __init__(self):
        self.values: Dict[str, Value] = {}

    def get(self, name: str) -> Value:
        if name in self.values:
            return self.values[name]
        raise EvaluationError(f"variable '{name}' not found")

    def set(self, name: str, value: Value):
        self.values[name] = value

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        return f"Scope({self.values!r})"
