"""
Position value object

Canvas coordinates of a primitive. Display only, no semantic effect.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Tuple, Union


@dataclass(frozen=True)
class Position:
    x: float = 0.0
    y: float = 0.0

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    @classmethod
    def of(cls, value: Union['Position', Mapping[str, Any], Tuple[float, float]]) -> 'Position':
        """Accept a Position, an {"x", "y"} mapping or an (x, y) pair."""
        if isinstance(value, Position):
            return value
        if isinstance(value, Mapping):
            return cls(x=value.get("x", 0.0), y=value.get("y", 0.0))
        if isinstance(value, (tuple, list)) and len(value) == 2:
            return cls(x=value[0], y=value[1])
        raise TypeError(f"Cannot build Position from {type(value).__name__}")

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"
