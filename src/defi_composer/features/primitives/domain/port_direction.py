"""
Port direction value object
"""
from enum import Enum


class PortDirection(Enum):
    """
    Port direction enumeration.

    - INPUT: resources flow into the primitive
    - OUTPUT: resources flow out of the primitive
    """
    INPUT = "input"
    OUTPUT = "output"

    @classmethod
    def from_string(cls, value: str) -> 'PortDirection':
        """Create PortDirection from string"""
        value_lower = value.lower()
        if value_lower == "input":
            return cls.INPUT
        elif value_lower == "output":
            return cls.OUTPUT
        else:
            raise ValueError(f"Invalid port direction: {value}")
