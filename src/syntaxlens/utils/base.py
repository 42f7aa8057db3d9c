"""
Base Classes and Utilities for syntaxlens
Result type shared by the render driver and the CLI
"""

from typing import Generic, TypeVar, Union
from dataclasses import dataclass
from enum import Enum

# Type variables for Result
T = TypeVar('T')
E = TypeVar('E')

# ==================== RESULT TYPES ====================

class ResultTag(Enum):
    """Result discriminant"""
    OK = "ok"
    ERR = "err"

@dataclass
class Result(Generic[T, E]):
    """Result type: Ok(T) | Err(E)"""
    tag: ResultTag
    value: Union[T, E]

    @classmethod
    def ok(cls, value: T) -> 'Result[T, E]':
        """Create successful result"""
        return cls(ResultTag.OK, value)

    @classmethod
    def err(cls, error: E) -> 'Result[T, E]':
        """Create error result"""
        return cls(ResultTag.ERR, error)

    def is_ok(self) -> bool:
        """Check if result is Ok"""
        return self.tag == ResultTag.OK

    def is_err(self) -> bool:
        """Check if result is Err"""
        return self.tag == ResultTag.ERR

    def unwrap(self) -> T:
        """Extract Ok value (throws if Err)"""
        if self.is_err():
            raise ValueError(f"Called unwrap() on Err: {self.value}")
        return self.value

    def unwrap_err(self) -> E:
        """Extract Err value (throws if Ok)"""
        if self.is_ok():
            raise ValueError(f"Called unwrap_err() on Ok: {self.value}")
        return self.value
