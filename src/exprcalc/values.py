"""Readable/writable value model produced by every parsed sub-expression."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Union

from .errors import NotReadableError, NotWritableError

if TYPE_CHECKING:
    from .context import EvaluationContext


class ValueKind(str, Enum):
    NONE = "none"
    SCALAR = "scalar"
    IDENTIFIER = "identifier"
    INDEXED_REFERENCE = "indexed_reference"


@dataclass(frozen=True)
class NoneValue:
    """Marks a statement that produced no value (map declaration)."""

    kind: ClassVar[ValueKind] = ValueKind.NONE

    def read(self, context: EvaluationContext) -> float:
        raise NotReadableError("Statement produced no value")

    def write(self, value: float, context: EvaluationContext) -> None:
        raise NotWritableError("Cannot assign to a statement without a value")


@dataclass(frozen=True)
class Scalar:
    """Computed number; rvalue only."""

    value: float
    kind: ClassVar[ValueKind] = ValueKind.SCALAR

    def read(self, context: EvaluationContext) -> float:
        return self.value

    def write(self, value: float, context: EvaluationContext) -> None:
        raise NotWritableError(f"Cannot assign to computed value {self.value!r}")


@dataclass(frozen=True)
class Identifier:
    name: str
    kind: ClassVar[ValueKind] = ValueKind.IDENTIFIER

    def read(self, context: EvaluationContext) -> float:
        return context.read_scalar(self.name)

    def write(self, value: float, context: EvaluationContext) -> None:
        context.write_scalar(self.name, value)


@dataclass(frozen=True)
class IndexedReference:
    """Entry ``name[index]`` of a declared map; the index is already evaluated."""

    name: str
    index: Scalar
    kind: ClassVar[ValueKind] = ValueKind.INDEXED_REFERENCE

    @classmethod
    def from_identifier(cls, base: Identifier, index: Scalar) -> "IndexedReference":
        return cls(name=base.name, index=index)

    def read(self, context: EvaluationContext) -> float:
        return context.read_map_entry(self.name, self.index.value)

    def write(self, value: float, context: EvaluationContext) -> None:
        context.write_map_entry(self.name, self.index.value, value)


Value = Union[NoneValue, Scalar, Identifier, IndexedReference]


def value_kind(value: Value) -> ValueKind:
    return value.kind


def is_writable(value: Value) -> bool:
    return value.kind in {ValueKind.IDENTIFIER, ValueKind.INDEXED_REFERENCE}


def validate_number(value: object, *, where: str = "value") -> float:
    """Coerce a real number (or 0-d numeric array) to ``float``; reject anything else."""
    if isinstance(value, bool):
        raise TypeError(f"{where} must be a real number, not bool")
    if isinstance(value, numbers.Real):
        return float(value)
    shape = getattr(value, "shape", None)
    if shape == () and hasattr(value, "item"):
        item = value.item()
        if isinstance(item, numbers.Real) and not isinstance(item, bool):
            return float(item)
    raise TypeError(f"{where} has unsupported runtime type {type(value).__name__}")


def same_number(left: float, right: float) -> bool:
    """Equality that treats two NaN sentinels as the same value."""
    if math.isnan(left) and math.isnan(right):
        return True
    return left == right
