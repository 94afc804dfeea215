"""
Shapes component models.

Shape is a closed tagged union: every value is exactly one of Square,
Rectangle or Circle, identified by its ``kind`` discriminant.

Invariants:
- kind is fixed per variant and cannot be reassigned
- the variant set is closed; adding one requires a new dispatch arm in area()
- numeric fields are not validated (zero, negative, inf and nan pass through)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

ShapeKind = Literal["square", "rectangle", "circle"]

SHAPE_KINDS: tuple[ShapeKind, ...] = ("square", "rectangle", "circle")


# --- Errors ---


class UnhandledVariantError(ValueError):
    """Raised when a value reaches dispatch with a discriminant outside the closed set."""

    def __init__(self, kind: object) -> None:
        self.kind = kind
        super().__init__(f"Unhandled shape variant: {kind!r}")


# --- Variants ---


@dataclass(frozen=True)
class Square:
    """Square with side length ``size``."""

    size: float
    kind: Literal["square"] = field(default="square", init=False)


@dataclass(frozen=True)
class Rectangle:
    """Rectangle with sides ``width`` and ``height``."""

    width: float
    height: float
    kind: Literal["rectangle"] = field(default="rectangle", init=False)


@dataclass(frozen=True)
class Circle:
    radius: float
    kind: Literal["circle"] = field(default="circle", init=False)


Shape = Square | Rectangle | Circle


# --- Input Models ---


@dataclass(frozen=True)
class AreaInput:
    """Input for computing the area of one shape."""

    shape: Shape


@dataclass(frozen=True)
class AreaManyInput:
    """Input for computing areas of several shapes."""

    shapes: tuple[Shape, ...]


# --- Output Models ---


@dataclass(frozen=True)
class AreaOutput:
    """Area of a single shape."""

    kind: ShapeKind
    area: float


@dataclass(frozen=True)
class AreaManyOutput:
    """Per-shape areas, in input order, and their sum."""

    results: tuple[AreaOutput, ...]
    total: float
