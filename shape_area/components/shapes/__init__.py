"""
Shapes component - closed shape union and exhaustive area computation.
"""

from .component import area, run, run_many
from .models import (
    SHAPE_KINDS,
    AreaInput,
    AreaManyInput,
    AreaManyOutput,
    AreaOutput,
    Circle,
    Rectangle,
    Shape,
    ShapeKind,
    Square,
    UnhandledVariantError,
)

__all__ = [
    # Pure functions
    "area",
    # Entry points
    "run",
    "run_many",
    # Variants
    "Circle",
    "Rectangle",
    "Shape",
    "ShapeKind",
    "SHAPE_KINDS",
    "Square",
    # Input models
    "AreaInput",
    "AreaManyInput",
    # Output models
    "AreaManyOutput",
    "AreaOutput",
    # Errors
    "UnhandledVariantError",
]
