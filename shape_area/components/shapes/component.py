"""
Shapes component - area of a closed shape union.

Functional core is ``area()``; ``run`` and ``run_many`` are the component
entry points.

Invariants:
- area() is total over Square, Rectangle and Circle
- area() is pure (no logging, no shared state)
- every Shape variant has a dispatch arm; a missing arm fails mypy because
  the fallback only accepts ``Never``
"""

from __future__ import annotations

import logging
import math
from typing import Never, NoReturn

from .models import (
    AreaInput,
    AreaManyInput,
    AreaManyOutput,
    AreaOutput,
    Shape,
    UnhandledVariantError,
)

logger = logging.getLogger(__name__)


def _unhandled_variant(shape: Never) -> NoReturn:
    """Fallback arm of every Shape dispatch."""
    raise UnhandledVariantError(getattr(shape, "kind", None))


# --- Pure Functions (Functional Core) ---


def area(shape: Shape) -> float:
    """
    Compute the area of a shape.

    Args:
        shape: Square, Rectangle or Circle.

    Returns:
        The unrounded area. Inputs are not validated, so negative sides give
        negative rectangle areas.

    Raises:
        UnhandledVariantError: If the value carries an unknown or no discriminant.
    """
    if getattr(shape, "kind", None) is None:
        raise UnhandledVariantError(None)

    if shape.kind == "square":
        return float(shape.size) * shape.size
    elif shape.kind == "rectangle":
        return float(shape.width) * shape.height
    elif shape.kind == "circle":
        return math.pi * shape.radius**2
    else:
        return _unhandled_variant(shape)


# --- Component Entry Points ---


def run(inp: AreaInput) -> AreaOutput:
    """
    Compute the area of ``inp.shape``.

    Unhandled variants are logged and re-raised to the caller.
    """
    try:
        result = area(inp.shape)
    except UnhandledVariantError as e:
        logger.error("Shape dispatch reached unknown kind %r", e.kind)
        raise

    logger.debug("Computed %s area: %r", inp.shape.kind, result)
    return AreaOutput(kind=inp.shape.kind, area=result)


def run_many(inp: AreaManyInput) -> AreaManyOutput:
    """
    Compute areas for every shape in order, plus their sum.

    The first unhandled variant aborts the whole call.
    """
    results = tuple(run(AreaInput(shape=shape)) for shape in inp.shapes)
    total = math.fsum(r.area for r in results)

    logger.debug("Computed %d areas, total %r", len(results), total)
    return AreaManyOutput(results=results, total=total)
