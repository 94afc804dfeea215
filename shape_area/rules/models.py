import logging

from pydantic import BaseModel, field_validator

from shape_area.components.shapes.models import ShapeKind


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class LoggingRules(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @field_validator("level")
    @classmethod
    def check_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown logging level '{v}'")
        return level


class ShapesRules(BaseModel):
    # Variant set this deployment expects; must match SHAPE_KINDS
    kinds: list[ShapeKind]


class Rules(BaseModel):
    project: ProjectRules
    logging: LoggingRules = LoggingRules()
    shapes: ShapesRules
