"""Modifiers — tagged adjustments layered on top of colony attribute formulas."""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


class ModifierOperation(str, Enum):
    ADD = "add"
    MULTIPLY = "multiply"


class ModifierSource(str, Enum):
    FEATURE = "feature"
    COLONY_TYPE = "colonyType"
    SCHEMATIC = "schematic"
    SHORTAGE = "shortage"          # Regenerated every market resolution
    EVENT = "event"


class ModifierCondition(BaseModel):
    """Only apply the modifier when a context attribute passes the comparison."""

    model_config = ConfigDict(frozen=True)

    attribute: str
    comparison: Literal["lte", "gte"]
    value: float


class Modifier(BaseModel):
    """A single additive or multiplicative adjustment to a named target."""

    model_config = ConfigDict(frozen=True)

    id: str
    target: str                             # e.g. "qualityOfLife", "miningOutput"
    operation: ModifierOperation
    value: float
    source_type: ModifierSource
    source_id: str
    source_name: str
    condition: Optional[ModifierCondition] = None
