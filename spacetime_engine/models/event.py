"""Game events — immutable records appended to the world's log."""

from typing import List

from pydantic import BaseModel, ConfigDict

from spacetime_engine.models.common import EventCategory, EventPriority


class GameEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    turn: int
    priority: EventPriority
    category: EventCategory
    title: str
    description: str
    related_entity_ids: List[str] = []
    dismissed: bool = False
