"""Event construction with content-derived, reproducible ids."""

import hashlib
from typing import List, Optional

from spacetime_engine.models.common import EventCategory, EventPriority
from spacetime_engine.models.event import GameEvent


def build_event(
    turn: int,
    priority: EventPriority,
    category: EventCategory,
    title: str,
    description: str,
    related_entity_ids: Optional[List[str]] = None,
) -> GameEvent:
    related = list(related_entity_ids or [])
    digest = hashlib.sha1(
        "|".join([str(turn), category.value, title, description, *related]).encode()
    ).hexdigest()
    return GameEvent(
        id=f"evt_{turn}_{digest[:10]}",
        turn=turn,
        priority=priority,
        category=category,
        title=title,
        description=description,
        related_entity_ids=related,
    )
