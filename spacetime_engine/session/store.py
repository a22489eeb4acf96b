"""
Game Session Store — holds live games between turn resolutions.

Each session owns its current GameState, its corporation NameRegistry and
its per-turn budget history. The engine itself stays stateless; this store
is the only place a game's progress is kept.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional
from uuid import uuid4

from spacetime_engine.corporate.generator import CorporationGenerator, NameRegistry
from spacetime_engine.models.budget import BudgetHistoryEntry
from spacetime_engine.models.config import EngineConfig
from spacetime_engine.models.state import GameState, TurnResult
from spacetime_engine.orchestrator.resolver import TurnResolver

logger = logging.getLogger(__name__)


class GameSession:
    """A single game in progress."""

    def __init__(self, session_id: str, state: GameState):
        self.id = session_id
        self.state = state
        self.registry = NameRegistry(c.name for c in state.corporations.values())
        self.history: List[BudgetHistoryEntry] = []
        self.created_at = datetime.utcnow()

    def summary(self) -> dict:
        return {
            "id": self.id,
            "turn": self.state.turn,
            "colonies": len(self.state.colonies),
            "corporations": len(self.state.corporations),
            "created_at": self.created_at.isoformat(),
        }


class GameSessionStore:
    """
    In-memory session store.
    Persistence is left to the host application.
    """

    def __init__(self):
        self._sessions: Dict[str, GameSession] = {}

    def create_session(self, state: GameState, session_id: Optional[str] = None) -> GameSession:
        session_id = session_id or f"game_{uuid4().hex[:12]}"
        session = GameSession(session_id, state)
        self._sessions[session_id] = session
        logger.info("Created session %s at turn %d", session_id, state.turn)
        return session

    def get_session(self, session_id: str) -> Optional[GameSession]:
        return self._sessions.get(session_id)

    def list_sessions(self) -> List[GameSession]:
        return list(self._sessions.values())

    def remove_session(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.registry.clear()
        return True

    def resolve_turn(self, session_id: str, config: Optional[EngineConfig] = None) -> Optional[TurnResult]:
        """Advance one session by one turn and record its budget history."""
        session = self._sessions.get(session_id)
        if session is None:
            return None

        resolver = TurnResolver(
            config=config,
            corp_generator=CorporationGenerator(session.registry),
        )
        result = resolver.resolve_turn(session.state)
        budget = result.updated_state.budget
        session.history.append(BudgetHistoryEntry(
            turn=result.completed_turn,
            total_income=budget.total_income,
            total_expenses=budget.total_expenses,
            net_bp=budget.net_bp,
            debt_tokens_at_end_of_turn=budget.debt_tokens,
        ))
        session.state = result.updated_state
        return result

    def count(self) -> int:
        return len(self._sessions)
