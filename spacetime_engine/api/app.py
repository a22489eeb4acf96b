"""
Spacetime Engine API — FastAPI endpoints.

Exposes the turn engine over REST for:
- Session management (create, list, delete)
- Turn resolution
- State, event log, sector market and budget history inspection
- Service status
- Engine configuration
"""

from typing import Optional

from fastapi import FastAPI, HTTPException

from spacetime_engine.models.config import EngineConfig
from spacetime_engine.models.state import GameState
from spacetime_engine.session.store import GameSession, GameSessionStore


# --- Application Factory ---

def create_app(
    session_store: Optional[GameSessionStore] = None,
    config: Optional[EngineConfig] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Spacetime Engine API",
        description="Turn resolution engine for the Spacetime empire simulation",
        version="0.1.0",
    )

    store = session_store or GameSessionStore()

    # Store components on app state for access in endpoints
    app.state.session_store = store
    app.state.config = config or EngineConfig()

    def _session_or_404(session_id: str) -> GameSession:
        session = store.get_session(session_id)
        if not session:
            raise HTTPException(404, "Session not found")
        return session

    # === SESSIONS ===

    @app.post("/sessions")
    def create_session(state: GameState):
        """Start a game from a complete world state."""
        session = store.create_session(state)
        return {"id": session.id, "turn": session.state.turn}

    @app.get("/sessions")
    def list_sessions():
        return [s.summary() for s in store.list_sessions()]

    @app.get("/sessions/{session_id}/state")
    def get_state(session_id: str):
        """Current world snapshot."""
        return _session_or_404(session_id).state.model_dump(mode="json")

    @app.delete("/sessions/{session_id}")
    def delete_session(session_id: str):
        if not store.remove_session(session_id):
            raise HTTPException(404, "Session not found")
        return {"status": "deleted", "session_id": session_id}

    # === TURNS ===

    @app.post("/sessions/{session_id}/turns")
    def resolve_turn(session_id: str):
        """Resolve exactly one turn."""
        _session_or_404(session_id)
        result = store.resolve_turn(session_id, app.state.config)
        return result.model_dump(mode="json")

    @app.get("/sessions/{session_id}/events")
    def get_events(session_id: str, turn: Optional[int] = None):
        """Full event log, optionally narrowed to one turn."""
        events = _session_or_404(session_id).state.events
        if turn is not None:
            events = [e for e in events if e.turn == turn]
        return [e.model_dump(mode="json") for e in events]

    @app.get("/sessions/{session_id}/markets")
    def get_markets(session_id: str):
        """Sector markets from the last resolved turn."""
        markets = _session_or_404(session_id).state.sector_markets
        return {sid: m.model_dump(mode="json") for sid, m in markets.items()}

    @app.get("/sessions/{session_id}/history")
    def get_history(session_id: str):
        """Budget summary for every resolved turn."""
        return [h.model_dump(mode="json") for h in _session_or_404(session_id).history]

    @app.get("/status")
    def status():
        return {
            "status": "ok",
            "active_sessions": store.count(),
            "verify_invariants": app.state.config.verify_invariants,
        }

    # === CONFIG ===

    @app.get("/config")
    def get_config():
        return app.state.config.model_dump()

    @app.put("/config")
    def update_config(config: EngineConfig):
        """Replace the engine configuration used for future turns."""
        app.state.config = config
        return config.model_dump()

    return app


# Default application instance
app = create_app()
