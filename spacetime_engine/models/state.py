"""Game State — the immutable world snapshot threaded through every phase."""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict

from spacetime_engine.models.budget import BudgetState
from spacetime_engine.models.colony import Colony
from spacetime_engine.models.common import InfraDomain
from spacetime_engine.models.contract import Contract, Mission
from spacetime_engine.models.corporation import Corporation
from spacetime_engine.models.event import GameEvent
from spacetime_engine.models.market import SectorMarketState
from spacetime_engine.models.planet import Galaxy, Planet


class EmpireBonuses(BaseModel):
    """Empire-wide bonuses earned from discoveries."""

    model_config = ConfigDict(frozen=True)

    infra_caps: Dict[InfraDomain, int] = {}


class GameState(BaseModel):
    """
    Complete world snapshot.

    Phases never mutate a GameState; they return a new one built with
    model_copy(update=...). Collections are keyed by entity id.
    """

    model_config = ConfigDict(frozen=True)

    turn: int = 1
    seed: int = 0
    budget: BudgetState = BudgetState()
    colonies: Dict[str, Colony] = {}
    corporations: Dict[str, Corporation] = {}
    planets: Dict[str, Planet] = {}
    galaxy: Galaxy = Galaxy()
    contracts: Dict[str, Contract] = {}
    missions: Dict[str, Mission] = {}
    sector_markets: Dict[str, SectorMarketState] = {}
    empire_bonuses: EmpireBonuses = EmpireBonuses()
    events: List[GameEvent] = []


class PhaseResult(BaseModel):
    """Output contract shared by every phase."""

    model_config = ConfigDict(frozen=True)

    updated_state: GameState
    events: List[GameEvent] = []


class TurnResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    updated_state: GameState
    events: List[GameEvent] = []
    completed_turn: int
