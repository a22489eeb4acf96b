"""
Turn Orchestrator — advances the whole game world by exactly one turn.

Behavioral Contract:
- Spendable BP is reset to 0 before any phase runs; unspent BP is forfeited
- Phases run in a fixed order: Debt, Income, Expense, Contract, Mission,
  Science, Corporate, Colony-Growth, Market, Event
- Each phase sees only the state produced by the phase before it
- Events are concatenated in phase order, returned, and appended to the log
- The turn counter increments after the last phase; completed_turn is the
  pre-increment value
- Referentially transparent: the random source is derived from
  (state.seed, state.turn) and the input state is never mutated
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from spacetime_engine.budget.phases import (
    resolve_debt_phase,
    resolve_expense_phase,
    resolve_income_phase,
)
from spacetime_engine.colony.growth import ColonyGrowthResolver
from spacetime_engine.corporate.engine import CorporateDecisionEngine
from spacetime_engine.corporate.generator import CorpGenerator
from spacetime_engine.corporate.policy import InvestmentPolicy
from spacetime_engine.market.phase import MarketPhase
from spacetime_engine.models.config import EngineConfig
from spacetime_engine.models.event import GameEvent
from spacetime_engine.models.state import GameState, PhaseResult, TurnResult
from spacetime_engine.operations.phases import (
    resolve_contract_phase,
    resolve_event_phase,
    resolve_mission_phase,
    resolve_science_phase,
)
from spacetime_engine.randomness.source import RandomSource, seeded_source

logger = logging.getLogger(__name__)

Phase = Callable[[GameState], PhaseResult]
SourceFactory = Callable[[int, int], RandomSource]

PHASE_ORDER = [
    "debt",
    "income",
    "expense",
    "contract",
    "mission",
    "science",
    "corporate",
    "colony",
    "market",
    "event",
]


class TurnResolver:
    """
    Threads a GameState through every phase of one turn.

    Contract, mission, science and event phases are pluggable: any callable
    taking a GameState and returning a PhaseResult can stand in for them.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        source_factory: Optional[SourceFactory] = None,
        investment_policy: Optional[InvestmentPolicy] = None,
        corp_generator: Optional[CorpGenerator] = None,
        contract_phase: Optional[Phase] = None,
        mission_phase: Optional[Phase] = None,
        science_phase: Optional[Phase] = None,
        event_phase: Optional[Phase] = None,
    ):
        self.config = config or EngineConfig()
        self.source_factory = source_factory or seeded_source
        self.investment_policy = investment_policy
        self.corp_generator = corp_generator
        self.contract_phase = contract_phase or (lambda s: resolve_contract_phase(s, self.config))
        self.mission_phase = mission_phase or (lambda s: resolve_mission_phase(s, self.config))
        self.science_phase = science_phase or (lambda s: resolve_science_phase(s, self.config))
        self.event_phase = event_phase or (lambda s: resolve_event_phase(s, self.config))

    def build_phases(self, source: RandomSource) -> List[Tuple[str, Phase]]:
        """The ordered phase pipeline for one turn, bound to that turn's random source."""
        corporate = CorporateDecisionEngine(
            source,
            self.config,
            policy=self.investment_policy,
            generator=self.corp_generator,
        )
        colony = ColonyGrowthResolver(source, self.config)
        market = MarketPhase(self.config)

        phases: Dict[str, Phase] = {
            "debt": lambda s: resolve_debt_phase(s, self.config),
            "income": lambda s: resolve_income_phase(s, self.config),
            "expense": lambda s: resolve_expense_phase(s, self.config),
            "contract": self.contract_phase,
            "mission": self.mission_phase,
            "science": self.science_phase,
            "corporate": corporate.resolve,
            "colony": colony.resolve,
            "market": market.resolve,
            "event": self.event_phase,
        }
        return [(name, phases[name]) for name in PHASE_ORDER]

    def resolve_turn(self, state: GameState) -> TurnResult:
        completed_turn = state.turn
        source = self.source_factory(state.seed, state.turn)

        working = state.model_copy(update={
            "budget": state.budget.model_copy(update={"current_bp": 0}),
        })

        events: List[GameEvent] = []
        for name, phase in self.build_phases(source):
            result = phase(working)
            working = result.updated_state
            events.extend(result.events)
            logger.debug("Phase %s produced %d events", name, len(result.events))

        final = working.model_copy(update={
            "turn": completed_turn + 1,
            "events": list(working.events) + events,
        })
        logger.info(
            "Resolved turn %d: %d events, %d BP, %d debt tokens",
            completed_turn, len(events), final.budget.current_bp, final.budget.debt_tokens,
        )
        return TurnResult(updated_state=final, events=events, completed_turn=completed_turn)


def resolve_turn(state: GameState, config: Optional[EngineConfig] = None) -> TurnResult:
    """Resolve one turn with the default phases and the state's own seed."""
    return TurnResolver(config).resolve_turn(state)
