"""
Corporate Decision Engine — capital accrual, investment, acquisition and
organic emergence for one turn.

Behavioral Contract:
- Processing order is fixed once at phase start: descending level, ties in
  encounter order; a corporation absorbed earlier in the turn is skipped
- Each corporation gains randint(0, 1) + floor(owned / 10) capital, then
  takes at most one action from the investment policy
- The working state is threaded corporation by corporation, so later
  corporations see what earlier ones did
- Ineligible actions are skipped silently: no event, no state change
- After every existing corporation has acted, each colony rolls
  (dynamism - 5) x 10% for a new corporation built from one public level
  of its most prominent non-civilian domain
- Holdings and colony mirrors are written together by the ownership
  transactions; the phase re-verifies them before returning
"""

import logging
from typing import Dict, List, Optional, Tuple

from spacetime_engine.catalog.tables import DOMAIN_TO_CORP_TYPE
from spacetime_engine.corporate.generator import (
    CorpGenerator,
    CorporationGenerator,
    GenerateCorpParams,
    NameRegistry,
)
from spacetime_engine.corporate.policy import CorpAction, InvestmentPolicy, RuleBasedInvestmentPolicy
from spacetime_engine.events.log import build_event
from spacetime_engine.formulas.growth import capital_gain, emergence_chance
from spacetime_engine.models.colony import Colony
from spacetime_engine.models.common import EventCategory, EventPriority, InfraDomain
from spacetime_engine.models.config import EngineConfig
from spacetime_engine.models.corporation import Corporation
from spacetime_engine.models.event import GameEvent
from spacetime_engine.models.state import GameState, PhaseResult
from spacetime_engine.ownership.transactions import (
    InvariantViolation,
    absorb_corporation,
    check_holdings_mirror,
    invest_level,
    transfer_public_level,
)
from spacetime_engine.randomness.source import RandomSource, roll_chance

logger = logging.getLogger(__name__)


def most_prominent_public_domain(colony: Colony) -> Optional[InfraDomain]:
    """Non-civilian domain with the most public levels; first one wins a tie."""
    best: Optional[InfraDomain] = None
    best_levels = 0
    for domain in InfraDomain:
        if domain == InfraDomain.CIVILIAN:
            continue
        levels = colony.infra(domain).public_levels
        if levels > best_levels:
            best, best_levels = domain, levels
    return best


class CorporateDecisionEngine:
    """Corporate phase of the turn pipeline."""

    def __init__(
        self,
        source: RandomSource,
        config: Optional[EngineConfig] = None,
        policy: Optional[InvestmentPolicy] = None,
        generator: Optional[CorpGenerator] = None,
    ):
        self.source = source
        self.config = config or EngineConfig()
        self.policy = policy or RuleBasedInvestmentPolicy(self.config)
        self.generator = generator

    def resolve(self, state: GameState) -> PhaseResult:
        events: List[GameEvent] = []
        order = sorted(state.corporations.values(), key=lambda c: c.level, reverse=True)

        working = state
        for corp in order:
            if corp.id not in working.corporations:
                logger.debug("Skipping %s: absorbed earlier this turn", corp.id)
                continue
            working, corp_events = self._process_corporation(working, corp.id)
            events.extend(corp_events)

        generator = self.generator or CorporationGenerator(
            NameRegistry(c.name for c in state.corporations.values())
        )
        working, emergence_events = self._run_emergence(working, state, generator)
        events.extend(emergence_events)

        if self.config.verify_invariants:
            check_holdings_mirror(working.corporations, working.colonies)

        return PhaseResult(updated_state=working, events=events)

    # --- Existing corporations ---

    def _process_corporation(
        self, state: GameState, corp_id: str
    ) -> Tuple[GameState, List[GameEvent]]:
        corp = state.corporations[corp_id]
        gain = capital_gain(corp.total_owned_infrastructure(), self.source)
        corp = corp.model_copy(update={"capital": corp.capital + gain})
        state = self._with_corporation(state, corp)

        action = self.policy.decide(corp, state, self.source)
        if action is None:
            return state, []
        if action.kind == "invest":
            return self._apply_investment(state, corp, action)
        return self._apply_acquisition(state, corp, action)

    def _apply_investment(
        self, state: GameState, corp: Corporation, action: CorpAction
    ) -> Tuple[GameState, List[GameEvent]]:
        colony = state.colonies.get(action.colony_id)
        if colony is None or action.domain is None:
            return state, []
        if corp.capital < action.cost or not colony.infra(action.domain).has_capacity():
            return state, []

        corp, colony = invest_level(corp, colony, action.domain, action.cost)
        colonies = dict(state.colonies)
        colonies[colony.id] = colony
        state = self._with_corporation(state, corp).model_copy(update={"colonies": colonies})

        domain = action.domain.value
        logger.debug("%s invested in %s on %s", corp.id, domain, colony.id)
        event = build_event(
            turn=state.turn,
            priority=EventPriority.INFO,
            category=EventCategory.CORPORATION,
            title=f"{corp.name}: {domain} investment",
            description=(
                f"{corp.name} spent {action.cost} capital to build {domain} "
                f"infrastructure on {colony.name}."
            ),
            related_entity_ids=[corp.id, colony.id],
        )
        return state, [event]

    def _apply_acquisition(
        self, state: GameState, buyer: Corporation, action: CorpAction
    ) -> Tuple[GameState, List[GameEvent]]:
        target = state.corporations.get(action.target_corp_id)
        if target is None or target.id == buyer.id or buyer.capital < action.cost:
            return state, []

        updated_buyer, changed = absorb_corporation(
            buyer, target, state.colonies, action.cost, self.config.max_corp_level
        )
        corporations = {
            cid: c for cid, c in state.corporations.items() if cid != target.id
        }
        corporations[buyer.id] = updated_buyer
        colonies = dict(state.colonies)
        colonies.update(changed)
        state = state.model_copy(update={"corporations": corporations, "colonies": colonies})

        logger.info("%s acquired %s for %d capital", buyer.id, target.id, action.cost)
        event = build_event(
            turn=state.turn,
            priority=EventPriority.INFO,
            category=EventCategory.CORPORATION,
            title=f"{buyer.name} acquired {target.name}",
            description=(
                f"{buyer.name} (Level {buyer.level}) acquired {target.name} "
                f"(Level {target.level}) for {action.cost} capital and rose to "
                f"Level {updated_buyer.level}."
            ),
            related_entity_ids=[buyer.id, target.id],
        )
        return state, [event]

    # --- Emergence ---

    def _run_emergence(
        self, state: GameState, original: GameState, generator: CorpGenerator
    ) -> Tuple[GameState, List[GameEvent]]:
        events: List[GameEvent] = []
        for colony_id in list(state.colonies):
            state, event = self._try_emergence(state, colony_id, original, generator)
            if event is not None:
                events.append(event)
        return state, events

    def _try_emergence(
        self,
        state: GameState,
        colony_id: str,
        original: GameState,
        generator: CorpGenerator,
    ) -> Tuple[GameState, Optional[GameEvent]]:
        colony = state.colonies[colony_id]
        if colony.planet_id not in state.planets:
            return state, None

        chance = emergence_chance(
            colony.attributes.dynamism,
            self.config.emergence_min_dynamism,
            self.config.emergence_chance_per_dynamism,
        )
        if not roll_chance(self.source, chance):
            return state, None

        domain = most_prominent_public_domain(colony)
        if domain is None:
            return state, None
        corp_type = DOMAIN_TO_CORP_TYPE.get(domain)
        if corp_type is None:
            return state, None

        taken_ids = set(original.corporations) | set(state.corporations)
        corp = generator.generate(
            GenerateCorpParams(
                type=corp_type,
                home_planet_id=colony.planet_id,
                founded_turn=state.turn,
            ),
            self.source,
            taken_ids,
        )
        if corp.id in taken_ids:
            raise InvariantViolation(f"generated corporation id {corp.id} is already in use")

        corp, colony = transfer_public_level(corp, colony, domain)
        corporations: Dict[str, Corporation] = dict(state.corporations)
        corporations[corp.id] = corp
        colonies = dict(state.colonies)
        colonies[colony.id] = colony

        logger.info("%s emerged on %s from %s", corp.id, colony.id, domain.value)
        event = build_event(
            turn=state.turn,
            priority=EventPriority.POSITIVE,
            category=EventCategory.CORPORATION,
            title=f"{corp.name} emerged on {colony.name}",
            description=(
                f"A new {corp_type.value} corporation, {corp.name}, emerged on "
                f"{colony.name} from its {domain.value} activity. One {domain.value} "
                f"level moved to corporate ownership."
            ),
            related_entity_ids=[corp.id, colony.id],
        )
        return state.model_copy(update={"corporations": corporations, "colonies": colonies}), event

    @staticmethod
    def _with_corporation(state: GameState, corp: Corporation) -> GameState:
        corporations = dict(state.corporations)
        corporations[corp.id] = corp
        return state.model_copy(update={"corporations": corporations})
