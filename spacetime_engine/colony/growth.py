"""
Colony Growth Resolver — recomputes every colony's derived state for the new turn.

Behavioral Contract:
- Colonies whose planet is missing are skipped unchanged, with no event
- Attributes are recomputed from the planet baseline, infrastructure, debt
  and modifiers; domain caps are recomputed from population and deposits
- Growth tick: level up needs growth >= 10, headroom under the planet-size
  cap and enough civilian infrastructure; growth resets to 0 (no carry).
  Decline needs growth <= -1 and population > 1; growth resets to 9.
  Otherwise the accumulator is kept as-is, even past 10 or below -1
- Organic growth: needs at least one existing level anywhere; chance is
  dynamism x 5%; one public level goes to an eligible domain, biased toward
  resources the sector market reports in deficit
- Stability <= 2 and quality of life <= 2 each raise a warning
"""

import logging
from typing import Dict, List, Optional, Set, Tuple

from spacetime_engine.catalog.tables import DOMAIN_TO_RESOURCE, PLANET_SIZE_MAX_POPULATION
from spacetime_engine.events.log import build_event
from spacetime_engine.formulas import attributes
from spacetime_engine.formulas.growth import (
    GROWTH_AFTER_DECLINE,
    GROWTH_DECLINE_THRESHOLD,
    GROWTH_LEVEL_UP_THRESHOLD,
    civilian_required_for_growth,
    organic_growth_chance,
)
from spacetime_engine.models.colony import Colony, ColonyAttributes, InfraState
from spacetime_engine.models.common import (
    EventCategory,
    EventPriority,
    InfraDomain,
    ResourceType,
)
from spacetime_engine.models.config import EngineConfig
from spacetime_engine.models.event import GameEvent
from spacetime_engine.models.planet import Planet
from spacetime_engine.models.state import GameState, PhaseResult
from spacetime_engine.randomness.source import RandomSource, roll_chance, weighted_choice

logger = logging.getLogger(__name__)


class ColonyGrowthResolver:
    """Colony-growth phase: attributes, caps, population and organic infrastructure."""

    def __init__(self, source: RandomSource, config: Optional[EngineConfig] = None):
        self.source = source
        self.config = config or EngineConfig()

    def resolve(self, state: GameState) -> PhaseResult:
        events: List[GameEvent] = []
        colonies: Dict[str, Colony] = dict(state.colonies)

        for colony_id, colony in state.colonies.items():
            planet = state.planets.get(colony.planet_id)
            if planet is None:
                logger.debug("Skipping colony %s: planet %s missing", colony_id, colony.planet_id)
                continue

            updated, colony_events = self._process_colony(colony, planet, state)
            colonies[colony_id] = updated
            events.extend(colony_events)

        return PhaseResult(
            updated_state=state.model_copy(update={"colonies": colonies}),
            events=events,
        )

    # --- Per colony ---

    def _process_colony(
        self, colony: Colony, planet: Planet, state: GameState
    ) -> Tuple[Colony, List[GameEvent]]:
        events: List[GameEvent] = []
        turn = state.turn

        colony = self._recalculate_caps(colony, planet, state)
        new_attributes, growth_per_turn = self.recompute_attributes(
            colony, planet, state.budget.debt_tokens
        )
        colony = colony.model_copy(update={"attributes": new_attributes})

        colony, change = self.apply_growth_tick(colony, planet, growth_per_turn)
        if change == "up":
            events.append(build_event(
                turn=turn,
                priority=EventPriority.POSITIVE,
                category=EventCategory.COLONY,
                title=f"Population Growth — {colony.name}",
                description=(
                    f"{colony.name} has grown to population level "
                    f"{colony.population_level}. The colony is thriving."
                ),
                related_entity_ids=[colony.id],
            ))
        elif change == "down":
            events.append(build_event(
                turn=turn,
                priority=EventPriority.WARNING,
                category=EventCategory.COLONY,
                title=f"Population Decline — {colony.name}",
                description=(
                    f"{colony.name} has declined to population level "
                    f"{colony.population_level}. Improve quality of life and "
                    f"stability to stop the decline."
                ),
                related_entity_ids=[colony.id],
            ))
        if change is not None:
            colony = self._recalculate_caps(colony, planet, state)

        colony = self.apply_organic_growth(colony, self._deficit_resources(state, colony))
        events.extend(self._attribute_warnings(colony, turn))
        return colony, events

    def recompute_attributes(
        self, colony: Colony, planet: Planet, debt_tokens: int
    ) -> Tuple[ColonyAttributes, int]:
        """Pure recomputation; returns the new attributes and this turn's growth delta."""
        mods = colony.modifiers
        hab = attributes.habitability(planet.base_habitability, mods)
        acc = attributes.accessibility(colony.level(InfraDomain.TRANSPORT), mods)
        dyn = attributes.dynamism(acc, colony.population_level, mods)
        qol = attributes.quality_of_life(hab, mods)
        stab = attributes.stability(qol, colony.level(InfraDomain.MILITARY), debt_tokens, mods)
        growth_per_turn = attributes.growth_per_turn(qol, stab, acc, hab, mods)

        return ColonyAttributes(
            habitability=hab,
            accessibility=acc,
            dynamism=dyn,
            quality_of_life=qol,
            stability=stab,
            growth=colony.attributes.growth,
        ), growth_per_turn

    def apply_growth_tick(
        self, colony: Colony, planet: Planet, growth_per_turn: int
    ) -> Tuple[Colony, Optional[str]]:
        pop = colony.population_level
        new_growth = colony.attributes.growth + growth_per_turn
        max_pop = PLANET_SIZE_MAX_POPULATION[planet.size]
        civilian = colony.level(InfraDomain.CIVILIAN)

        if (
            new_growth >= GROWTH_LEVEL_UP_THRESHOLD
            and pop < max_pop
            and civilian >= civilian_required_for_growth(pop)
        ):
            return self._with_population(colony, pop + 1, 0), "up"

        if new_growth <= GROWTH_DECLINE_THRESHOLD and pop > 1:
            return self._with_population(colony, pop - 1, GROWTH_AFTER_DECLINE), "down"

        return self._with_population(colony, pop, new_growth), None

    def apply_organic_growth(self, colony: Colony, deficit_resources: Set[ResourceType]) -> Colony:
        if colony.total_infrastructure() == 0:
            return colony

        chance = organic_growth_chance(
            colony.attributes.dynamism, self.config.organic_growth_chance_per_dynamism
        )
        if not roll_chance(self.source, chance):
            return colony

        options = []
        for domain, infra in colony.infrastructure.items():
            if domain == InfraDomain.CIVILIAN:
                continue
            if infra.total_levels() == 0 or not infra.has_capacity():
                continue
            resource = DOMAIN_TO_RESOURCE.get(domain)
            weight = self.config.shortage_growth_weight if resource in deficit_resources else 1
            options.append((domain, weight))

        if not options:
            return colony

        domain = weighted_choice(self.source, options)
        infra = colony.infra(domain)
        infrastructure = dict(colony.infrastructure)
        infrastructure[domain] = infra.model_copy(
            update={"public_levels": infra.public_levels + 1}
        )
        logger.debug("Organic %s growth on %s", domain.value, colony.id)
        return colony.model_copy(update={"infrastructure": infrastructure})

    # --- Helpers ---

    def _recalculate_caps(self, colony: Colony, planet: Planet, state: GameState) -> Colony:
        infrastructure: Dict[InfraDomain, InfraState] = {}
        for domain, infra in colony.infrastructure.items():
            cap = attributes.infra_cap(
                domain,
                colony.population_level,
                planet.deposits,
                colony.modifiers,
                state.empire_bonuses.infra_caps,
            )
            infrastructure[domain] = infra.model_copy(update={"current_cap": cap})
        return colony.model_copy(update={"infrastructure": infrastructure})

    @staticmethod
    def _with_population(colony: Colony, population: int, growth: int) -> Colony:
        return colony.model_copy(update={
            "population_level": population,
            "attributes": colony.attributes.model_copy(update={"growth": growth}),
        })

    @staticmethod
    def _deficit_resources(state: GameState, colony: Colony) -> Set[ResourceType]:
        market = state.sector_markets.get(colony.sector_id)
        if market is None:
            return set()
        return {r for r, surplus in market.net_surplus.items() if surplus < 0}

    def _attribute_warnings(self, colony: Colony, turn: int) -> List[GameEvent]:
        events: List[GameEvent] = []
        threshold = self.config.low_attribute_warning_threshold
        stability = colony.attributes.stability
        qol = colony.attributes.quality_of_life

        if stability <= threshold:
            events.append(build_event(
                turn=turn,
                priority=EventPriority.WARNING,
                category=EventCategory.COLONY,
                title=f"Low Stability — {colony.name}",
                description=(
                    f"{colony.name} has critically low stability ({stability}/10). "
                    f"Unrest is a growing risk."
                ),
                related_entity_ids=[colony.id],
            ))
        if qol <= threshold:
            events.append(build_event(
                turn=turn,
                priority=EventPriority.WARNING,
                category=EventCategory.COLONY,
                title=f"Low Quality of Life — {colony.name}",
                description=(
                    f"{colony.name} has critically low quality of life ({qol}/10). "
                    f"Population decline is imminent without intervention."
                ),
                related_entity_ids=[colony.id],
            ))
        return events
