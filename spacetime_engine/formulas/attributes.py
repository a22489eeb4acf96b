"""
Colony attribute and infrastructure-cap formulas.

Every attribute is clamped to [0, 10] after modifiers. growth_per_turn is
not clamped. Modifier targets use the attribute's camelCase name
(habitability, accessibility, dynamism, qualityOfLife, stability, growth)
and max<Domain> for caps.
"""

import math
from typing import Dict, List, Optional

from spacetime_engine.catalog.tables import EXTRACTION_DOMAINS, best_richness_cap
from spacetime_engine.formulas.modifiers import resolve_modifiers
from spacetime_engine.models.common import InfraDomain
from spacetime_engine.models.modifier import Modifier
from spacetime_engine.models.planet import Deposit

ATTR_MIN = 0
ATTR_MAX = 10


def _clamped(base: int, target: str, modifiers: List[Modifier]) -> int:
    return math.floor(resolve_modifiers(base, target, modifiers, ATTR_MIN, ATTR_MAX))


def habitability(base_habitability: int, modifiers: List[Modifier]) -> int:
    return _clamped(base_habitability, "habitability", modifiers)


def accessibility(transport_level: int, modifiers: List[Modifier]) -> int:
    return _clamped(3 + transport_level // 2, "accessibility", modifiers)


def dynamism(accessibility_value: int, population_level: int, modifiers: List[Modifier]) -> int:
    return _clamped((accessibility_value + population_level) // 2, "dynamism", modifiers)


def habitability_malus(habitability_value: int) -> int:
    return max(0, 10 - habitability_value) // 3


def quality_of_life(habitability_value: int, modifiers: List[Modifier]) -> int:
    return _clamped(10 - habitability_malus(habitability_value), "qualityOfLife", modifiers)


def stability(
    quality_of_life_value: int,
    military_level: int,
    debt_tokens: int,
    modifiers: List[Modifier],
) -> int:
    base = (
        10
        - max(0, 5 - quality_of_life_value)
        - debt_tokens // 2
        + min(3, military_level // 3)
    )
    return _clamped(base, "stability", modifiers)


def growth_per_turn(
    quality_of_life_value: int,
    stability_value: int,
    accessibility_value: int,
    habitability_value: int,
    modifiers: List[Modifier],
) -> int:
    base = (
        (quality_of_life_value + stability_value + accessibility_value) // 3
        - 3
        - habitability_malus(habitability_value)
    )
    return math.floor(resolve_modifiers(base, "growth", modifiers))


def infra_cap(
    domain: InfraDomain,
    population_level: int,
    deposits: List[Deposit],
    modifiers: List[Modifier],
    empire_caps: Optional[Dict[InfraDomain, int]] = None,
) -> Optional[int]:
    """
    Capacity ceiling for one domain on one colony.

    Civilian is uncapped (None). Extraction domains take the smaller of the
    population-derived cap and the richest matching deposit's cap, and are
    capped at 0 when no matching deposit exists.
    """
    if domain == InfraDomain.CIVILIAN:
        return None

    bonus = (empire_caps or {}).get(domain, 0)
    population_cap = max(0, math.floor(resolve_modifiers(
        population_level * 2 + bonus, f"max{domain.value}", modifiers
    )))

    if domain in EXTRACTION_DOMAINS:
        deposit_cap = best_richness_cap(domain, deposits)
        if deposit_cap is None:
            return 0
        return min(population_cap, deposit_cap)

    return population_cap
