"""
Production — converts one colony's infrastructure and population into
per-resource flows.

Behavioral Contract:
- Extraction produces floor(level x output multiplier) and only when the
  planet holds a matching deposit
- Manufacturing produces its level, or floor(level / 2) when local supply
  of any input falls short of the combined industrial demand for it
- SpaceIndustry consumes tier-1 outputs, so tier-1 shortfalls cascade
- Transport capacity equals the transport level
- Population consumes Food pop x 2, ConsumerGoods pop, TransportCapacity pop
- consumed always reports full demand, even when production was reduced
"""

import math
from typing import Dict, List

from spacetime_engine.catalog.tables import has_deposit_for
from spacetime_engine.formulas.modifiers import resolve_modifiers
from spacetime_engine.models.colony import Colony
from spacetime_engine.models.common import InfraDomain, ResourceType
from spacetime_engine.models.market import ResourceFlow
from spacetime_engine.models.planet import Deposit

OUTPUT_MODIFIER_TARGETS: Dict[InfraDomain, str] = {
    InfraDomain.AGRICULTURAL: "agriculturalOutput",
    InfraDomain.MINING: "miningOutput",
    InfraDomain.DEEP_MINING: "deepMiningOutput",
    InfraDomain.GAS_EXTRACTION: "gasExtractionOutput",
}


def extraction(level: int, output_multiplier: float) -> int:
    return max(0, math.floor(level * output_multiplier))


def manufacturing(level: int, has_inputs: bool) -> int:
    return level if has_inputs else level // 2


def food_consumption(population_level: int) -> int:
    return population_level * 2


def consumer_goods_consumption(population_level: int) -> int:
    return population_level


def transport_consumption(population_level: int) -> int:
    return population_level


def _extract(colony: Colony, domain: InfraDomain, deposits: List[Deposit]) -> int:
    if not has_deposit_for(domain, deposits):
        return 0
    multiplier = resolve_modifiers(1.0, OUTPUT_MODIFIER_TARGETS[domain], colony.modifiers)
    return extraction(colony.level(domain), multiplier)


def colony_resource_flows(
    colony: Colony, deposits: List[Deposit]
) -> Dict[ResourceType, ResourceFlow]:
    pop = colony.population_level

    food = _extract(colony, InfraDomain.AGRICULTURAL, deposits)
    common = _extract(colony, InfraDomain.MINING, deposits)
    rare = _extract(colony, InfraDomain.DEEP_MINING, deposits)
    volatiles = _extract(colony, InfraDomain.GAS_EXTRACTION, deposits)

    low = colony.level(InfraDomain.LOW_INDUSTRY)
    heavy = colony.level(InfraDomain.HEAVY_INDUSTRY)
    high_tech = colony.level(InfraDomain.HIGH_TECH_INDUSTRY)
    space = colony.level(InfraDomain.SPACE_INDUSTRY)

    # One unit of each input per industrial level
    common_demand = low + heavy
    rare_demand = heavy + high_tech
    volatiles_demand = high_tech

    common_short = common < common_demand
    rare_short = rare < rare_demand
    volatiles_short = volatiles < volatiles_demand

    consumer_goods = manufacturing(low, not common_short)
    heavy_machinery = manufacturing(heavy, not common_short and not rare_short)
    high_tech_goods = manufacturing(high_tech, not rare_short and not volatiles_short)

    space_has_inputs = high_tech_goods >= space and heavy_machinery >= space
    ship_parts = manufacturing(space, space_has_inputs)

    produced_consumed = {
        ResourceType.FOOD: (food, food_consumption(pop)),
        ResourceType.COMMON_MATERIALS: (common, common_demand),
        ResourceType.RARE_MATERIALS: (rare, rare_demand),
        ResourceType.VOLATILES: (volatiles, volatiles_demand),
        ResourceType.CONSUMER_GOODS: (consumer_goods, consumer_goods_consumption(pop)),
        ResourceType.HEAVY_MACHINERY: (heavy_machinery, space),
        ResourceType.HIGH_TECH_GOODS: (high_tech_goods, space),
        ResourceType.SHIP_PARTS: (ship_parts, 0),
        ResourceType.TRANSPORT_CAPACITY: (
            colony.level(InfraDomain.TRANSPORT),
            transport_consumption(pop),
        ),
    }
    return {
        resource: ResourceFlow(resource=resource, produced=produced, consumed=consumed)
        for resource, (produced, consumed) in produced_consumed.items()
    }
