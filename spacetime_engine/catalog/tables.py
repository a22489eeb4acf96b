"""
Static rule tables — deposits, planet sizes, corporation types and the
domain/resource mappings shared by the market, colony and corporate phases.
"""

from typing import Dict, List, Optional, Tuple

from spacetime_engine.models.common import (
    CorpPersonalityTrait,
    CorpType,
    DepositType,
    InfraDomain,
    PlanetSize,
    ResourceType,
    RichnessLevel,
)
from spacetime_engine.models.planet import Deposit

# --- Deposits ---

RICHNESS_CAPS: Dict[RichnessLevel, int] = {
    RichnessLevel.POOR: 5,
    RichnessLevel.MODERATE: 10,
    RichnessLevel.RICH: 15,
    RichnessLevel.EXCEPTIONAL: 20,
}

# deposit -> (resource produced, domain that extracts it)
DEPOSIT_DEFINITIONS: Dict[DepositType, Tuple[ResourceType, InfraDomain]] = {
    DepositType.FERTILE_GROUND: (ResourceType.FOOD, InfraDomain.AGRICULTURAL),
    DepositType.RICH_OCEAN: (ResourceType.FOOD, InfraDomain.AGRICULTURAL),
    DepositType.FUNGAL_NETWORKS: (ResourceType.FOOD, InfraDomain.AGRICULTURAL),
    DepositType.THERMAL_VENT_ECOSYSTEM: (ResourceType.FOOD, InfraDomain.AGRICULTURAL),
    DepositType.COMMON_ORE_VEIN: (ResourceType.COMMON_MATERIALS, InfraDomain.MINING),
    DepositType.CARBON_BASED_LAND: (ResourceType.COMMON_MATERIALS, InfraDomain.MINING),
    DepositType.SURFACE_METAL_FIELDS: (ResourceType.COMMON_MATERIALS, InfraDomain.MINING),
    DepositType.GLACIAL_DEPOSITS: (ResourceType.COMMON_MATERIALS, InfraDomain.MINING),
    DepositType.RARE_ORE_VEIN: (ResourceType.RARE_MATERIALS, InfraDomain.DEEP_MINING),
    DepositType.CRYSTAL_FORMATIONS: (ResourceType.RARE_MATERIALS, InfraDomain.DEEP_MINING),
    DepositType.TECTONIC_SEAMS: (ResourceType.RARE_MATERIALS, InfraDomain.DEEP_MINING),
    DepositType.ANCIENT_SEABED: (ResourceType.RARE_MATERIALS, InfraDomain.DEEP_MINING),
    DepositType.GAS_POCKET: (ResourceType.VOLATILES, InfraDomain.GAS_EXTRACTION),
    DepositType.SUBSURFACE_ICE_RESERVES: (ResourceType.VOLATILES, InfraDomain.GAS_EXTRACTION),
    DepositType.VOLCANIC_FUMAROLES: (ResourceType.VOLATILES, InfraDomain.GAS_EXTRACTION),
    DepositType.ATMOSPHERIC_LAYERS: (ResourceType.VOLATILES, InfraDomain.GAS_EXTRACTION),
}

EXTRACTION_DOMAINS = frozenset({
    InfraDomain.MINING,
    InfraDomain.DEEP_MINING,
    InfraDomain.GAS_EXTRACTION,
    InfraDomain.AGRICULTURAL,
})


def extracted_by(deposit_type: DepositType) -> InfraDomain:
    return DEPOSIT_DEFINITIONS[deposit_type][1]


def has_deposit_for(domain: InfraDomain, deposits: List[Deposit]) -> bool:
    return any(extracted_by(d.type) == domain for d in deposits)


def best_richness_cap(domain: InfraDomain, deposits: List[Deposit]) -> Optional[int]:
    """Cap of the richest deposit the domain can extract, or None if there is none."""
    caps = [RICHNESS_CAPS[d.richness] for d in deposits if extracted_by(d.type) == domain]
    return max(caps) if caps else None


# --- Planets ---

PLANET_SIZE_MAX_POPULATION: Dict[PlanetSize, int] = {
    PlanetSize.TINY: 4,
    PlanetSize.SMALL: 5,
    PlanetSize.MEDIUM: 8,
    PlanetSize.LARGE: 9,
    PlanetSize.HUGE: 10,
}

# --- Domains and resources ---

DOMAIN_TO_RESOURCE: Dict[InfraDomain, ResourceType] = {
    InfraDomain.AGRICULTURAL: ResourceType.FOOD,
    InfraDomain.MINING: ResourceType.COMMON_MATERIALS,
    InfraDomain.DEEP_MINING: ResourceType.RARE_MATERIALS,
    InfraDomain.GAS_EXTRACTION: ResourceType.VOLATILES,
    InfraDomain.LOW_INDUSTRY: ResourceType.CONSUMER_GOODS,
    InfraDomain.HEAVY_INDUSTRY: ResourceType.HEAVY_MACHINERY,
    InfraDomain.HIGH_TECH_INDUSTRY: ResourceType.HIGH_TECH_GOODS,
    InfraDomain.SPACE_INDUSTRY: ResourceType.SHIP_PARTS,
    InfraDomain.TRANSPORT: ResourceType.TRANSPORT_CAPACITY,
}

RESOURCE_TO_DOMAIN: Dict[ResourceType, InfraDomain] = {
    resource: domain for domain, resource in DOMAIN_TO_RESOURCE.items()
}

DOMAIN_REQUIRED_INPUTS: Dict[InfraDomain, List[ResourceType]] = {
    InfraDomain.LOW_INDUSTRY: [ResourceType.COMMON_MATERIALS],
    InfraDomain.HEAVY_INDUSTRY: [ResourceType.COMMON_MATERIALS, ResourceType.RARE_MATERIALS],
    InfraDomain.HIGH_TECH_INDUSTRY: [ResourceType.RARE_MATERIALS, ResourceType.VOLATILES],
    InfraDomain.SPACE_INDUSTRY: [ResourceType.HIGH_TECH_GOODS, ResourceType.HEAVY_MACHINERY],
}

TRADEABLE_RESOURCES: List[ResourceType] = [
    r for r in ResourceType if r != ResourceType.TRANSPORT_CAPACITY
]

# --- Corporations ---

CORP_TYPE_PRIMARY_DOMAINS: Dict[CorpType, List[InfraDomain]] = {
    CorpType.EXPLOITATION: [
        InfraDomain.MINING, InfraDomain.DEEP_MINING, InfraDomain.GAS_EXTRACTION,
    ],
    CorpType.CONSTRUCTION: [InfraDomain.CIVILIAN],
    CorpType.INDUSTRIAL: [
        InfraDomain.LOW_INDUSTRY, InfraDomain.HEAVY_INDUSTRY, InfraDomain.HIGH_TECH_INDUSTRY,
    ],
    CorpType.SHIPBUILDING: [InfraDomain.SPACE_INDUSTRY],
    CorpType.SCIENCE: [InfraDomain.SCIENCE],
    CorpType.TRANSPORT: [InfraDomain.TRANSPORT],
    CorpType.MILITARY: [InfraDomain.MILITARY],
    CorpType.EXPLORATION: [],
    CorpType.AGRICULTURE: [InfraDomain.AGRICULTURAL],
}

# Civilian never seeds an emergent corporation.
DOMAIN_TO_CORP_TYPE: Dict[InfraDomain, CorpType] = {
    InfraDomain.AGRICULTURAL: CorpType.AGRICULTURE,
    InfraDomain.MINING: CorpType.EXPLOITATION,
    InfraDomain.DEEP_MINING: CorpType.EXPLOITATION,
    InfraDomain.GAS_EXTRACTION: CorpType.EXPLOITATION,
    InfraDomain.LOW_INDUSTRY: CorpType.INDUSTRIAL,
    InfraDomain.HEAVY_INDUSTRY: CorpType.INDUSTRIAL,
    InfraDomain.HIGH_TECH_INDUSTRY: CorpType.INDUSTRIAL,
    InfraDomain.SPACE_INDUSTRY: CorpType.SHIPBUILDING,
    InfraDomain.SCIENCE: CorpType.SCIENCE,
    InfraDomain.TRANSPORT: CorpType.TRANSPORT,
    InfraDomain.MILITARY: CorpType.MILITARY,
}

TRAIT_SPAWN_WEIGHTS: List[Tuple[CorpPersonalityTrait, int]] = [
    (CorpPersonalityTrait.CAUTIOUS, 15),
    (CorpPersonalityTrait.AGGRESSIVE, 15),
    (CorpPersonalityTrait.INNOVATIVE, 10),
    (CorpPersonalityTrait.CONSERVATIVE, 15),
    (CorpPersonalityTrait.OPPORTUNISTIC, 15),
    (CorpPersonalityTrait.ETHICAL, 10),
    (CorpPersonalityTrait.RUTHLESS, 10),
    (CorpPersonalityTrait.EFFICIENT, 10),
]

DUAL_TRAIT_CHANCE = 30

CORP_NAME_PREFIXES: List[str] = [
    "Apex", "Astra", "Atlas", "Aurum", "Axiom", "Beacon", "Boreal", "Cascade",
    "Catalyst", "Centauri", "Cerulean", "Citadel", "Cobalt", "Condor", "Crest",
    "Cygnus", "Delta", "Drake", "Eclipse", "Epoch", "Equinox", "Ethos",
    "Farreach", "Ferrum", "Frontier", "Galactic", "Genesis", "Granite", "Halo",
    "Harbinger", "Helix", "Horizon", "Hydra", "Ion", "Ironwall", "Keystone",
    "Lattice", "Lodestar", "Meridian", "Minera", "Momentum", "Nautilus",
    "Nebula", "Nexus", "Nova", "Obsidian", "Olympus", "Onyx", "Orbit",
    "Pangea", "Pathfinder", "Phoenix", "Pinnacle", "Pioneer", "Polaris",
    "Quantum", "Radiant", "Rampart", "Redstone", "Relay", "Sentinel", "Solaris",
    "Sovereign", "Spectra", "Starfall", "Stellar", "Summit", "Terran", "Titan",
    "Torus", "Trident", "Umbral", "Vanguard", "Vector", "Verdant", "Vertex",
    "Vortex", "Wayfarer", "Xenon", "Zenith",
]

CORP_NAME_SUFFIXES: List[str] = [
    "Associates", "Authority", "Bureau", "Capital", "Combine", "Company",
    "Consortium", "Corp", "Corporation", "Development", "Directorate",
    "Dynamics", "Engineering", "Enterprises", "Exchange", "Extraction",
    "Federation", "Foundation", "Futures", "Group", "Guild", "Holdings",
    "House", "Industries", "Institute", "Logistics", "Manufacturing", "Mining",
    "Navigation", "Networks", "Operations", "Partners", "Projects", "Resources",
    "Research", "Sciences", "Services", "Solutions", "Systems", "Technologies",
    "Trading", "Transit", "Union", "Ventures", "Works",
]

CORP_NAME_CONNECTORS: List[str] = ["&", "and", "of"]

CORP_NAME_CONNECTOR_CHANCE = 20
