"""Shared enumerations used across every subsystem of the engine."""

from enum import Enum


class PlanetType(str, Enum):
    CONTINENTAL = "Continental"
    JUNGLE = "Jungle"
    WATER = "Water"
    SWAMP = "Swamp"
    ARID = "Arid"
    TUNDRA = "Tundra"
    ROCKY = "Rocky"
    VOLCANIC = "Volcanic"
    BARREN = "Barren"
    GAS_GIANT = "GasGiant"


class PlanetSize(str, Enum):
    TINY = "Tiny"
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"
    HUGE = "Huge"


class DepositType(str, Enum):
    FERTILE_GROUND = "FertileGround"
    RICH_OCEAN = "RichOcean"
    FUNGAL_NETWORKS = "FungalNetworks"
    THERMAL_VENT_ECOSYSTEM = "ThermalVentEcosystem"
    COMMON_ORE_VEIN = "CommonOreVein"
    CARBON_BASED_LAND = "CarbonBasedLand"
    SURFACE_METAL_FIELDS = "SurfaceMetalFields"
    GLACIAL_DEPOSITS = "GlacialDeposits"
    RARE_ORE_VEIN = "RareOreVein"
    CRYSTAL_FORMATIONS = "CrystalFormations"
    TECTONIC_SEAMS = "TectonicSeams"
    ANCIENT_SEABED = "AncientSeabed"
    GAS_POCKET = "GasPocket"
    SUBSURFACE_ICE_RESERVES = "SubsurfaceIceReserves"
    VOLCANIC_FUMAROLES = "VolcanicFumaroles"
    ATMOSPHERIC_LAYERS = "AtmosphericLayers"


class RichnessLevel(str, Enum):
    POOR = "Poor"
    MODERATE = "Moderate"
    RICH = "Rich"
    EXCEPTIONAL = "Exceptional"


class ResourceType(str, Enum):
    FOOD = "Food"
    COMMON_MATERIALS = "CommonMaterials"
    RARE_MATERIALS = "RareMaterials"
    VOLATILES = "Volatiles"
    CONSUMER_GOODS = "ConsumerGoods"
    HEAVY_MACHINERY = "HeavyMachinery"
    HIGH_TECH_GOODS = "HighTechGoods"
    SHIP_PARTS = "ShipParts"
    TRANSPORT_CAPACITY = "TransportCapacity"  # Local only, never traded


class InfraDomain(str, Enum):
    CIVILIAN = "Civilian"
    MINING = "Mining"
    DEEP_MINING = "DeepMining"
    GAS_EXTRACTION = "GasExtraction"
    AGRICULTURAL = "Agricultural"
    LOW_INDUSTRY = "LowIndustry"
    HEAVY_INDUSTRY = "HeavyIndustry"
    HIGH_TECH_INDUSTRY = "HighTechIndustry"
    SPACE_INDUSTRY = "SpaceIndustry"
    TRANSPORT = "Transport"
    SCIENCE = "Science"
    MILITARY = "Military"


class ColonyType(str, Enum):
    FRONTIER_COLONY = "FrontierColony"
    MINING_OUTPOST = "MiningOutpost"
    SCIENCE_OUTPOST = "ScienceOutpost"
    MILITARY_OUTPOST = "MilitaryOutpost"


class CorpType(str, Enum):
    EXPLOITATION = "Exploitation"
    CONSTRUCTION = "Construction"
    INDUSTRIAL = "Industrial"
    SHIPBUILDING = "Shipbuilding"
    SCIENCE = "Science"
    TRANSPORT = "Transport"
    MILITARY = "Military"
    EXPLORATION = "Exploration"
    AGRICULTURE = "Agriculture"


class CorpPersonalityTrait(str, Enum):
    CAUTIOUS = "Cautious"
    AGGRESSIVE = "Aggressive"
    INNOVATIVE = "Innovative"
    CONSERVATIVE = "Conservative"
    OPPORTUNISTIC = "Opportunistic"
    ETHICAL = "Ethical"
    RUTHLESS = "Ruthless"
    EFFICIENT = "Efficient"


class ContractType(str, Enum):
    EXPLORATION = "Exploration"
    GROUND_SURVEY = "GroundSurvey"
    COLONIZATION = "Colonization"
    SHIP_COMMISSION = "ShipCommission"
    TRADE_ROUTE = "TradeRoute"


class ContractStatus(str, Enum):
    ACTIVE = "Active"
    COMPLETED = "Completed"
    FAILED = "Failed"


class MissionType(str, Enum):
    ESCORT = "Escort"
    ASSAULT = "Assault"
    DEFENSE = "Defense"
    RESCUE = "Rescue"
    INVESTIGATION = "Investigation"


class EventPriority(str, Enum):
    CRITICAL = "Critical"
    WARNING = "Warning"
    INFO = "Info"
    POSITIVE = "Positive"


class EventCategory(str, Enum):
    BUDGET = "budget"
    COLONY = "colony"
    CORPORATION = "corporation"
    CONTRACT = "contract"
