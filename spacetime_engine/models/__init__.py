"""Spacetime engine data models."""

from spacetime_engine.models.budget import (
    BudgetHistoryEntry,
    BudgetState,
    ExpenseEntry,
    ExpenseSourceType,
    IncomeSource,
    IncomeSourceType,
)
from spacetime_engine.models.colony import Colony, ColonyAttributes, InfraState
from spacetime_engine.models.common import (
    ColonyType,
    ContractStatus,
    ContractType,
    CorpPersonalityTrait,
    CorpType,
    DepositType,
    EventCategory,
    EventPriority,
    InfraDomain,
    MissionType,
    PlanetSize,
    PlanetType,
    ResourceType,
    RichnessLevel,
)
from spacetime_engine.models.config import EngineConfig
from spacetime_engine.models.contract import Contract, ContractTarget, Mission
from spacetime_engine.models.corporation import CorpAssets, Corporation
from spacetime_engine.models.event import GameEvent
from spacetime_engine.models.market import (
    ExportBonus,
    ResourceFlow,
    SectorMarketState,
    Shortage,
    TradeFlow,
)
from spacetime_engine.models.modifier import (
    Modifier,
    ModifierCondition,
    ModifierOperation,
    ModifierSource,
)
from spacetime_engine.models.planet import Deposit, Galaxy, Planet, Sector
from spacetime_engine.models.state import (
    EmpireBonuses,
    GameState,
    PhaseResult,
    TurnResult,
)

__all__ = [
    "BudgetHistoryEntry",
    "BudgetState",
    "Colony",
    "ColonyAttributes",
    "ColonyType",
    "Contract",
    "ContractStatus",
    "ContractTarget",
    "ContractType",
    "CorpAssets",
    "CorpPersonalityTrait",
    "CorpType",
    "Corporation",
    "Deposit",
    "DepositType",
    "EmpireBonuses",
    "EngineConfig",
    "EventCategory",
    "EventPriority",
    "ExpenseEntry",
    "ExpenseSourceType",
    "ExportBonus",
    "Galaxy",
    "GameEvent",
    "GameState",
    "IncomeSource",
    "IncomeSourceType",
    "InfraDomain",
    "InfraState",
    "Mission",
    "MissionType",
    "Modifier",
    "ModifierCondition",
    "ModifierOperation",
    "ModifierSource",
    "PhaseResult",
    "Planet",
    "PlanetSize",
    "PlanetType",
    "ResourceFlow",
    "ResourceType",
    "RichnessLevel",
    "Sector",
    "SectorMarketState",
    "Shortage",
    "TradeFlow",
    "TurnResult",
]
