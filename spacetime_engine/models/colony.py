"""Colony — the settlement unit whose attributes and infrastructure drive the economy."""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from spacetime_engine.models.common import ColonyType, InfraDomain
from spacetime_engine.models.modifier import Modifier


class InfraState(BaseModel):
    """
    Ownership split of one infrastructure domain on one colony.

    corporate_levels mirrors the owning corporations' holdings; it is
    only ever written through spacetime_engine.ownership.transactions.
    """

    model_config = ConfigDict(frozen=True)

    domain: InfraDomain
    public_levels: int = Field(ge=0, default=0)
    corporate_levels: Dict[str, int] = {}
    current_cap: Optional[int] = None       # None means uncapped (Civilian)

    def corporate_total(self) -> int:
        return sum(self.corporate_levels.values())

    def total_levels(self) -> int:
        return self.public_levels + self.corporate_total()

    def has_capacity(self) -> bool:
        return self.current_cap is None or self.total_levels() < self.current_cap


class ColonyAttributes(BaseModel):
    """Derived attributes, recomputed each turn by the colony growth resolver."""

    model_config = ConfigDict(frozen=True)

    habitability: int = Field(ge=0, le=10, default=0)
    accessibility: int = Field(ge=0, le=10, default=0)
    dynamism: int = Field(ge=0, le=10, default=0)
    quality_of_life: int = Field(ge=0, le=10, default=0)
    stability: int = Field(ge=0, le=10, default=0)
    growth: int = 0                         # Progress accumulator, unbounded


class Colony(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    planet_id: str
    sector_id: str
    name: str
    type: ColonyType = ColonyType.FRONTIER_COLONY
    population_level: int = Field(ge=1, le=10, default=1)
    attributes: ColonyAttributes = ColonyAttributes()
    infrastructure: Dict[InfraDomain, InfraState] = Field(
        default_factory=dict, validate_default=True
    )
    corporations_present: List[str] = []
    modifiers: List[Modifier] = []
    founded_turn: int = 1

    @field_validator("infrastructure")
    @classmethod
    def _fill_missing_domains(
        cls, value: Dict[InfraDomain, InfraState]
    ) -> Dict[InfraDomain, InfraState]:
        """Every colony carries a state for all twelve domains."""
        return {
            domain: value.get(domain) or InfraState(domain=domain)
            for domain in InfraDomain
        }

    def infra(self, domain: InfraDomain) -> InfraState:
        return self.infrastructure[domain]

    def level(self, domain: InfraDomain) -> int:
        return self.infrastructure[domain].total_levels()

    def total_infrastructure(self) -> int:
        return sum(state.total_levels() for state in self.infrastructure.values())
