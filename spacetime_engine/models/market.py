"""Market models — per-colony resource flows and per-sector clearing results."""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict

from spacetime_engine.models.common import ResourceType


def zero_resource_record() -> Dict[ResourceType, int]:
    return {resource: 0 for resource in ResourceType}


class ResourceFlow(BaseModel):
    model_config = ConfigDict(frozen=True)

    resource: ResourceType
    produced: int = 0
    consumed: int = 0           # Population demand plus industrial input
    imported: int = 0
    in_shortage: bool = False

    @property
    def surplus(self) -> int:
        return self.produced - self.consumed

    @property
    def unmet_deficit(self) -> int:
        return max(0, self.consumed - self.produced - self.imported)


class TradeFlow(BaseModel):
    """One resource moved along a trade route in one direction."""

    model_config = ConfigDict(frozen=True)

    from_sector_id: str
    to_sector_id: str
    resource: ResourceType
    surplus_available: int
    transferred: int            # floor(surplus_available * efficiency)
    received: int


class Shortage(BaseModel):
    model_config = ConfigDict(frozen=True)

    colony_id: str
    resource: ResourceType
    deficit_amount: int


class ExportBonus(BaseModel):
    model_config = ConfigDict(frozen=True)

    colony_id: str
    resource: ResourceType
    attribute_target: str = "dynamism"
    bonus_amount: int = 1


class SectorMarketState(BaseModel):
    """Recreated from scratch every turn; never carried over."""

    model_config = ConfigDict(frozen=True)

    sector_id: str
    total_production: Dict[ResourceType, int]
    total_consumption: Dict[ResourceType, int]
    net_surplus: Dict[ResourceType, int]
    inbound_flows: List[TradeFlow] = []
    outbound_flows: List[TradeFlow] = []
