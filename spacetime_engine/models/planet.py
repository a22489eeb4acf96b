"""Planets, sectors and the galaxy adjacency graph."""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from spacetime_engine.models.common import (
    DepositType,
    PlanetSize,
    PlanetType,
    RichnessLevel,
)


class Deposit(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: DepositType
    richness: RichnessLevel
    richness_revealed: bool = False


class Planet(BaseModel):
    """A surveyed body that a colony may be founded on."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    sector_id: str
    type: PlanetType
    size: PlanetSize
    base_habitability: int = Field(ge=0, le=10)
    deposits: List[Deposit] = []


class Sector(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    exploration_percent: int = Field(ge=0, le=100, default=0)
    first_entered_turn: Optional[int] = None


class Galaxy(BaseModel):
    """Sectors plus a bidirectional adjacency list."""

    model_config = ConfigDict(frozen=True)

    sectors: Dict[str, Sector] = {}
    adjacency: Dict[str, List[str]] = {}
    starting_sector_id: Optional[str] = None
