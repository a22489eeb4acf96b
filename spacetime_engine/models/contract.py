"""Contracts and missions — the BP-funded commitments the expense phase pays for."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from spacetime_engine.models.common import ContractStatus, ContractType, MissionType

TRADE_ROUTE_SENTINEL = 9999  # turns_remaining for ongoing trade routes


class ContractTarget(BaseModel):
    """
    What a contract points at.

    kind selects which id fields are meaningful: "sector" uses sector_id,
    "planet" uses planet_id, "colony" uses colony_id and "sector_pair"
    uses sector_id_a / sector_id_b.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["sector", "planet", "colony", "sector_pair"]
    sector_id: Optional[str] = None
    planet_id: Optional[str] = None
    colony_id: Optional[str] = None
    sector_id_a: Optional[str] = None
    sector_id_b: Optional[str] = None


class Contract(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    type: ContractType
    status: ContractStatus = ContractStatus.ACTIVE
    target: ContractTarget
    assigned_corp_id: str
    bp_per_turn: int = Field(ge=0)
    duration_turns: int = Field(ge=1)
    turns_remaining: int = Field(ge=0)
    start_turn: int = 1
    completed_turn: Optional[int] = None


class Mission(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    type: MissionType
    bp_per_turn: int = Field(ge=0)
    start_turn: int = 1
    completed_turn: Optional[int] = None
