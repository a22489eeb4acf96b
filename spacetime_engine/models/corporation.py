"""Corporation — an autonomous economic actor that owns colony infrastructure."""

from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from spacetime_engine.models.common import CorpPersonalityTrait, CorpType, InfraDomain

CONFLICTING_TRAIT_PAIRS: List[Tuple[CorpPersonalityTrait, CorpPersonalityTrait]] = [
    (CorpPersonalityTrait.CAUTIOUS, CorpPersonalityTrait.AGGRESSIVE),
    (CorpPersonalityTrait.INNOVATIVE, CorpPersonalityTrait.CONSERVATIVE),
    (CorpPersonalityTrait.ETHICAL, CorpPersonalityTrait.RUTHLESS),
]


def traits_conflict(a: CorpPersonalityTrait, b: CorpPersonalityTrait) -> bool:
    return (a, b) in CONFLICTING_TRAIT_PAIRS or (b, a) in CONFLICTING_TRAIT_PAIRS


class CorpAssets(BaseModel):
    """
    Authoritative record of what a corporation owns.

    infrastructure_by_colony maps colony id -> {domain: levels}.
    """

    model_config = ConfigDict(frozen=True)

    infrastructure_by_colony: Dict[str, Dict[InfraDomain, int]] = {}
    schematics: List[str] = []
    patents: List[str] = []


class Corporation(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: CorpType
    level: int = Field(ge=1, le=10, default=1)
    capital: int = Field(ge=0, default=0)
    traits: List[CorpPersonalityTrait] = Field(min_length=1, max_length=2)
    home_planet_id: str
    planets_present: List[str] = []
    assets: CorpAssets = CorpAssets()
    active_contract_ids: List[str] = []
    founded_turn: int = 1

    @field_validator("traits")
    @classmethod
    def _compatible_traits(cls, value: List[CorpPersonalityTrait]) -> List[CorpPersonalityTrait]:
        if len(value) == 2:
            first, second = value
            if first == second or traits_conflict(first, second):
                raise ValueError(f"incompatible traits: {first.value}, {second.value}")
        return value

    def total_owned_infrastructure(self) -> int:
        return sum(
            sum(holdings.values())
            for holdings in self.assets.infrastructure_by_colony.values()
        )

    def holdings_on(self, colony_id: str) -> Dict[InfraDomain, int]:
        return dict(self.assets.infrastructure_by_colony.get(colony_id, {}))
