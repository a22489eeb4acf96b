"""
Corporation Generator — creates new level-1 corporations with unique names.

Behavioral Contract:
- Names are reserved through a session-scoped NameRegistry, never a
  process-wide global; clear() resets it for a new game
- Generated corporations start at level 1 with 0 capital, no assets,
  and presence on their home planet only
- 70% get one personality trait, 30% get two that do not conflict
"""

from typing import AbstractSet, Iterable, List, Optional, Protocol, Set

from pydantic import BaseModel

from spacetime_engine.catalog.tables import (
    CORP_NAME_CONNECTOR_CHANCE,
    CORP_NAME_CONNECTORS,
    CORP_NAME_PREFIXES,
    CORP_NAME_SUFFIXES,
    DUAL_TRAIT_CHANCE,
    TRAIT_SPAWN_WEIGHTS,
)
from spacetime_engine.models.common import CorpPersonalityTrait, CorpType
from spacetime_engine.models.corporation import Corporation, traits_conflict
from spacetime_engine.randomness.source import RandomSource, pick, roll_chance, weighted_choice

_ID_ALPHABET = list("0123456789abcdefghijklmnopqrstuvwxyz")


class CorporationGenerationError(Exception):
    """Raised when a unique corporation cannot be produced."""
    pass


class NameRegistry:
    """Tracks names handed out within one game session."""

    def __init__(self, names: Optional[Iterable[str]] = None):
        self._names: Set[str] = set(names or [])

    def reserve(self, name: str) -> bool:
        """Claim a name. Returns False if it was already taken."""
        if name in self._names:
            return False
        self._names.add(name)
        return True

    def clear(self) -> None:
        self._names.clear()

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)


class GenerateCorpParams(BaseModel):
    type: CorpType
    home_planet_id: str
    founded_turn: int


class CorpGenerator(Protocol):
    """Protocol for corporation generation — pluggable backend."""

    def generate(
        self,
        params: GenerateCorpParams,
        source: RandomSource,
        taken_ids: AbstractSet[str] = frozenset(),
    ) -> Corporation: ...


class CorporationGenerator:
    def __init__(self, registry: Optional[NameRegistry] = None, max_attempts: int = 100):
        self.registry = registry if registry is not None else NameRegistry()
        self.max_attempts = max_attempts

    def generate(
        self,
        params: GenerateCorpParams,
        source: RandomSource,
        taken_ids: AbstractSet[str] = frozenset(),
    ) -> Corporation:
        return Corporation(
            id=self._generate_id(source, taken_ids),
            name=self.generate_name(source),
            type=params.type,
            level=1,
            capital=0,
            traits=self.generate_traits(source),
            home_planet_id=params.home_planet_id,
            planets_present=[params.home_planet_id],
            founded_turn=params.founded_turn,
        )

    def generate_name(self, source: RandomSource) -> str:
        for _ in range(self.max_attempts):
            prefix = pick(source, CORP_NAME_PREFIXES)
            suffix = pick(source, CORP_NAME_SUFFIXES)
            if roll_chance(source, CORP_NAME_CONNECTOR_CHANCE):
                name = f"{prefix} {pick(source, CORP_NAME_CONNECTORS)} {suffix}"
            else:
                name = f"{prefix} {suffix}"
            if self.registry.reserve(name):
                return name
        raise CorporationGenerationError(
            f"failed to generate a unique corporation name after {self.max_attempts} attempts"
        )

    def generate_traits(self, source: RandomSource) -> List[CorpPersonalityTrait]:
        first = weighted_choice(source, TRAIT_SPAWN_WEIGHTS)
        traits = [first]
        if roll_chance(source, DUAL_TRAIT_CHANCE):
            eligible = [
                (trait, weight) for trait, weight in TRAIT_SPAWN_WEIGHTS
                if trait != first and not traits_conflict(first, trait)
            ]
            if eligible:
                traits.append(weighted_choice(source, eligible))
        return traits

    def _generate_id(self, source: RandomSource, taken_ids: AbstractSet[str]) -> str:
        for _ in range(self.max_attempts):
            suffix = "".join(pick(source, _ID_ALPHABET) for _ in range(8))
            corp_id = f"corp_{suffix}"
            if corp_id not in taken_ids:
                return corp_id
        raise CorporationGenerationError(
            f"failed to generate a unique corporation id after {self.max_attempts} attempts"
        )
