"""
Investment Policy — decides what one corporation does with its capital this turn.

Behavioral Contract:
- Returns at most one action: an investment is tried first, an acquisition
  only when no investment target exists
- Investment: capital >= 2, below the ownership cap (level x 4), a sector
  market deficit in an allowed domain whose own inputs are not in deficit,
  and a colony in that sector with spare capacity (and a deposit, for
  extraction domains)
- Acquisition: level >= 6, target at least 3 levels below, capital >=
  target level x 5; the target with the most owned infrastructure wins
- Never changes state; the engine applies the action
"""

from typing import List, Literal, Optional, Protocol, Tuple

from pydantic import BaseModel, ConfigDict

from spacetime_engine.catalog.tables import (
    CORP_TYPE_PRIMARY_DOMAINS,
    DOMAIN_REQUIRED_INPUTS,
    EXTRACTION_DOMAINS,
    RESOURCE_TO_DOMAIN,
    has_deposit_for,
)
from spacetime_engine.formulas.growth import acquisition_cost, max_corp_infrastructure
from spacetime_engine.models.colony import Colony
from spacetime_engine.models.common import InfraDomain, ResourceType
from spacetime_engine.models.config import EngineConfig
from spacetime_engine.models.corporation import Corporation
from spacetime_engine.models.state import GameState
from spacetime_engine.randomness.source import RandomSource, weighted_choice


class CorpAction(BaseModel):
    """A single decision taken by a corporation."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["invest", "acquire"]
    cost: int
    colony_id: Optional[str] = None
    domain: Optional[InfraDomain] = None
    target_corp_id: Optional[str] = None


class InvestmentPolicy(Protocol):
    """Protocol for corporate decision making — pluggable backend."""

    def decide(
        self, corp: Corporation, state: GameState, source: RandomSource
    ) -> Optional[CorpAction]: ...


class RuleBasedInvestmentPolicy:
    """Chases the worst sector deficits, then buys out much smaller rivals."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

    def decide(
        self, corp: Corporation, state: GameState, source: RandomSource
    ) -> Optional[CorpAction]:
        action = self.find_investment(corp, state, source)
        if action is None:
            action = self.find_acquisition(corp, state)
        return action

    # --- Investment ---

    def allowed_domains(self, corp: Corporation) -> List[InfraDomain]:
        if corp.level >= self.config.primary_domain_level_threshold:
            return list(InfraDomain)
        return list(CORP_TYPE_PRIMARY_DOMAINS.get(corp.type, []))

    def find_investment(
        self, corp: Corporation, state: GameState, source: RandomSource
    ) -> Optional[CorpAction]:
        cost = self.config.invest_capital_cost
        if corp.capital < max(cost, self.config.min_capital_to_invest):
            return None

        allowed = self.allowed_domains(corp)
        if not allowed:
            return None

        cap = max_corp_infrastructure(corp.level, self.config.infra_per_corp_level)
        if corp.total_owned_infrastructure() >= cap:
            return None

        deficits = self._collect_deficits(state, allowed)
        if not deficits:
            return None

        sector_id, domain = weighted_choice(source, deficits)
        colony = self._best_colony(state, sector_id, domain)
        if colony is None:
            return None

        return CorpAction(kind="invest", cost=cost, colony_id=colony.id, domain=domain)

    @staticmethod
    def _collect_deficits(
        state: GameState, allowed: List[InfraDomain]
    ) -> List[Tuple[Tuple[str, InfraDomain], int]]:
        deficits = []
        for sector_id, market in state.sector_markets.items():
            for resource in ResourceType:
                surplus = market.net_surplus.get(resource, 0)
                if surplus >= 0:
                    continue
                domain = RESOURCE_TO_DOMAIN.get(resource)
                if domain is None or domain not in allowed:
                    continue
                inputs = DOMAIN_REQUIRED_INPUTS.get(domain, [])
                if any(market.net_surplus.get(r, 0) < 0 for r in inputs):
                    continue
                deficits.append(((sector_id, domain), -surplus))
        return deficits

    @staticmethod
    def _best_colony(state: GameState, sector_id: str, domain: InfraDomain) -> Optional[Colony]:
        candidates = []
        for colony in state.colonies.values():
            if colony.sector_id != sector_id:
                continue
            if not colony.infra(domain).has_capacity():
                continue
            if domain in EXTRACTION_DOMAINS:
                planet = state.planets.get(colony.planet_id)
                if planet is None or not has_deposit_for(domain, planet.deposits):
                    continue
            candidates.append(colony)

        if not candidates:
            return None
        # max() returns the first of equal keys, keeping encounter order on ties
        return max(candidates, key=lambda c: c.attributes.dynamism)

    # --- Acquisition ---

    def find_acquisition(self, corp: Corporation, state: GameState) -> Optional[CorpAction]:
        if corp.level < self.config.megacorp_level:
            return None

        best: Optional[Corporation] = None
        for candidate in state.corporations.values():
            if candidate.id == corp.id:
                continue
            if corp.level - candidate.level < self.config.acquisition_level_gap:
                continue
            cost = acquisition_cost(candidate.level, self.config.acquisition_cost_per_level)
            if corp.capital < cost:
                continue
            if best is None or (
                candidate.total_owned_infrastructure() > best.total_owned_infrastructure()
            ):
                best = candidate

        if best is None:
            return None
        return CorpAction(
            kind="acquire",
            cost=acquisition_cost(best.level, self.config.acquisition_cost_per_level),
            target_corp_id=best.id,
        )
