"""Tests for the Corporate Decision Engine, investment policy and generator."""

import random
from typing import List, Optional

import pytest

from spacetime_engine.corporate.engine import CorporateDecisionEngine, most_prominent_public_domain
from spacetime_engine.corporate.generator import (
    CorporationGenerationError,
    CorporationGenerator,
    GenerateCorpParams,
    NameRegistry,
)
from spacetime_engine.corporate.policy import CorpAction, RuleBasedInvestmentPolicy
from spacetime_engine.models.colony import Colony, ColonyAttributes, InfraState
from spacetime_engine.models.common import (
    CorpPersonalityTrait,
    CorpType,
    DepositType,
    EventCategory,
    EventPriority,
    InfraDomain,
    PlanetSize,
    PlanetType,
    ResourceType,
    RichnessLevel,
)
from spacetime_engine.models.corporation import CONFLICTING_TRAIT_PAIRS, CorpAssets, Corporation
from spacetime_engine.models.market import SectorMarketState, zero_resource_record
from spacetime_engine.models.planet import Deposit, Planet
from spacetime_engine.models.state import GameState


class FixedRandom:
    def __init__(self, value: float = 0.99, integer: int = 0):
        self.value = value
        self.integer = integer

    def random(self) -> float:
        return self.value

    def randint(self, a: int, b: int) -> int:
        return max(a, min(b, self.integer))


class RecordingPolicy(RuleBasedInvestmentPolicy):
    """Rule-based policy that remembers who was asked, in order."""

    def __init__(self):
        super().__init__()
        self.asked: List[str] = []

    def decide(self, corp, state, source):
        self.asked.append(corp.id)
        return super().decide(corp, state, source)


class FixedActionPolicy:
    def __init__(self, action: CorpAction):
        self.action = action

    def decide(self, corp, state, source):
        return self.action


def _make_corp(
    corp_id: str,
    level: int = 1,
    capital: int = 0,
    corp_type: CorpType = CorpType.EXPLOITATION,
    holdings=None,
) -> Corporation:
    return Corporation(
        id=corp_id,
        name=f"{corp_id.title()} Holdings",
        type=corp_type,
        level=level,
        traits=[CorpPersonalityTrait.OPPORTUNISTIC],
        capital=capital,
        home_planet_id="pl_1",
        planets_present=["pl_1"],
        assets=CorpAssets(infrastructure_by_colony=holdings or {}),
    )


def _make_colony(dynamism: int = 3, corporate=None, **public: int) -> Colony:
    infrastructure = {}
    for name, count in public.items():
        domain = InfraDomain(name)
        infrastructure[domain] = InfraState(domain=domain, public_levels=count, current_cap=6)
    if corporate:
        mining = infrastructure.get(
            InfraDomain.MINING, InfraState(domain=InfraDomain.MINING, current_cap=6)
        )
        infrastructure[InfraDomain.MINING] = mining.model_copy(update={"corporate_levels": corporate})
    return Colony(
        id="col_1",
        planet_id="pl_1",
        sector_id="sec_1",
        name="Forge",
        population_level=3,
        attributes=ColonyAttributes(dynamism=dynamism),
        infrastructure=infrastructure,
        corporations_present=list((corporate or {}).keys()),
    )


def _make_planet(deposits: Optional[List[Deposit]] = None) -> Planet:
    return Planet(
        id="pl_1",
        name="Forge Prime",
        sector_id="sec_1",
        type=PlanetType.ROCKY,
        size=PlanetSize.MEDIUM,
        base_habitability=5,
        deposits=deposits or [],
    )


def _make_market(**net) -> SectorMarketState:
    surplus = zero_resource_record()
    for name, value in net.items():
        surplus[ResourceType(name)] = value
    return SectorMarketState(
        sector_id="sec_1",
        total_production=zero_resource_record(),
        total_consumption=zero_resource_record(),
        net_surplus=surplus,
    )


def _make_state(corps=(), colonies=(), planet: Optional[Planet] = None, markets=None) -> GameState:
    planet = planet or _make_planet()
    return GameState(
        turn=7,
        corporations={c.id: c for c in corps},
        colonies={c.id: c for c in colonies},
        planets={planet.id: planet},
        sector_markets=markets or {},
    )


class TestCapitalAccrual:
    def test_ten_levels_and_forced_zero_draw(self):
        corp = _make_corp("corp_a", holdings={"col_elsewhere": {InfraDomain.MINING: 10}})
        engine = CorporateDecisionEngine(FixedRandom(integer=0))
        result = engine.resolve(_make_state(corps=[corp]))

        assert result.updated_state.corporations["corp_a"].capital >= 1

    def test_capital_never_decreases_from_accrual(self):
        corps = [_make_corp(f"corp_{i}", capital=i) for i in range(4)]
        engine = CorporateDecisionEngine(random.Random(11))
        updated = engine.resolve(_make_state(corps=corps)).updated_state

        for corp in corps:
            assert updated.corporations[corp.id].capital >= corp.capital


class TestProcessingOrder:
    def test_descending_level_ties_in_encounter_order(self):
        policy = RecordingPolicy()
        corps = [
            _make_corp("corp_low", level=2),
            _make_corp("corp_first", level=5),
            _make_corp("corp_second", level=5),
        ]
        CorporateDecisionEngine(FixedRandom(), policy=policy).resolve(_make_state(corps=corps))

        assert policy.asked == ["corp_first", "corp_second", "corp_low"]


class TestInvestment:
    def setup_method(self):
        self.planet = _make_planet(
            [Deposit(type=DepositType.COMMON_ORE_VEIN, richness=RichnessLevel.MODERATE)]
        )

    def test_invests_into_sector_deficit(self):
        corp = _make_corp("corp_a", capital=5)
        colony = _make_colony(Mining=0)
        state = _make_state(
            corps=[corp],
            colonies=[colony],
            planet=self.planet,
            markets={"sec_1": _make_market(CommonMaterials=-4)},
        )
        result = CorporateDecisionEngine(FixedRandom(value=0.5)).resolve(state)
        updated_corp = result.updated_state.corporations["corp_a"]
        updated_colony = result.updated_state.colonies["col_1"]

        assert updated_corp.capital == 3
        assert updated_corp.holdings_on("col_1") == {InfraDomain.MINING: 1}
        assert updated_colony.infra(InfraDomain.MINING).corporate_levels == {"corp_a": 1}
        assert "corp_a" in updated_colony.corporations_present
        assert [e.title for e in result.events] == ["Corp_A Holdings: Mining investment"]
        assert result.events[0].category == EventCategory.CORPORATION

    def test_skips_domain_whose_inputs_are_short(self):
        corp = _make_corp("corp_a", capital=5, corp_type=CorpType.INDUSTRIAL)
        colony = _make_colony(LowIndustry=0)
        state = _make_state(
            corps=[corp],
            colonies=[colony],
            markets={"sec_1": _make_market(ConsumerGoods=-3, CommonMaterials=-2)},
        )
        result = CorporateDecisionEngine(FixedRandom(value=0.5)).resolve(state)

        assert result.events == []
        assert result.updated_state.corporations["corp_a"].assets == corp.assets

    def test_extraction_requires_deposit(self):
        corp = _make_corp("corp_a", capital=5)
        colony = _make_colony(Mining=0)
        state = _make_state(
            corps=[corp],
            colonies=[colony],
            markets={"sec_1": _make_market(CommonMaterials=-4)},
        )
        result = CorporateDecisionEngine(FixedRandom(value=0.5)).resolve(state)
        assert result.events == []

    def test_ineligible_action_skipped_silently(self):
        corp = _make_corp("corp_a", capital=5)
        colony = _make_colony(Mining=6)
        action = CorpAction(kind="invest", cost=2, colony_id="col_1", domain=InfraDomain.MINING)
        state = _make_state(corps=[corp], colonies=[colony], planet=self.planet)

        result = CorporateDecisionEngine(
            FixedRandom(), policy=FixedActionPolicy(action)
        ).resolve(state)

        assert result.events == []
        assert result.updated_state.colonies["col_1"] == colony

    def test_allowed_domains_widen_at_level_three(self):
        policy = RuleBasedInvestmentPolicy()
        assert policy.allowed_domains(_make_corp("a", level=1, corp_type=CorpType.EXPLORATION)) == []
        assert len(policy.allowed_domains(_make_corp("b", level=3))) == len(InfraDomain)


class TestAcquisition:
    def test_buyer_absorbs_smaller_corporation(self):
        buyer = _make_corp("corp_big", level=6, capital=20)
        target = _make_corp("corp_small", level=2, holdings={"col_1": {InfraDomain.MINING: 2}})
        colony = _make_colony(corporate={"corp_small": 2})
        policy = RecordingPolicy()

        result = CorporateDecisionEngine(FixedRandom(), policy=policy).resolve(
            _make_state(corps=[target, buyer], colonies=[colony])
        )
        state = result.updated_state
        updated = state.corporations["corp_big"]

        assert "corp_small" not in state.corporations
        assert policy.asked == ["corp_big"]
        assert updated.level == 7
        assert updated.capital == 10
        assert updated.holdings_on("col_1") == {InfraDomain.MINING: 2}
        assert state.colonies["col_1"].infra(InfraDomain.MINING).corporate_levels == {"corp_big": 2}
        assert [e.title for e in result.events] == [
            "Corp_Big Holdings acquired Corp_Small Holdings"
        ]

    def test_target_with_empty_holding_entry(self):
        buyer = _make_corp("corp_big", level=6, capital=20)
        target = _make_corp(
            "corp_small", level=2,
            holdings={"col_1": {InfraDomain.MINING: 2, InfraDomain.SCIENCE: 0}},
        )
        colony = _make_colony(corporate={"corp_small": 2})

        state = CorporateDecisionEngine(FixedRandom()).resolve(
            _make_state(corps=[target, buyer], colonies=[colony])
        ).updated_state

        assert "corp_small" not in state.corporations
        assert state.corporations["corp_big"].holdings_on("col_1") == {InfraDomain.MINING: 2}

    def test_gap_too_small(self):
        buyer = _make_corp("corp_big", level=6, capital=50)
        rival = _make_corp("corp_rival", level=4)
        result = CorporateDecisionEngine(FixedRandom()).resolve(_make_state(corps=[buyer, rival]))

        assert set(result.updated_state.corporations) == {"corp_big", "corp_rival"}
        assert result.events == []


class TestEmergence:
    def test_low_dynamism_never_emerges(self):
        for dynamism in range(0, 6):
            colony = _make_colony(dynamism=dynamism, Science=3)
            result = CorporateDecisionEngine(FixedRandom(value=0.0)).resolve(
                _make_state(colonies=[colony])
            )
            assert result.updated_state.corporations == {}
            assert result.events == []

    def test_emergence_transfers_one_public_level(self):
        colony = _make_colony(dynamism=8, Science=3, Transport=1)
        result = CorporateDecisionEngine(FixedRandom(value=0.0)).resolve(
            _make_state(colonies=[colony])
        )
        state = result.updated_state

        assert len(state.corporations) == 1
        corp = next(iter(state.corporations.values()))
        science = state.colonies["col_1"].infra(InfraDomain.SCIENCE)

        assert corp.type == CorpType.SCIENCE
        assert corp.level == 1
        assert corp.holdings_on("col_1") == {InfraDomain.SCIENCE: 1}
        assert science.public_levels == 2
        assert science.corporate_levels == {corp.id: 1}
        assert corp.id in state.colonies["col_1"].corporations_present
        assert [e.priority for e in result.events] == [EventPriority.POSITIVE]
        assert result.events[0].title == f"{corp.name} emerged on Forge"

    def test_no_public_levels_no_emergence(self):
        colony = _make_colony(dynamism=10)
        result = CorporateDecisionEngine(FixedRandom(value=0.0)).resolve(
            _make_state(colonies=[colony])
        )
        assert result.updated_state.corporations == {}

    def test_civilian_never_dominant(self):
        colony = _make_colony(Civilian=12, Military=1)
        assert most_prominent_public_domain(colony) == InfraDomain.MILITARY
        assert most_prominent_public_domain(_make_colony(Civilian=12)) is None

    def test_input_state_not_mutated(self):
        colony = _make_colony(dynamism=8, Science=3)
        state = _make_state(colonies=[colony])
        before = state.model_dump()
        CorporateDecisionEngine(FixedRandom(value=0.0)).resolve(state)
        assert state.model_dump() == before


class TestCorporationGenerator:
    def setup_method(self):
        self.registry = NameRegistry()
        self.generator = CorporationGenerator(self.registry)
        self.params = GenerateCorpParams(type=CorpType.SCIENCE, home_planet_id="pl_9", founded_turn=4)

    def test_generates_level_one_corporation(self):
        corp = self.generator.generate(self.params, random.Random(3))

        assert corp.id.startswith("corp_")
        assert corp.level == 1
        assert corp.capital == 0
        assert corp.planets_present == ["pl_9"]
        assert corp.founded_turn == 4
        assert corp.name in self.registry

    def test_names_unique_and_traits_compatible(self):
        source = random.Random(21)
        corps = [self.generator.generate(self.params, source) for _ in range(25)]

        assert len({c.name for c in corps}) == 25
        for corp in corps:
            assert 1 <= len(corp.traits) <= 2
            if len(corp.traits) == 2:
                pair = tuple(corp.traits)
                assert pair not in CONFLICTING_TRAIT_PAIRS
                assert pair[::-1] not in CONFLICTING_TRAIT_PAIRS

    def test_exhausted_names_raise(self):
        generator = CorporationGenerator(self.registry, max_attempts=3)
        generator.generate(self.params, FixedRandom())
        with pytest.raises(CorporationGenerationError):
            generator.generate(self.params, FixedRandom())

    def test_taken_ids_avoided(self):
        generator = CorporationGenerator(self.registry, max_attempts=3)
        with pytest.raises(CorporationGenerationError):
            generator.generate(self.params, FixedRandom(), taken_ids={"corp_00000000"})

    def test_registry_reserve_and_clear(self):
        assert self.registry.reserve("Nova Dynamics")
        assert not self.registry.reserve("Nova Dynamics")
        assert len(self.registry) == 1
        self.registry.clear()
        assert "Nova Dynamics" not in self.registry
