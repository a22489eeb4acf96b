"""Tests for core data models."""

import pytest
from pydantic import ValidationError

from spacetime_engine.models.budget import BudgetState
from spacetime_engine.models.colony import Colony, ColonyAttributes, InfraState
from spacetime_engine.models.common import CorpPersonalityTrait, CorpType, InfraDomain, ResourceType
from spacetime_engine.models.config import EngineConfig
from spacetime_engine.models.corporation import CONFLICTING_TRAIT_PAIRS, CorpAssets, Corporation
from spacetime_engine.models.market import ResourceFlow
from spacetime_engine.models.state import GameState


def _make_colony(**overrides) -> Colony:
    fields = dict(id="col_1", planet_id="pl_1", sector_id="sec_1", name="Haven")
    fields.update(overrides)
    return Colony(**fields)


class TestColony:
    def test_all_domains_present(self):
        colony = _make_colony(infrastructure={
            InfraDomain.MINING: InfraState(domain=InfraDomain.MINING, public_levels=2),
        })

        assert set(colony.infrastructure) == set(InfraDomain)
        assert colony.level(InfraDomain.MINING) == 2
        assert colony.level(InfraDomain.SCIENCE) == 0
        assert colony.total_infrastructure() == 2

    def test_population_bounds(self):
        with pytest.raises(ValidationError):
            _make_colony(population_level=0)
        with pytest.raises(ValidationError):
            _make_colony(population_level=11)

    def test_attribute_bounds(self):
        with pytest.raises(ValidationError):
            ColonyAttributes(stability=11)
        # growth is an accumulator, not an attribute
        assert ColonyAttributes(growth=-4).growth == -4

    def test_frozen(self):
        colony = _make_colony()
        with pytest.raises(ValidationError):
            colony.population_level = 3


class TestInfraState:
    def test_totals(self):
        infra = InfraState(
            domain=InfraDomain.MINING,
            public_levels=2,
            corporate_levels={"corp_a": 1, "corp_b": 3},
            current_cap=8,
        )
        assert infra.corporate_total() == 4
        assert infra.total_levels() == 6
        assert infra.has_capacity()

    def test_capacity_reached(self):
        infra = InfraState(domain=InfraDomain.MINING, public_levels=4, current_cap=4)
        assert not infra.has_capacity()

    def test_uncapped(self):
        infra = InfraState(domain=InfraDomain.CIVILIAN, public_levels=40)
        assert infra.has_capacity()


class TestCorporation:
    def test_owned_infrastructure(self):
        corp = Corporation(
            id="corp_a", name="Ferrum Mining", type=CorpType.EXPLOITATION, home_planet_id="pl_1",
            traits=[CorpPersonalityTrait.EFFICIENT],
            assets=CorpAssets(infrastructure_by_colony={
                "col_1": {InfraDomain.MINING: 2},
                "col_2": {InfraDomain.MINING: 1, InfraDomain.DEEP_MINING: 1},
            }),
        )
        assert corp.total_owned_infrastructure() == 4
        assert corp.holdings_on("col_2") == {InfraDomain.MINING: 1, InfraDomain.DEEP_MINING: 1}
        assert corp.holdings_on("col_9") == {}

    def test_level_bounds(self):
        with pytest.raises(ValidationError):
            Corporation(
                id="corp_a", name="Ferrum Mining", type=CorpType.EXPLOITATION,
                home_planet_id="pl_1", level=11, traits=[CorpPersonalityTrait.EFFICIENT],
            )

    def _with_traits(self, *traits: CorpPersonalityTrait) -> Corporation:
        return Corporation(
            id="corp_a", name="Ferrum Mining", type=CorpType.EXPLOITATION,
            home_planet_id="pl_1", traits=list(traits),
        )

    def test_one_or_two_compatible_traits(self):
        assert len(self._with_traits(CorpPersonalityTrait.CAUTIOUS).traits) == 1
        pair = self._with_traits(CorpPersonalityTrait.CAUTIOUS, CorpPersonalityTrait.ETHICAL)
        assert pair.traits == [CorpPersonalityTrait.CAUTIOUS, CorpPersonalityTrait.ETHICAL]

    def test_trait_count_bounds(self):
        with pytest.raises(ValidationError):
            self._with_traits()
        with pytest.raises(ValidationError):
            self._with_traits(
                CorpPersonalityTrait.CAUTIOUS,
                CorpPersonalityTrait.ETHICAL,
                CorpPersonalityTrait.EFFICIENT,
            )

    def test_conflicting_traits_rejected(self):
        for first, second in CONFLICTING_TRAIT_PAIRS:
            with pytest.raises(ValidationError):
                self._with_traits(first, second)
            with pytest.raises(ValidationError):
                self._with_traits(second, first)

    def test_duplicate_trait_rejected(self):
        with pytest.raises(ValidationError):
            self._with_traits(CorpPersonalityTrait.RUTHLESS, CorpPersonalityTrait.RUTHLESS)


class TestResourceFlow:
    def test_surplus_and_deficit(self):
        flow = ResourceFlow(resource=ResourceType.FOOD, produced=3, consumed=8, imported=2)
        assert flow.surplus == -5
        assert flow.unmet_deficit == 3

    def test_no_deficit_when_covered(self):
        flow = ResourceFlow(resource=ResourceType.FOOD, produced=3, consumed=4, imported=2)
        assert flow.unmet_deficit == 0


class TestBudgetState:
    def test_debt_tokens_bounded(self):
        with pytest.raises(ValidationError):
            BudgetState(debt_tokens=11)
        with pytest.raises(ValidationError):
            BudgetState(debt_tokens=-1)


class TestEngineConfig:
    def test_trade_efficiency_range(self):
        with pytest.raises(ValidationError):
            EngineConfig(trade_efficiency=0)
        assert EngineConfig(trade_efficiency=1.0).trade_efficiency == 1.0


class TestGameState:
    def test_json_round_trip(self):
        state = GameState(
            turn=3,
            seed=11,
            colonies={"col_1": _make_colony(population_level=4)},
        )
        restored = GameState.model_validate_json(state.model_dump_json())
        assert restored == state
        assert restored.colonies["col_1"].infra(InfraDomain.CIVILIAN).public_levels == 0
