"""Tests for the pure formula library."""

import pytest

from spacetime_engine.formulas import attributes
from spacetime_engine.formulas.growth import (
    acquisition_cost,
    capital_gain,
    civilian_required_for_growth,
    completion_bonus,
    emergence_chance,
    max_corp_infrastructure,
    organic_growth_chance,
)
from spacetime_engine.formulas.modifiers import modifier_breakdown, resolve_modifiers
from spacetime_engine.formulas.production import colony_resource_flows
from spacetime_engine.formulas.tax import corp_tax, planet_tax
from spacetime_engine.models.colony import Colony, InfraState
from spacetime_engine.models.common import (
    DepositType,
    InfraDomain,
    ResourceType,
    RichnessLevel,
)
from spacetime_engine.models.modifier import (
    Modifier,
    ModifierCondition,
    ModifierOperation,
    ModifierSource,
)
from spacetime_engine.models.planet import Deposit


class FixedRandom:
    def __init__(self, value: float = 0.0, integer: int = 0):
        self.value = value
        self.integer = integer

    def random(self) -> float:
        return self.value

    def randint(self, a: int, b: int) -> int:
        return max(a, min(b, self.integer))


def _mod(target: str, value: float, op: ModifierOperation = ModifierOperation.ADD, **kwargs) -> Modifier:
    return Modifier(
        id=f"mod_{target}_{value}",
        target=target,
        operation=op,
        value=value,
        source_type=ModifierSource.FEATURE,
        source_id="feature_test",
        source_name="Test Feature",
        **kwargs,
    )


def _make_colony(population: int = 3, **levels: int) -> Colony:
    infrastructure = {
        InfraDomain(name): InfraState(domain=InfraDomain(name), public_levels=count)
        for name, count in levels.items()
    }
    return Colony(
        id="col_1",
        planet_id="pl_1",
        sector_id="sec_1",
        name="Test Colony",
        population_level=population,
        infrastructure=infrastructure,
    )


class TestTax:
    def test_small_colonies_pay_nothing(self):
        for pop in range(1, 5):
            assert planet_tax(pop, 10) == 0

    def test_planet_tax_at_full_habitability(self):
        assert planet_tax(5, 10) == 6
        assert planet_tax(10, 10) == 25

    def test_poor_habitability_reduces_tax(self):
        # floor(36/4) - (10-7) * floor(6/3) = 9 - 6
        assert planet_tax(6, 7) == 3

    def test_planet_tax_never_negative(self):
        assert planet_tax(5, 0) == 0

    def test_corp_tax(self):
        assert corp_tax(1) == 0
        assert corp_tax(3) == 1
        assert corp_tax(10) == 20


class TestModifierResolution:
    def test_additive_then_multiplicative(self):
        mods = [
            _mod("miningOutput", 2),
            _mod("miningOutput", 1.5, ModifierOperation.MULTIPLY),
            _mod("miningOutput", 1),
        ]
        assert resolve_modifiers(1, "miningOutput", mods) == pytest.approx(6.0)

    def test_other_targets_ignored(self):
        assert resolve_modifiers(5, "dynamism", [_mod("stability", -3)]) == 5

    def test_clamping(self):
        assert resolve_modifiers(9, "stability", [_mod("stability", 5)], 0, 10) == 10
        assert resolve_modifiers(1, "stability", [_mod("stability", -5)], 0, 10) == 0

    def test_condition_requires_context(self):
        conditional = _mod(
            "stability", -2,
            condition=ModifierCondition(attribute="qualityOfLife", comparison="lte", value=3),
        )
        assert resolve_modifiers(6, "stability", [conditional]) == 6
        assert resolve_modifiers(6, "stability", [conditional], context={"qualityOfLife": 2}) == 4
        assert resolve_modifiers(6, "stability", [conditional], context={"qualityOfLife": 5}) == 6

    def test_breakdown_lists_contributors(self):
        breakdown = modifier_breakdown("dynamism", [_mod("dynamism", 1), _mod("stability", 2)])
        assert breakdown == [{"source": "Test Feature", "operation": "add", "value": 1}]


class TestAttributes:
    def test_reference_colony(self):
        hab = attributes.habitability(8, [])
        acc = attributes.accessibility(0, [])
        dyn = attributes.dynamism(acc, 3, [])
        assert (hab, acc, dyn) == (8, 3, 3)

    def test_population_seven_dynamism(self):
        # floor((3 + 7) / 2)
        assert attributes.dynamism(3, 7, []) == 5

    def test_accessibility_from_transport(self):
        assert attributes.accessibility(5, []) == 5

    def test_quality_of_life_and_stability(self):
        assert attributes.quality_of_life(4, []) == 8
        assert attributes.stability(3, 9, 4, []) == 10 - 2 - 2 + 3

    def test_attributes_clamped(self):
        assert attributes.habitability(9, [_mod("habitability", 5)]) == 10
        assert attributes.accessibility(0, [_mod("accessibility", -8)]) == 0

    def test_growth_not_clamped(self):
        assert attributes.growth_per_turn(10, 10, 3, 8, [_mod("growth", -20)]) == -16


class TestInfraCap:
    def test_civilian_uncapped(self):
        assert attributes.infra_cap(InfraDomain.CIVILIAN, 5, [], []) is None

    def test_non_extraction_cap(self):
        assert attributes.infra_cap(InfraDomain.SCIENCE, 3, [], []) == 6

    def test_extraction_without_deposit(self):
        assert attributes.infra_cap(InfraDomain.MINING, 5, [], []) == 0

    def test_extraction_limited_by_richest_deposit(self):
        deposits = [
            Deposit(type=DepositType.COMMON_ORE_VEIN, richness=RichnessLevel.POOR),
            Deposit(type=DepositType.GLACIAL_DEPOSITS, richness=RichnessLevel.MODERATE),
        ]
        assert attributes.infra_cap(InfraDomain.MINING, 8, deposits, []) == 10
        assert attributes.infra_cap(InfraDomain.MINING, 2, deposits, []) == 4

    def test_empire_bonus_and_modifier(self):
        cap = attributes.infra_cap(
            InfraDomain.SCIENCE, 2, [], [_mod("maxScience", 1)], {InfraDomain.SCIENCE: 2}
        )
        assert cap == 7


class TestGrowthFormulas:
    def test_capital_gain_forced_zero_draw(self):
        assert capital_gain(10, FixedRandom(integer=0)) == 1
        assert capital_gain(25, FixedRandom(integer=1)) == 3
        assert capital_gain(0, FixedRandom(integer=0)) == 0

    def test_emergence_chance(self):
        for dynamism in range(0, 6):
            assert emergence_chance(dynamism) == 0
        assert emergence_chance(6) == 10
        assert emergence_chance(10) == 50

    def test_other_thresholds(self):
        assert organic_growth_chance(4) == 20
        assert civilian_required_for_growth(3) == 8
        assert completion_bonus(3, 5) == 3
        assert max_corp_infrastructure(2) == 8
        assert acquisition_cost(3) == 15


class TestProduction:
    def test_extraction_requires_deposit(self):
        colony = _make_colony(population=1, Agricultural=4)
        assert colony_resource_flows(colony, [])[ResourceType.FOOD].produced == 0

        deposits = [Deposit(type=DepositType.FERTILE_GROUND, richness=RichnessLevel.RICH)]
        food = colony_resource_flows(colony, deposits)[ResourceType.FOOD]
        assert food.produced == 4
        assert food.consumed == 2
        assert food.surplus == 2

    def test_manufacturing_halved_without_inputs(self):
        colony = _make_colony(population=1, LowIndustry=4)
        flows = colony_resource_flows(colony, [])
        assert flows[ResourceType.CONSUMER_GOODS].produced == 2
        assert flows[ResourceType.COMMON_MATERIALS].consumed == 4

    def test_population_consumption(self):
        flows = colony_resource_flows(_make_colony(population=4), [])
        assert flows[ResourceType.FOOD].consumed == 8
        assert flows[ResourceType.CONSUMER_GOODS].consumed == 4
        assert flows[ResourceType.TRANSPORT_CAPACITY].consumed == 4
