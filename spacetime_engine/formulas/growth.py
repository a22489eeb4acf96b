"""Growth and capital formulas for corporations and colonies."""

from spacetime_engine.randomness.source import RandomSource

GROWTH_LEVEL_UP_THRESHOLD = 10
GROWTH_DECLINE_THRESHOLD = -1
GROWTH_AFTER_DECLINE = 9


def capital_gain(total_owned_infra: int, source: RandomSource) -> int:
    """randint(0, 1) + floor(owned / 10). Never negative."""
    return source.randint(0, 1) + max(0, total_owned_infra) // 10


def completion_bonus(bp_per_turn: int, duration_turns: int) -> int:
    return (bp_per_turn * duration_turns) // 5


def max_corp_infrastructure(corp_level: int, per_level: int = 4) -> int:
    return corp_level * per_level


def acquisition_cost(target_level: int, per_level: int = 5) -> int:
    return target_level * per_level


def civilian_required_for_growth(population_level: int) -> int:
    """Civilian levels needed before the next population level can be reached."""
    return (population_level + 1) * 2


def emergence_chance(dynamism: int, min_dynamism: int = 6, per_point: int = 10) -> int:
    """Percent chance a colony spawns a corporation this turn."""
    if dynamism < min_dynamism:
        return 0
    return (dynamism - (min_dynamism - 1)) * per_point


def organic_growth_chance(dynamism: int, per_point: int = 5) -> int:
    return dynamism * per_point
