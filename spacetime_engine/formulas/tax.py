"""Tax formulas. All results are non-negative integers."""


def planet_tax(population_level: int, habitability: int) -> int:
    """Colonies below population 5 pay nothing; poor habitability eats into the rest."""
    if population_level < 5:
        return 0
    habitability_cost = max(0, 10 - habitability) * max(1, population_level // 3)
    return max(0, (population_level * population_level) // 4 - habitability_cost)


def corp_tax(corp_level: int) -> int:
    return (corp_level * corp_level) // 5
