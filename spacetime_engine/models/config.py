"""Engine configuration — every tunable rule constant in one place."""

from pydantic import BaseModel, Field


class EngineConfig(BaseModel):
    """Configuration for turn resolution. Defaults reproduce the game rules."""

    # Budget
    max_debt_tokens: int = 10
    debt_tokens_per_deficit_bp: int = 3

    # Market
    trade_efficiency: float = Field(gt=0, le=1, default=0.5)
    food_shortage_malus: int = -2
    consumer_goods_shortage_malus: int = -1
    transport_shortage_malus: int = -1
    export_dynamism_bonus: int = 1

    # Colony growth
    organic_growth_chance_per_dynamism: int = 5
    shortage_growth_weight: int = 3
    low_attribute_warning_threshold: int = 2

    # Corporations
    invest_capital_cost: int = 2
    min_capital_to_invest: int = 2
    acquisition_cost_per_level: int = 5
    megacorp_level: int = 6
    acquisition_level_gap: int = 3
    max_corp_level: int = 10
    infra_per_corp_level: int = 4
    primary_domain_level_threshold: int = 3
    emergence_min_dynamism: int = 6
    emergence_chance_per_dynamism: int = 10

    # Diagnostics
    verify_invariants: bool = True
