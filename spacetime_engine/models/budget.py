"""Budget ledger — itemized income, expenses and debt."""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class IncomeSourceType(str, Enum):
    PLANET_TAX = "planet_tax"
    CORP_TAX = "corp_tax"


class ExpenseSourceType(str, Enum):
    CONTRACT = "contract"
    MISSION = "mission"
    DIRECT_INVEST = "direct_invest"
    DEBT_CLEARANCE = "debt_clearance"


class IncomeSource(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: IncomeSourceType
    source_id: str
    source_name: str
    amount: int


class ExpenseEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: ExpenseSourceType
    source_id: str
    source_name: str
    amount: int


class BudgetState(BaseModel):
    """Per-turn budget. current_bp is forfeited at the start of every turn."""

    model_config = ConfigDict(frozen=True)

    current_bp: int = 0
    income_sources: List[IncomeSource] = []
    expense_entries: List[ExpenseEntry] = []
    total_income: int = 0
    total_expenses: int = 0
    net_bp: int = 0
    debt_tokens: int = Field(ge=0, le=10, default=0)
    stability_malus: int = 0
    calculated_turn: int = 0


class BudgetHistoryEntry(BaseModel):
    turn: int
    total_income: int
    total_expenses: int
    net_bp: int
    debt_tokens_at_end_of_turn: int
