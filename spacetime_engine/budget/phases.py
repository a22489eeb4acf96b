"""
Ledger Phases — Debt, Income and Expense.

Behavioral Contract:
- Debt: clears exactly one token per turn while any remain, at a cost of 1 BP
- Income: itemizes every positive planet and corporation tax, adds the total
- Expense: itemizes active contracts and unfinished missions, subtracts the
  total, and converts any resulting deficit into debt tokens
- stability_malus is always floor(debt_tokens / 2)
"""

import logging
from typing import List, Optional

from spacetime_engine.events.log import build_event
from spacetime_engine.formulas.tax import corp_tax, planet_tax
from spacetime_engine.models.budget import (
    ExpenseEntry,
    ExpenseSourceType,
    IncomeSource,
    IncomeSourceType,
)
from spacetime_engine.models.common import ContractStatus, EventCategory, EventPriority
from spacetime_engine.models.config import EngineConfig
from spacetime_engine.models.state import GameState, PhaseResult

logger = logging.getLogger(__name__)


def resolve_debt_phase(state: GameState, config: Optional[EngineConfig] = None) -> PhaseResult:
    budget = state.budget
    if budget.debt_tokens <= 0:
        return PhaseResult(updated_state=state)

    remaining = budget.debt_tokens - 1
    cleared = remaining == 0
    event = build_event(
        turn=state.turn,
        priority=EventPriority.POSITIVE if cleared else EventPriority.INFO,
        category=EventCategory.BUDGET,
        title="Debt Cleared" if cleared else "Debt Token Cleared",
        description=(
            "All debt has been repaid. Economic stability restored."
            if cleared
            else f"Debt token cleared ({remaining} remaining). 1 BP deducted."
        ),
    )
    logger.debug("Debt token cleared on turn %d, %d remaining", state.turn, remaining)

    updated_budget = budget.model_copy(update={
        "current_bp": budget.current_bp - 1,
        "debt_tokens": remaining,
        "stability_malus": remaining // 2,
    })
    return PhaseResult(
        updated_state=state.model_copy(update={"budget": updated_budget}),
        events=[event],
    )


def resolve_income_phase(state: GameState, config: Optional[EngineConfig] = None) -> PhaseResult:
    sources: List[IncomeSource] = []

    for colony in state.colonies.values():
        tax = planet_tax(colony.population_level, colony.attributes.habitability)
        if tax > 0:
            sources.append(IncomeSource(
                type=IncomeSourceType.PLANET_TAX,
                source_id=colony.id,
                source_name=colony.name,
                amount=tax,
            ))

    for corp in state.corporations.values():
        tax = corp_tax(corp.level)
        if tax > 0:
            sources.append(IncomeSource(
                type=IncomeSourceType.CORP_TAX,
                source_id=corp.id,
                source_name=corp.name,
                amount=tax,
            ))

    total = sum(s.amount for s in sources)
    updated_budget = state.budget.model_copy(update={
        "current_bp": state.budget.current_bp + total,
        "income_sources": sources,
        "total_income": total,
        "calculated_turn": state.turn,
    })
    return PhaseResult(updated_state=state.model_copy(update={"budget": updated_budget}))


def resolve_expense_phase(state: GameState, config: Optional[EngineConfig] = None) -> PhaseResult:
    config = config or EngineConfig()
    entries: List[ExpenseEntry] = []

    for contract in state.contracts.values():
        if contract.status != ContractStatus.ACTIVE:
            continue
        entries.append(ExpenseEntry(
            type=ExpenseSourceType.CONTRACT,
            source_id=contract.id,
            source_name=f"Contract ({contract.type.value})",
            amount=contract.bp_per_turn,
        ))

    for mission in state.missions.values():
        if mission.completed_turn is not None:
            continue
        entries.append(ExpenseEntry(
            type=ExpenseSourceType.MISSION,
            source_id=mission.id,
            source_name=f"Mission ({mission.type.value})",
            amount=mission.bp_per_turn,
        ))

    budget = state.budget
    total = sum(e.amount for e in entries)
    balance = budget.current_bp - total

    tokens = budget.debt_tokens
    if balance < 0:
        gained = max(1, abs(balance) // config.debt_tokens_per_deficit_bp)
        tokens = min(config.max_debt_tokens, tokens + gained)
        logger.info(
            "Turn %d closed at %d BP: +%d debt tokens (now %d)",
            state.turn, balance, gained, tokens,
        )

    updated_budget = budget.model_copy(update={
        "current_bp": balance,
        "expense_entries": entries,
        "total_expenses": total,
        "net_bp": budget.total_income - total,
        "debt_tokens": tokens,
        "stability_malus": tokens // 2,
        "calculated_turn": state.turn,
    })
    return PhaseResult(updated_state=state.model_copy(update={"budget": updated_budget}))
