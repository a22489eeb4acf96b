"""
Operations Phases — Contract, Mission, Science and Event.

Behavioral Contract:
- Contract: every active contract except trade routes counts down one turn;
  at zero it is Completed, its corporation earns floor(bp x duration / 5)
  capital, and a Positive completion event is emitted
- Trade routes stay active until cancelled upstream
- Type-specific completion effects (new colonies, ships, surveys) belong to
  the content generators and are not applied here
- Mission, Science and Event phases pass state through unchanged
"""

import logging
from typing import Dict, List, Optional

from spacetime_engine.events.log import build_event
from spacetime_engine.formulas.growth import completion_bonus
from spacetime_engine.models.common import (
    ContractStatus,
    ContractType,
    EventCategory,
    EventPriority,
)
from spacetime_engine.models.config import EngineConfig
from spacetime_engine.models.contract import Contract, ContractTarget
from spacetime_engine.models.corporation import Corporation
from spacetime_engine.models.event import GameEvent
from spacetime_engine.models.state import GameState, PhaseResult

logger = logging.getLogger(__name__)

CONTRACT_TYPE_LABELS: Dict[ContractType, str] = {
    ContractType.EXPLORATION: "Exploration",
    ContractType.GROUND_SURVEY: "Ground Survey",
    ContractType.COLONIZATION: "Colonization",
    ContractType.SHIP_COMMISSION: "Ship Commission",
    ContractType.TRADE_ROUTE: "Trade Route",
}


def describe_target(target: ContractTarget) -> str:
    if target.kind == "sector":
        return f"sector {target.sector_id}"
    if target.kind == "planet":
        return f"planet {target.planet_id}"
    if target.kind == "colony":
        return f"colony {target.colony_id}"
    return f"sectors {target.sector_id_a} / {target.sector_id_b}"


def _completion_event(contract: Contract, turn: int) -> GameEvent:
    label = CONTRACT_TYPE_LABELS[contract.type]
    return build_event(
        turn=turn,
        priority=EventPriority.POSITIVE,
        category=EventCategory.CONTRACT,
        title=f"{label} Contract Completed",
        description=f"{label} contract on {describe_target(contract.target)} has been completed.",
        related_entity_ids=[contract.id, contract.assigned_corp_id],
    )


def resolve_contract_phase(state: GameState, config: Optional[EngineConfig] = None) -> PhaseResult:
    contracts: Dict[str, Contract] = dict(state.contracts)
    corporations: Dict[str, Corporation] = dict(state.corporations)
    events: List[GameEvent] = []

    for contract_id, contract in state.contracts.items():
        if contract.status != ContractStatus.ACTIVE:
            continue
        if contract.type == ContractType.TRADE_ROUTE:
            continue

        remaining = max(0, contract.turns_remaining - 1)
        if remaining > 0:
            contracts[contract_id] = contract.model_copy(update={"turns_remaining": remaining})
            continue

        contracts[contract_id] = contract.model_copy(update={
            "turns_remaining": 0,
            "status": ContractStatus.COMPLETED,
            "completed_turn": state.turn,
        })

        corp = corporations.get(contract.assigned_corp_id)
        if corp is not None:
            bonus = completion_bonus(contract.bp_per_turn, contract.duration_turns)
            corporations[corp.id] = corp.model_copy(update={"capital": corp.capital + bonus})
            logger.debug("%s earned %d capital completing %s", corp.id, bonus, contract_id)

        events.append(_completion_event(contract, state.turn))

    return PhaseResult(
        updated_state=state.model_copy(update={
            "contracts": contracts,
            "corporations": corporations,
        }),
        events=events,
    )


def resolve_mission_phase(state: GameState, config: Optional[EngineConfig] = None) -> PhaseResult:
    return PhaseResult(updated_state=state)


def resolve_science_phase(state: GameState, config: Optional[EngineConfig] = None) -> PhaseResult:
    return PhaseResult(updated_state=state)


def resolve_event_phase(state: GameState, config: Optional[EngineConfig] = None) -> PhaseResult:
    return PhaseResult(updated_state=state)
