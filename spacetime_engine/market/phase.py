"""
Market Phase — runs the sector market resolver over the whole galaxy and
turns its results into colony modifiers, sector summaries and events.

Behavioral Contract:
- All shortage-sourced modifiers are discarded first; every other source
  is left untouched
- Sectors with no colonies are skipped: no market entry, no events
- Active trade routes trade in both directions from the pre-trade snapshot
- Food shortage -> qualityOfLife -2, ConsumerGoods -> qualityOfLife -1,
  TransportCapacity -> accessibility -1; industrial inputs get no modifier
- Export bonuses are dynamism +1 modifiers, regenerated like shortages
- One event per colony with any unmet shortage: Critical when Food is
  among them, Warning otherwise
"""

import logging
from typing import Dict, List, Optional, Tuple

from spacetime_engine.events.log import build_event
from spacetime_engine.market.resolver import (
    ColonyFlows,
    SectorClearing,
    SectorMarketResolver,
    find_shortages,
)
from spacetime_engine.models.colony import Colony
from spacetime_engine.models.common import (
    ContractStatus,
    ContractType,
    EventCategory,
    EventPriority,
    ResourceType,
)
from spacetime_engine.models.config import EngineConfig
from spacetime_engine.models.event import GameEvent
from spacetime_engine.models.market import ExportBonus, TradeFlow
from spacetime_engine.models.modifier import Modifier, ModifierOperation, ModifierSource
from spacetime_engine.models.state import GameState, PhaseResult

logger = logging.getLogger(__name__)


def strip_shortage_modifiers(colony: Colony) -> Colony:
    kept = [m for m in colony.modifiers if m.source_type != ModifierSource.SHORTAGE]
    return colony.model_copy(update={"modifiers": kept})


class MarketPhase:
    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.resolver = SectorMarketResolver(trade_efficiency=self.config.trade_efficiency)
        self._shortage_effects: Dict[ResourceType, Tuple[str, int]] = {
            ResourceType.FOOD: ("qualityOfLife", self.config.food_shortage_malus),
            ResourceType.CONSUMER_GOODS: ("qualityOfLife", self.config.consumer_goods_shortage_malus),
            ResourceType.TRANSPORT_CAPACITY: ("accessibility", self.config.transport_shortage_malus),
        }

    def resolve(self, state: GameState) -> PhaseResult:
        colonies: Dict[str, Colony] = {
            cid: strip_shortage_modifiers(c) for cid, c in state.colonies.items()
        }

        # Group by sector in encounter order; colonies without a planet sit out
        by_sector: Dict[str, List[Colony]] = {}
        for colony in colonies.values():
            if colony.planet_id not in state.planets:
                continue
            by_sector.setdefault(colony.sector_id, []).append(colony)

        clearings: Dict[str, SectorClearing] = {}
        for sector_id, members in by_sector.items():
            deposits = {c.id: state.planets[c.planet_id].deposits for c in members}
            clearings[sector_id] = self.resolver.clear_sector(sector_id, members, deposits)

        flows: Dict[str, Dict[str, ColonyFlows]] = {
            sid: clearing.colony_flows for sid, clearing in clearings.items()
        }
        inbound, outbound = self._run_trade_routes(state, clearings, flows)

        events: List[GameEvent] = []
        sector_markets = {}
        for sector_id, clearing in clearings.items():
            bonuses = clearing.export_bonuses
            for colony in clearing.colonies:
                updated, event = self._apply_results(
                    colony, flows[sector_id][colony.id], bonuses, state.turn
                )
                colonies[colony.id] = updated
                if event is not None:
                    events.append(event)
            sector_markets[sector_id] = clearing.to_market_state(
                inbound.get(sector_id), outbound.get(sector_id)
            )

        logger.debug(
            "Market resolved for %d sectors with %d shortage events",
            len(sector_markets), len(events),
        )
        return PhaseResult(
            updated_state=state.model_copy(update={
                "colonies": colonies,
                "sector_markets": sector_markets,
            }),
            events=events,
        )

    def _run_trade_routes(
        self,
        state: GameState,
        clearings: Dict[str, SectorClearing],
        flows: Dict[str, Dict[str, ColonyFlows]],
    ) -> Tuple[Dict[str, List[TradeFlow]], Dict[str, List[TradeFlow]]]:
        inbound: Dict[str, List[TradeFlow]] = {}
        outbound: Dict[str, List[TradeFlow]] = {}
        exportable = {sid: dict(c.leftover_pool) for sid, c in clearings.items()}

        for contract in state.contracts.values():
            if contract.type != ContractType.TRADE_ROUTE:
                continue
            if contract.status != ContractStatus.ACTIVE:
                continue
            target = contract.target
            if target.kind != "sector_pair":
                continue
            a, b = target.sector_id_a, target.sector_id_b
            if a not in clearings or b not in clearings:
                continue

            # Both directions read the pre-route leftovers
            snapshot = {a: dict(exportable[a]), b: dict(exportable[b])}
            for exporter, importer in ((a, b), (b, a)):
                updated, shipped = self.resolver.trade_pass(
                    exporter, snapshot[exporter], clearings[importer], flows[importer]
                )
                flows[importer] = updated
                for flow in shipped:
                    exportable[exporter][flow.resource] -= flow.received
                    outbound.setdefault(exporter, []).append(flow)
                    inbound.setdefault(importer, []).append(flow)
                    logger.debug(
                        "Trade %s -> %s: %d %s",
                        exporter, importer, flow.received, flow.resource.value,
                    )

        return inbound, outbound

    def _apply_results(
        self,
        colony: Colony,
        colony_flows: ColonyFlows,
        bonuses: List[ExportBonus],
        turn: int,
    ) -> Tuple[Colony, Optional[GameEvent]]:
        modifiers = list(colony.modifiers)
        shortages = [s.resource for s in find_shortages(colony.id, colony_flows)]

        for resource in shortages:
            effect = self._shortage_effects.get(resource)
            if effect is None:
                continue
            target, value = effect
            modifiers.append(Modifier(
                id=f"mod_{colony.id}_shortage_{resource.value}",
                target=target,
                operation=ModifierOperation.ADD,
                value=value,
                source_type=ModifierSource.SHORTAGE,
                source_id=f"shortage_{resource.value}",
                source_name=f"{resource.value} Shortage",
            ))

        for bonus in bonuses:
            if bonus.colony_id != colony.id:
                continue
            modifiers.append(Modifier(
                id=f"mod_{colony.id}_export_{bonus.resource.value}",
                target=bonus.attribute_target,
                operation=ModifierOperation.ADD,
                value=self.config.export_dynamism_bonus,
                source_type=ModifierSource.SHORTAGE,
                source_id=f"export_{bonus.resource.value}",
                source_name=f"{bonus.resource.value} Export",
            ))

        updated = colony.model_copy(update={"modifiers": modifiers})
        if not shortages:
            return updated, None

        critical = ResourceType.FOOD in shortages
        names = ", ".join(r.value for r in shortages)
        event = build_event(
            turn=turn,
            priority=EventPriority.CRITICAL if critical else EventPriority.WARNING,
            category=EventCategory.COLONY,
            title=f"Resource Shortage — {colony.name}",
            description=f"{colony.name} is short of: {names}.",
            related_entity_ids=[colony.id],
        )
        return updated, event
