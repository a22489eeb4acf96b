"""
Sector Market Resolver — clears supply and demand inside one sector, and
moves leftover surplus along trade routes between sectors.

Behavioral Contract:
- Every tradeable resource's positive colony surpluses form one sector pool
- Colonies draw their deficits from the pool in descending dynamism order,
  ties kept in encounter order
- Transport capacity is never pooled: a local deficit is a shortage
- A colony with surplus of a resource earns an export bonus when the pool
  for that resource was actually drawn down
- Cross-sector trade ships floor(leftover x efficiency) and fills importer
  deficits, again by descending dynamism
- Pure: takes colonies and deposits, returns new flow values
"""

from typing import Dict, List, Optional, Tuple

from spacetime_engine.catalog.tables import TRADEABLE_RESOURCES
from spacetime_engine.formulas.production import colony_resource_flows
from spacetime_engine.models.colony import Colony
from spacetime_engine.models.common import ResourceType
from spacetime_engine.models.market import (
    ExportBonus,
    ResourceFlow,
    SectorMarketState,
    Shortage,
    TradeFlow,
    zero_resource_record,
)
from spacetime_engine.models.planet import Deposit

ColonyFlows = Dict[ResourceType, ResourceFlow]


def find_shortages(colony_id: str, flows: ColonyFlows) -> List[Shortage]:
    """Unmet deficits left on one colony after clearing and trade."""
    return [
        Shortage(colony_id=colony_id, resource=resource, deficit_amount=flow.unmet_deficit)
        for resource, flow in flows.items()
        if flow.in_shortage
    ]


def _by_dynamism(colonies: List[Colony]) -> List[Colony]:
    # sorted() is stable, so equal dynamism keeps encounter order
    return sorted(colonies, key=lambda c: c.attributes.dynamism, reverse=True)


class SectorClearing:
    """Result of clearing one sector's market before any cross-sector trade."""

    def __init__(
        self,
        sector_id: str,
        colonies: List[Colony],
        colony_flows: Dict[str, ColonyFlows],
        leftover_pool: Dict[ResourceType, int],
        export_bonuses: List[ExportBonus],
        total_production: Dict[ResourceType, int],
        total_consumption: Dict[ResourceType, int],
    ):
        self.sector_id = sector_id
        self.colonies = colonies
        self.colony_flows = colony_flows
        self.leftover_pool = leftover_pool
        self.export_bonuses = export_bonuses
        self.total_production = total_production
        self.total_consumption = total_consumption

    @property
    def net_surplus(self) -> Dict[ResourceType, int]:
        return {
            r: self.total_production[r] - self.total_consumption[r]
            for r in ResourceType
        }

    def to_market_state(
        self,
        inbound: Optional[List[TradeFlow]] = None,
        outbound: Optional[List[TradeFlow]] = None,
    ) -> SectorMarketState:
        return SectorMarketState(
            sector_id=self.sector_id,
            total_production=dict(self.total_production),
            total_consumption=dict(self.total_consumption),
            net_surplus=self.net_surplus,
            inbound_flows=list(inbound or []),
            outbound_flows=list(outbound or []),
        )


class SectorMarketResolver:
    def __init__(self, trade_efficiency: float = 0.5):
        self.trade_efficiency = trade_efficiency

    def clear_sector(
        self,
        sector_id: str,
        colonies: List[Colony],
        deposits_by_colony: Dict[str, List[Deposit]],
    ) -> SectorClearing:
        raw: Dict[str, ColonyFlows] = {
            colony.id: colony_resource_flows(colony, deposits_by_colony.get(colony.id, []))
            for colony in colonies
        }

        pool: Dict[ResourceType, int] = {
            resource: sum(max(0, raw[c.id][resource].surplus) for c in colonies)
            for resource in TRADEABLE_RESOURCES
        }
        initial_pool = dict(pool)

        imported: Dict[str, Dict[ResourceType, int]] = {c.id: {} for c in colonies}
        for colony in _by_dynamism(colonies):
            for resource in TRADEABLE_RESOURCES:
                surplus = raw[colony.id][resource].surplus
                if surplus >= 0:
                    continue
                received = min(-surplus, pool[resource])
                pool[resource] -= received
                imported[colony.id][resource] = received

        colony_flows: Dict[str, ColonyFlows] = {}
        for colony in colonies:
            flows: ColonyFlows = {}
            for resource, flow in raw[colony.id].items():
                if resource == ResourceType.TRANSPORT_CAPACITY:
                    flows[resource] = flow.model_copy(update={"in_shortage": flow.surplus < 0})
                    continue
                received = imported[colony.id].get(resource, 0)
                remaining = max(0, -flow.surplus - received)
                flows[resource] = flow.model_copy(update={
                    "imported": received,
                    "in_shortage": remaining > 0,
                })
            colony_flows[colony.id] = flows

        export_bonuses: List[ExportBonus] = []
        for colony in colonies:
            for resource in TRADEABLE_RESOURCES:
                if raw[colony.id][resource].surplus > 0 and initial_pool[resource] > pool[resource]:
                    export_bonuses.append(ExportBonus(colony_id=colony.id, resource=resource))

        total_production = zero_resource_record()
        total_consumption = zero_resource_record()
        for colony in colonies:
            for resource, flow in raw[colony.id].items():
                total_production[resource] += flow.produced
                total_consumption[resource] += flow.consumed

        return SectorClearing(
            sector_id=sector_id,
            colonies=list(colonies),
            colony_flows=colony_flows,
            leftover_pool=pool,
            export_bonuses=export_bonuses,
            total_production=total_production,
            total_consumption=total_consumption,
        )

    def trade_pass(
        self,
        exporter_sector_id: str,
        exportable: Dict[ResourceType, int],
        importer: SectorClearing,
        importer_flows: Dict[str, ColonyFlows],
    ) -> Tuple[Dict[str, ColonyFlows], List[TradeFlow]]:
        """
        Ship one direction of a trade route.

        `exportable` is the exporter's leftover pool; `importer_flows` is the
        importer's current flows (already including earlier passes). Returns
        new importer flows and the trade flows that actually delivered goods.
        """
        updated = {cid: dict(flows) for cid, flows in importer_flows.items()}
        trade_flows: List[TradeFlow] = []
        ordered = _by_dynamism(importer.colonies)

        for resource in TRADEABLE_RESOURCES:
            available = exportable.get(resource, 0)
            if available <= 0:
                continue
            transferred = int(available * self.trade_efficiency)
            if transferred <= 0:
                continue

            remaining = transferred
            received_total = 0
            for colony in ordered:
                if remaining <= 0:
                    break
                flow = updated[colony.id][resource]
                deficit = flow.unmet_deficit
                if deficit <= 0:
                    continue
                received = min(deficit, remaining)
                remaining -= received
                received_total += received
                updated[colony.id][resource] = flow.model_copy(update={
                    "imported": flow.imported + received,
                    "in_shortage": deficit - received > 0,
                })

            if received_total > 0:
                trade_flows.append(TradeFlow(
                    from_sector_id=exporter_sector_id,
                    to_sector_id=importer.sector_id,
                    resource=resource,
                    surplus_available=available,
                    transferred=transferred,
                    received=received_total,
                ))

        return updated, trade_flows
