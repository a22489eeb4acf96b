"""
Ownership Transactions — the only writers of corporate infrastructure.

A corporation's assets.infrastructure_by_colony is the authoritative record
of its stake in each colony; every colony's per-domain corporate_levels map
is a mirror of it. Each function here updates both sides in one step and
returns new values, so the two can never drift apart.

Behavioral Contract:
- Never mutates its inputs
- Raises InvariantViolation rather than clamping when a transaction would
  break a level, capacity, capital or mirror invariant
"""

from typing import Dict, Iterable, Tuple

from spacetime_engine.models.colony import Colony, InfraState
from spacetime_engine.models.common import InfraDomain
from spacetime_engine.models.corporation import Corporation


class InvariantViolation(Exception):
    """Raised when a state transition would break an ownership invariant."""
    pass


def _replace_infra(colony: Colony, state: InfraState) -> Colony:
    infrastructure = dict(colony.infrastructure)
    infrastructure[state.domain] = state
    return colony.model_copy(update={"infrastructure": infrastructure})


def _add_holding(
    corp: Corporation, colony_id: str, domain: InfraDomain, levels: int
) -> Dict[str, Dict[InfraDomain, int]]:
    by_colony = {cid: dict(h) for cid, h in corp.assets.infrastructure_by_colony.items()}
    holdings = by_colony.setdefault(colony_id, {})
    holdings[domain] = holdings.get(domain, 0) + levels
    return by_colony


def _with_presence(present: Iterable[str], entity_id: str) -> list:
    present = list(present)
    if entity_id not in present:
        present.append(entity_id)
    return present


def invest_level(
    corp: Corporation,
    colony: Colony,
    domain: InfraDomain,
    cost: int,
) -> Tuple[Corporation, Colony]:
    """Corporation pays `cost` capital to build one new level it owns."""
    infra = colony.infra(domain)
    if not infra.has_capacity():
        raise InvariantViolation(
            f"{colony.id}/{domain.value} is at capacity "
            f"({infra.total_levels()}/{infra.current_cap})"
        )
    if corp.capital < cost:
        raise InvariantViolation(
            f"{corp.id} cannot pay {cost} with {corp.capital} capital"
        )

    corporate_levels = dict(infra.corporate_levels)
    corporate_levels[corp.id] = corporate_levels.get(corp.id, 0) + 1
    updated_colony = _replace_infra(
        colony, infra.model_copy(update={"corporate_levels": corporate_levels})
    )
    updated_colony = updated_colony.model_copy(update={
        "corporations_present": _with_presence(colony.corporations_present, corp.id),
    })

    updated_corp = corp.model_copy(update={
        "capital": corp.capital - cost,
        "assets": corp.assets.model_copy(update={
            "infrastructure_by_colony": _add_holding(corp, colony.id, domain, 1),
        }),
        "planets_present": _with_presence(corp.planets_present, colony.planet_id),
    })
    return updated_corp, updated_colony


def transfer_public_level(
    corp: Corporation,
    colony: Colony,
    domain: InfraDomain,
) -> Tuple[Corporation, Colony]:
    """Move one existing public level into corporate ownership. Capacity is unchanged."""
    infra = colony.infra(domain)
    if infra.public_levels < 1:
        raise InvariantViolation(
            f"{colony.id}/{domain.value} has no public level to transfer"
        )

    corporate_levels = dict(infra.corporate_levels)
    corporate_levels[corp.id] = corporate_levels.get(corp.id, 0) + 1
    updated_colony = _replace_infra(colony, infra.model_copy(update={
        "public_levels": infra.public_levels - 1,
        "corporate_levels": corporate_levels,
    }))
    updated_colony = updated_colony.model_copy(update={
        "corporations_present": _with_presence(colony.corporations_present, corp.id),
    })

    updated_corp = corp.model_copy(update={
        "assets": corp.assets.model_copy(update={
            "infrastructure_by_colony": _add_holding(corp, colony.id, domain, 1),
        }),
        "planets_present": _with_presence(corp.planets_present, colony.planet_id),
    })
    return updated_corp, updated_colony


def absorb_corporation(
    buyer: Corporation,
    target: Corporation,
    colonies: Dict[str, Colony],
    cost: int,
    max_level: int = 10,
) -> Tuple[Corporation, Dict[str, Colony]]:
    """
    Merge `target` into `buyer`.

    Returns the updated buyer and only the colonies whose mirrors changed.
    Every level the target owned is re-keyed to the buyer in each colony's
    corporate_levels map, and the target disappears from corporations_present.
    """
    if buyer.id == target.id:
        raise InvariantViolation(f"{buyer.id} cannot acquire itself")
    if buyer.capital < cost:
        raise InvariantViolation(
            f"{buyer.id} cannot pay {cost} with {buyer.capital} capital"
        )

    merged = {cid: dict(h) for cid, h in buyer.assets.infrastructure_by_colony.items()}
    changed: Dict[str, Colony] = {}

    for colony_id, target_holdings in target.assets.infrastructure_by_colony.items():
        buyer_holdings = merged.setdefault(colony_id, {})
        for domain, levels in target_holdings.items():
            if levels:
                buyer_holdings[domain] = buyer_holdings.get(domain, 0) + levels

        colony = colonies.get(colony_id)
        if colony is None:
            continue

        infrastructure = dict(colony.infrastructure)
        for domain, levels in target_holdings.items():
            infra = infrastructure[domain]
            mirrored = infra.corporate_levels.get(target.id, 0)
            if mirrored != levels:
                raise InvariantViolation(
                    f"{colony_id}/{domain.value}: {target.id} holds {levels} "
                    f"but the colony records {mirrored}"
                )
            corporate_levels = dict(infra.corporate_levels)
            corporate_levels.pop(target.id, None)
            if levels:
                corporate_levels[buyer.id] = corporate_levels.get(buyer.id, 0) + levels
            infrastructure[domain] = infra.model_copy(
                update={"corporate_levels": corporate_levels}
            )

        present = [cid for cid in colony.corporations_present if cid != target.id]
        changed[colony_id] = colony.model_copy(update={
            "infrastructure": infrastructure,
            "corporations_present": _with_presence(present, buyer.id),
        })

    planets_present = list(buyer.planets_present)
    for planet_id in target.planets_present:
        if planet_id not in planets_present:
            planets_present.append(planet_id)

    updated_buyer = buyer.model_copy(update={
        "capital": buyer.capital - cost,
        "level": min(max_level, buyer.level + 1),
        "assets": buyer.assets.model_copy(update={
            "infrastructure_by_colony": merged,
            "schematics": list(buyer.assets.schematics) + list(target.assets.schematics),
            "patents": list(buyer.assets.patents) + list(target.assets.patents),
        }),
        "planets_present": planets_present,
    })
    return updated_buyer, changed


def check_holdings_mirror(
    corporations: Dict[str, Corporation],
    colonies: Dict[str, Colony],
) -> None:
    """Raise InvariantViolation if any holding and its colony mirror disagree."""
    expected: Dict[Tuple[str, InfraDomain, str], int] = {}
    for corp in corporations.values():
        for colony_id, holdings in corp.assets.infrastructure_by_colony.items():
            if colony_id not in colonies:
                continue
            for domain, levels in holdings.items():
                if levels < 0:
                    raise InvariantViolation(f"{corp.id} holds negative {domain.value}")
                if levels:
                    expected[(colony_id, domain, corp.id)] = levels

    actual: Dict[Tuple[str, InfraDomain, str], int] = {}
    for colony in colonies.values():
        for domain, infra in colony.infrastructure.items():
            if infra.public_levels < 0:
                raise InvariantViolation(f"{colony.id}/{domain.value} has negative public levels")
            for corp_id, levels in infra.corporate_levels.items():
                if levels < 0:
                    raise InvariantViolation(
                        f"{colony.id}/{domain.value} records negative levels for {corp_id}"
                    )
                if levels:
                    actual[(colony.id, domain, corp_id)] = levels

    if expected != actual:
        drift = sorted(
            f"{colony_id}/{domain.value}/{corp_id}"
            for (colony_id, domain, corp_id), _ in set(expected.items()) ^ set(actual.items())
        )
        raise InvariantViolation(f"holdings mirror out of sync: {drift}")
