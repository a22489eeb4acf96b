"""
Modifier resolution.

Behavioral Contract:
- Only modifiers whose target matches (and whose condition, if any, holds
  against the supplied context) participate
- All additive modifiers are summed onto the base first
- Multiplicative modifiers are then applied sequentially in list order
- The result is optionally clamped
"""

from typing import Dict, List, Optional

from spacetime_engine.models.modifier import Modifier, ModifierOperation


def _is_condition_met(modifier: Modifier, context: Dict[str, float]) -> bool:
    condition = modifier.condition
    if condition is None:
        return True

    value = context.get(condition.attribute)
    if value is None:
        return False

    if condition.comparison == "lte":
        return value <= condition.value
    return value >= condition.value


def applicable_modifiers(
    target: str,
    modifiers: List[Modifier],
    context: Optional[Dict[str, float]] = None,
) -> List[Modifier]:
    context = context or {}
    return [
        m for m in modifiers
        if m.target == target and _is_condition_met(m, context)
    ]


def resolve_modifiers(
    base: float,
    target: str,
    modifiers: List[Modifier],
    clamp_min: Optional[float] = None,
    clamp_max: Optional[float] = None,
    context: Optional[Dict[str, float]] = None,
) -> float:
    applicable = applicable_modifiers(target, modifiers, context)

    adjusted = base + sum(
        m.value for m in applicable if m.operation == ModifierOperation.ADD
    )
    for m in applicable:
        if m.operation == ModifierOperation.MULTIPLY:
            adjusted *= m.value

    if clamp_min is not None:
        adjusted = max(clamp_min, adjusted)
    if clamp_max is not None:
        adjusted = min(clamp_max, adjusted)
    return adjusted


def modifier_breakdown(
    target: str,
    modifiers: List[Modifier],
    context: Optional[Dict[str, float]] = None,
) -> List[dict]:
    """Human-readable list of what contributes to a target, for tooltips and logs."""
    return [
        {"source": m.source_name, "operation": m.operation.value, "value": m.value}
        for m in applicable_modifiers(target, modifiers, context)
    ]
