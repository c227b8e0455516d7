from __future__ import annotations

from roomcrawl.core.models import Condition, ConditionKind, Player


def satisfied(condition: Condition | None, player: Player) -> bool:
    if condition is None or condition.kind is None:
        return True
    if condition.kind == ConditionKind.HAS:
        return condition.resource_id is not None and player.has(condition.resource_id)
    # Unknown kinds never block a connection.
    return True


def required_resource(condition: Condition) -> str | None:
    if condition.kind == ConditionKind.HAS:
        return condition.resource_id
    return None
