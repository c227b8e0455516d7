from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from roomcrawl.core.conditions import satisfied
from roomcrawl.core.models import Connection, Outcome
from roomcrawl.core.strategies import Inventory, MainAction, StrategyKind, TurnStrategy, UncompletedCondition

if TYPE_CHECKING:
    from roomcrawl.core.engine import Game


logger = logging.getLogger(__name__)


class CommandKind(str, Enum):
    OPEN_INVENTORY = "open_inventory"
    PICK_UP = "pick_up"
    TRAVERSE = "traverse"
    TOGGLE_HINT = "toggle_hint"
    DROP = "drop"
    BACK = "back"
    QUIT = "quit"


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    resource_id: str | None = None
    connection: Connection | None = None


@dataclass(frozen=True)
class Action:
    label: str
    command: Command
    style: str = ""


QUIT = Action("Quit the game", Command(CommandKind.QUIT), style="grey50")
BACK = Action("Go back", Command(CommandKind.BACK))


def _main_actions(game: Game) -> list[Action]:
    room = game.active_room
    actions = [Action("Check inventory", Command(CommandKind.OPEN_INVENTORY))]
    for resource_id in room.resources:
        name = game.resources[resource_id].name
        actions.append(Action(f"Take {name}", Command(CommandKind.PICK_UP, resource_id=resource_id)))
    for connection in room.connections:
        actions.append(
            Action(f"Go to {connection.name}", Command(CommandKind.TRAVERSE, connection=connection), style="green")
        )
    hint_label = "Hide hint" if game.show_hints else "Show hint"
    actions.append(Action(hint_label, Command(CommandKind.TOGGLE_HINT), style="grey50"))
    actions.append(QUIT)
    return actions


def _inventory_actions(game: Game) -> list[Action]:
    actions = [
        Action(f"Drop {game.resources[resource_id].name}", Command(CommandKind.DROP, resource_id=resource_id))
        for resource_id in game.player.inventory
    ]
    actions.extend([BACK, QUIT])
    return actions


def build_actions(strategy: TurnStrategy, game: Game) -> list[Action]:
    """Return this turn's menu for ``strategy``.

    The order is the menu numbering shown to the player; "Go back" and "Quit"
    always come last.
    """
    if strategy.kind is StrategyKind.MAIN:
        return _main_actions(game)
    if strategy.kind is StrategyKind.INVENTORY:
        return _inventory_actions(game)
    if strategy.kind is StrategyKind.UNCOMPLETED_CONDITION:
        return [BACK, QUIT]
    raise ValueError(f"unknown strategy kind {strategy.kind}")


def apply_command(game: Game, command: Command) -> None:
    logger.debug("Applying %s in %s", command.kind.value, game.active_room_id)
    kind = command.kind

    if kind is CommandKind.OPEN_INVENTORY:
        game.set_strategy(Inventory())
    elif kind is CommandKind.PICK_UP:
        room = game.active_room
        if command.resource_id in room.resources:
            room.resources.remove(command.resource_id)
            game.player.take(command.resource_id)
    elif kind is CommandKind.TRAVERSE:
        connection = command.connection
        if satisfied(connection.condition, game.player):
            game.active_room_id = connection.room_id
        else:
            game.set_strategy(UncompletedCondition(connection.condition))
    elif kind is CommandKind.TOGGLE_HINT:
        game.show_hints = not game.show_hints
    elif kind is CommandKind.DROP:
        if game.player.has(command.resource_id):
            game.player.give_up(command.resource_id)
            game.active_room.resources.append(command.resource_id)
    elif kind is CommandKind.BACK:
        game.set_strategy(MainAction())
    elif kind is CommandKind.QUIT:
        game.stop(Outcome.QUIT)
    else:
        raise ValueError(f"unknown command {kind}")
