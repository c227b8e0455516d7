from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

from roomcrawl.core.models import Condition
from roomcrawl.core.render import (
    render_banner,
    render_condition,
    render_connections,
    render_hints,
    render_inventory,
    render_resources,
)

if TYPE_CHECKING:
    from roomcrawl.core.engine import Game


class StrategyKind(str, Enum):
    MAIN = "main"
    INVENTORY = "inventory"
    UNCOMPLETED_CONDITION = "uncompleted_condition"


class TurnStrategy(ABC):
    """Behaviour of a single turn: render, offer actions, dispatch one choice."""

    kind: ClassVar[StrategyKind]

    @abstractmethod
    def execute(self, game: Game) -> None: ...

    def _prompt(self, game: Game) -> None:
        game.refresh_actions()
        game.show_action_menu()
        game.handle_choice(game.read_choice())


@dataclass(frozen=True)
class MainAction(TurnStrategy):
    kind: ClassVar[StrategyKind] = StrategyKind.MAIN

    def execute(self, game: Game) -> None:
        game.terminal.clear()
        render_banner(game)

        game.enter_active_room()
        if not game.running:
            game.actions = []
            return

        render_resources(game)
        render_connections(game)
        if game.show_hints:
            render_hints(game)

        self._prompt(game)


@dataclass(frozen=True)
class Inventory(TurnStrategy):
    kind: ClassVar[StrategyKind] = StrategyKind.INVENTORY

    def execute(self, game: Game) -> None:
        game.terminal.clear()
        render_banner(game)
        render_inventory(game)
        self._prompt(game)


@dataclass(frozen=True)
class UncompletedCondition(TurnStrategy):
    kind: ClassVar[StrategyKind] = StrategyKind.UNCOMPLETED_CONDITION

    condition: Condition

    def execute(self, game: Game) -> None:
        game.terminal.clear()
        render_banner(game)
        render_condition(game, self.condition)
        self._prompt(game)
