from __future__ import annotations

import logging

from roomcrawl.core.actions import Action, apply_command, build_actions
from roomcrawl.core.errors import ConfigurationError
from roomcrawl.core.models import Outcome, Player, Resource, Room, RoomKind
from roomcrawl.core.render import render_defeat, render_description, render_menu, render_victory
from roomcrawl.core.strategies import MainAction, TurnStrategy
from roomcrawl.core.terminal import Terminal


logger = logging.getLogger(__name__)

CHOICE_PROMPT = "Your choice: "


def parse_choice(text: str | int | None) -> int | None:
    if isinstance(text, int):
        return text
    if text is None:
        return None
    try:
        return int(text.strip())
    except ValueError:
        return None


class Game:
    def __init__(
        self,
        player: Player,
        rooms: dict[str, Room],
        resources: dict[str, Resource],
        active_room_id: str,
        terminal: Terminal,
        hints: list[str] | None = None,
    ):
        if active_room_id not in rooms:
            raise ConfigurationError(f"start room {active_room_id} does not exist")
        self.player = player
        self.rooms = rooms
        self.resources = resources
        self.active_room_id = active_room_id
        self.terminal = terminal
        self.hints = hints or []
        self.strategy: TurnStrategy = MainAction()
        self.actions: list[Action] = []
        self.running = True
        self.show_hints = False
        self.outcome: Outcome | None = None
        self.turns = 0

    @property
    def active_room(self) -> Room:
        return self.rooms[self.active_room_id]

    def start(self) -> Outcome | None:
        while self.running:
            self.strategy.execute(self)
        self.terminal.print("[cyan]Game over.[/cyan]")
        return self.outcome

    def set_strategy(self, strategy: TurnStrategy) -> None:
        self.strategy = strategy

    def stop(self, outcome: Outcome) -> None:
        self.running = False
        self.outcome = outcome
        logger.info("Game ended in %s: %s", self.active_room_id, outcome.value)

    def enter_active_room(self) -> None:
        room = self.active_room
        render_description(self)
        if room.kind is RoomKind.WINNING:
            render_victory(self)
            self.stop(Outcome.WON)
        elif room.kind is RoomKind.DEATH:
            render_defeat(self)
            self.stop(Outcome.LOST)

    def refresh_actions(self) -> list[Action]:
        self.actions = build_actions(self.strategy, self)
        return self.actions

    def show_action_menu(self) -> None:
        render_menu(self)

    def read_choice(self) -> int | None:
        raw = self.terminal.ask(CHOICE_PROMPT)
        if raw is None:
            # End of input leaves nothing else to read.
            self.stop(Outcome.QUIT)
            return None
        return parse_choice(raw)

    def handle_choice(self, choice: str | int | None) -> bool:
        if not self.running:
            return False
        n = parse_choice(choice)
        if n is None or n < 1 or n > len(self.actions):
            self.terminal.print("Invalid choice.")
            return False
        self.turns += 1
        apply_command(self, self.actions[n - 1].command)
        return True
