from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

from roomcrawl.core.conditions import required_resource
from roomcrawl.core.models import Condition

if TYPE_CHECKING:
    from roomcrawl.core.engine import Game


def render_banner(game: Game) -> None:
    name = escape(game.active_room.name)
    game.terminal.print(f"[bold yellow reverse] You are in [underline]{name}[/underline] [/]")


def render_description(game: Game) -> None:
    game.terminal.print(f"[italic]{escape(game.active_room.description)}[/italic]")


def render_victory(game: Game) -> None:
    game.terminal.print(f"[bold green reverse] Congratulations, {escape(game.player.name)}, you won! [/]\n")


def render_defeat(game: Game) -> None:
    game.terminal.print("[bold red]You lost...[/bold red]\n")


def render_resources(game: Game) -> None:
    room = game.active_room
    if not room.resources:
        game.terminal.print("\n[underline]There is nothing here to take with you.[/underline]")
        return
    game.terminal.print("\n[underline]You can take something from here:[/underline]")
    for resource_id in room.resources:
        game.terminal.print(f"[bold yellow] * [/bold yellow]{escape(game.resources[resource_id].name)}")


def render_connections(game: Game) -> None:
    room = game.active_room
    if not room.connections:
        game.terminal.print("\n[underline]There is no way out of here...[/underline]")
        return
    game.terminal.print("\n[underline]From here you can reach:[/underline]")
    for connection in room.connections:
        game.terminal.print(f"[bold yellow]-> [/bold yellow]{escape(connection.name)}")


def render_inventory(game: Game) -> None:
    game.terminal.print("\n[underline]Your inventory:[/underline]")
    if not game.player.inventory:
        game.terminal.print("(Empty)")
        return
    for resource_id in game.player.inventory:
        game.terminal.print(f"[bold yellow] * [/bold yellow]{escape(game.resources[resource_id].name)}")


def render_condition(game: Game, condition: Condition) -> None:
    game.terminal.print(escape(condition.description))
    resource_id = required_resource(condition)
    if resource_id is not None:
        name = game.resources[resource_id].name
        game.terminal.print(f"\n[red]You need to have:\n{escape(name)}[/red]")


def render_hints(game: Game) -> None:
    if not game.hints:
        return
    table = Table(title="Hints")
    table.add_column("#", justify="right")
    table.add_column("Route")
    for i, hint in enumerate(game.hints, start=1):
        table.add_row(str(i), escape(hint))
    game.terminal.print(table)


def render_menu(game: Game) -> None:
    game.terminal.print("\n[on green] Choose an action [/on green]")
    for i, action in enumerate(game.actions, start=1):
        label = escape(action.label)
        if action.style:
            label = f"[{action.style}]{label}[/{action.style}]"
        game.terminal.print(f"{i}. {label}.")
