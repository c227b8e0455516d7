from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import typer
from importlib import metadata
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from roomcrawl.core.audit import append_audit
from roomcrawl.core.config import RoomcrawlConfig, load_master_config
from roomcrawl.core.errors import ConfigurationError
from roomcrawl.core.loader import build_game, load_content, validate_content
from roomcrawl.core.terminal import Terminal


app = typer.Typer(add_completion=False, help="Roomcrawl: a turn-based text adventure")
console = Console()

DEFAULT_CONTENT = Path(__file__).parent / "content" / "world.yaml"


def _get_version() -> str:
    try:
        return metadata.version("roomcrawl")
    except metadata.PackageNotFoundError:
        return "0.0.0+local"


def _resolve_config_path(config_path: str) -> str | None:
    path = Path(config_path)
    if path.exists():
        return str(path)

    env_path = os.getenv("ROOMCRAWL_CONFIG")
    if env_path:
        env_candidate = Path(env_path)
        if env_candidate.exists():
            return str(env_candidate)

    if config_path != "roomcrawl.yaml":
        return str(path)

    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / "roomcrawl.yaml"
        if candidate.exists():
            return str(candidate)

    return None


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _get_config(config_path: str, content: str | None) -> RoomcrawlConfig:
    resolved = _resolve_config_path(config_path)
    if resolved is None:
        cfg = RoomcrawlConfig(
            content_path=str(DEFAULT_CONTENT),
            start_room=None,
            audit_path="./roomcrawl_audit.jsonl",
            audit_enabled=False,
        )
    else:
        cfg = load_master_config(resolved)
    if content:
        cfg = RoomcrawlConfig(
            content_path=content,
            start_room=cfg.start_room,
            audit_path=cfg.audit_path,
            audit_enabled=cfg.audit_enabled,
        )
    return cfg


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the Roomcrawl version and exit.",
        is_eager=True,
    ),
):
    if version:
        console.print(_get_version())
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit()


@app.command("play")
def play(
    name: str = typer.Option(..., "--name", "-n", prompt="Your name", help="Player name"),
    config: str = typer.Option("roomcrawl.yaml", "--config", help="Path to master config"),
    content: Optional[str] = typer.Option(None, "--content", help="Path to a content file (overrides config)"),
    start_room: Optional[str] = typer.Option(None, "--start-room", help="Room id to start in (overrides config)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine events"),
):
    _configure_logging(verbose)

    try:
        cfg = _get_config(config, content)
        data = load_content(cfg.content_path)
        game = build_game(data, name, Terminal(console), start_room=start_room or cfg.start_room)
    except (ConfigurationError, FileNotFoundError) as e:
        console.print(f"[red]Configuration error[/red]: {escape(str(e))}")
        console.print("[grey50]Game over[/grey50]")
        raise typer.Exit(code=2)

    if cfg.audit_enabled:
        append_audit({"event": "game_start", "player": name, "room": game.active_room_id}, cfg.audit_path)

    outcome = game.start()

    if cfg.audit_enabled:
        append_audit(
            {
                "event": "game_end",
                "player": name,
                "outcome": outcome.value if outcome else None,
                "turns": game.turns,
                "room": game.active_room_id,
                "inventory": list(game.player.inventory),
            },
            cfg.audit_path,
        )


@app.command("check")
def check(
    config: str = typer.Option("roomcrawl.yaml", "--config", help="Path to master config"),
    content: Optional[str] = typer.Option(None, "--content", help="Path to a content file (overrides config)"),
):
    try:
        cfg = _get_config(config, content)
        data = load_content(cfg.content_path)
        validate_content(data, cfg.start_room)
    except (ConfigurationError, FileNotFoundError) as e:
        console.print(f"❌ Configuration error: {escape(str(e))}")
        raise typer.Exit(code=2)

    table = Table(title="Roomcrawl Rooms")
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Resources")
    table.add_column("Exits")
    for room in data["rooms"]:
        exits = []
        for c in room.get("connections") or []:
            condition = c.get("condition")
            exits.append(f"{c['roomId']} (needs {condition.get('resourceId')})" if condition else c["roomId"])
        table.add_row(
            room["id"],
            room.get("name", room["id"]),
            room["type"],
            ", ".join(room.get("resources") or []),
            ", ".join(exits),
        )
    console.print(table)
    console.print(f"✅ {len(data['rooms'])} rooms, start room: [bold]{cfg.start_room or data['start_room']}[/bold]")
