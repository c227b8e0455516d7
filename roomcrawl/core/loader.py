from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from roomcrawl.core.engine import Game
from roomcrawl.core.errors import ConfigurationError
from roomcrawl.core.models import Condition, Connection, Player, Resource, Room, RoomKind

if TYPE_CHECKING:
    from roomcrawl.core.terminal import Terminal


logger = logging.getLogger(__name__)

ROOM_KINDS = {kind.value: kind for kind in RoomKind}


def _fail(message: str) -> ConfigurationError:
    logger.error("Configuration error: %s", message)
    return ConfigurationError(message)


def load_content(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Content file not found: {p}")
    with p.open("r", encoding="utf-8") as f:
        try:
            if p.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise _fail(f"cannot parse content in {p}: {e}") from e
    if not isinstance(data, dict):
        raise _fail(f"content in {p} must be a mapping")
    return data


def _validate_condition(condition: Any, room_id: str, resource_ids: set[str]) -> None:
    if not isinstance(condition, dict):
        raise _fail(f"condition in {room_id} must be a mapping")
    ctype = condition.get("type")
    if ctype == "has" and condition.get("resourceId") not in resource_ids:
        raise _fail(f"condition in {room_id} requires unknown resource {condition.get('resourceId')}")
    if ctype not in (None, "has"):
        logger.warning("Unknown condition type %s in %s is always satisfied", ctype, room_id)


def validate_content(data: dict[str, Any], start_room: str | None = None) -> None:
    rooms = data.get("rooms", [])
    resources = data.get("resources", [])
    if not isinstance(rooms, list) or not rooms:
        raise _fail("rooms must be a non-empty list")
    if not isinstance(resources, list):
        raise _fail("resources must be a list")

    resource_ids: set[str] = set()
    for resource in resources:
        if not isinstance(resource, dict):
            raise _fail(f"resource {resource!r} must be a mapping")
        rid = resource.get("id")
        if rid is None:
            raise _fail("resource without id")
        if rid in resource_ids:
            raise _fail(f"duplicate resource id {rid}")
        resource_ids.add(rid)

    room_ids: set[str] = set()
    for room in rooms:
        if not isinstance(room, dict):
            raise _fail(f"room {room!r} must be a mapping")
        room_id = room.get("id")
        if room_id is None:
            raise _fail("room without id")
        if room_id in room_ids:
            raise _fail(f"duplicate room id {room_id}")
        room_ids.add(room_id)

    # Each resource starts in exactly one place.
    placed: dict[str, str] = {}
    for room in rooms:
        room_id = room["id"]
        rtype = room.get("type")
        if rtype not in ROOM_KINDS:
            raise _fail(f"unknown room type {rtype} in {room_id}")

        room_resources = room.get("resources") or []
        if not isinstance(room_resources, list):
            raise _fail(f"resources in {room_id} must be a list")
        for rid in room_resources:
            if rid not in resource_ids:
                raise _fail(f"unknown resource {rid} in {room_id}")
            if rid in placed:
                raise _fail(f"resource {rid} in {room_id} is already placed in {placed[rid]}")
            placed[rid] = room_id

        connections = room.get("connections") or []
        if not isinstance(connections, list):
            raise _fail(f"connections in {room_id} must be a list")
        for connection in connections:
            if not isinstance(connection, dict):
                raise _fail(f"connection in {room_id} must be a mapping")
            target = connection.get("roomId")
            if target not in room_ids:
                raise _fail(f"connection in {room_id} points to unknown room {target}")
            condition = connection.get("condition")
            if condition is not None:
                _validate_condition(condition, room_id, resource_ids)

    start = start_room or data.get("start_room")
    if start not in room_ids:
        raise _fail(f"start room {start} does not exist")


def _build_condition(raw: dict[str, Any] | None) -> Condition | None:
    if not raw:
        return None
    return Condition(
        kind=raw.get("type"),
        resource_id=raw.get("resourceId"),
        description=raw.get("description", ""),
    )


def create_room(room: dict[str, Any]) -> Room:
    rtype = room.get("type")
    kind = ROOM_KINDS.get(rtype)
    if kind is None:
        raise _fail(f"unknown room type {rtype} in {room.get('id')}")
    connections = tuple(
        Connection(
            room_id=c["roomId"],
            name=c.get("name", c["roomId"]),
            condition=_build_condition(c.get("condition")),
        )
        for c in room.get("connections") or []
    )
    return Room(
        room_id=room["id"],
        name=room.get("name", room["id"]),
        description=room.get("description", ""),
        kind=kind,
        resources=list(room.get("resources") or []),
        connections=connections,
    )


def build_rooms(data: dict[str, Any]) -> dict[str, Room]:
    return {room["id"]: create_room(room) for room in data.get("rooms", [])}


def build_resources(data: dict[str, Any]) -> dict[str, Resource]:
    return {
        r["id"]: Resource(resource_id=r["id"], name=r.get("name", r["id"]))
        for r in data.get("resources", [])
    }


def build_game(
    data: dict[str, Any],
    player_name: str,
    terminal: Terminal,
    start_room: str | None = None,
) -> Game:
    validate_content(data, start_room)
    rooms = build_rooms(data)
    start = start_room or data["start_room"]
    hints = [str(h) for h in data.get("hints") or []]
    logger.debug("Loaded %d rooms, starting in %s", len(rooms), start)
    return Game(
        player=Player(name=player_name),
        rooms=rooms,
        resources=build_resources(data),
        active_room_id=start,
        terminal=terminal,
        hints=hints,
    )
