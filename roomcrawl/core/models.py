from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class RoomKind(str, Enum):
    NORMAL = "normal"
    WINNING = "winning"
    DEATH = "death"


class ConditionKind(str, Enum):
    HAS = "has"


class Outcome(str, Enum):
    WON = "won"
    LOST = "lost"
    QUIT = "quit"


@dataclass(frozen=True)
class Resource:
    resource_id: str
    name: str


@dataclass(frozen=True)
class Condition:
    kind: str | None
    resource_id: str | None = None
    description: str = ""


@dataclass(frozen=True)
class Connection:
    room_id: str
    name: str
    condition: Condition | None = None


@dataclass
class Room:
    room_id: str
    name: str
    description: str
    kind: RoomKind
    resources: list[str] = field(default_factory=list)
    connections: tuple[Connection, ...] = ()


@dataclass
class Player:
    name: str
    inventory: list[str] = field(default_factory=list)

    def has(self, resource_id: str) -> bool:
        return resource_id in self.inventory

    def take(self, resource_id: str) -> None:
        if resource_id not in self.inventory:
            self.inventory.append(resource_id)

    def give_up(self, resource_id: str) -> None:
        self.inventory = [r for r in self.inventory if r != resource_id]
