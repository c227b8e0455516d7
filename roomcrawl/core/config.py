from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any
import yaml


@dataclass(frozen=True)
class RoomcrawlConfig:
    content_path: str
    start_room: str | None
    audit_path: str
    audit_enabled: bool


def load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {p}")
    with p.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _resolve(base: Path, value: str) -> str:
    if Path(value).is_absolute():
        return value
    return str((base / value).resolve())


def load_master_config(path: str | Path) -> RoomcrawlConfig:
    master_path = Path(path).resolve()
    raw = load_yaml(master_path)

    content_path = raw.get("content", {}).get("path", "./roomcrawl/content/world.yaml")
    audit = raw.get("audit", {})
    start_room = raw.get("game", {}).get("start_room")

    return RoomcrawlConfig(
        content_path=_resolve(master_path.parent, content_path),
        start_room=str(start_room) if start_room else None,
        audit_path=_resolve(master_path.parent, audit.get("path", "./roomcrawl_audit.jsonl")),
        audit_enabled=bool(audit.get("enabled", True)),
    )
