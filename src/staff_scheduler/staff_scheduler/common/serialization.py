from __future__ import annotations

from dataclasses import fields, is_dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Iterable


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _json_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, time):
        return value.strftime("%H:%M:%S")
    return value


def to_payload(entity: Any, *, exclude: Iterable[str] = ()) -> dict:
    """Turn an entity dataclass into a JSON-ready dict with camelCase keys."""
    if not is_dataclass(entity):
        raise TypeError(f"Expected a dataclass instance, got {type(entity)!r}")
    skipped = set(exclude)
    return {
        camel_case(f.name): _json_value(getattr(entity, f.name))
        for f in fields(entity)
        if f.name not in skipped
    }


def to_payloads(entities: Iterable[Any], *, exclude: Iterable[str] = ()) -> list:
    skipped = tuple(exclude)
    return [to_payload(e, exclude=skipped) for e in entities]
