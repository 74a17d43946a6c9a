"""Field readers shared by the entity ``from_dict`` constructors."""
from __future__ import annotations

from typing import Any, Callable, List, Optional, TypeVar

from core.errors import ValidationError

T = TypeVar("T")


def ensure_mapping(data: Any, entity: str) -> dict:
    if not isinstance(data, dict):
        raise ValidationError(f"{entity}: expected an object, got {type(data).__name__}")
    return data


def req_str(data: dict, name: str, entity: str) -> str:
    value = data.get(name)
    if not isinstance(value, str):
        raise ValidationError(f"{entity}.{name}: expected a string, got {value!r}")
    return value


def req_int(data: dict, name: str, entity: str) -> int:
    value = data.get(name)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{entity}.{name}: expected an integer, got {value!r}")
    return value


def opt_int(data: dict, name: str, entity: str, default: int = 0) -> int:
    if data.get(name) is None:
        return default
    return req_int(data, name, entity)


def opt_str(data: dict, name: str, entity: str) -> Optional[str]:
    if data.get(name) is None:
        return None
    return req_str(data, name, entity)


def list_of(
    data: dict,
    name: str,
    entity: str,
    build: Callable[[Any], T],
    *,
    limit: Optional[int] = None,
) -> List[T]:
    raw = data.get(name)
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValidationError(f"{entity}.{name}: expected a list, got {type(raw).__name__}")
    if limit is not None and len(raw) > limit:
        raise ValidationError(f"{entity}.{name}: at most {limit} entries allowed, got {len(raw)}")
    return [build(item) for item in raw]
