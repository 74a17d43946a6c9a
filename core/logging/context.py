"""Per-task log fields (address, key name, ...) attached to every record."""
from __future__ import annotations

import contextvars
from contextlib import contextmanager
from typing import Any, Dict, Iterator

_fields: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar("bsclient_log_fields", default={})


def get_context() -> Dict[str, Any]:
    return dict(_fields.get())


@contextmanager
def log_context(**values: Any) -> Iterator[Dict[str, Any]]:
    """Bind ``values`` for the duration of the block. None values are skipped.

    asyncio tasks copy the context when they are created, so concurrent
    acquisitions never see each other's fields.
    """
    merged = {**_fields.get(), **{k: v for k, v in values.items() if v is not None}}
    token = _fields.set(merged)
    try:
        yield merged
    finally:
        _fields.reset(token)
