"""Application services root exports."""
from .token import BoundToken, EmptyToken, StaleToken, TokenManager, TokenStatus

__all__ = [
    "BoundToken",
    "EmptyToken",
    "StaleToken",
    "TokenManager",
    "TokenStatus",
]
