from .state import TokenStatus, TokenState, EmptyToken, BoundToken, StaleToken
from .token_manager import TokenManager

__all__ = [
    "TokenStatus",
    "TokenState",
    "EmptyToken",
    "BoundToken",
    "StaleToken",
    "TokenManager",
]
