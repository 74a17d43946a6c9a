"""Application layer - token lifecycle and use cases."""
from .services import TokenManager
from .use_cases import FetchClubRosterUseCase

__all__ = [
    'TokenManager',
    'FetchClubRosterUseCase',
]
