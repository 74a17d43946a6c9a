"""Application use cases."""
from .fetch_club_roster import ClubRoster, FetchClubRosterUseCase

__all__ = [
    'ClubRoster',
    'FetchClubRosterUseCase',
]
