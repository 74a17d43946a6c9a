"""Infrastructure API module."""
from .bs_client import BrawlStarsClient, build_query
from .portal_client import PortalSessionClient, Session
from .public_ip import PublicIPResolver

__all__ = [
    'BrawlStarsClient',
    'build_query',
    'PortalSessionClient',
    'Session',
    'PublicIPResolver',
]
