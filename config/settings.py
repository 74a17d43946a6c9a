"""Application settings and configuration."""
import os
from pathlib import Path
from dotenv import load_dotenv

ENV_PATH = Path(__file__).resolve().parent / '.env'
load_dotenv(dotenv_path=ENV_PATH)


class Settings:
    """
    Developer-portal credentials and API endpoints.

    The data API only accepts keys that were minted on the developer portal
    for the caller's public IPv4 address, so the client needs the portal
    account (email/password), not a static key.
    """

    # ── Portal account ────────────────────────────────────────────────────
    BS_EMAIL:    str = os.getenv('BS_EMAIL', '')
    BS_PASSWORD: str = os.getenv('BS_PASSWORD', '')

    # Name given to keys created by this client. Also used for lookups when
    # BS_KEY_MATCH=name.
    BS_KEY_NAME:  str = os.getenv('BS_KEY_NAME', 'autoCreate')
    BS_KEY_MATCH: str = os.getenv('BS_KEY_MATCH', 'address').strip().lower()

    # ── Endpoints ─────────────────────────────────────────────────────────
    BS_API_BASE_URL:    str = os.getenv('BS_API_BASE_URL', 'https://api.brawlstars.com/v1')
    BS_PORTAL_BASE_URL: str = os.getenv('BS_PORTAL_BASE_URL', 'https://developer.brawlstars.com')
    PUBLIC_IP_URL:      str = os.getenv('PUBLIC_IP_URL', 'https://api.ipify.org?format=json')

    # ── Portal session ────────────────────────────────────────────────────
    # The portal hands out 1h sessions. Expiry is recorded TTL - margin
    # seconds after login so we never send a cookie the portal already dropped.
    PORTAL_SESSION_TTL_S:    int = int(os.getenv('PORTAL_SESSION_TTL_S', '3600'))
    PORTAL_SESSION_MARGIN_S: int = int(os.getenv('PORTAL_SESSION_MARGIN_S', '1'))

    # ── HTTP ──────────────────────────────────────────────────────────────
    REQUEST_TIMEOUT: float = float(os.getenv('REQUEST_TIMEOUT', '30'))

    # ── Paths / logging ───────────────────────────────────────────────────
    BASE_DIR: Path = Path(__file__).resolve().parent.parent
    DATA_DIR: Path = BASE_DIR / 'data'
    LOG_DIR:  Path = Path(os.getenv('LOG_DIR', str(DATA_DIR / 'logs')))

    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    @classmethod
    def validate(cls) -> None:
        if not cls.BS_EMAIL or not cls.BS_PASSWORD:
            raise ValueError("BS_EMAIL and BS_PASSWORD must be set in config/.env")
        if cls.BS_KEY_MATCH not in ('address', 'name'):
            raise ValueError("BS_KEY_MATCH must be 'address' or 'name'")
        if not 0 < cls.PORTAL_SESSION_MARGIN_S < cls.PORTAL_SESSION_TTL_S:
            raise ValueError("PORTAL_SESSION_MARGIN_S must be between 0 and PORTAL_SESSION_TTL_S")

    @classmethod
    def create_directories(cls) -> None:
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)


settings = Settings()
