"""Error taxonomy shared by the portal client, token manager and dispatcher."""
from __future__ import annotations

from typing import Any, Optional


class BrawlStarsError(Exception):
    """Base class for every error raised by this client."""


class ValidationError(BrawlStarsError):
    """Malformed caller input or an entity record that fails validation."""


class AuthenticationError(BrawlStarsError):
    """The developer portal refused the login or could not be reached."""


class AuthorizationError(BrawlStarsError):
    """The data API rejected the token even after a refresh."""


class ProtocolError(BrawlStarsError):
    """A success status came back with an empty or unparseable body."""


class TransportError(BrawlStarsError):
    """The request never produced an HTTP response."""


class RemoteError(BrawlStarsError):
    """The portal or data API answered with a 4xx/5xx rejection."""

    def __init__(
        self,
        status_code: int,
        reason: str = "unknown",
        message: str = "Unknown error",
        type: Optional[str] = None,
        detail: Any = None,
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        self.message = message
        self.type = type
        self.detail = detail
        super().__init__(f"[{status_code}] {reason}: {message}")

    @classmethod
    def from_body(cls, status_code: int, body: Any) -> "RemoteError":
        """Build from a data-API error body ({reason, message, type, detail})."""
        if not isinstance(body, dict):
            return cls(status_code)
        return cls(
            status_code,
            reason=body.get("reason") or "unknown",
            message=body.get("message") or "Unknown error",
            type=body.get("type"),
            detail=body.get("detail"),
        )


class AcquisitionError(BrawlStarsError):
    """Token acquisition failed at ``stage`` (address, login, list or create)."""

    def __init__(self, stage: str, snapshot: dict[str, Any], cause: Optional[BaseException] = None) -> None:
        self.stage = stage
        self.snapshot = snapshot
        self.cause = cause
        msg = f"token acquisition failed at {stage}: {cause}" if cause else f"token acquisition failed at {stage}"
        super().__init__(f"{msg} | state={snapshot}")
