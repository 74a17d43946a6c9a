"""Policy used to recognise a reusable API key on the portal."""
from enum import Enum

from core.errors import ValidationError


class KeyMatchPolicy(Enum):
    """How the token manager picks an existing key to adopt.
    
    - ADDRESS: the key's CIDR allow-list covers the current public address
    - NAME: the key's name equals the configured key name
    """
    
    ADDRESS = "address"
    NAME = "name"
    
    @classmethod
    def from_string(cls, value: str) -> 'KeyMatchPolicy':
        """Create policy from a settings value."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValidationError(f"Invalid key match policy: {value!r}") from None
