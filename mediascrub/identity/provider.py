"""Identity providers supplying the uploader's user id."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional
import logging

from mediascrub.config import ConfigManager
from mediascrub.exceptions import IdentityError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """An already-authenticated uploader.
    
    Attributes:
        identity_id: Opaque id used to scope the storage path
        username: User name recorded as object metadata (may be empty)
    """
    identity_id: str
    username: Optional[str] = None


class IdentityProvider(ABC):
    """Supplies the identity of the current uploader.
    
    Authentication happens elsewhere; providers only hand over the result.
    """
    
    @abstractmethod
    def get_identity(self) -> Identity:
        """Return the current identity.
        
        Raises:
            IdentityError: If no identity is available
        """
        pass


class StaticIdentityProvider(IdentityProvider):
    """Provider returning a fixed identity (CLI use, tests, per-request)."""
    
    def __init__(self, identity_id: str, username: Optional[str] = None) -> None:
        if not identity_id:
            raise IdentityError("identity_id is required")
        self._identity = Identity(identity_id=identity_id, username=username or None)
    
    @classmethod
    def from_config(cls, config: ConfigManager) -> "StaticIdentityProvider":
        """Build a provider from the ``identity`` config section."""
        return cls(
            identity_id=config.get("identity.identity_id", ""),
            username=config.get("identity.username"),
        )
    
    def get_identity(self) -> Identity:
        return self._identity
