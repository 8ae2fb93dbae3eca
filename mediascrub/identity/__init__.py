"""Identity collaborators."""

from mediascrub.identity.provider import Identity, IdentityProvider, StaticIdentityProvider

__all__ = ["Identity", "IdentityProvider", "StaticIdentityProvider"]
