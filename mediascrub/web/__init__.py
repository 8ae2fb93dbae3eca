"""Web upload endpoint for mediascrub."""

from .app import create_app

__all__ = ["create_app"]
