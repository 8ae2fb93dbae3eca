"""Route blueprints for the mediascrub web API."""

from .api import api_bp

__all__ = ["api_bp"]
