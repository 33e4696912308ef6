"""Route group exports."""

from . import health, location, stores

__all__ = ["health", "location", "stores"]
