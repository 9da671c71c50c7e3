"""snaplink: URL shortening service with click tracking."""

__version__ = "1.0.0"
