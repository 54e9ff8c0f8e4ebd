"""Session gateway: opaque session tokens backed by a durable store and a cache."""

__version__ = "0.1.0"
