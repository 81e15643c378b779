"""authcore - in-memory account registration and login."""

__version__ = "0.1.0"
