"""Files manager backend: users, session tokens and store health."""

__version__ = "0.1.0"
