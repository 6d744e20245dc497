"""Version information for pagedoc."""

__version__ = "0.1.0"
