"""Azure subscription sweeper - TTL-based cleanup of resources and empty resource groups."""

__version__ = "0.1.0"
