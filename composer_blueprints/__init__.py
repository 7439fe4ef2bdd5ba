"""Blueprint commands for a composer image-builder server, run against a supplied API client."""

__version__ = "35.9"
__all__ = ["core", "simple", "save", "show", "depsolve", "freeze", "diff"]