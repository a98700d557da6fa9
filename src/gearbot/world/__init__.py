"""World collaborators consumed by the interpreter."""
from .actor import Actor, GridCoords
from .level import Level

__all__ = ["Actor", "GridCoords", "Level"]
