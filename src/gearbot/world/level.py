"""Level layout: spawn point and collectable gears."""
from __future__ import annotations
import logging
from typing import Dict, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from gearbot.config.schema import LevelConfig

from .actor import Actor, GridCoords

logger = logging.getLogger(__name__)


class Level:
    """Gear pickups keyed by grid cell; restored every time the actor respawns."""

    def __init__(self, spawn: GridCoords = (0, 0), facing: GridCoords = (1, 0), gears: Dict[GridCoords, int] | None = None):
        self.spawn = spawn
        self.facing = facing
        self._layout: Dict[GridCoords, int] = dict(gears or {})
        self.gears: Dict[GridCoords, int] = dict(self._layout)

    @classmethod
    def from_config(cls, config: LevelConfig) -> "Level":
        gears = {(g.position[0], g.position[1]): g.value for g in config.gears}
        return cls(spawn=(config.spawn[0], config.spawn[1]), facing=(config.facing[0], config.facing[1]), gears=gears)

    def respawn(self, actor: Actor):
        actor.position = self.spawn
        actor.facing = self.facing
        self.gears = dict(self._layout)

    def collect(self, position: GridCoords) -> int:
        value = self.gears.pop(position, 0)
        if value:
            logger.debug("collected %d gears at %s", value, position)
        return value
