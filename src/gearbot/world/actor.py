"""Grid actor driven by the program."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

GridCoords = Tuple[int, int]


@dataclass
class Actor:
    position: GridCoords = (0, 0)
    facing: GridCoords = (1, 0)

    def move_forward(self):
        self.position = (self.position[0] + self.facing[0], self.position[1] + self.facing[1])

    def turn_left(self):
        # counter-clockwise with y pointing up
        dx, dy = self.facing
        self.facing = (-dy, dx)
