"""Capacity-bounded instruction sequence."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

from gearbot.core.errors import RejectedCommand
from .instructions import Instruction


@dataclass
class Program:
    capacity: int = 1
    sequence: List[Instruction] = field(default_factory=list)

    def __post_init__(self):
        if self.capacity < 1:
            raise ValueError("program capacity must be at least 1")
        if len(self.sequence) > self.capacity:
            raise ValueError("program longer than its capacity")

    def __len__(self) -> int:
        return len(self.sequence)

    def __getitem__(self, index: int) -> Instruction:
        return self.sequence[index]

    @property
    def full(self) -> bool:
        return len(self.sequence) >= self.capacity

    def append(self, instruction: Instruction):
        if self.full:
            raise RejectedCommand(f"program is full ({self.capacity} instructions)")
        self.sequence.append(instruction)

    def remove(self, index: int) -> Instruction:
        if not 0 <= index < len(self.sequence):
            raise RejectedCommand(f"no instruction at index {index}")
        return self.sequence.pop(index)

    def grow(self, factor: int = 2):
        if factor < 1:
            raise ValueError("capacity can only grow")
        self.capacity *= factor
