"""Instructions currently available to the player, grouped by category."""
from __future__ import annotations
from typing import Dict, Iterator, Mapping, Set, Iterable

from gearbot.core.errors import RejectedCommand
from .instructions import Instruction, InstructionCategory, parse_instruction


class UnlockSet:
    """Monotonically growing category -> instructions mapping."""

    def __init__(self, seed: Iterable[Instruction] = (Instruction.MOVE_FORWARD,)):
        self._unlocked: Dict[InstructionCategory, Set[Instruction]] = {}
        for instruction in seed:
            self.unlock(instruction)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, list[str]]) -> "UnlockSet":
        unlocks = cls(seed=())
        for category, names in mapping.items():
            for name in names:
                instruction = parse_instruction(name)
                if instruction.category is not InstructionCategory(category):
                    raise ValueError(f"{name} does not belong to category {category}")
                unlocks.unlock(instruction)
        return unlocks

    def unlock(self, instruction: Instruction) -> bool:
        """Add ``instruction``; returns False if it was already available."""
        bucket = self._unlocked.setdefault(instruction.category, set())
        if instruction in bucket:
            return False
        bucket.add(instruction)
        return True

    def __contains__(self, instruction: object) -> bool:
        return isinstance(instruction, Instruction) and instruction in self._unlocked.get(instruction.category, set())

    def __iter__(self) -> Iterator[Instruction]:
        for category in InstructionCategory:
            yield from sorted(self._unlocked.get(category, set()), key=lambda i: i.value)

    def in_category(self, category: InstructionCategory) -> frozenset[Instruction]:
        return frozenset(self._unlocked.get(category, set()))

    def require(self, instruction: Instruction):
        if instruction not in self:
            raise RejectedCommand(f"{instruction.value} is not unlocked")
