"""Closed instruction set and its effects on the actor."""
from __future__ import annotations
from enum import Enum

from gearbot.world.actor import Actor


class InstructionCategory(str, Enum):
    MOVEMENT = "movement"
    CONTROL = "control"
    SCANNING = "scanning"


class Instruction(str, Enum):
    MOVE_FORWARD = "move_forward"
    # Named for a gap check, but turns left unconditionally.
    IF_GAP_TURN_LEFT = "if_gap_turn_left"

    @property
    def category(self) -> InstructionCategory:
        return CATEGORIES[self]


CATEGORIES = {
    Instruction.MOVE_FORWARD: InstructionCategory.MOVEMENT,
    Instruction.IF_GAP_TURN_LEFT: InstructionCategory.SCANNING,
}


def parse_instruction(name: str) -> Instruction:
    try:
        return Instruction(name)
    except ValueError as exc:
        raise ValueError(f"unknown instruction {name!r}") from exc


def execute(instruction: Instruction, actor: Actor):
    """Apply ``instruction`` to ``actor``. Total over the instruction set."""
    if instruction is Instruction.MOVE_FORWARD:
        actor.move_forward()
    elif instruction is Instruction.IF_GAP_TURN_LEFT:
        actor.turn_left()
    else:
        raise AssertionError(f"unhandled instruction {instruction!r}")
