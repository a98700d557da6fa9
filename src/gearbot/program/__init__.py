"""Player-authored programs and the instruction set."""
from .instructions import Instruction, InstructionCategory, execute, parse_instruction
from .program import Program
from .unlocks import UnlockSet

__all__ = ["Instruction", "InstructionCategory", "execute", "parse_instruction", "Program", "UnlockSet"]
