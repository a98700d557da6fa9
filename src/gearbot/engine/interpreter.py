"""Program interpreter: one instruction per tick."""
from __future__ import annotations
import logging

from gearbot.core.timers import Timer
from gearbot.program import Instruction, Program, execute
from gearbot.world import Actor
from .context import CpuParameters

logger = logging.getLogger(__name__)


class Interpreter:
    """Owns the run-scoped program counter, tick timer and bomb timer."""

    def __init__(self):
        self.pc = 0
        self.tick_timer: Timer | None = None
        self.bomb: Timer | None = None

    def on_run_start(self, cpu: CpuParameters, bomb_duration: float):
        self.pc = 0
        self.tick_timer = Timer(cpu.tick_period, repeating=True)
        self.bomb = Timer(cpu.scaled(bomb_duration))
        logger.debug("run armed: tick=%.4fs bomb=%.4fs", self.tick_timer.duration, self.bomb.duration)

    def on_tick(self, program: Program, actor: Actor) -> Instruction | None:
        """Execute ``program[pc]``. Returns None once the program has run off its end."""
        assert 0 <= self.pc <= len(program), "program counter out of range"
        if self.pc == len(program):
            logger.info("End of program reached.")
            return None
        instruction = program[self.pc]
        logger.debug("Executing instruction %d: %s", self.pc, instruction.value)
        execute(instruction, actor)
        self.pc += 1
        return instruction

    def discard(self):
        if self.bomb is not None:
            self.bomb.stop()
        self.tick_timer = None
        self.bomb = None
        self.pc = 0
