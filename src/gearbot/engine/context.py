"""Long-lived session state and upgrade effects."""
from __future__ import annotations
import logging
from dataclasses import dataclass, field

from gearbot.config import ConfigSchema
from gearbot.economy import UpgradeGraph, UpgradeKind, Wallet
from gearbot.program import Instruction, Program, UnlockSet

logger = logging.getLogger(__name__)


@dataclass
class CpuParameters:
    tick_interval: float = 1.0
    multiplier: float = 1.0

    def __post_init__(self):
        if self.tick_interval <= 0 or self.multiplier <= 0:
            raise ValueError("cpu parameters must be strictly positive")

    @property
    def tick_period(self) -> float:
        return self.tick_interval * self.multiplier

    def scaled(self, duration: float) -> float:
        return duration * self.multiplier


@dataclass
class SessionContext:
    wallet: Wallet = field(default_factory=Wallet)
    unlocks: UnlockSet = field(default_factory=UnlockSet)
    cpu: CpuParameters = field(default_factory=CpuParameters)
    program: Program = field(default_factory=Program)
    upgrades: UpgradeGraph = field(default_factory=lambda: UpgradeGraph.from_config(ConfigSchema().upgrades))
    bomb_duration: float = 30.0

    @classmethod
    def from_config(cls, config: ConfigSchema) -> "SessionContext":
        return cls(
            wallet=Wallet(),
            unlocks=UnlockSet.from_mapping(config.unlocks.seed),
            cpu=CpuParameters(config.cpu.tick_interval, config.cpu.multiplier),
            program=Program(capacity=config.program.initial_capacity),
            upgrades=UpgradeGraph.from_config(config.upgrades),
            bomb_duration=config.bomb.duration,
        )


def apply_upgrade(kind: UpgradeKind, context: SessionContext) -> Instruction | None:
    """Apply a bought upgrade. Returns the instruction it unlocked, if any."""
    if kind is UpgradeKind.SPEED_BOOST:
        context.cpu.tick_interval /= 2
        logger.info("Applied CPU Speed upgrade: new tick = %.4fs", context.cpu.tick_interval)
    elif kind is UpgradeKind.MULTIPLIER_BOOST:
        context.cpu.multiplier *= 2.0
        logger.info("Applied CPU Multiplier upgrade: new multiplier = %s", context.cpu.multiplier)
    elif kind is UpgradeKind.CAPACITY_BOOST:
        context.program.grow(2)
        logger.info("Applied Max Instructions upgrade: new max instructions = %d", context.program.capacity)
    elif kind is UpgradeKind.UNLOCK_CONDITIONAL:
        if context.unlocks.unlock(Instruction.IF_GAP_TURN_LEFT):
            logger.info("Applied Unlock If upgrade: IfGapTurnLeft now available")
            return Instruction.IF_GAP_TURN_LEFT
    else:
        raise AssertionError(f"unhandled upgrade {kind!r}")
    return None
