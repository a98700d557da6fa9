"""Inbound commands and outbound events exchanged with presentation layers."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Union

from gearbot.economy.upgrades import UpgradeKind
from gearbot.program.instructions import Instruction, InstructionCategory


class Outcome(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class Phase(str, Enum):
    BUYING = "buying"
    RUNNING = "running"


# commands


@dataclass(frozen=True)
class StartRun:
    pass


@dataclass(frozen=True)
class ResetToBuying:
    pass


@dataclass(frozen=True)
class Purchase:
    index: int


@dataclass(frozen=True)
class AddInstruction:
    instruction: Instruction


@dataclass(frozen=True)
class RemoveInstruction:
    index: int


@dataclass(frozen=True)
class PickupCurrency:
    amount: int


Command = Union[StartRun, ResetToBuying, Purchase, AddInstruction, RemoveInstruction, PickupCurrency]


# events


@dataclass(frozen=True)
class TickExecuted:
    instruction: Instruction
    pc: int


@dataclass(frozen=True)
class RunCompleted:
    outcome: Outcome
    ticks: int


@dataclass(frozen=True)
class UpgradePurchased:
    kind: UpgradeKind
    index: int


@dataclass(frozen=True)
class WalletChanged:
    balance: int


@dataclass(frozen=True)
class UnlockSetChanged:
    category: InstructionCategory
    instruction: Instruction


@dataclass(frozen=True)
class PhaseChanged:
    phase: Phase


Event = Union[TickExecuted, RunCompleted, UpgradePurchased, WalletChanged, UnlockSetChanged, PhaseChanged]
