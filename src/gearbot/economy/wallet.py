"""Gear balance."""
from __future__ import annotations
from dataclasses import dataclass

from gearbot.core.errors import RejectedCommand


@dataclass
class Wallet:
    balance: int = 0

    def __post_init__(self):
        if self.balance < 0:
            raise ValueError("wallet balance cannot be negative")

    def deposit(self, amount: int):
        if amount <= 0:
            raise RejectedCommand(f"cannot deposit {amount} gears")
        self.balance += amount

    def can_afford(self, cost: int) -> bool:
        return self.balance >= cost

    def spend(self, cost: int):
        if not self.can_afford(cost):
            raise RejectedCommand(f"insufficient gears: {self.balance} < {cost}")
        self.balance -= cost
