"""Play session: command queue, frame loop and run lifecycle.

Each call to :meth:`Session.update` processes one host frame in a fixed order:

1. countdown check (the bomb),
2. tick scheduler (the interpreter),
3. pending commands, first in first out.

Within a frame the bomb wins every tie: a tick only executes if it fires
strictly before the bomb's expiry offset. Commands submitted while a frame
is being processed (gear pickups) are handled in the same frame's command
stage.
"""
from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List

from gearbot.config import ConfigSchema
from gearbot.core.errors import RejectedCommand
from gearbot.core.timers import to_nanos, to_seconds
from gearbot.economy import UpgradeOffer
from gearbot.program import Instruction
from gearbot.world import Actor, Level
from .context import SessionContext, apply_upgrade
from .events import (
    AddInstruction,
    Command,
    Event,
    Outcome,
    Phase,
    PhaseChanged,
    PickupCurrency,
    Purchase,
    RemoveInstruction,
    ResetToBuying,
    RunCompleted,
    StartRun,
    TickExecuted,
    UnlockSetChanged,
    UpgradePurchased,
    WalletChanged,
)
from .interpreter import Interpreter
from .phase import PhaseMachine

logger = logging.getLogger(__name__)


class Session:
    def __init__(self, context: SessionContext | None = None, level: Level | None = None):
        self.context = context or SessionContext()
        self.level = level or Level()
        self.actor = Actor(self.level.spawn, self.level.facing)
        self.phases = PhaseMachine()
        self.interpreter = Interpreter()
        self.last_outcome: Outcome | None = None
        self.ticks_executed = 0
        self.run_elapsed_ns = 0
        self.offers: List[UpgradeOffer] = []
        self._commands: Deque[Command] = deque()
        self._events: List[Event] = []
        self._refresh_offers()

    @classmethod
    def from_config(cls, config: ConfigSchema) -> "Session":
        return cls(SessionContext.from_config(config), Level.from_config(config.level))

    @property
    def phase(self) -> Phase:
        return self.phases.phase

    @property
    def controls(self):
        return self.phases.controls

    @property
    def pc(self) -> int:
        return self.interpreter.pc

    @property
    def run_elapsed(self) -> float:
        return to_seconds(self.run_elapsed_ns)

    @property
    def time_to_bomb(self) -> float | None:
        """Seconds left on the bomb, or None outside a run."""
        if self.interpreter.bomb is None:
            return None
        return self.interpreter.bomb.remaining

    # inbound commands

    def submit(self, command: Command):
        self._commands.append(command)

    def start_run(self):
        self.submit(StartRun())

    def reset_to_buying(self):
        self.submit(ResetToBuying())

    def purchase(self, node_index: int):
        self.submit(Purchase(node_index))

    def add_instruction(self, instruction: Instruction):
        self.submit(AddInstruction(instruction))

    def remove_instruction(self, index: int):
        self.submit(RemoveInstruction(index))

    def pickup_currency(self, amount: int):
        self.submit(PickupCurrency(amount))

    # frame loop

    def update(self, dt: float) -> List[Event]:
        """Advance one frame and return the events it produced."""
        if self.phases.running:
            self._advance_run(to_nanos(dt))
        while self._commands:
            self.dispatch(self._commands.popleft())
        return self.drain_events()

    def drain_events(self) -> List[Event]:
        events, self._events = self._events, []
        return events

    def dispatch(self, command: Command) -> bool:
        """Execute ``command`` now. Rejections are logged and reported as False."""
        try:
            if isinstance(command, StartRun):
                self._begin_run()
            elif isinstance(command, ResetToBuying):
                self._reset()
            elif isinstance(command, Purchase):
                return self._purchase(command.index)
            elif isinstance(command, AddInstruction):
                self._require_buying("edit the program")
                self.context.unlocks.require(command.instruction)
                self.context.program.append(command.instruction)
            elif isinstance(command, RemoveInstruction):
                self._require_buying("edit the program")
                self.context.program.remove(command.index)
            elif isinstance(command, PickupCurrency):
                self.context.wallet.deposit(command.amount)
                self._wallet_changed()
            else:
                raise AssertionError(f"unhandled command {command!r}")
        except RejectedCommand as exc:
            logger.warning("%s rejected: %s", type(command).__name__, exc)
            return False
        return True

    def _require_buying(self, what: str):
        if self.phases.running:
            raise RejectedCommand(f"cannot {what} while running")

    def _advance_run(self, dt_ns: int):
        interpreter = self.interpreter
        bomb_at = interpreter.bomb.expiry_offset(dt_ns)
        interpreter.bomb.tick(dt_ns)
        pending = len(self.context.program) - interpreter.pc + 1
        for offset in interpreter.tick_timer.tick(dt_ns, limit=pending):
            if bomb_at is not None and bomb_at <= offset:
                break
            if not self._tick():
                self.run_elapsed_ns += offset
                return
        if bomb_at is not None:
            self.run_elapsed_ns += bomb_at
            logger.info("Bomb exploded after %d instructions", self.ticks_executed)
            self._end_run(Outcome.FAILURE)
            return
        self.run_elapsed_ns += dt_ns

    def _tick(self) -> bool:
        instruction = self.interpreter.on_tick(self.context.program, self.actor)
        if instruction is None:
            self._end_run(Outcome.SUCCESS)
            return False
        self.ticks_executed += 1
        self._events.append(TickExecuted(instruction, self.interpreter.pc - 1))
        gears = self.level.collect(self.actor.position)
        if gears:
            self.submit(PickupCurrency(gears))
        return True

    def _begin_run(self):
        self.phases.request_start()
        self._events.append(PhaseChanged(Phase.RUNNING))
        self.level.respawn(self.actor)
        self.ticks_executed = 0
        self.run_elapsed_ns = 0
        self.interpreter.on_run_start(self.context.cpu, self.context.bomb_duration)
        logger.info("Starting simulation with %d instructions", len(self.context.program))
        # tick 0 fires immediately
        self._tick()

    def _end_run(self, outcome: Outcome):
        self.interpreter.discard()
        self.phases.finish_run()
        self.last_outcome = outcome
        self._events.append(RunCompleted(outcome, self.ticks_executed))
        self._events.append(PhaseChanged(Phase.BUYING))

    def _reset(self):
        self.phases.request_reset()
        logger.info("Resetting simulation")
        self.interpreter.discard()
        self._events.append(PhaseChanged(Phase.BUYING))

    def _purchase(self, index: int) -> bool:
        if self.phases.running:
            logger.warning("Purchase rejected: cannot buy upgrades while running")
            return False
        kind = self.context.upgrades.purchase(index, self.context.wallet)
        if kind is None:
            return False
        unlocked = apply_upgrade(kind, self.context)
        self._events.append(UpgradePurchased(kind, index))
        if unlocked is not None:
            self._events.append(UnlockSetChanged(unlocked.category, unlocked))
        self._wallet_changed()
        return True

    def _wallet_changed(self):
        self._events.append(WalletChanged(self.context.wallet.balance))
        self._refresh_offers()

    def _refresh_offers(self):
        self.offers = self.context.upgrades.offers(self.context.wallet.balance)
