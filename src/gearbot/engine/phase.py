"""Buying/Running phase machine and the two run controls."""
from __future__ import annotations
import logging
from dataclasses import dataclass

from gearbot.core.errors import RejectedCommand
from .events import Phase

logger = logging.getLogger(__name__)


@dataclass
class Controls:
    """Presentation flags for the Run and Reset buttons."""

    run_active: bool = True
    reset_active: bool = False

    def sync(self, phase: Phase):
        self.run_active = phase is Phase.BUYING
        self.reset_active = phase is Phase.RUNNING


class PhaseMachine:
    def __init__(self, controls: Controls | None = None):
        self.phase = Phase.BUYING
        self.controls = controls or Controls()
        self.controls.sync(self.phase)

    @property
    def running(self) -> bool:
        return self.phase is Phase.RUNNING

    def request_start(self):
        if self.phase is Phase.RUNNING:
            raise RejectedCommand("a run is already in progress")
        if not self.controls.run_active:
            raise RejectedCommand("run control is inactive")
        self._enter(Phase.RUNNING)

    def request_reset(self):
        if self.phase is Phase.BUYING:
            raise RejectedCommand("no run to reset")
        if not self.controls.reset_active:
            raise RejectedCommand("reset control is inactive")
        self._enter(Phase.BUYING)

    def finish_run(self):
        """Internal Running -> Buying transition (program complete or bomb exploded)."""
        assert self.phase is Phase.RUNNING, "finish_run outside a run"
        self._enter(Phase.BUYING)

    def _enter(self, phase: Phase):
        logger.info("phase %s -> %s", self.phase.value, phase.value)
        self.phase = phase
        self.controls.sync(phase)
