"""Top-level screen state: the session only exists while a game is being played."""
from __future__ import annotations
import logging
from enum import Enum
from typing import Callable, List

from gearbot.core.errors import RejectedCommand
from .events import Event
from .session import Session

logger = logging.getLogger(__name__)


class Screen(str, Enum):
    LOADING = "loading"
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"


class ScreenMachine:
    """Loading -> Menu -> Playing <-> Paused, and back to Menu."""

    def __init__(self, session_factory: Callable[[], Session] = Session):
        self.screen = Screen.LOADING
        self.session: Session | None = None
        self._session_factory = session_factory

    def _move(self, allowed: tuple, target: Screen) -> bool:
        if self.screen not in allowed:
            logger.warning("Cannot go from %s to %s", self.screen.value, target.value)
            return False
        logger.info("screen %s -> %s", self.screen.value, target.value)
        self.screen = target
        return True

    def finish_loading(self) -> bool:
        return self._move((Screen.LOADING,), Screen.MENU)

    def play(self) -> bool:
        if self.screen is not Screen.MENU:
            return self._move((Screen.MENU,), Screen.PLAYING)
        session = self._session_factory()
        self._move((Screen.MENU,), Screen.PLAYING)
        self.session = session
        return True

    def pause(self) -> bool:
        return self._move((Screen.PLAYING,), Screen.PAUSED)

    def resume(self) -> bool:
        return self._move((Screen.PAUSED,), Screen.PLAYING)

    def quit_to_menu(self) -> bool:
        if not self._move((Screen.PLAYING, Screen.PAUSED), Screen.MENU):
            return False
        self.session = None
        return True

    def require_session(self) -> Session:
        if self.session is None:
            raise RejectedCommand("no game in progress")
        return self.session

    def update(self, dt: float) -> List[Event]:
        if self.screen is not Screen.PLAYING or self.session is None:
            return []
        return self.session.update(dt)
