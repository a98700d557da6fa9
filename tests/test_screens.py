from gearbot.engine.events import Phase
from gearbot.engine.screens import Screen, ScreenMachine
from gearbot.program import Instruction


def test_screen_transitions():
    screens = ScreenMachine()
    assert screens.screen is Screen.LOADING
    assert screens.play() is False
    assert screens.finish_loading()
    assert screens.play()
    assert screens.screen is Screen.PLAYING
    assert screens.session is not None
    assert screens.pause()
    assert screens.pause() is False
    assert screens.resume()
    assert screens.quit_to_menu()
    assert screens.session is None


def test_each_play_builds_a_fresh_session():
    screens = ScreenMachine()
    screens.finish_loading()
    screens.play()
    first = screens.require_session()
    first.pickup_currency(12)
    screens.update(0.0)
    assert first.context.wallet.balance == 12
    screens.quit_to_menu()
    screens.play()
    second = screens.require_session()
    assert second is not first
    assert second.context.wallet.balance == 0


def test_paused_screen_does_not_advance_the_run():
    screens = ScreenMachine()
    screens.finish_loading()
    screens.play()
    session = screens.require_session()
    session.context.program.grow(2)
    session.add_instruction(Instruction.MOVE_FORWARD)
    session.add_instruction(Instruction.MOVE_FORWARD)
    session.start_run()
    screens.update(0.0)
    assert session.phase is Phase.RUNNING
    screens.pause()
    assert screens.update(1000.0) == []
    assert session.phase is Phase.RUNNING
    screens.resume()
    screens.update(1000.0)
    assert session.phase is Phase.BUYING
