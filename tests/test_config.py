from pathlib import Path

import pytest

pytest.importorskip("pydantic")
pytest.importorskip("yaml")

from pydantic import ValidationError

from gearbot.config import ConfigSchema, load_config
from gearbot.config.schema import LevelConfig, SEED_EDGES
from gearbot.engine.session import Session

DEFAULTS = Path(__file__).resolve().parents[1] / "src" / "gearbot" / "config" / "defaults.yaml"


def test_defaults_yaml_loads():
    cfg = load_config(DEFAULTS)
    assert cfg.program.initial_capacity == 1
    assert cfg.upgrades.edges == SEED_EDGES
    assert cfg.level.gears[0].value == 10
    assert cfg.script.steps[0].action == "add"


def test_session_from_config():
    cfg = ConfigSchema()
    cfg.cpu.tick_interval = 0.25
    cfg.level.spawn = [2, 3]
    session = Session.from_config(cfg)
    assert session.context.cpu.tick_period == pytest.approx(0.25)
    assert session.context.program.capacity == 1
    assert session.actor.position == (2, 3)
    assert [o.index for o in session.offers] == [0]


@pytest.mark.parametrize("section, values", [("cpu", {"tick_interval": 0}), ("cpu", {"multiplier": -1}), ("bomb", {"duration": 0}), ("program", {"initial_capacity": 0})])
def test_non_positive_parameters_rejected(section, values):
    with pytest.raises(ValidationError):
        ConfigSchema(**{section: values})


def test_facing_must_be_cardinal():
    with pytest.raises(ValidationError):
        LevelConfig(facing=[1, 1])


def test_add_step_requires_instruction():
    with pytest.raises(ValidationError):
        ConfigSchema(script={"steps": [{"action": "add"}]})


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == ConfigSchema()


@pytest.mark.parametrize(
    "seed",
    [{"moving": ["move_forward"]}, {"movement": ["jump"]}, {"movement": ["if_gap_turn_left"]}],
    ids=["unknown-category", "unknown-instruction", "wrong-category"],
)
def test_unlock_seed_names_checked_on_load(seed):
    with pytest.raises(ValidationError):
        ConfigSchema(unlocks={"seed": seed})


def test_script_instruction_names_checked_on_load(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("script:\n  steps:\n    - {action: add, instruction: jump}\n    - {action: run}\n")
    with pytest.raises(ValidationError):
        load_config(path)
