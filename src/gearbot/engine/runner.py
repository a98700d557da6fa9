"""Headless scripted sessions for balancing and regression runs."""
from __future__ import annotations
import logging
from pathlib import Path
from typing import List

import yaml
from rich.console import Console
from rich.table import Table

from gearbot.config import ConfigSchema
from gearbot.config.schema import ScriptStep
from gearbot.program import parse_instruction
from .events import Phase
from .metrics import run_record, save_metrics
from .screens import ScreenMachine
from .session import Session

console = Console()
logger = logging.getLogger(__name__)


def _play_run(screens: ScreenMachine, session: Session, config: ConfigSchema, run: int) -> dict:
    frame_dt = config.script.frame_dt
    session.start_run()
    screens.update(0.0)
    waited = 0.0
    while session.phase is Phase.RUNNING and waited < config.script.max_run_seconds:
        screens.update(frame_dt)
        waited += frame_dt
    if session.phase is Phase.RUNNING:
        logger.warning("run %d still going after %.1fs, resetting", run, waited)
        record = run_record(run, session, "timeout")
        session.reset_to_buying()
        screens.update(0.0)
        return record
    return run_record(run, session, session.last_outcome.value)


def _apply_step(screens: ScreenMachine, session: Session, step: ScriptStep):
    if step.action == "add":
        session.add_instruction(parse_instruction(step.instruction))
    elif step.action == "remove":
        session.remove_instruction(step.index if step.index is not None else len(session.context.program) - 1)
    elif step.action == "purchase":
        session.purchase(step.index if step.index is not None else 0)
    elif step.action == "pickup":
        session.pickup_currency(step.amount or 0)
    elif step.action == "wait":
        screens.update(step.seconds or 0.0)
        return
    screens.update(0.0)


def run_script(config: ConfigSchema) -> Path:
    run_dir = Path(config.outputs.run_dir)
    run_dir.mkdir(parents=True, exist_ok=True)
    screens = ScreenMachine(lambda: Session.from_config(config))
    screens.finish_loading()
    screens.play()
    session = screens.require_session()
    records: List[dict] = []
    for step in config.script.steps:
        if step.action == "run":
            record = _play_run(screens, session, config, len(records))
            records.append(record)
            console.log(
                f"run {record['run']} | {record['outcome']} | ticks={record['ticks']} | "
                f"elapsed={record['elapsed']:.2f}s | gears={record['balance']}"
            )
        else:
            _apply_step(screens, session, step)
    save_metrics(records, run_dir / "metrics.csv")
    config_dict = config.model_dump(mode="json")
    with open(run_dir / "config.yaml", "w") as f:
        yaml.safe_dump(config_dict, f)
    if config.outputs.summarize:
        table = Table(title="Runs", show_lines=True)
        for column in ("run", "outcome", "ticks", "elapsed", "balance", "capacity"):
            table.add_column(column)
        for record in records:
            table.add_row(*(str(record[c]) for c in ("run", "outcome", "ticks", "elapsed", "balance", "capacity")))
        console.print(table)
        offers = ", ".join(f"{o.index}:{o.node.kind.label}{'' if o.affordable else ' (locked)'}" for o in session.offers)
        console.print(f"Upgrades on offer: {offers or 'none'}")
    screens.quit_to_menu()
    console.print(f"Session complete -> {run_dir}")
    return run_dir
