"""Per-run metrics records and CSV output."""
from __future__ import annotations
from pathlib import Path
import pandas as pd

from .session import Session

COLUMNS = [
    "run",
    "outcome",
    "ticks",
    "elapsed",
    "balance",
    "capacity",
    "program_length",
    "tick_interval",
    "multiplier",
    "actor_x",
    "actor_y",
]


def run_record(run: int, session: Session, outcome: str) -> dict:
    ctx = session.context
    return {
        "run": run,
        "outcome": outcome,
        "ticks": session.ticks_executed,
        "elapsed": round(session.run_elapsed, 6),
        "balance": ctx.wallet.balance,
        "capacity": ctx.program.capacity,
        "program_length": len(ctx.program),
        "tick_interval": ctx.cpu.tick_interval,
        "multiplier": ctx.cpu.multiplier,
        "actor_x": session.actor.position[0],
        "actor_y": session.actor.position[1],
    }


def save_metrics(records: list[dict], path: Path) -> pd.DataFrame:
    df = pd.DataFrame(records, columns=COLUMNS)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    return df
