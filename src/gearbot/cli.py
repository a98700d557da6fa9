"""Typer CLI for gearbot."""
from __future__ import annotations
import logging
import typer
from pathlib import Path
from rich import print
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from pydantic import ValidationError

from gearbot.config import ConfigSchema, load_config
from gearbot.core.errors import ConfigurationError
from gearbot.economy import UpgradeGraph
from gearbot.engine.runner import run_script

app = typer.Typer(help="gearbot program/upgrade engine CLI")

DEFAULT_CONFIG = Path(__file__).parent / "config" / "defaults.yaml"


def _setup_logging(level: str):
    logging.basicConfig(level=level.upper(), format="%(message)s", handlers=[RichHandler(show_path=False)])


def _load(config: Path) -> ConfigSchema:
    try:
        return load_config(config)
    except ValidationError as exc:
        print(f"[red]invalid configuration:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1)


def _build_graph(cfg: ConfigSchema) -> UpgradeGraph:
    try:
        return UpgradeGraph.from_config(cfg.upgrades)
    except ConfigurationError as exc:
        print(f"[red]invalid upgrade graph:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1)


@app.command()
def run(
    config: Path = typer.Option(DEFAULT_CONFIG, help="YAML config path"),
    run_dir: Path = typer.Option(None, help="Override output directory"),
    frame_dt: float = typer.Option(None, help="Override frame delta in seconds"),
    summarize: bool = typer.Option(True, help="Print a run summary table"),
    log_level: str = typer.Option("warning", help="Logging level"),
):
    _setup_logging(log_level)
    cfg = _load(config)
    if run_dir is not None:
        cfg.outputs.run_dir = run_dir
    if frame_dt is not None:
        cfg.script.frame_dt = frame_dt
    cfg.outputs.summarize = summarize
    try:
        out = run_script(cfg)
    except ConfigurationError as exc:
        print(f"[red]invalid configuration:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1)
    print(f"Runs written to {out}")


@app.command()
def upgrades(
    config: Path = typer.Option(DEFAULT_CONFIG, help="YAML config path"),
    balance: int = typer.Option(0, help="Gear balance used for affordability"),
):
    cfg = _load(config)
    graph = _build_graph(cfg)
    table = Table(title="Upgrade graph")
    for column in ("index", "upgrade", "level", "cost", "unlocks", "state"):
        table.add_column(column)
    for index, node in enumerate(graph.nodes):
        if graph.is_visible(index):
            state = "affordable" if balance >= node.cost else "visible"
        else:
            state = "hidden"
        table.add_row(str(index), node.kind.label, str(node.level), str(node.cost), ", ".join(map(str, graph.successors(index))), state)
    Console().print(table)


@app.command()
def validate(config: Path = typer.Option(DEFAULT_CONFIG, help="YAML config path")):
    cfg = _load(config)
    graph = _build_graph(cfg)
    print(f"ok: {len(graph)} upgrades, roots {list(graph.roots)}")


if __name__ == "__main__":
    app()
