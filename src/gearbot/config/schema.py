"""Pydantic config schema and loader."""
from pathlib import Path
from typing import Literal, Optional
import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationInfo

from gearbot.program.instructions import InstructionCategory, parse_instruction


class CpuConfig(BaseModel):
    tick_interval: float = 1.0
    multiplier: float = 1.0

    @field_validator("tick_interval", "multiplier")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("cpu parameters must be strictly positive")
        return v


class BombConfig(BaseModel):
    duration: float = 30.0

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("bomb duration must be positive")
        return v


class ProgramConfig(BaseModel):
    initial_capacity: int = 1

    @field_validator("initial_capacity")
    @classmethod
    def validate_capacity(cls, v: int) -> int:
        if v < 1:
            raise ValueError("initial_capacity must be at least 1")
        return v


class UnlockConfig(BaseModel):
    seed: dict[str, list[str]] = Field(default_factory=lambda: {"movement": ["move_forward"]})

    @field_validator("seed")
    @classmethod
    def validate_seed(cls, v):
        for category, names in v.items():
            try:
                expected = InstructionCategory(category)
            except ValueError as exc:
                raise ValueError(f"unknown instruction category {category!r}") from exc
            for name in names:
                if parse_instruction(name).category is not expected:
                    raise ValueError(f"{name} does not belong to category {category}")
        return v


class UpgradeNodeConfig(BaseModel):
    kind: Literal["speed_boost", "multiplier_boost", "capacity_boost", "unlock_conditional"]
    level: int = 1
    cost: int = 0

    @field_validator("cost")
    @classmethod
    def validate_cost(cls, v: int) -> int:
        if v < 0:
            raise ValueError("upgrade cost must be non-negative")
        return v


def _seed_nodes() -> list[UpgradeNodeConfig]:
    nodes = [UpgradeNodeConfig(kind="capacity_boost", level=i, cost=10 * 2**i - 10) for i in range(1, 5)]
    nodes += [UpgradeNodeConfig(kind="speed_boost", level=i, cost=10 * 3**i) for i in range(1, 6)]
    nodes.append(UpgradeNodeConfig(kind="unlock_conditional", level=1, cost=100))
    return nodes


SEED_EDGES = [[0, 4], [4, 5], [4, 1], [5, 6], [5, 2], [5, 9], [6, 7], [6, 3], [7, 8]]


class UpgradeConfig(BaseModel):
    nodes: list[UpgradeNodeConfig] = Field(default_factory=_seed_nodes)
    edges: list[list[int]] = Field(default_factory=lambda: [list(e) for e in SEED_EDGES])
    roots: list[int] = Field(default_factory=lambda: [0])

    @field_validator("edges", mode="before")
    @classmethod
    def validate_edge_lists(cls, v):
        return [list(e) if isinstance(e, tuple) else e for e in v]

    @field_validator("edges")
    @classmethod
    def validate_edges(cls, v):
        for e in v:
            if len(e) != 2:
                raise ValueError("edges must be [source, target] pairs")
        return v


class GearConfig(BaseModel):
    position: list[int]
    value: int = 1

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("gear value must be positive")
        return v


class LevelConfig(BaseModel):
    spawn: list[int] = Field(default_factory=lambda: [0, 0])
    facing: list[int] = Field(default_factory=lambda: [1, 0])
    gears: list[GearConfig] = Field(default_factory=list)

    @field_validator("facing")
    @classmethod
    def validate_facing(cls, v):
        if len(v) != 2 or abs(v[0]) + abs(v[1]) != 1:
            raise ValueError("facing must be a unit cardinal vector")
        return v


class ScriptStep(BaseModel):
    action: Literal["add", "remove", "purchase", "pickup", "run", "wait"]
    instruction: Optional[str] = Field(default=None, validate_default=True)
    index: Optional[int] = None
    amount: Optional[int] = None
    seconds: Optional[float] = None

    @field_validator("instruction")
    @classmethod
    def validate_instruction(cls, v, info: ValidationInfo):
        if info.data.get("action") == "add" and v is None:
            raise ValueError("add steps need an instruction")
        if v is not None:
            parse_instruction(v)
        return v


class ScriptConfig(BaseModel):
    frame_dt: float = 1.0 / 60.0
    max_run_seconds: float = 120.0
    steps: list[ScriptStep] = Field(default_factory=list)

    @field_validator("frame_dt", "max_run_seconds")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("script timings must be positive")
        return v


class OutputConfig(BaseModel):
    run_dir: Path = Path("runs")
    summarize: bool = True


class ConfigSchema(BaseModel):
    cpu: CpuConfig = Field(default_factory=CpuConfig)
    bomb: BombConfig = Field(default_factory=BombConfig)
    program: ProgramConfig = Field(default_factory=ProgramConfig)
    unlocks: UnlockConfig = Field(default_factory=UnlockConfig)
    upgrades: UpgradeConfig = Field(default_factory=UpgradeConfig)
    level: LevelConfig = Field(default_factory=LevelConfig)
    script: ScriptConfig = Field(default_factory=ScriptConfig)
    outputs: OutputConfig = Field(default_factory=OutputConfig)


def load_config(path: Path) -> ConfigSchema:
    data = yaml.safe_load(Path(path).read_text()) or {}
    return ConfigSchema(**data)
