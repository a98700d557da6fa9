"""Configuration utilities for gearbot."""
from .schema import ConfigSchema, load_config

__all__ = ["ConfigSchema", "load_config"]
