"""Utility functions and helpers."""

from .logger import setup_logger
from .random_source import RandomSource
from .io import save_json, load_json

__all__ = ["setup_logger", "RandomSource", "save_json", "load_json"]
