"""Workload generation."""

from .process_generator import ProcessGenerator

__all__ = ["ProcessGenerator"]
