# schedsim/utils/io.py
"""
JSON helpers for the headless report bundle.
"""
import json
from enum import Enum
from pathlib import Path
from typing import Any, Union

PathLike = Union[str, Path]


def _encode(value: Any) -> Any:
    # Enums and numpy scalars can leak into summaries
    if isinstance(value, Enum):
        return value.value
    if hasattr(value, 'item'):
        return value.item()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def save_json(records: Any, file_path: PathLike, indent: int = 2) -> Path:
    """Write records as JSON, creating parent directories.

    Returns:
        Path written
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(records, indent=indent, default=_encode))
    return path


def load_json(file_path: PathLike) -> Any:
    """Read a JSON artifact back."""
    return json.loads(Path(file_path).read_text())
