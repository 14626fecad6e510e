"""Test utilities."""

import json
from pathlib import Path
from typing import Any, Dict


def read_json(path: Path) -> Dict[str, Any]:
    """Load a JSON file written by the code under test."""
    with open(path, "r") as f:
        data: Dict[str, Any] = json.load(f)
        return data
