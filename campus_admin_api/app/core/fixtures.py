"""Fixture loading for the in‑memory stores.

Each entity is seeded from ``<fixtures_dir>/<name>.json``, a JSON list of
records.  A missing file seeds an empty store; a corrupt file is an
error, since silently starting empty would hide it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional


logger = logging.getLogger(__name__)

# Fixtures shipped with the package.
DEFAULT_FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data"


def fixtures_path(directory: Optional[str] = None) -> Path:
    return Path(directory) if directory else DEFAULT_FIXTURES_DIR


def load_fixture(name: str, directory: Optional[str] = None) -> List[Dict[str, Any]]:
    """Load the seed records for ``name`` (e.g. ``"students"``)."""
    path = fixtures_path(directory) / f"{name}.json"
    if not path.exists():
        logger.warning("Fixture %s not found; starting with an empty store", path)
        return []
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"Fixture {path} must contain a JSON list")
    return data
