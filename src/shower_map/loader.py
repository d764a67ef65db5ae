"""Populate an Analysis from a YAML or JSON event file.

Accepted shapes::

    particles:
      - {id: 1, type: e-, value: 0.1}
      - {id: 2, parent: 1, type: e-, value: 0.2}

or a bare list of the same entries. JSON files parse as YAML.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from shower_map.analysis import Analysis
from shower_map.forest.model import ShowerMapError
from shower_map.particles import ParticleTable

logger = logging.getLogger(__name__)


class EventFileError(ShowerMapError):
    """Raised when an event file cannot be read or has a bad entry."""

    pass


def _to_int(index: int, name: str, raw: Any) -> int:
    # int(True) and int(1.7) would silently give a different id
    if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
        raise EventFileError(f"Entry {index}: {name} must be an integer, got {raw!r}")
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise EventFileError(f"Entry {index}: {name} must be an integer, got {raw!r}") from e


def _parse_entry(index: int, entry: Any) -> tuple[int, int | None, str, float]:
    if not isinstance(entry, dict):
        raise EventFileError(f"Entry {index}: expected a mapping, got {type(entry).__name__}")
    missing = [k for k in ("id", "type") if k not in entry]
    if missing:
        raise EventFileError(f"Entry {index}: missing {', '.join(missing)}")
    node_id = _to_int(index, "id", entry["id"])
    parent = entry.get("parent")
    parent_id = _to_int(index, "parent", parent) if parent is not None else None
    raw_value = entry.get("value", 0.0)
    if isinstance(raw_value, bool):
        raise EventFileError(f"Entry {index}: value must be a number, got {raw_value!r}")
    try:
        value = float(raw_value)
    except (TypeError, ValueError) as e:
        raise EventFileError(f"Entry {index}: value must be a number, got {raw_value!r}") from e
    return node_id, parent_id, str(entry["type"]), value


def load_events(
    data: Any,
    analysis: Analysis | None = None,
    table: ParticleTable | None = None,
) -> Analysis:
    """Insert parsed event data into analysis (a new one if None).

    Entries are inserted in file order, so a parent must appear before its
    children to be linked; otherwise the child becomes a primary.
    """
    if analysis is None:
        analysis = Analysis()
    if table is None:
        table = ParticleTable()

    if isinstance(data, dict):
        if "particles" not in data:
            raise EventFileError("Expected a 'particles' list")
        entries = data["particles"]
    else:
        entries = data
    if entries is None:
        entries = []
    if not isinstance(entries, list):
        raise EventFileError("'particles' must be a list")

    for index, entry in enumerate(entries):
        node_id, parent_id, type_name, value = _parse_entry(index, entry)
        analysis.insert(node_id, parent_id, table.get(type_name), value)

    logger.info("Loaded %d particles (%d species)", len(entries), len(table))
    return analysis


def load_event_file(
    path: Path,
    analysis: Analysis | None = None,
    table: ParticleTable | None = None,
) -> Analysis:
    """Read path and load its particles."""
    try:
        data = yaml.safe_load(Path(path).read_text())
    except OSError as e:
        raise EventFileError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise EventFileError(f"Invalid event file {path}: {e}") from e
    logger.debug("Read event file %s", path)
    return load_events(data, analysis=analysis, table=table)
