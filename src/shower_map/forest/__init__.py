"""Forest store: id-keyed nodes with cursor navigation."""

from shower_map.forest.model import (
    Cursor,
    DuplicateIdError,
    Forest,
    InvalidCursorError,
    Node,
    ShowerMapError,
    UnknownIdError,
)

__all__ = [
    "Cursor",
    "DuplicateIdError",
    "Forest",
    "InvalidCursorError",
    "Node",
    "ShowerMapError",
    "UnknownIdError",
]
