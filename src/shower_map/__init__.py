"""shower-map: hierarchical sums and filters over particle shower trees.

Public API:
    - Analysis: id-addressed queries (value_of, sum_of_children, heads, ...)
    - ShowerMap: predicate-gated sums at the forest's current selection
    - Forest: the id-keyed node store with cursor navigation

Example:
    from shower_map import Analysis, ParticleTable, particle_type

    table = ParticleTable()
    electron = table.get("e-")
    analysis = Analysis()
    analysis.insert(1, None, electron, 0.1)
    analysis.insert(2, 1, electron, 0.2)
    analysis.sum_of_ancestors(2, particle_type(electron))  # (True, 0.1)
"""

__version__ = "0.1.0"

from shower_map.aggregation import ShowerMap
from shower_map.analysis import Analysis, QueryResult
from shower_map.conditions import (
    Condition,
    accept_all,
    all_of,
    any_of,
    min_quantity,
    negate,
    particle_type,
)
from shower_map.forest import (
    Cursor,
    DuplicateIdError,
    Forest,
    InvalidCursorError,
    Node,
    ShowerMapError,
    UnknownIdError,
)
from shower_map.particles import ParticleDefinition, ParticleTable, TrackData

__all__ = [
    "Analysis",
    "Condition",
    "Cursor",
    "DuplicateIdError",
    "Forest",
    "InvalidCursorError",
    "Node",
    "ParticleDefinition",
    "ParticleTable",
    "QueryResult",
    "ShowerMap",
    "ShowerMapError",
    "TrackData",
    "UnknownIdError",
    "accept_all",
    "all_of",
    "any_of",
    "min_quantity",
    "negate",
    "particle_type",
]
