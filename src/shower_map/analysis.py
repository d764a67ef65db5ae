# Copyright 2026 Pennyworth Technologies, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Analysis - id-addressed queries over a shower of particle tracks.

All query methods take an optional condition (default: accept everything)
and report absent ids and non-matching nodes as ``matched=False`` rather
than raising.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, NamedTuple

from shower_map.aggregation.engine import ShowerMap
from shower_map.conditions import Condition, accept_all
from shower_map.forest.model import Cursor, Forest
from shower_map.particles import ParticleDefinition, TrackData

logger = logging.getLogger(__name__)


class QueryResult(NamedTuple):
    matched: bool
    value: Any


class Analysis:
    """A shower map of ``TrackData[float]`` payloads.

    Each instance owns its forest and selection. Instances are independent,
    so separate workers should each construct their own.
    """

    def __init__(self) -> None:
        self.forest = Forest()
        self.engine: ShowerMap[float] = ShowerMap(self.forest, zero=float)

    def __len__(self) -> int:
        return len(self.forest)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.forest

    def __iter__(self) -> Iterator[tuple[int, TrackData[float]]]:
        return iter(self.forest)

    def items(self) -> Iterator[tuple[int, TrackData[float]]]:
        """(id, payload) pairs in ascending id order."""
        return iter(self.forest)

    def size(self) -> int:
        return len(self.forest)

    def exists(self, node_id: int) -> bool:
        return self.forest.exists(node_id)

    def clear(self) -> None:
        self.forest.clear()

    def insert(
        self,
        node_id: int,
        parent_id: int | None,
        pdef: ParticleDefinition,
        value: float,
    ) -> None:
        """Add a track. A parent_id not in the map (e.g. 0) makes a primary."""
        self.forest.insert(node_id, parent_id, TrackData(pdef, value))

    def _select(self, node_id: int) -> bool:
        if not self.forest.exists(node_id):
            return False
        self.forest.select(node_id)
        return True

    def matches(self, node_id: int, cond: Condition = accept_all) -> bool:
        """True if node_id exists and its own payload matches."""
        if not self._select(node_id):
            return False
        return cond(self.forest.current_payload())

    def update(self, node_id: int, value: float, cond: Condition = accept_all) -> bool:
        """Set the quantity of node_id if it exists and matches."""
        if not self._select(node_id):
            return False
        if not cond(self.forest.current_payload()):
            return False
        self.engine.update_current(value)
        return True

    def parent_matches(self, node_id: int, cond: Condition = accept_all) -> QueryResult:
        """Nearest ancestor of node_id that matches, as (found, ancestor_id)."""
        if not self._select(node_id):
            return QueryResult(False, None)
        ancestor = self.engine.find_matching_ancestor(cond)
        return QueryResult(ancestor is not None, ancestor)

    def value_of(self, node_id: int, cond: Condition = accept_all) -> QueryResult:
        """Quantity of node_id, zero when the node does not match."""
        if not self._select(node_id):
            return QueryResult(False, self.engine.zero())
        value = self.engine.value_at_cursor(cond)
        return QueryResult(cond(self.forest.current_payload()), value)

    def sum_of_ancestors(self, node_id: int, cond: Condition = accept_all) -> QueryResult:
        """Sum over matching ancestors; matched if any ancestor matches."""
        if not self._select(node_id):
            return QueryResult(False, self.engine.zero())
        total, matched = self.engine.accumulate_ancestors(cond)
        return QueryResult(matched, total)

    def sum_of_children(self, node_id: int, cond: Condition = accept_all) -> QueryResult:
        """Sum over matching direct children; matched if any child matches."""
        total = self.engine.zero()
        if not self._select(node_id):
            return QueryResult(False, total)
        matched = False
        walker = self.forest.cursor.copy()
        if walker.move_to_first_child():
            while True:
                payload = walker.payload
                if cond(payload):
                    matched = True
                    total += payload.data
                if not walker.move_to_next_sibling():
                    break
        return QueryResult(matched, total)

    def children_ids(self, node_id: int, cond: Condition = accept_all) -> QueryResult:
        """Ids of matching direct children in sibling order."""
        ids: list[int] = []
        if not self._select(node_id):
            return QueryResult(False, ids)
        walker = self.forest.cursor.copy()
        if walker.move_to_first_child():
            while True:
                if cond(walker.payload):
                    ids.append(walker.id)
                if not walker.move_to_next_sibling():
                    break
        return QueryResult(bool(ids), ids)

    def heads(self, cond: Condition = accept_all) -> QueryResult:
        """Find the topmost matching ancestor of every matching chain.

        For each node (in id order) walk up to the root, remembering the last
        matching node seen. That node is a head: nothing above it matches.
        Walks that reach an already known head stop early, since everything
        below a head resolves to the same head.
        """
        heads: list[int] = []
        known: set[int] = set()
        for node_id, _ in self.forest:
            walker = Cursor(self.forest, node_id)
            candidate: int | None = None
            while True:
                current = walker.id
                if current in known:
                    candidate = None
                    break
                if cond(walker.payload):
                    candidate = current
                if not walker.move_to_parent():
                    break
            if candidate is not None:
                heads.append(candidate)
                known.add(candidate)
        logger.debug("Found %d heads", len(heads))
        return QueryResult(bool(heads), heads)
