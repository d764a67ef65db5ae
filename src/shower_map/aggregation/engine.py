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

"""Aggregation engine for summing quantities across a forest.

Every traversal is expressed with the four cursor primitives (select,
parent, first child, next sibling). Traversals run on a copy of the
forest's cursor, so the caller's selection is the same before and after.
"""

from __future__ import annotations

import dataclasses
from typing import Callable, Generic, TypeVar

from shower_map.conditions import Condition, accept_all
from shower_map.forest.model import Cursor, Forest

Q = TypeVar("Q")


class ShowerMap(Generic[Q]):
    """Predicate-gated sums over a forest of ``TrackData`` payloads.

    The quantity type only needs a zero value (produced by ``zero()``) and
    support for ``+=``.
    """

    def __init__(self, forest: Forest, zero: Callable[[], Q] = float):
        self.forest = forest
        self.zero = zero

    def _walker(self) -> Cursor:
        return self.forest.cursor.copy()

    def _value(self, cursor: Cursor, cond: Condition) -> Q:
        result = self.zero()
        if cursor.valid:
            payload = cursor.payload
            if cond(payload):
                result += payload.data
        return result

    def _sum_siblings(self, cursor: Cursor, cond: Condition) -> Q:
        result = self.zero()
        if not cursor.valid:
            return result
        walker = cursor.copy()
        if not walker.move_to_parent():
            # A root is its own only sibling
            result += self._value(cursor, cond)
            return result
        walker.move_to_first_child()
        result += self._value(walker, cond)
        while walker.move_to_next_sibling():
            result += self._value(walker, cond)
        return result

    def _sum_branch(self, cursor: Cursor, cond: Condition) -> Q:
        # Post-order with an explicit stack: (cursor, children already pushed)
        result = self.zero()
        stack: list[tuple[Cursor, bool]] = [(cursor.copy(), False)]
        while stack:
            node, expanded = stack.pop()
            if expanded:
                result += self._value(node, cond)
                continue
            stack.append((node, True))
            children: list[Cursor] = []
            walker = node.copy()
            if walker.move_to_first_child():
                while True:
                    children.append(walker.copy())
                    if not walker.move_to_next_sibling():
                        break
            stack.extend(reversed(children))
        return result

    def value_at_cursor(self, cond: Condition = accept_all) -> Q:
        """Quantity of the selected node, or zero if invalid or rejected."""
        return self._value(self.forest.cursor, cond)

    def sum_siblings(self, cond: Condition = accept_all) -> Q:
        """Sum over the selected node and all nodes sharing its parent."""
        return self._sum_siblings(self.forest.cursor, cond)

    def sum_children(self, cond: Condition = accept_all) -> Q:
        """Sum over the direct children of the selected node."""
        walker = self._walker()
        if not walker.valid or not walker.move_to_first_child():
            return self.zero()
        return self._sum_siblings(walker, cond)

    def sum_branch(self, cond: Condition = accept_all) -> Q:
        """Sum over the selected node and every descendant.

        Children are visited depth first in sibling order, and each node's
        own value is added after its subtree.
        """
        cursor = self.forest.cursor
        if not cursor.valid:
            return self.zero()
        return self._sum_branch(cursor, cond)

    def accumulate_ancestors(self, cond: Condition = accept_all) -> tuple[Q, bool]:
        """Walk up from the selected node once.

        Returns:
            Tuple of (sum over matching ancestors, whether any ancestor matched).
            The selected node itself is not included.
        """
        result = self.zero()
        matched = False
        walker = self._walker()
        if not walker.valid:
            return result, matched
        while walker.move_to_parent():
            if cond(walker.payload):
                matched = True
                result += walker.payload.data
        return result, matched

    def sum_ancestors(self, cond: Condition = accept_all) -> Q:
        """Sum over parent, grandparent, ... up to the root."""
        result, _ = self.accumulate_ancestors(cond)
        return result

    def find_matching_ancestor(self, cond: Condition = accept_all) -> int | None:
        """Id of the nearest ancestor whose payload matches, or None."""
        walker = self._walker()
        if not walker.valid:
            return None
        while walker.move_to_parent():
            if cond(walker.payload):
                return walker.id
        return None

    def update_current(self, value: Q) -> None:
        """Replace the quantity of the selected node, keeping its species."""
        cursor = self.forest.cursor
        cursor.update_payload(dataclasses.replace(cursor.payload, data=value))
