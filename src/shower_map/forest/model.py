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

"""Forest store - nodes keyed by id, linked by parent/first-child/next-sibling.

Relations are stored as ids into the forest's node table rather than as
object references. Navigation goes through a ``Cursor``:

    Parent -> ...
      ^
      |
      v
    FirstChild -> NextSibling -> NextSibling -> None
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator

logger = logging.getLogger(__name__)


class ShowerMapError(Exception):
    """Base class for shower map errors."""

    pass


class DuplicateIdError(ShowerMapError, ValueError):
    """Raised when inserting a node whose id is already in the forest."""

    def __init__(self, node_id: int):
        self.node_id = node_id
        super().__init__(f"Node id already present: {node_id}")


class UnknownIdError(ShowerMapError, KeyError):
    """Raised when selecting an id that is not in the forest."""

    def __init__(self, node_id: int):
        self.node_id = node_id
        super().__init__(node_id)

    def __str__(self) -> str:
        return f"Unknown node id: {self.node_id}"


class InvalidCursorError(ShowerMapError):
    """Raised when reading through a cursor that points at nothing."""

    pass


@dataclass
class Node:
    id: int
    payload: Any
    parent: int | None = None
    first_child: int | None = None
    next_sibling: int | None = None

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_leaf(self) -> bool:
        return self.first_child is None


class Cursor:
    """A movable position inside a forest.

    A cursor is either valid (pointing at a node id) or invalid. Moving past
    the edge of the structure (parent of a root, first child of a leaf, next
    sibling of the last child) invalidates it and returns False.
    """

    def __init__(self, forest: Forest, node_id: int | None = None):
        self._forest = forest
        self._id = node_id

    def __repr__(self) -> str:
        return f"Cursor(id={self._id!r})"

    def copy(self) -> Cursor:
        return Cursor(self._forest, self._id)

    def select(self, node_id: int) -> None:
        if node_id not in self._forest._nodes:
            raise UnknownIdError(node_id)
        self._id = node_id

    def invalidate(self) -> None:
        self._id = None

    @property
    def valid(self) -> bool:
        return self._id is not None

    @property
    def id(self) -> int:
        if self._id is None:
            raise InvalidCursorError("Cursor does not point at a node")
        return self._id

    @property
    def node(self) -> Node:
        return self._forest._nodes[self.id]

    @property
    def payload(self) -> Any:
        return self.node.payload

    def _move(self, target: int | None) -> bool:
        self._id = target
        return target is not None

    def move_to_parent(self) -> bool:
        return self._move(self.node.parent)

    def move_to_first_child(self) -> bool:
        return self._move(self.node.first_child)

    def move_to_next_sibling(self) -> bool:
        return self._move(self.node.next_sibling)

    def update_payload(self, payload: Any) -> None:
        self.node.payload = payload


class Forest:
    """A set of rooted trees sharing one id space, with a single selection."""

    def __init__(self) -> None:
        self._nodes: dict[int, Node] = {}
        self.cursor = Cursor(self)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __iter__(self) -> Iterator[tuple[int, Any]]:
        """Yield (id, payload) pairs in ascending id order."""
        for nid in sorted(self._nodes):
            yield nid, self._nodes[nid].payload

    def insert(self, node_id: int, parent_id: int | None, payload: Any) -> Node:
        """Add a node as the last child of parent_id, or as a root.

        A parent_id that is not in the forest (including None) makes the
        new node a root.
        """
        if node_id in self._nodes:
            raise DuplicateIdError(node_id)

        parent = self._nodes.get(parent_id) if parent_id is not None else None
        node = Node(id=node_id, payload=payload)

        if parent is None:
            if parent_id is not None:
                logger.debug("Parent %s of %s not found, inserting as root", parent_id, node_id)
        else:
            node.parent = parent.id
            if parent.first_child is None:
                parent.first_child = node_id
            else:
                last = self._nodes[parent.first_child]
                while last.next_sibling is not None:
                    last = self._nodes[last.next_sibling]
                last.next_sibling = node_id

        self._nodes[node_id] = node
        logger.debug("Inserted node %s (parent=%s)", node_id, node.parent)
        return node

    def clear(self) -> None:
        """Remove every node and invalidate the selection."""
        if self._nodes:
            logger.debug("Clearing forest with %d nodes", len(self._nodes))
        self._nodes.clear()
        self.cursor.invalidate()

    def exists(self, node_id: int) -> bool:
        return node_id in self._nodes

    def node(self, node_id: int) -> Node:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise UnknownIdError(node_id) from None

    def roots(self) -> list[int]:
        return [nid for nid in sorted(self._nodes) if self._nodes[nid].parent is None]

    def children_of(self, node_id: int) -> list[int]:
        """Ids of the direct children of node_id, in insertion order."""
        result: list[int] = []
        child = self.node(node_id).first_child
        while child is not None:
            result.append(child)
            child = self._nodes[child].next_sibling
        return result

    # Selection primitives, delegating to the forest's own cursor

    def select(self, node_id: int) -> None:
        self.cursor.select(node_id)

    def current_valid(self) -> bool:
        return self.cursor.valid

    def current_id(self) -> int:
        return self.cursor.id

    def current_payload(self) -> Any:
        return self.cursor.payload

    def move_to_parent(self) -> bool:
        return self.cursor.move_to_parent()

    def move_to_first_child(self) -> bool:
        return self.cursor.move_to_first_child()

    def move_to_next_sibling(self) -> bool:
        return self.cursor.move_to_next_sibling()

    def update_payload(self, payload: Any) -> None:
        self.cursor.update_payload(payload)
