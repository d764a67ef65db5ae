"""JSON renderer for forests."""

import json
from typing import Any

from shower_map.forest.model import Forest
from shower_map.renderers.base import OutputFormat


class JSONRenderer:
    """Renders a forest as JSON.

    Nodes are listed flat, keyed by id, with parent and children ids, so
    output size does not depend on nesting depth.
    """

    format = OutputFormat.JSON

    def render(self, forest: Forest, *, precision: int = 4, **options) -> str:
        data = {
            "nodes": {
                str(nid): self._node_dict(forest, nid, precision) for nid, _ in forest
            },
            "root_ids": forest.roots(),
        }
        indent = options.get("indent", 2)
        return json.dumps(data, indent=indent, default=str)

    def _node_dict(self, forest: Forest, node_id: int, precision: int) -> dict[str, Any]:
        node = forest.node(node_id)
        quantity = node.payload.data
        if isinstance(quantity, float):
            quantity = round(quantity, precision)
        return {
            "id": node_id,
            "particle": node.payload.pdef.name,
            "quantity": quantity,
            "parent": node.parent,
            "children": forest.children_of(node_id),
        }
