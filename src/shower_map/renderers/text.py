"""Plain text renderer: one line per node in id order."""

from shower_map.forest.model import Forest
from shower_map.renderers.base import OutputFormat, describe_node


class TextRenderer:
    format = OutputFormat.TEXT

    def render(self, forest: Forest, *, precision: int = 4, **options) -> str:
        lines = [describe_node(forest.node(nid), precision) for nid, _ in forest]
        return "\n".join(lines) + ("\n" if lines else "")
