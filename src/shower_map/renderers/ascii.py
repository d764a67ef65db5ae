"""ASCII tree renderer using Rich for terminal output."""

import io

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from shower_map.forest.model import Forest
from shower_map.renderers.base import OutputFormat, format_quantity

# Columns taken by each level of tree guides
GUIDE_WIDTH = 4
# Columns kept free for the deepest label
LABEL_ROOM = 40


class ASCIIRenderer:
    """Renders every root of a forest as a Rich tree."""

    format = OutputFormat.ASCII

    def render(
        self,
        forest: Forest,
        *,
        precision: int = 4,
        depth: int | None = None,
        **options,
    ) -> str:
        """Render the forest as ASCII.

        Depth is limited to what fits in the console width; deeper children
        are summarized with a "not shown" line.

        Args:
            forest: The forest to render
            precision: Digits after the decimal point for float quantities
            depth: Maximum depth to render below each root
            **options: Additional options (width)

        Returns:
            ASCII string representation of the forest
        """
        width = options.get("width", 120)
        max_depth = max(0, (width - LABEL_ROOM) // GUIDE_WIDTH)
        if depth is not None:
            max_depth = min(max_depth, depth)

        buffer = io.StringIO()
        console = Console(
            file=buffer,
            force_terminal=False,
            color_system=None,
            width=width,
        )
        for root_id in forest.roots():
            console.print(self._create_rich_tree(forest, root_id, precision, max_depth))
        return buffer.getvalue()

    def _create_rich_tree(
        self,
        forest: Forest,
        root_id: int,
        precision: int,
        max_depth: int,
    ) -> Tree:
        root = Tree(self._build_label(forest, root_id, precision))
        stack: list[tuple[int, Tree, int]] = [(root_id, root, 0)]
        while stack:
            node_id, rich_tree, current_depth = stack.pop()
            children = forest.children_of(node_id)
            if not children:
                continue
            if current_depth >= max_depth:
                rich_tree.add(Text(f"... {len(children)} children not shown", style="dim"))
                continue
            for child_id in children:
                child_tree = rich_tree.add(self._build_label(forest, child_id, precision))
                stack.append((child_id, child_tree, current_depth + 1))
        return root

    def _build_label(self, forest: Forest, node_id: int, precision: int) -> Text:
        payload = forest.node(node_id).payload
        text = Text()
        text.append(f"{node_id} ", style="bold")
        text.append(payload.pdef.name, style="cyan")
        text.append(f" {format_quantity(payload.data, precision)}", style="dim")
        return text
