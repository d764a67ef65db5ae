"""Base renderer, output formats and payload formatting helpers."""

from enum import Enum
from typing import Any, Protocol

from shower_map.forest.model import Forest, Node


class OutputFormat(str, Enum):
    """Output format for rendering."""

    ASCII = "ascii"
    JSON = "json"
    TEXT = "text"


def format_quantity(value: Any, precision: int = 4) -> str:
    if isinstance(value, float):
        return f"{value:.{precision}f}"
    return str(value)


def format_payload(payload: Any, precision: int = 4) -> str:
    """Format a track payload as "(name, quantity)"."""
    return f"({payload.pdef.name}, {format_quantity(payload.data, precision)})"


def describe_node(node: Node, precision: int = 4) -> str:
    """One-line description of a node and its relations (0 when absent)."""
    return (
        f"id: {node.id} = {format_payload(node.payload, precision)}"
        f" ; parent id: {node.parent or 0}"
        f" ; first child id: {node.first_child or 0}"
        f" ; next sibling id: {node.next_sibling or 0}"
    )


class ForestRenderer(Protocol):
    """Protocol for forest renderers."""

    format: OutputFormat

    def render(self, forest: Forest, *, precision: int = 4, **options) -> str:
        """Render the forest to the target format.

        Args:
            forest: The forest to render
            precision: Digits after the decimal point for float quantities
            **options: Additional format-specific options

        Returns:
            Rendered output
        """
        ...
