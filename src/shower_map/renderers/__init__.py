"""Renderers for displaying a forest."""

from shower_map.forest.model import Forest
from shower_map.renderers.ascii import ASCIIRenderer
from shower_map.renderers.base import (
    ForestRenderer,
    OutputFormat,
    describe_node,
    format_payload,
    format_quantity,
)
from shower_map.renderers.json_renderer import JSONRenderer
from shower_map.renderers.text import TextRenderer

_RENDERERS: dict[OutputFormat, type] = {
    OutputFormat.ASCII: ASCIIRenderer,
    OutputFormat.JSON: JSONRenderer,
    OutputFormat.TEXT: TextRenderer,
}


def render_forest(
    forest: Forest,
    *,
    format: OutputFormat = OutputFormat.ASCII,
    precision: int = 4,
    **options,
) -> str:
    """Render a forest to the specified format."""
    renderer: ForestRenderer = _RENDERERS[OutputFormat(format)]()
    return renderer.render(forest, precision=precision, **options)


__all__ = [
    "ASCIIRenderer",
    "ForestRenderer",
    "JSONRenderer",
    "OutputFormat",
    "TextRenderer",
    "describe_node",
    "format_payload",
    "format_quantity",
    "render_forest",
]
