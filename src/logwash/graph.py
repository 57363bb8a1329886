"""Graph column glyph translation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeVar

from rich.text import Text

GraphText = TypeVar("GraphText", str, Text)


def translate_graph(graph: GraphText, table: Mapping[str, str] | None = None) -> GraphText:
    """Replace graph characters with glyphs from *table*.

    Characters missing from the table are kept. Replacements are one
    character for one character, so spans on a :class:`rich.text.Text`
    keep covering the same columns and every glyph inherits the style
    of the character it replaced.
    """
    if not table:
        return graph
    plain = graph.plain if isinstance(graph, Text) else graph
    translated = "".join(table.get(char, char) for char in plain)
    if not isinstance(graph, Text):
        return translated
    return Text(
        translated,
        style=graph.style,
        justify=graph.justify,
        overflow=graph.overflow,
        no_wrap=graph.no_wrap,
        end=graph.end,
        tab_size=graph.tab_size,
        spans=list(graph.spans),
    )
