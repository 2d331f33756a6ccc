"""Themes and HTML-like label formatting for C4 diagrams."""

import html
import textwrap
from typing import Any, Dict, Iterable, List, Optional

from ..core.models import ElementKind, Theme, ThemeConfig, Usage

DEFAULT_WRAP_WIDTH = 20
LINE_BREAK = "<br />\n"

THEMES: Dict[Theme, ThemeConfig] = {
    Theme.LIGHT: ThemeConfig(
        background_color="white",
        font_color="#263238",
        line_color="#263238",
        container_fill="#ECEFF1:#90A4AE",
    ),
    Theme.DARK: ThemeConfig(
        background_color="#263238",
        font_color="#ECEFF1",
        line_color="#B0BEC5",
        container_fill="#455A64:#37474F",
    ),
    Theme.MONO: ThemeConfig(
        background_color="white",
        font_color="black",
        line_color="black",
        container_fill="white:lightgray",
    ),
}

# Tag shown under the element name
KIND_TAGS = {
    ElementKind.CONTAINER: "Container",
    ElementKind.INTERNAL_SYSTEM: "Internal System",
    ElementKind.EXTERNAL_SYSTEM: "External System",
    ElementKind.INTERNAL_USER: "Internal User",
    ElementKind.EXTERNAL_USER: "External User",
}

KIND_SHAPES = {
    ElementKind.CONTAINER: ("box", "rounded,filled"),
    ElementKind.INTERNAL_SYSTEM: ("box", "rounded"),
    ElementKind.EXTERNAL_SYSTEM: ("box", "rounded,dashed"),
    ElementKind.INTERNAL_USER: ("underline", None),
    ElementKind.EXTERNAL_USER: ("underline", "dashed"),
}


def get_theme(theme: Theme) -> ThemeConfig:
    """Look up the configuration of a theme."""
    return THEMES[Theme(theme)]


def wrap_text(text: str, width: int = DEFAULT_WRAP_WIDTH) -> str:
    """Escape text for an HTML-like label and wrap it at ``width`` columns.

    Lines break only at whitespace; words longer than ``width`` are kept
    whole. Existing line breaks in the text are preserved.
    """
    lines: List[str] = []
    for paragraph in text.splitlines():
        wrapped = textwrap.wrap(
            paragraph,
            width=width,
            break_long_words=False,
            break_on_hyphens=False,
        )
        lines.extend(wrapped or [""])
    return LINE_BREAK.join(html.escape(line, quote=False) for line in lines)


class LabelFormatter:
    """Builds HTML-like Graphviz labels and style attributes for a theme."""

    def __init__(self, theme: ThemeConfig, wrap_width: int = DEFAULT_WRAP_WIDTH):
        self.theme = theme
        self.wrap_width = wrap_width

    def element_label(
        self,
        name: str,
        kind: ElementKind,
        description: str = "",
        type_tag: Optional[str] = None,
    ) -> str:
        """Three-row label: name, bracketed kind tag, wrapped description."""
        tag = KIND_TAGS[kind]
        if type_tag:
            tag = f"{tag}: {type_tag}"

        rows = [
            f'<tr><td><font point-size="{self.theme.title_font_size}">'
            f"{html.escape(name, quote=False)}</font></td></tr>",
            f'<tr><td><font point-size="{self.theme.type_font_size}">'
            f"[{html.escape(tag, quote=False)}]</font></td></tr>",
            f"<tr><td>{wrap_text(description, self.wrap_width)}</td></tr>",
        ]
        return self._table(rows)

    def usage_label(self, usages: Iterable[Usage]) -> str:
        """Label with one segment per usage: purpose, then ``[type]`` if set."""
        rows: List[str] = []
        for usage in usages:
            rows.append(f"<tr><td>{wrap_text(usage.purpose, self.wrap_width)}</td></tr>")
            if usage.type:
                rows.append(
                    f'<tr><td><font point-size="{self.theme.type_font_size}">'
                    f"[{html.escape(usage.type, quote=False)}]</font></td></tr>",
                )
        return self._table(rows)

    def node_attributes(self, kind: ElementKind) -> Dict[str, Any]:
        """Style attributes for a node of the given kind."""
        shape, style = KIND_SHAPES[kind]
        attributes: Dict[str, Any] = {}
        if style:
            attributes["style"] = style
        attributes.update(self._font_attributes())
        attributes["shape"] = shape
        attributes["color"] = self.theme.line_color
        if kind == ElementKind.CONTAINER:
            attributes["fillcolor"] = self.theme.container_fill
            attributes["gradientangle"] = self.theme.gradient_angle
        return attributes

    def cluster_attributes(self) -> Dict[str, Any]:
        """Style attributes for an internal system cluster."""
        return {
            "style": "rounded",
            **self._font_attributes(),
            "color": self.theme.line_color,
        }

    def edge_attributes(self) -> Dict[str, Any]:
        """Style attributes for a usage edge."""
        return {**self._font_attributes(), "color": self.theme.line_color}

    def _font_attributes(self) -> Dict[str, Any]:
        return {
            "fontsize": self.theme.font_size,
            "fontcolor": self.theme.font_color,
            "fontname": self.theme.font_name,
        }

    @staticmethod
    def _table(rows: List[str]) -> str:
        body = "\n".join(f"    {row}" for row in rows)
        return (
            '<<table border="0" cellborder="0" cellspacing="0">\n'
            f"{body}\n"
            "</table>>"
        )
