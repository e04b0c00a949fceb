"""Jinja2 serialisation of a visual tree into a standalone HTML page.

The rasterizer loads this page in a headless browser.  Only inline styles
taken from the tree are emitted, so whatever the color sanitizer wrote is
exactly what the browser paints.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from srs_gen.render.visual import VisualNode

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

VOID_TAGS = frozenset({"br", "hr", "img", "input", "meta", "link"})


def _css_filter(style: dict[str, str]) -> str:
    """Serialise a style mapping: ``{"color": "red"}`` -> ``"color: red"``."""
    return "; ".join(f"{prop}: {value}" for prop, value in style.items())


class HtmlRenderer:
    """Renders visual trees with the ``page.html.j2`` template."""

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "j2"]),
            keep_trailing_newline=True,
        )
        self.env.filters["css"] = _css_filter

    def render(self, tree: VisualNode, *, title: str = "Software Requirements Specification") -> str:
        """Return the full HTML document for *tree*."""
        template = self.env.get_template("page.html.j2")
        return template.render(root=tree, title=title, void_tags=VOID_TAGS)
