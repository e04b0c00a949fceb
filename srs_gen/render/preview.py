"""Builds the preview visual tree for an ``ExpandedDocument``.

The tree mirrors what the document preview shows on screen: a cover block
followed by the three numbered SRS sections.  Colors come from a ``Theme``;
the default theme uses ``oklch()`` values, as a modern utility stylesheet
resolves them, which is why export runs the color sanitizer first.
"""

from __future__ import annotations

from dataclasses import dataclass

from srs_gen.expander.models import ExpandedDocument
from srs_gen.render.visual import VisualNode

CAPTURE_TARGET_ID = "srs-preview"

# A4 width at 96 CSS pixels per inch.
PAGE_WIDTH_PX = 794


@dataclass(frozen=True)
class Theme:
    """Colors and typography applied to the preview."""

    text: str
    heading: str
    muted: str
    background: str
    border: str
    accent: str
    font_family: str = "Georgia, 'Times New Roman', serif"


DEFAULT_THEME = Theme(
    text="oklch(27.9% 0.041 260.031)",
    heading="oklch(20.8% 0.042 265.755)",
    muted="oklch(55.1% 0.027 264.364)",
    background="#ffffff",
    border="oklch(86.9% 0.022 252.894)",
    accent="oklch(54.6% 0.245 262.881)",
)

PLAIN_THEME = Theme(
    text="rgb(17, 24, 39)",
    heading="rgb(0, 0, 0)",
    muted="rgb(107, 114, 128)",
    background="#ffffff",
    border="rgb(209, 213, 219)",
    accent="rgb(37, 99, 235)",
)


def _el(tag: str, text: str = "", *, classes: list[str] | None = None, **style: str) -> VisualNode:
    """Create a node; keyword style names use underscores for CSS hyphens."""
    return VisualNode(
        tag=tag,
        text=text,
        classes=list(classes or []),
        style={key.replace("_", "-"): value for key, value in style.items()},
    )


class _PreviewBuilder:
    def __init__(self, theme: Theme) -> None:
        self.theme = theme

    def section(self, title: str) -> VisualNode:
        node = _el("section", classes=["srs-section"], margin_top="28px")
        node.append(
            _el(
                "h2",
                title,
                color=self.theme.heading,
                border_bottom="1px solid",
                border_color=self.theme.border,
                padding_bottom="4px",
                font_size="20px",
            )
        )
        return node

    def subsection(self, parent: VisualNode, title: str, body: str | None = None) -> VisualNode:
        parent.append(_el("h3", title, color=self.theme.heading, font_size="16px", margin_top="16px"))
        if body is not None:
            parent.append(_el("p", body, line_height="1.6"))
        return parent

    def bullet_list(self, parent: VisualNode, items: list[str]) -> VisualNode:
        ul = parent.append(_el("ul", padding_left="24px"))
        for item in items:
            ul.append(_el("li", item, line_height="1.6"))
        return ul

    def cover(self, document: ExpandedDocument) -> VisualNode:
        cover = document.cover
        node = _el(
            "section",
            classes=["srs-cover"],
            text_align="center",
            padding_bottom="24px",
            border_bottom="2px solid",
            border_color=self.theme.border,
        )
        node.append(_el("h1", cover.title, color=self.theme.accent, font_size="26px"))
        node.append(_el("h2", cover.project_name, color=self.theme.heading, font_size="22px"))
        node.append(_el("p", cover.description, font_style="italic"))
        node.append(_el("p", "Prepared by:", color=self.theme.muted, margin_top="16px"))
        members = node.append(_el("ul", list_style="none", padding_left="0"))
        for member in cover.members:
            members.append(_el("li", member))
        node.append(_el("p", f"Date: {cover.date_label}", color=self.theme.muted))
        return node

    def build(self, document: ExpandedDocument) -> VisualNode:
        root = _el(
            "div",
            classes=["preview-page"],
            color=self.theme.text,
            background_color=self.theme.background,
            border_color=self.theme.border,
            border_width="1px",
            border_style="solid",
            padding="40px",
            width=f"{PAGE_WIDTH_PX}px",
            box_sizing="border-box",
            font_family=self.theme.font_family,
            font_size="14px",
        )
        root.node_id = CAPTURE_TARGET_ID
        root.append(self.cover(document))

        intro = document.introduction
        node = root.append(self.section("1. Introduction"))
        self.subsection(node, "1.1 Purpose", intro.purpose)
        self.subsection(node, "1.2 Scope", intro.scope)
        self.subsection(node, "1.3 Definitions, Acronyms and Abbreviations")
        self.bullet_list(node, [f"{d.term}: {d.meaning}" for d in intro.definitions])
        self.subsection(node, "1.4 References", intro.references)

        general = document.general_description
        node = root.append(self.section("2. General Description"))
        self.subsection(node, "2.1 Product Perspective", general.product_perspective)
        self.subsection(node, "2.2 Product Functions", general.product_functions)
        self.subsection(node, "2.3 User Characteristics", general.user_characteristics)
        self.subsection(node, "2.4 General Constraints", general.general_constraints)
        self.subsection(node, "2.5 Assumptions and Dependencies", general.assumptions_dependencies)

        specific = document.specific_requirements
        node = root.append(self.section("3. Specific Requirements"))
        self.subsection(node, "3.1 Functional Requirements")
        self.bullet_list(node, list(specific.functional_requirements))
        self.subsection(
            node, "3.2 External Interface Requirements", specific.external_interface_requirements
        )
        self.subsection(node, "3.3 Non-Functional Requirements")
        self.bullet_list(node, list(specific.non_functional_requirements))
        return root


def build_preview(document: ExpandedDocument, *, theme: Theme = DEFAULT_THEME) -> VisualNode:
    """Render *document* into a fresh visual tree rooted at ``#srs-preview``."""
    return _PreviewBuilder(theme).build(document)
