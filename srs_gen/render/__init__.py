"""SRS generator -- Render module.

Builds the on-screen preview of an expanded document as an explicit visual
tree and serialises it to HTML for capture.

Public API
----------
.. autoclass:: VisualNode
.. autofunction:: build_preview
.. autoclass:: HtmlRenderer
"""

from .html import HtmlRenderer
from .preview import CAPTURE_TARGET_ID, DEFAULT_THEME, PLAIN_THEME, Theme, build_preview
from .visual import VisualNode

__all__ = [
    "VisualNode",
    "build_preview",
    "CAPTURE_TARGET_ID",
    "Theme",
    "DEFAULT_THEME",
    "PLAIN_THEME",
    "HtmlRenderer",
]
