"""SRS generator -- Export module.

Turns an expanded document into a downloadable PDF, either locally
(color sanitizing, rasterization, pagination) or through the remote
rendering service.

Public API
----------
.. autoclass:: ExportOrchestrator
.. autoclass:: ColorSanitizer
.. autoclass:: Rasterizer
.. autoclass:: PageLayoutEngine
.. autoclass:: BackendRenderClient
.. autoclass:: ExportArtifact
"""

from .artifact import ExportArtifact, artifact_filename, extension_for, save_artifact
from .backend_client import BackendRenderClient, RenderedDocument
from .colors import ColorSanitizer, is_supported, sanitize
from .layout import A4, LETTER, PageLayoutEngine, PagePlacement, PageSize, PaginationMode
from .orchestrator import ExportOrchestrator
from .payload import RenderPayload, flatten_document
from .rasterizer import CaptureOptions, RasterImage, Rasterizer

__all__ = [
    # Orchestrator
    "ExportOrchestrator",
    # Colors
    "ColorSanitizer",
    "sanitize",
    "is_supported",
    # Rasterizer
    "Rasterizer",
    "CaptureOptions",
    "RasterImage",
    # Layout
    "PageLayoutEngine",
    "PageSize",
    "PagePlacement",
    "PaginationMode",
    "A4",
    "LETTER",
    # Remote
    "BackendRenderClient",
    "RenderedDocument",
    "RenderPayload",
    "flatten_document",
    # Artifact
    "ExportArtifact",
    "artifact_filename",
    "extension_for",
    "save_artifact",
]
