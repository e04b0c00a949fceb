"""Export orchestration for an expanded SRS document.

Two mutually exclusive paths produce the same kind of ``ExportArtifact``:

* **local**  -- sanitize colors -> rasterize the preview -> lay out pages.
* **remote** -- flatten the document to text blocks -> the rendering service.

Both fail fast with ``PreconditionError`` before doing any work when their
inputs are missing, and neither returns a partial artifact on failure.
Persisting the artifact (``save_artifact``) is left to the caller.
"""

from __future__ import annotations

from typing import Optional

from srs_gen.config import Config
from srs_gen.errors import PreconditionError
from srs_gen.expander.models import ExpandedDocument
from srs_gen.export.artifact import ExportArtifact, artifact_filename, extension_for
from srs_gen.export.backend_client import BackendRenderClient
from srs_gen.export.colors import ColorSanitizer
from srs_gen.export.layout import PAGE_FORMATS, PageLayoutEngine, PageSize, PaginationMode
from srs_gen.export.payload import flatten_document
from srs_gen.export.rasterizer import CaptureOptions, Rasterizer
from srs_gen.render.preview import CAPTURE_TARGET_ID
from srs_gen.render.visual import VisualNode
from srs_gen.utils import CancellationToken

_NOT_EXPANDED = "Generate the SRS first: the document has not been expanded."


class ExportOrchestrator:
    """Sequences the export components for one document at a time.

    Attributes:
        config: Export and backend settings.
        sanitizer: Rewrites unsupported colors before capture.
        rasterizer: Captures the preview tree into a PNG.
        layout_engine: Places the PNG on PDF pages.
        backend: Client for the remote rendering service.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        *,
        sanitizer: Optional[ColorSanitizer] = None,
        rasterizer: Optional[Rasterizer] = None,
        layout_engine: Optional[PageLayoutEngine] = None,
        backend: Optional[BackendRenderClient] = None,
    ) -> None:
        self.config = config or Config()
        export = self.config.export
        self.sanitizer = sanitizer or ColorSanitizer()
        self.rasterizer = rasterizer or Rasterizer(node_binary=export.node_binary)
        self.layout_engine = layout_engine or PageLayoutEngine(PaginationMode(export.pagination))
        self.backend = backend or BackendRenderClient(
            self.config.backend.url, timeout=self.config.backend.timeout
        )

    @property
    def page_size(self) -> PageSize:
        export = self.config.export
        return PAGE_FORMATS[export.page_format].with_margin(export.margin_pt)

    @property
    def capture_options(self) -> CaptureOptions:
        export = self.config.export
        return CaptureOptions(scale=export.scale, timeout_seconds=export.capture_timeout)

    # ------------------------------------------------------------------
    # Local path
    # ------------------------------------------------------------------

    async def export_local(
        self,
        document: Optional[ExpandedDocument],
        tree: Optional[VisualNode],
        *,
        target_id: str = CAPTURE_TARGET_ID,
        cancel: Optional[CancellationToken] = None,
    ) -> ExportArtifact:
        """Rasterize the rendered preview and paginate it into a PDF.

        Raises:
            PreconditionError: No document, no tree, or no ``#target_id`` in it.
            RasterizationError: The capture produced no image.
            ExportCancelledError: *cancel* fired during the capture.
        """
        if document is None:
            raise PreconditionError(_NOT_EXPANDED)
        if tree is None:
            raise PreconditionError("Preview not ready: nothing has been rendered yet.")
        target = tree.find(target_id)
        if target is None:
            raise PreconditionError(f"Preview not ready: capture target #{target_id} not found.")

        clean = self.sanitizer.sanitize(target)
        image = await self.rasterizer.capture(clean, self.capture_options, cancel=cancel)
        return self.layout_engine.layout(
            image,
            self.page_size,
            filename=artifact_filename(document.source.project_name),
            title=f"{document.cover.project_name} - {document.cover.title}",
        )

    # ------------------------------------------------------------------
    # Remote path
    # ------------------------------------------------------------------

    async def export_remote(
        self,
        document: Optional[ExpandedDocument],
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> ExportArtifact:
        """Have the rendering service produce the document from the flattened text.

        The artifact keeps the media type the service declared and its file
        extension follows from it.

        Raises:
            PreconditionError: No document.
            TransportError: Network failure or non-success status.
            ExportCancelledError: *cancel* fired during the request.
        """
        if document is None:
            raise PreconditionError(_NOT_EXPANDED)

        rendered = await self.backend.render(flatten_document(document), cancel=cancel)
        return ExportArtifact(
            content=rendered.content,
            filename=artifact_filename(
                document.source.project_name, extension_for(rendered.media_type)
            ),
            media_type=rendered.media_type,
        )
