"""Page layout: one raster image -> a paginated PDF.

The image is printed at the page's printable width with its aspect ratio
kept.  When the scaled height fits one page, a single page is emitted with
the image at the top-left of the printable area.  When it does not:

* ``PaginationMode.SLICED`` (default) cuts the source into page-height bands
  and emits one page per band, left-aligned, with no gap between bands.
* ``PaginationMode.SINGLE_PAGE`` keeps the legacy behavior: the whole image
  goes on one page and overflows past the bottom edge.
"""

from __future__ import annotations

import io
import math
from dataclasses import dataclass
from enum import Enum

from PIL import Image
from reportlab.lib import pagesizes
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from srs_gen.errors import RasterizationError
from srs_gen.export.artifact import ExportArtifact, PDF_MEDIA_TYPE
from srs_gen.export.rasterizer import RasterImage

# Tolerance for "fits on one page" comparisons in PDF points.
_EPSILON = 1e-6


class PaginationMode(str, Enum):
    """How an image taller than one page is handled."""
    SLICED = "sliced"
    SINGLE_PAGE = "single_page"


@dataclass(frozen=True)
class PageSize:
    """Page dimensions in PDF points (1/72 inch)."""

    width: float
    height: float
    margin: float = 0.0

    @property
    def printable_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def printable_height(self) -> float:
        return self.height - 2 * self.margin

    def with_margin(self, margin: float) -> "PageSize":
        return PageSize(self.width, self.height, margin)


A4 = PageSize(*pagesizes.A4)
LETTER = PageSize(*pagesizes.LETTER)

PAGE_FORMATS: dict[str, PageSize] = {"a4": A4, "letter": LETTER}


@dataclass(frozen=True)
class PagePlacement:
    """Where one band of source rows lands on one page.

    ``x``/``y`` are the bottom-left corner in reportlab's coordinate system;
    ``y`` is negative when the band overflows the page.
    """

    page_index: int
    source_top: int
    source_bottom: int
    x: float
    y: float
    width: float
    height: float


def scaled_height(image_width: int, image_height: int, page: PageSize) -> float:
    """Printed height of an image drawn at the page's printable width."""
    return image_height * page.printable_width / image_width


class PageLayoutEngine:
    """Maps raster images onto fixed-size PDF pages."""

    def __init__(self, mode: PaginationMode = PaginationMode.SLICED) -> None:
        self.mode = PaginationMode(mode)

    # -- Geometry ------------------------------------------------------------

    def plan(self, image_width: int, image_height: int, page: PageSize = A4) -> list[PagePlacement]:
        """Compute the page placements for an image of the given pixel size."""
        if image_width <= 0 or image_height <= 0:
            raise ValueError(f"Image has no area: {image_width}x{image_height}")
        if page.printable_width <= 0 or page.printable_height <= 0:
            raise ValueError(f"Page margin leaves no printable area: {page}")

        draw_width = page.printable_width
        total_height = scaled_height(image_width, image_height, page)
        top_edge = page.height - page.margin

        if total_height <= page.printable_height + _EPSILON or self.mode is PaginationMode.SINGLE_PAGE:
            return [
                PagePlacement(
                    page_index=0,
                    source_top=0,
                    source_bottom=image_height,
                    x=page.margin,
                    y=top_edge - total_height,
                    width=draw_width,
                    height=total_height,
                )
            ]

        pages = math.ceil(total_height / page.printable_height - _EPSILON)
        band_px = page.printable_height * image_width / draw_width

        placements: list[PagePlacement] = []
        for index in range(pages):
            top = int(index * band_px)
            bottom = image_height if index == pages - 1 else min(image_height, int((index + 1) * band_px))
            if bottom <= top:
                continue
            height = (bottom - top) * draw_width / image_width
            placements.append(
                PagePlacement(
                    page_index=len(placements),
                    source_top=top,
                    source_bottom=bottom,
                    x=page.margin,
                    y=top_edge - height,
                    width=draw_width,
                    height=height,
                )
            )
        return placements

    # -- Rendering -----------------------------------------------------------

    def layout(
        self,
        image: RasterImage,
        page: PageSize = A4,
        *,
        filename: str = "project-SRS.pdf",
        title: str = "Software Requirements Specification",
    ) -> ExportArtifact:
        """Lay *image* out on pages and return the finished PDF artifact."""
        placements = self.plan(image.width, image.height, page)

        buffer = io.BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=(page.width, page.height))
        pdf.setTitle(title)

        try:
            source = Image.open(io.BytesIO(image.png))
            source.load()
        except OSError as exc:
            raise RasterizationError(f"Raster image could not be decoded: {exc}") from exc

        with source:
            flat = _flatten(source)
            for placement in placements:
                band = flat.crop((0, placement.source_top, flat.width, placement.source_bottom))
                pdf.drawImage(
                    ImageReader(band),
                    placement.x,
                    placement.y,
                    width=placement.width,
                    height=placement.height,
                )
                pdf.showPage()
        pdf.save()

        return ExportArtifact(
            content=buffer.getvalue(),
            filename=filename,
            media_type=PDF_MEDIA_TYPE,
            page_count=len(placements),
        )


def _flatten(img: Image.Image) -> Image.Image:
    """Composite transparent images onto white; PDF bands are drawn opaque."""
    if img.mode in ("RGBA", "LA", "P"):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.split()[-1])
        return background
    if img.mode != "RGB":
        return img.convert("RGB")
    return img
