"""Exception hierarchy for expansion and export."""

from __future__ import annotations


class SRSGenError(Exception):
    """Base class for every error raised by the SRS generator."""


class PreconditionError(SRSGenError):
    """Raised when an export starts before its inputs exist.

    Either the document has not been expanded yet or the rendered visual
    tree does not contain the capture target.
    """


class CaptureError(SRSGenError):
    """A single embedded resource could not be read during rasterization.

    The rasterizer absorbs these and proceeds with a best-effort image;
    they are never raised out of ``Rasterizer.capture``.
    """

    def __init__(self, resource: str, reason: str = "") -> None:
        self.resource = resource
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Could not load {resource}{detail}")


class RasterizationError(SRSGenError):
    """Raised when the capture produced no usable image at all."""


class TransportError(SRSGenError):
    """Raised when the remote rendering service cannot deliver a document."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ExportCancelledError(SRSGenError):
    """Raised when a caller abandons an export through its cancellation token."""
