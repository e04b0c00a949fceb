"""SRS generator configuration.

Centralised, typed configuration for expansion and export. All settings use
Pydantic v2 models so they can be validated at construction time and serialised
to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field


class BackendConfig(BaseModel):
    """Configuration for the remote document-rendering service."""

    url: str = Field(default="http://localhost:5000")
    timeout: int = Field(default=60, ge=1, description="Per-request timeout in seconds")


class ExportConfig(BaseModel):
    """Tuning knobs for the local export path."""

    scale: float = Field(
        default=2.0, ge=1.0, description="Supersampling factor used during rasterization"
    )
    page_format: Literal["a4", "letter"] = Field(default="a4")
    margin_pt: float = Field(default=0.0, ge=0.0, description="Page margin in PDF points")
    pagination: Literal["sliced", "single_page"] = Field(
        default="sliced",
        description="'sliced' emits one page per band, 'single_page' keeps the legacy overflow",
    )
    capture_timeout: int = Field(default=60, ge=5, description="Rasterizer timeout in seconds")
    node_binary: str = Field(default="node", description="Node.js executable running Playwright")


class Config(BaseModel):
    """Global SRS generator configuration.

    Instances are typically created once by the CLI entry point and then
    passed to the ``ExportOrchestrator``.
    """

    output_dir: Path = Field(default=Path("./output"))
    backend: BackendConfig = Field(default_factory=BackendConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to ``<output_dir>/srs-gen.json``.

        Returns:
            The resolved path where the file was written.
        """
        target = path or (self.output_dir / "srs-gen.json")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            SRS_API_URL, SRS_API_TIMEOUT, SRS_OUTPUT_DIR, SRS_EXPORT_SCALE,
            SRS_PAGE_FORMAT, SRS_PAGINATION, SRS_NODE_BINARY.
        """
        backend_kwargs: dict[str, Any] = {}
        if os.environ.get("SRS_API_URL"):
            backend_kwargs["url"] = os.environ["SRS_API_URL"]
        if os.environ.get("SRS_API_TIMEOUT"):
            backend_kwargs["timeout"] = int(os.environ["SRS_API_TIMEOUT"])

        export_kwargs: dict[str, Any] = {}
        if os.environ.get("SRS_EXPORT_SCALE"):
            export_kwargs["scale"] = float(os.environ["SRS_EXPORT_SCALE"])
        if os.environ.get("SRS_PAGE_FORMAT"):
            export_kwargs["page_format"] = os.environ["SRS_PAGE_FORMAT"].lower()
        if os.environ.get("SRS_PAGINATION"):
            export_kwargs["pagination"] = os.environ["SRS_PAGINATION"].lower()
        if os.environ.get("SRS_NODE_BINARY"):
            export_kwargs["node_binary"] = os.environ["SRS_NODE_BINARY"]

        return cls(
            output_dir=Path(os.environ.get("SRS_OUTPUT_DIR", "./output")),
            backend=BackendConfig(**backend_kwargs),
            export=ExportConfig(**export_kwargs),
        )
