"""Shared pytest fixtures for the SRS generator test suite.

Provides reusable fixtures for:
- Sample seeds and pre-expanded documents with a pinned cover date
- Preview visual trees
- In-memory PNG images of arbitrary size
- Mock subprocess helpers
- Mocked rendering-service responses
"""

from __future__ import annotations

import io
from datetime import date
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from PIL import Image

from srs_gen.expander import ExpandedDocument, RawInput, expand
from srs_gen.render import VisualNode, build_preview

FIXED_DATE = date(2026, 3, 7)

EXAMPLE_DESCRIPTION = (
    "A responsive web application to automate college attendance using enrollment numbers, "
    "with monthly PDF/XLSX reports and role-based access for students, faculty, and admin."
)


# ---------------------------------------------------------------------------
# Seeds & documents
# ---------------------------------------------------------------------------

@pytest.fixture
def fixed_date() -> date:
    return FIXED_DATE


@pytest.fixture
def example_input() -> RawInput:
    """The "Smart Attendance" seed used throughout the docs."""
    return RawInput(
        project_name="Smart Attendance Management System",
        description=EXAMPLE_DESCRIPTION,
        members=["Vraj Adhia", "John Doe", "Jane Smith"],
    )


@pytest.fixture
def empty_input() -> RawInput:
    return RawInput(project_name="   ", description="", members=["", "  "])


@pytest.fixture
def expanded_document(example_input: RawInput) -> ExpandedDocument:
    return expand(example_input, today=FIXED_DATE)


@pytest.fixture
def preview_tree(expanded_document: ExpandedDocument) -> VisualNode:
    return build_preview(expanded_document)


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------

def _png_bytes(width: int, height: int, mode: str = "RGB", color: Any = (255, 255, 255)) -> bytes:
    buffer = io.BytesIO()
    Image.new(mode, (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def make_png():
    """Factory for in-memory PNGs.

    Usage:
        def test_layout(make_png):
            png = make_png(200, 900)
    """
    return _png_bytes


# ---------------------------------------------------------------------------
# Mock Subprocess (generic)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


# ---------------------------------------------------------------------------
# Mock rendering service
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_backend():
    """Factory patching ``httpx.AsyncClient`` with a canned rendering-service reply.

    Usage:
        def test_remote(mock_backend):
            patcher, client = mock_backend(content=b"%PDF-1.4")
            with patcher:
                ...
            client.post.assert_awaited_once()
    """
    def factory(
        content: bytes = b"%PDF-1.4 remote",
        status_code: int = 200,
        post_error: Exception | None = None,
        content_type: str = "application/pdf",
    ) -> tuple[Any, AsyncMock]:
        mock_response = MagicMock()
        mock_response.status_code = status_code
        mock_response.headers = httpx.Headers({"content-type": content_type} if content_type else {})
        mock_response.content = content
        mock_response.text = content.decode("utf-8", errors="replace")
        if status_code >= 400:
            mock_response.raise_for_status = MagicMock(
                side_effect=httpx.HTTPStatusError(
                    f"HTTP {status_code}",
                    request=MagicMock(),
                    response=mock_response,
                )
            )
        else:
            mock_response.raise_for_status = MagicMock()

        mock_client = AsyncMock()
        if post_error is not None:
            mock_client.post = AsyncMock(side_effect=post_error)
        else:
            mock_client.post = AsyncMock(return_value=mock_response)
        mock_client.get = AsyncMock(return_value=mock_response)
        mock_client.__aenter__ = AsyncMock(return_value=mock_client)
        mock_client.__aexit__ = AsyncMock(return_value=False)

        return patch("httpx.AsyncClient", return_value=mock_client), mock_client

    return factory
