"""Raster capture of a rendered visual subtree.

Serialises the subtree to HTML and runs a headless-Chromium Playwright script
(via a ``node`` subprocess) that sizes the viewport to the subtree's full
scrollable extent and screenshots exactly that box at the requested
supersampling scale.

Failed sub-resource loads (typically cross-origin images) never abort the
capture: each becomes a ``CaptureError`` recorded on the returned image and
the best-effort screenshot is used.
"""

from __future__ import annotations

import asyncio
import contextlib
import io
import json
import tempfile
import textwrap
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from PIL import Image, UnidentifiedImageError

from srs_gen.errors import CaptureError, RasterizationError
from srs_gen.render.html import HtmlRenderer
from srs_gen.render.visual import VisualNode
from srs_gen.utils import CancellationToken, print_warning, run_cancellable

_FALLBACK_TARGET_ID = "capture-root"


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CaptureOptions:
    """How a subtree is captured.

    ``capture_width``/``capture_height`` override the measured scroll extent;
    leave them ``None`` to capture the whole subtree.
    """

    scale: float = 2.0
    capture_width: Optional[int] = None
    capture_height: Optional[int] = None
    timeout_seconds: int = 60

    def __post_init__(self) -> None:
        if self.scale < 1:
            raise ValueError(f"scale must be >= 1, got {self.scale}")
        for name in ("capture_width", "capture_height"):
            value = getattr(self, name)
            if value is not None and value < 1:
                raise ValueError(f"{name} must be positive, got {value}")


@dataclass(frozen=True)
class RasterImage:
    """A captured PNG and its intrinsic pixel size."""

    png: bytes
    width: int
    height: int
    capture_errors: tuple[CaptureError, ...] = ()

    @property
    def best_effort(self) -> bool:
        """``True`` when some embedded resource could not be captured."""
        return bool(self.capture_errors)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _build_capture_script(
    page_url: str,
    target_id: str,
    output_path: Path,
    options: CaptureOptions,
) -> str:
    """Return a self-contained Playwright script capturing ``#target_id``."""
    return textwrap.dedent(f"""\
        const {{ chromium }} = require('playwright');

        (async () => {{
            const browser = await chromium.launch({{ headless: true }});
            const failed = [];
            try {{
                const context = await browser.newContext({{
                    viewport: {{ width: 1024, height: 768 }},
                    deviceScaleFactor: {options.scale},
                }});
                const page = await context.newPage();
                page.on('requestfailed', (req) => {{
                    const failure = req.failure();
                    failed.push({{ url: req.url(), error: failure ? failure.errorText : 'request failed' }});
                }});
                page.on('response', (res) => {{
                    if (res.status() >= 400) {{
                        failed.push({{ url: res.url(), error: 'HTTP ' + res.status() }});
                    }}
                }});
                await page.goto({json.dumps(page_url)}, {{ waitUntil: 'load', timeout: {options.timeout_seconds * 1000} }});

                const target = page.locator({json.dumps("#" + target_id)});
                const extent = await target.evaluate((el) => {{
                    el.style.overflow = 'visible';
                    el.style.maxHeight = 'none';
                    return {{ width: el.scrollWidth, height: el.scrollHeight }};
                }});
                const width = {json.dumps(options.capture_width)} || extent.width;
                const height = {json.dumps(options.capture_height)} || extent.height;
                await page.setViewportSize({{ width: width, height: height }});

                const origin = await target.evaluate((el) => {{
                    const rect = el.getBoundingClientRect();
                    return {{ x: rect.left + window.scrollX, y: rect.top + window.scrollY }};
                }});
                await page.screenshot({{
                    path: {json.dumps(str(output_path))},
                    fullPage: true,
                    clip: {{ x: origin.x, y: origin.y, width: width, height: height }},
                }});
                console.log(JSON.stringify({{ width: width, height: height, failed: failed }}));
            }} catch (err) {{
                console.error('Capture failed:', err.message);
                process.exit(1);
            }} finally {{
                await browser.close();
            }}
        }})();
    """)


def _parse_report(stdout: str) -> dict[str, Any]:
    """Read the JSON report printed on the script's last stdout line."""
    for line in reversed(stdout.strip().splitlines()):
        line = line.strip()
        if line.startswith("{"):
            try:
                return json.loads(line)
            except json.JSONDecodeError:
                return {}
    return {}


def _image_size(png: bytes) -> tuple[int, int]:
    try:
        with Image.open(io.BytesIO(png)) as img:
            return img.size
    except (UnidentifiedImageError, OSError) as exc:
        raise RasterizationError(f"Capture produced an unreadable image: {exc}") from exc


# ---------------------------------------------------------------------------
# Rasterizer
# ---------------------------------------------------------------------------

class Rasterizer:
    """Captures visual subtrees into PNG images with Playwright."""

    def __init__(
        self,
        *,
        node_binary: str = "node",
        renderer: Optional[HtmlRenderer] = None,
    ) -> None:
        self.node_binary = node_binary
        self.renderer = renderer or HtmlRenderer()

    # -- Public API ----------------------------------------------------------

    async def capture(
        self,
        tree: VisualNode,
        options: Optional[CaptureOptions] = None,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> RasterImage:
        """Capture *tree* into a single raster image.

        Raises ``RasterizationError`` when no image could be produced and
        ``ExportCancelledError`` when *cancel* fires first.
        """
        options = options or CaptureOptions()
        target = tree
        if target.node_id is None:
            target = tree.copy()
            target.node_id = _FALLBACK_TARGET_ID

        with tempfile.TemporaryDirectory(prefix="srs-capture-") as tmp:
            work_dir = Path(tmp)
            page_path = work_dir / "page.html"
            output_path = work_dir / "capture.png"
            page_path.write_text(self.renderer.render(target), encoding="utf-8")

            script = _build_capture_script(page_path.as_uri(), target.node_id, output_path, options)
            stdout = await self._run_capture_script(
                script, output_path, options.timeout_seconds, cancel
            )
            if not output_path.exists():
                raise RasterizationError(
                    f"Capture exited successfully but no image was written: {output_path}"
                )
            png = output_path.read_bytes()

        width, height = _image_size(png)
        errors = tuple(
            CaptureError(entry.get("url", "?"), entry.get("error", ""))
            for entry in _parse_report(stdout).get("failed", [])
        )
        for error in errors:
            print_warning(f"Best-effort capture: {error}")

        return RasterImage(png=png, width=width, height=height, capture_errors=errors)

    # -- Internal ------------------------------------------------------------

    async def _run_capture_script(
        self,
        script: str,
        output: Path,
        timeout: int,
        cancel: Optional[CancellationToken],
    ) -> str:
        """Execute the Playwright script and return its stdout.

        *output* is where the script writes the PNG; it is checked by the
        caller.
        """
        try:
            proc = await asyncio.create_subprocess_exec(
                self.node_binary,
                "-e",
                script,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise RasterizationError(
                f"Node.js executable not found: {self.node_binary}"
            ) from exc

        try:
            stdout, stderr = await run_cancellable(
                asyncio.wait_for(proc.communicate(), timeout=timeout),
                cancel,
            )
        except asyncio.TimeoutError as exc:
            raise RasterizationError(f"Capture timed out after {timeout}s") from exc
        finally:
            if proc.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    proc.kill()
                await proc.wait()

        if proc.returncode != 0:
            error_msg = stderr.decode().strip() or stdout.decode().strip()
            raise RasterizationError(f"Playwright capture failed for {output.name}: {error_msg}")

        return stdout.decode()
