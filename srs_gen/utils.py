"""Shared utility functions for the SRS generator.

Provides filename sanitisation, cooperative cancellation for the two export
suspension points, file-system helpers, and Rich-based console reporting.
"""

from __future__ import annotations

import asyncio
import contextlib
import re
from collections.abc import Awaitable
from pathlib import Path
from typing import TypeVar

from rich.console import Console
from rich.table import Table

from srs_gen.errors import ExportCancelledError

console = Console()

T = TypeVar("T")

# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def sanitize_filename(name: str, default: str = "project") -> str:
    """Turn an arbitrary project name into a safe file-name stem.

    * Replaces path separators, reserved characters and control characters
      with underscores.
    * Collapses runs of whitespace and underscores.
    * Falls back to *default* when nothing printable is left.

    Examples::

        sanitize_filename("Smart Attendance") -> "Smart Attendance"
        sanitize_filename("a/b: c?") -> "a_b_ c"
        sanitize_filename("   ") -> "project"
    """
    result = re.sub(r'[\\/:*?"<>|\x00-\x1f]+', "_", name.strip())
    result = re.sub(r"\s+", " ", result)
    result = re.sub(r"_+", "_", result)
    result = result.strip(" ._")
    return result or default


# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------


class CancellationToken:
    """Lets a caller abandon a long-running export.

    The token is handed to ``Rasterizer.capture`` and
    ``BackendRenderClient.render``; calling :meth:`cancel` from anywhere on
    the same event loop makes the pending call raise
    ``ExportCancelledError``.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()


async def run_cancellable(work: Awaitable[T], cancel: CancellationToken | None = None) -> T:
    """Await *work*, abandoning it as soon as *cancel* fires.

    Args:
        work: The coroutine or future to await.
        cancel: Optional token. ``None`` simply awaits *work*.

    Returns:
        Whatever *work* returns.

    Raises:
        ExportCancelledError: If the token fired before *work* finished. The
            underlying task is cancelled and given the chance to clean up.
    """
    if cancel is None:
        return await work

    if cancel.cancelled:
        if asyncio.iscoroutine(work):
            work.close()
        raise ExportCancelledError("Export cancelled before it started")

    task = asyncio.ensure_future(work)
    waiter = asyncio.ensure_future(cancel.wait())
    try:
        done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        waiter.cancel()
        if not task.done():
            task.cancel()

    if task in done:
        return task.result()

    with contextlib.suppress(asyncio.CancelledError):
        await task
    raise ExportCancelledError("Export cancelled")


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Returns:
        The resolved ``Path`` object.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path.resolve()


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_size(num_bytes: int) -> str:
    """Format a byte count for humans.

    Examples::

        format_size(512)       -> "512 B"
        format_size(2048)      -> "2.0 KB"
        format_size(3_500_000) -> "3.3 MB"
    """
    if num_bytes < 1024:
        return f"{max(num_bytes, 0)} B"
    size = float(num_bytes)
    for unit in ("KB", "MB", "GB"):
        size /= 1024
        if size < 1024 or unit == "GB":
            break
    return f"{size:.1f} {unit}"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
