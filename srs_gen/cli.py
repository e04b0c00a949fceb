"""Command-line entry point for the SRS generator.

Usage::

    srs-gen expand --name "Acme" --description "tracks widgets" --member Ann --member Bo
    srs-gen payload --name "Acme"
    srs-gen export --mode local --name "Acme" --output ./out
    srs-gen export --mode remote --name "Acme" --api-url http://localhost:5000
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from srs_gen.config import Config
from srs_gen.errors import SRSGenError, TransportError
from srs_gen.expander import MAX_MEMBERS, ContentExpander, ExpandedDocument, RawInput
from srs_gen.export import (
    ExportArtifact,
    ExportOrchestrator,
    flatten_document,
    save_artifact,
)
from srs_gen.render import DEFAULT_THEME, PLAIN_THEME, build_preview
from srs_gen.utils import (
    console,
    format_size,
    print_error,
    print_success,
    print_summary_table,
)

THEMES = {"default": DEFAULT_THEME, "plain": PLAIN_THEME}


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--name", default="", help="Project name")
    parser.add_argument("--description", default="", help="One-paragraph project description")
    parser.add_argument(
        "--member",
        action="append",
        default=[],
        metavar="NAME",
        help=f"Contributor name (repeat up to {MAX_MEMBERS} times)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="srs-gen",
        description="SRS generator -- expand a few fields into a full SRS and export it as PDF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            '  srs-gen expand --name "Smart Attendance" --member "Vraj Adhia"\n'
            '  srs-gen export --mode local --name "Smart Attendance" -o ./out\n'
            '  srs-gen export --mode remote --name "Smart Attendance"\n'
        ),
    )
    sub = parser.add_subparsers(dest="command", required=True)

    expand_cmd = sub.add_parser("expand", help="Print the expanded SRS document")
    _add_input_arguments(expand_cmd)
    expand_cmd.add_argument("--json", action="store_true", help="Print the full document as JSON")

    payload_cmd = sub.add_parser("payload", help="Print the flattened remote-render payload")
    _add_input_arguments(payload_cmd)

    export_cmd = sub.add_parser("export", help="Expand and export the SRS as a PDF")
    _add_input_arguments(export_cmd)
    export_cmd.add_argument("--mode", choices=["local", "remote"], default="local")
    export_cmd.add_argument("--output", "-o", default=None, help="Directory to save the PDF in")
    export_cmd.add_argument("--api-url", default=None, help="Rendering service base URL")
    export_cmd.add_argument("--scale", type=float, default=None, help="Capture supersampling factor")
    export_cmd.add_argument("--page-format", choices=["a4", "letter"], default=None)
    export_cmd.add_argument("--pagination", choices=["sliced", "single_page"], default=None)
    export_cmd.add_argument("--theme", choices=sorted(THEMES), default="default")

    return parser


def _raw_input(args: argparse.Namespace) -> RawInput:
    return RawInput(project_name=args.name, description=args.description, members=args.member)


def _apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    if args.output:
        config.output_dir = Path(args.output)
    if args.api_url:
        config.backend.url = args.api_url
    if args.scale is not None:
        config.export.scale = args.scale
    if args.page_format:
        config.export.page_format = args.page_format
    if args.pagination:
        config.export.pagination = args.pagination
    # Assignments bypass field validation; re-validate the whole tree.
    return Config.model_validate(config.model_dump())


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _print_document(document: ExpandedDocument) -> None:
    cover = document.cover
    specific = document.specific_requirements
    print_summary_table(
        {
            "Title": cover.title,
            "Project": cover.project_name,
            "Description": cover.description,
            "Members": ", ".join(cover.members),
            "Date": cover.date_label,
            "Functional requirements": str(len(specific.functional_requirements)),
            "Non-functional requirements": str(len(specific.non_functional_requirements)),
        },
        title="Expanded SRS",
    )


async def _export(
    args: argparse.Namespace, config: Config, document: ExpandedDocument
) -> ExportArtifact:
    orchestrator = ExportOrchestrator(config)
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as progress:
        if args.mode == "remote":
            if not await orchestrator.backend.is_available():
                raise TransportError(
                    f"Rendering service at {config.backend.url} is not reachable. "
                    "Start it or pass --api-url."
                )
            progress.add_task(f"Rendering remotely via {config.backend.url}...", total=None)
            return await orchestrator.export_remote(document)
        progress.add_task("Capturing preview and laying out pages...", total=None)
        tree = build_preview(document, theme=THEMES[args.theme])
        return await orchestrator.export_local(document, tree)


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point for ``srs-gen`` and ``python -m srs_gen``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        raw = _raw_input(args)
    except ValidationError:
        print_error(f"Error: at most {MAX_MEMBERS} members are allowed (got {len(args.member)}).")
        return 2

    document = ContentExpander().expand(raw)

    if args.command == "expand":
        if args.json:
            console.print_json(document.model_dump_json())
        else:
            _print_document(document)
        return 0

    if args.command == "payload":
        console.print_json(data=flatten_document(document).to_json_body())
        return 0

    try:
        config = _apply_overrides(Config.from_env(), args)
    except (ValidationError, ValueError) as exc:
        print_error(f"Error: invalid configuration: {exc}")
        return 2

    try:
        artifact = asyncio.run(_export(args, config, document))
    except SRSGenError as exc:
        print_error(f"Export failed: {exc}")
        return 1

    path = save_artifact(artifact, config.output_dir)
    pages = f", {artifact.page_count} page(s)" if artifact.page_count else ""
    print_success(f"Saved {path} ({format_size(artifact.size)}{pages})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
