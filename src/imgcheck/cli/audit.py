"""imgcheck audit — batch check over a media library."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from imgcheck.cli.common import (
    console,
    dpi_threshold_opt,
    output_opt,
    policy_opt,
    resolve_policy,
    write_json,
)
from imgcheck.io.sources import DataSource, DirectorySource, ManifestSource
from imgcheck.models.config import DEFAULT_PAGE_SIZE, AuditConfig
from imgcheck.notify import ConsoleNotifier


def _build_source(source: str, config: AuditConfig, base_dir: Optional[str]) -> DataSource:
    path = Path(source)
    if path.is_dir():
        return DirectorySource(path, config.extensions, include_derived=config.include_derived)
    if path.is_file():
        return ManifestSource(path, base_dir=base_dir)
    console.print(f"[red]Error: {source} is not a directory or attachment export[/red]")
    raise typer.Exit(1)


def audit(
    source: str = typer.Argument(
        ..., help="Directory of images, or JSONL export of attachment records"
    ),
    page_size: int = typer.Option(
        DEFAULT_PAGE_SIZE,
        "--page-size",
        "--bulk-size",
        min=1,
        clamp=True,
        help="Number of images to process in one batch",
    ),
    base_dir: Optional[str] = typer.Option(
        None, "--base-dir", help="Uploads directory for relative paths in an export"
    ),
    include_derived: bool = typer.Option(
        False, "--include-derived", help="Also check resized variants such as name-150x150.jpg"
    ),
    extensions: Optional[str] = typer.Option(
        None, "--extensions", help="Comma-separated extensions"
    ),
    policy_path: Optional[str] = policy_opt,
    dpi_threshold: Optional[int] = dpi_threshold_opt,
    progress: bool = typer.Option(True, "--progress/--no-progress", help="Show a progress bar"),
    output: Optional[str] = output_opt,
) -> None:
    """Check every top-level image for DPI and color model, page by page.

    Exit code 0 = no errors, 2 = one or more checks failed.
    """
    from imgcheck.pipeline.runner import BatchRunner

    config = AuditConfig(
        page_size=page_size, include_derived=include_derived, show_progress=progress
    )
    if extensions:
        config.extensions = tuple(f".{e.strip().lstrip('.')}" for e in extensions.split(","))

    policy = resolve_policy(policy_path, dpi_threshold)
    data_source = _build_source(source, config, base_dir)

    runner = BatchRunner(
        data_source,
        policy=policy,
        notifier=ConsoleNotifier(console),
        console=console if config.show_progress else None,
    )
    report = runner.run(config.page_size)

    if report.missing:
        console.print(f"  Missing files: [yellow]{report.missing:,}[/yellow]")

    if output:
        write_json(report.to_dict(), output)

    if not report.passed:
        raise typer.Exit(2)
