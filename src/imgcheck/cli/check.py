"""imgcheck check — upload gate for individual files."""

from __future__ import annotations

import os
from typing import Any, Optional

import typer
from rich.markup import escape

from imgcheck.cli.common import (
    console,
    dpi_threshold_opt,
    output_opt,
    policy_opt,
    resolve_policy,
    write_json,
)
from imgcheck.core.gate import check_image
from imgcheck.core.inspector import ImageInspector
from imgcheck.exceptions import FileMissing


def check(
    files: list[str] = typer.Argument(..., help="Image files to check"),
    policy_path: Optional[str] = policy_opt,
    dpi_threshold: Optional[int] = dpi_threshold_opt,
    output: Optional[str] = output_opt,
) -> None:
    """Check image files the way an upload is gated: DPI first, then color model.

    Exit code 0 = all files accepted, 1 = a file is missing, 2 = a file is rejected.
    """
    policy = resolve_policy(policy_path, dpi_threshold)
    inspector = ImageInspector()

    results: list[dict[str, Any]] = []
    rejected = 0
    missing = 0
    for path in files:
        name = escape(os.path.basename(path))
        try:
            outcome = check_image(path, policy, inspector)
        except FileMissing:
            missing += 1
            console.print(f"  [yellow]MISSING[/yellow]  {name}")
            results.append({"path": path, "missing": True})
            continue

        if outcome.passed:
            console.print(f"  [green]PASS[/green]  {name}")
        else:
            rejected += 1
            console.print(f"  [red]FAIL[/red]  {name}: {escape(outcome.message)}")
        results.append({"path": path, "missing": False, **outcome.to_dict()})

    if output:
        write_json(results, output)

    if missing:
        raise typer.Exit(1)
    if rejected:
        raise typer.Exit(2)
