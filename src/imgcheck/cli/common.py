"""Options and helpers shared by CLI commands."""

from __future__ import annotations

from typing import Any, Optional

import orjson
import typer
import yaml  # type: ignore[import-untyped]
from rich.console import Console

from imgcheck.core.policy import load_policy
from imgcheck.models.policy import Policy

console = Console()

policy_opt = typer.Option(None, "-p", "--policy", help="Path to policy YAML")
dpi_threshold_opt = typer.Option(
    None, "--dpi-threshold", min=0, help="Maximum allowed DPI (overrides the policy file)"
)
output_opt = typer.Option(None, "-o", "--out", help="Output JSON path")


def resolve_policy(policy_path: Optional[str], dpi_threshold: Optional[int]) -> Policy:
    try:
        policy = load_policy(policy_path) if policy_path else Policy()
        if dpi_threshold is not None:
            policy = Policy(dpi_threshold=dpi_threshold)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        console.print(f"[red]Invalid policy: {exc}[/red]")
        raise typer.Exit(1)
    return policy


def write_json(data: Any, output: str) -> None:
    with open(output, "wb") as f:
        f.write(orjson.dumps(data, option=orjson.OPT_INDENT_2))
    console.print(f"[green]Saved to {output}[/green]")
