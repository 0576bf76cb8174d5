"""Root Typer app with global options."""

from __future__ import annotations

from typing import Optional

import typer

app = typer.Typer(
    name="imgcheck",
    help="Check that images do not exceed a DPI threshold and use the RGB color model.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        from imgcheck import __version__

        typer.echo(f"imgcheck {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=_version_callback, is_eager=True, help="Show version."
    ),
) -> None:
    """imgcheck — image resolution and color model checks."""


# Import and register commands
from imgcheck.cli.check import check  # noqa: E402
from imgcheck.cli.audit import audit  # noqa: E402

app.command()(check)
app.command()(audit)
