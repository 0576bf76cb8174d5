"""Notification sinks for human-readable check outcomes."""

from __future__ import annotations

from typing import Protocol

from rich.console import Console
from rich.markup import escape


class Notifier(Protocol):
    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class ConsoleNotifier:
    """Prints messages to a Rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console if console is not None else Console()

    def info(self, message: str) -> None:
        self.console.print(escape(message))

    def success(self, message: str) -> None:
        self.console.print(f"[green]Success:[/green] {escape(message)}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]Error:[/red] {escape(message)}")


class NullNotifier:
    def info(self, message: str) -> None:
        pass

    def success(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass
