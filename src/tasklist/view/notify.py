# SPDX-License-Identifier: MIT

from abc import ABC, abstractmethod
from typing import Optional

from rich.console import Console


class Notifier(ABC):
    """Short-lived messages telling the user how an operation went."""

    @abstractmethod
    def success(self, message: str) -> None: ...

    @abstractmethod
    def error(self, message: str) -> None: ...


class ConsoleNotifier(Notifier):
    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(stderr=True)

    def success(self, message: str) -> None:
        self.console.print(f"[green]{message}[/green]")

    def error(self, message: str) -> None:
        self.console.print(f"[red]{message}[/red]")
