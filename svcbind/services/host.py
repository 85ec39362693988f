"""Host capabilities used by the binding flows.

This module provides:
- Interface for prompting the user and showing notices
- Terminal implementation rendered with rich
- Clipboard writer backed by the platform's copy command
"""

import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from rich.console import Console
from rich.prompt import IntPrompt
from rich.table import Table


logger = logging.getLogger(__name__)


class HostInterface(ABC):
    """Abstract interface for user interaction."""

    @abstractmethod
    def choose(self, options: Sequence[str], placeholder: str) -> Optional[str]:
        """Ask the user to pick one option.

        Returns:
            The selected option, or None if the user cancelled
        """
        pass

    @abstractmethod
    def info(self, text: str) -> None:
        pass

    @abstractmethod
    def error(self, text: str) -> None:
        pass


class ConsoleHost(HostInterface):
    """Terminal host: numbered pick list plus coloured notices."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def choose(self, options: Sequence[str], placeholder: str) -> Optional[str]:
        if not options:
            return None

        self.console.print(f"[bold]{placeholder}[/bold]", highlight=False)
        table = Table(show_header=False, box=None)
        table.add_column(justify="right", style="cyan")
        table.add_column()
        for index, option in enumerate(options, start=1):
            table.add_row(str(index), option)
        table.add_row("0", "[dim]cancel[/dim]")
        self.console.print(table)

        try:
            choice = IntPrompt.ask(
                "Selection",
                console=self.console,
                choices=[str(i) for i in range(len(options) + 1)],
                show_choices=False,
            )
        except (EOFError, KeyboardInterrupt):
            self.console.print()
            return None

        if choice == 0:
            return None
        return options[choice - 1] or None

    def info(self, text: str) -> None:
        self.console.print(f"[cyan]{text}[/cyan]", highlight=False)

    def error(self, text: str) -> None:
        self.console.print(f"[bold red]{text}[/bold red]", highlight=False)


class ClipboardError(RuntimeError):
    """Raised when no clipboard command is available or it fails."""
    pass


class ClipboardInterface(ABC):
    """Abstract interface for writing text to the clipboard."""

    @abstractmethod
    def write(self, text: str) -> None:
        pass


class SystemClipboard(ClipboardInterface):
    """Pipes text into the first copy command found on PATH."""

    # macOS, Wayland, X11 (xclip, xsel), Windows
    COMMANDS: tuple[tuple[str, ...], ...] = (
        ("pbcopy",),
        ("wl-copy",),
        ("xclip", "-selection", "clipboard"),
        ("xsel", "--clipboard", "--input"),
        ("clip",),
    )

    def find_command(self) -> Optional[list[str]]:
        for command in self.COMMANDS:
            if shutil.which(command[0]):
                return list(command)
        return None

    def write(self, text: str) -> None:
        command = self.find_command()
        if command is None:
            raise ClipboardError(
                "Could not write to clipboard. Install xclip or xsel (Linux) or use macOS."
            )

        try:
            result = subprocess.run(
                command, input=text, capture_output=True, text=True, timeout=5
            )
        except (subprocess.TimeoutExpired, OSError) as e:
            raise ClipboardError(f"{command[0]} failed: {e}") from e

        if result.returncode != 0:
            raise ClipboardError(f"{command[0]} failed: {result.stderr.strip()}")
        logger.debug("Copied %d characters with %s", len(text), command[0])
