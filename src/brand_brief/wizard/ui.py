"""
Brand Brief Wizard UI Components

Reusable terminal UI components for the onboarding wizard using rich library.
"""

import re
from typing import Callable, Dict, List, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table


# Patterns that indicate a secret value
SECRET_PATTERNS = [
    "token", "password", "secret", "credential",
    "access_token", "refresh_token", "client_secret", "bearer",
]

# Regex patterns for common Google secret formats
SECRET_REGEXES = [
    r'ya29\.[a-zA-Z0-9_\-]{20,}',  # OAuth access tokens
    r'1//[a-zA-Z0-9_\-]{20,}',  # OAuth refresh tokens
    r'GOCSPX-[a-zA-Z0-9_\-]{10,}',  # OAuth client secrets
    r'AIza[a-zA-Z0-9_\-]{35}',  # API keys
]


def mask_secrets(text: str, mask: str = "********") -> str:
    """Mask secrets in a string.

    Args:
        text: The text that may contain secrets
        mask: The string to replace secrets with

    Returns:
        Text with secrets masked
    """
    if not text:
        return text

    result = text

    # Mask known secret patterns in key=value format
    for pattern in SECRET_PATTERNS:
        regex = rf'({pattern}["\']?\s*[=:]\s*["\']?)([^"\'\s,}}]+)(["\']?)'
        result = re.sub(regex, rf'\1{mask}\3', result, flags=re.IGNORECASE)

    # Mask specific secret formats
    for regex in SECRET_REGEXES:
        result = re.sub(regex, mask, result)

    return result


class WizardUI:
    """UI components for the Brand Brief onboarding wizard."""

    def __init__(self, console: Optional[Console] = None, total_steps: int = 7):
        self.console = console or Console()
        self._step_number = 0
        self._total_steps = total_steps

    def print_header(self, title: str = "Brand Brief - Digit Ads"):
        """Print the wizard header."""
        self.console.print()
        self.console.print(Panel(
            f"[bold blue]{title}[/bold blue]",
            border_style="blue",
            padding=(0, 2)
        ))
        self.console.print()

    def print_step_header(self, step_num: int, title: str, description: str = ""):
        """Print a step header with number and title."""
        self._step_number = step_num
        self.console.print()
        self.console.print(f"[bold cyan]Paso {step_num} de {self._total_steps}:[/bold cyan] [bold]{title}[/bold]")
        if description:
            self.console.print(f"[dim]{description}[/dim]")
        self.console.print()

    def print_success(self, message: str):
        """Print a success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def print_error(self, message: str):
        """Print an error message."""
        self.console.print(f"[red]✗[/red] {message}")

    def print_warning(self, message: str):
        """Print a warning message."""
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    def print_info(self, message: str):
        """Print an info message."""
        self.console.print(f"[blue]ℹ[/blue] {message}")

    def prompt_text(
        self,
        prompt: str,
        default: str = "",
        required: bool = False,
        validator: Optional[Callable[[str], bool]] = None,
        error_message: str = "Valor inválido"
    ) -> str:
        """Prompt for text input."""
        while True:
            value = Prompt.ask(prompt, default=default if default else None, console=self.console)
            value = value or ""

            if required and not value:
                self.print_error("Este campo es obligatorio")
                continue

            if validator and value and not validator(value):
                self.print_error(error_message)
                continue

            return value

    def prompt_confirm(self, prompt: str, default: bool = False) -> bool:
        """Prompt for yes/no confirmation."""
        return Confirm.ask(prompt, default=default, console=self.console)

    def prompt_choice(
        self,
        prompt: str,
        choices: Sequence[str],
        default: Optional[str] = None
    ) -> str:
        """Prompt for a choice from a list."""
        self.console.print(f"\n{prompt}")
        for i, choice in enumerate(choices, 1):
            marker = "[bold green]→[/bold green]" if choice == default else " "
            self.console.print(f"  {marker} [{i}] {choice}")

        while True:
            selection = Prompt.ask(
                "Número u opción",
                default=str(choices.index(default) + 1) if default in choices else None,
                console=self.console
            ) or ""

            # Try numeric selection
            try:
                idx = int(selection) - 1
                if 0 <= idx < len(choices):
                    return choices[idx]
            except ValueError:
                pass

            # Try name match
            for choice in choices:
                if choice.lower() == selection.lower():
                    return choice

            self.print_error(f"Selección inválida. Elija 1-{len(choices)}")

    def prompt_multi_choice(
        self,
        prompt: str,
        choices: Sequence[str],
        selected: Optional[Sequence[str]] = None
    ) -> List[str]:
        """Prompt for several choices, entered as comma-separated numbers.

        Returns the selection in the order of `choices`.
        """
        selected = list(selected or [])
        self.console.print(f"\n{prompt}")
        for i, choice in enumerate(choices, 1):
            marker = "[bold green]■[/bold green]" if choice in selected else "□"
            self.console.print(f"  {marker} [{i}] {choice}")

        default = ",".join(str(choices.index(s) + 1) for s in selected if s in choices)
        while True:
            answer = Prompt.ask(
                "Números separados por coma",
                default=default or None,
                console=self.console
            ) or ""
            picked = []
            valid = True
            for part in answer.split(","):
                part = part.strip()
                if not part:
                    continue
                if not part.isdigit() or not 1 <= int(part) <= len(choices):
                    valid = False
                    break
                picked.append(choices[int(part) - 1])
            if valid:
                return [choice for choice in choices if choice in picked]
            self.print_error(f"Selección inválida. Use números entre 1 y {len(choices)}")

    def show_errors(self, errors: Dict[str, List[str]], labels: Optional[Dict[str, str]] = None):
        """Show field errors inline, one line per field."""
        labels = labels or {}
        for path, messages in errors.items():
            label = labels.get(path, path)
            for message in messages:
                self.print_error(f"{label}: {message}")

    def show_summary_table(self, title: str, data: Dict[str, str]):
        """Show a summary table with secrets masked."""
        table = Table(title=title, border_style="blue")
        table.add_column("Campo", style="cyan")
        table.add_column("Valor", style="white")

        for key, value in data.items():
            display_value = mask_secrets(value) if value else "[dim]sin valor[/dim]"
            table.add_row(key, display_value)

        self.console.print(table)

    def show_completion_panel(
        self,
        title: str,
        content: str,
        next_steps: List[str]
    ):
        """Show a completion panel with next steps."""
        self.console.print()
        self.console.print(Panel(
            f"[bold green]{title}[/bold green]\n\n{content}",
            border_style="green",
            padding=(1, 2)
        ))

        if next_steps:
            self.console.print()
            self.console.print("[bold]Próximos pasos:[/bold]")
            for i, step in enumerate(next_steps, 1):
                self.console.print(f"  {i}. {step}")
