"""Rich Console factory and theme for dentalctl output.

Consoles render into a StringIO buffer so every renderer keeps the
``render_* -> str`` contract. Rich drops color codes on its own when the
output is not a terminal (CliRunner, pipes).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DENTAL_THEME = Theme(
    {
        "dental.ok": "bold green",
        "dental.error": "bold red",
        "dental.warning": "bold yellow",
        "dental.op": "bold cyan",
        "dental.key": "dim",
        "dental.field": "bold",
        "dental.granted": "green",
        "dental.denied": "red",
        "dental.role.kepala_klinik": "bold magenta",
        "dental.role.dokter": "bold blue",
        "dental.role.staf": "bold yellow",
    }
)

GRANTED_MARK = "✓"
DENIED_MARK = "·"


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (keeps tables stable in tests).
    """
    return Console(
        file=StringIO(),
        theme=DENTAL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_role(role: str) -> str:
    """Rich style for a role column header; custom roles get none."""
    style = f"dental.role.{role}"
    return style if style in DENTAL_THEME.styles else ""
