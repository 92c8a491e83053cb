"""Centralized Rich theme and styled output helpers."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

# Tokyo Night palette
PRIMARY = "#7aa2f7"
SECONDARY = "#9ece6a"
TERTIARY = "#bb9af7"
ERROR = "#f7768e"
ON_SURFACE = "#c0caf5"
OUTLINE = "#565f89"
OUTLINE_VARIANT = "#414868"


def _build_theme() -> Theme:
    """Build the Rich theme used by every command."""
    return Theme(
        {
            "title": f"bold {PRIMARY}",
            "label": OUTLINE,
            "value": ON_SURFACE,
            "success": f"bold {SECONDARY}",
            "warning": f"bold {TERTIARY}",
            "error": f"bold {ERROR}",
            "muted": OUTLINE_VARIANT,
            "info": PRIMARY,
            # Data type colors
            "str": ON_SURFACE,
            "num": TERTIARY,
            "bool_on": f"bold {SECONDARY}",
        }
    )


THEME = _build_theme()
console = Console(theme=THEME, highlight=False)
err_console = Console(theme=THEME, highlight=False, stderr=True)


def print_header(text: str | None) -> None:
    """Print a styled header."""
    if text is not None:
        console.print(f"\n[title]{text}[/title]")


def print_kv(label: str, value: str, label_width: int = 14) -> None:
    """Print a key-value pair with aligned label."""
    console.print(f"  [label]{label:<{label_width}}[/label] [value]{value}[/value]")


def fmt(value: str) -> str:
    """Style a plain value, escaping any Rich markup it contains."""
    return f"[str]{escape(value)}[/str]"


def print_success(text: str) -> None:
    """Print a success message."""
    console.print(f"[success]✓[/success] {text}")


def print_error(text: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[error]✗[/error] {text}")


def print_warning(text: str) -> None:
    """Print a warning message to stderr."""
    err_console.print(f"[warning]![/warning] {text}")


def print_info(text: str) -> None:
    """Print an info message."""
    console.print(f"[info]∟[/info] {text}")


def create_table(*columns: str, title: str | None = None) -> Table:
    """Create a styled table with consistent formatting."""
    table = Table(
        title=title,
        title_style="title",
        header_style="label",
        border_style="muted",
        show_header=True,
        show_edge=True,
        pad_edge=True,
    )
    for col in columns:
        table.add_column(col, no_wrap=True)
    return table
