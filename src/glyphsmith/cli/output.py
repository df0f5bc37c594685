"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with formatted step, summary and error messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from glyphsmith.utils.logging import BatchStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Glyphsmith[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_source_info(path: str, glyph_count: int, detail: str | None = None) -> None:
    """Print the input file and how many glyphs it holds.

    Args:
        path: Input file path
        glyph_count: Number of glyphs in the input
        detail: Optional extra info (e.g. family name)
    """
    line = Text("  ")
    line.append(path)
    if detail:
        line.append(f" ({detail})")
    console.print(line)
    console.print(f"  {glyph_count:,} glyphs")


def format_file_size(size_bytes: int) -> str:
    """Format a byte count in human-readable form (e.g. "12 KB")."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def print_success(output_path: str, file_size: str, stats: BatchStats, noun: str) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        stats: Batch outcome
        noun: What was done per glyph ("compiled", "imported")
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green]")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)

    error_style = "red" if stats.error_count > 0 else "green"
    console.print(
        f"  {stats.processed_count} glyphs {noun} {SYM_DOT} {stats.skipped_count} skipped {SYM_DOT} "
        f"[{error_style}]{stats.error_count} errors[/{error_style}]"
    )


def print_skipped(stats: BatchStats, limit: int = 20) -> None:
    """Print a table of skipped and failed glyphs."""
    rows = [(char, "skipped", reason) for char, reason in stats.skipped]
    rows += [(char, "error", reason) for char, reason in stats.errors]
    if not rows:
        return

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Glyph")
    table.add_column("Status")
    table.add_column("Reason")
    for char, status, reason in rows[:limit]:
        style = "red" if status == "error" else "yellow"
        table.add_row(char, f"[{style}]{status}[/{style}]", reason)
    console.print(table)
    if len(rows) > limit:
        console.print(f"  ... +{len(rows) - limit} more")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
