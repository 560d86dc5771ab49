"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with formatted step, summary and error messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

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
    console.print(f"\n[bold]Glyphpack[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_server_info(host: str, port: int, data_dir: str) -> None:
    """Print where the server listens and stores files."""
    console.print(f"  http://{host}:{port} {SYM_DOT} data in {data_dir}")


def print_mappings(rows: list[tuple[str, str]]) -> None:
    """Print the file-to-codepoint table of a build.

    Args:
        rows: ``(filename, "U+XXXX")`` pairs in mapping order
    """
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Icon")
    table.add_column("Code point")
    for filename, codepoint in rows:
        table.add_row(Text(filename), codepoint)
    console.print(table)


def _format_size(size_bytes: int) -> str:
    """Format file size in human-readable form."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def print_success(output_path: str, size_bytes: int, entries: list[str], total_time_s: float) -> None:
    """Print success message with bundle summary.

    Args:
        output_path: Path to written archive
        size_bytes: Archive size
        entries: Filenames contained in the archive
        total_time_s: Total build time in seconds
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {total_time_s:.1f}s")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({_format_size(size_bytes)})")
    console.print(line)
    console.print(f"  {f' {SYM_DOT} '.join(entries)}")


def print_cleanup_summary(removed: int, failed: list[tuple[str, str]]) -> None:
    """Print the outcome of a bulk cleanup.

    Args:
        removed: Number of files deleted
        failed: ``(name, reason)`` for files that could not be deleted
    """
    if not failed:
        console.print(f"\n[bold green]{SYM_OK} Cleaned[/bold green] {removed} file(s)")
        return

    console.print(
        f"\n[bold yellow]{SYM_ERR} Partially cleaned[/bold yellow] "
        f"{removed} removed {SYM_DOT} [red]{len(failed)} failed[/red]"
    )
    for name, reason in failed:
        console.print(f"  {name}: {reason}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
