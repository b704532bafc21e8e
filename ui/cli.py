"""Console presentation for the grading run."""

from typing import List

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.grader import GradeResult, Status

console = Console()

STATUS_STYLES = {
    Status.FAILED_BY_ABSENCE: "bold red",
    Status.FAILED_BY_GRADE: "red",
    Status.FINAL_EXAM: "yellow",
    Status.APPROVED: "green",
}

def display_welcome(spreadsheet_id: str, sheet_range: str):
    """Displays a welcome message."""
    console.print(Panel(
        "[bold green]Sheets Attendance Grader[/bold green]",
        title="Welcome",
        border_style="blue"
    ))
    console.print(f"Spreadsheet: [cyan]{spreadsheet_id}[/cyan]  Range: [cyan]{sheet_range}[/cyan]")
    console.rule()

def display_farewell():
    console.rule()
    console.print("[bold cyan]Grading process complete. Exiting.[/bold cyan]")

def display_error(message: str):
    """Displays an error message in a standard format."""
    console.print(Panel(f"[bold red]Error:[/bold red] {message}", title="Error", border_style="red"))

def display_warning(message: str):
    console.print(f"[yellow]Warning:[/yellow] {message}")

def display_success(message: str):
    console.print(f"[green]Success:[/green] {message}")

def display_step(step_number: int, description: str):
    """Displays the current step in the process."""
    console.print(f"\n[bold blue]Step {step_number}:[/bold blue] {description}")
    console.rule()

def build_results_table(results: List[GradeResult]) -> Table:
    """Builds a table with one line per graded student."""
    table = Table(title="Grading Results", show_header=True, header_style="bold magenta")
    table.add_column("Row", style="dim", justify="right")
    table.add_column("Faltas", justify="right")
    table.add_column("P1", justify="right")
    table.add_column("P2", justify="right")
    table.add_column("P3", justify="right")
    table.add_column("Faltas %", justify="right")
    table.add_column("Média", justify="right")
    table.add_column("Situação")
    table.add_column("Nota p/ Aprovação Final", justify="right")

    for result in results:
        row = result.row
        table.add_row(
            str(row.row_number),
            f"{row.absences:g}",
            "-" if row.p1 is None else str(row.p1),
            "-" if row.p2 is None else str(row.p2),
            "-" if row.p3 is None else str(row.p3),
            f"{result.absence_percent}%",
            "-" if result.mean_grade is None else str(result.mean_grade),
            Text(result.status.value, style=STATUS_STYLES[result.status]),
            str(result.final_grade),
        )
    return table

def display_results(results: List[GradeResult]):
    """Displays the results table followed by a count per status."""
    if not results:
        console.print("[yellow]No students were graded.[/yellow]")
        return

    console.print(build_results_table(results))
    counts = {status: 0 for status in Status}
    for result in results:
        counts[result.status] += 1
    summary = ", ".join(f"{status.value}: {count}" for status, count in counts.items())
    console.print(f"Summary: {len(results)} students ({summary}).")
