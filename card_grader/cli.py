"""Command-line interface for Card Grader."""

import json
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .core.types import CardDetails, GradeResult, ImageSide
from .pipeline.orchestrator import CardGrader
from .utils.error_handler import CardGraderError
from .utils.log import configure_logging, get_logger

configure_logging(stream=sys.stderr)
logger = get_logger(__name__)

console = Console()

app = typer.Typer(
    name="card-grader",
    help="Card Grader - condition scoring and listing details from card photos",
    add_completion=False
)


def _details_table(details: CardDetails, title: str = "Identified Card") -> Table:
    table = Table(title=title)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Name", details.name)
    table.add_row("Set", details.set)
    table.add_row("Number", f"#{details.number}")
    table.add_row("Type", details.type)
    table.add_row("Rarity", details.rarity)
    table.add_row("Category", details.category.value)
    return table


def _grade_table(result: GradeResult) -> Table:
    table = Table(title="Grading Analysis")
    table.add_column("Feature", style="cyan")
    table.add_column("Score", style="white", justify="right")

    for name, score in result.scores.items():
        table.add_row(name.capitalize(), f"{score:.1f}")
    table.add_row("[bold]Grade[/bold]", f"[bold]{result.grade:.1f}[/bold]")
    return table


@app.command()
def grade(
    front: Path = typer.Argument(..., exists=True, dir_okay=False, help="Front image of the card"),
    back: Optional[Path] = typer.Argument(None, exists=True, dir_okay=False, help="Back image of the card"),
    as_json: bool = typer.Option(False, "--json", "-j", help="Print the result as JSON"),
):
    """Grade card condition from front and back photos."""
    grader = CardGrader()

    if not as_json:
        console.print(Panel.fit(
            "[bold blue]Card Grader[/bold blue]\n"
            "[dim]Text → normalize → centering → corners → edges → surface[/dim]",
            border_style="blue"
        ))

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            disable=as_json,
        ) as progress:
            task = progress.add_task("Starting analysis...", total=None)

            def on_progress(step: str, details: str):
                progress.update(task, description=f"{step}: {details}")

            result = grader.analyze(front, back, progress_sink=on_progress)

    except CardGraderError as e:
        console.print(f"[red]❌ Analysis failed: {e.message}[/red]")
        logger.error("Analysis failed", error=str(e))
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return

    if back is None:
        console.print("[yellow]⚠ No back image supplied - condition scores skipped[/yellow]")
    else:
        console.print(_grade_table(result))
    console.print(_details_table(result.card_details))


@app.command()
def text(
    image: Path = typer.Argument(..., exists=True, dir_okay=False, help="Card image to read"),
    side: ImageSide = typer.Option(ImageSide.FRONT, "--side", "-s", help="Which side the image shows"),
    as_json: bool = typer.Option(False, "--json", "-j", help="Print the result as JSON"),
):
    """Extract card details from a single image without grading."""
    grader = CardGrader()

    try:
        details = grader.extract_details(image, side)
    except CardGraderError as e:
        console.print(f"[red]❌ Text extraction failed: {e.message}[/red]")
        logger.error("Text extraction failed", error=str(e))
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(details.to_dict(), indent=2))
        return

    console.print(_details_table(details, title=f"Card Details ({side.value})"))


if __name__ == "__main__":
    app()
