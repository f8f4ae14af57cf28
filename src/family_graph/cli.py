"""CLI for inspecting family tree snapshots."""

import json
from pathlib import Path
from typing import Any

import typer
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import FamilyGraphConfig, KinshipConfig, load_config
from .derivation import ImpliedRelationDeriver
from .kinship import KinshipResolver
from .layout import TreeLayoutEngine
from .logging import LOG_LEVELS, configure_logging
from .models import coerce_persons, coerce_relations

app = typer.Typer(
    name="family-graph",
    help="Family relationship graph: kinship, implied relations and tree layout",
    add_completion=False,
)
console = Console()


class SnapshotFile(BaseModel):
    """JSON snapshot of one family tree.

    Records stay loose mappings here; each one is validated on its own so
    a single bad relation does not reject the whole file.
    """

    persons: list[dict[str, Any]] = []
    relations: list[dict[str, Any]] = []


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Minimum level of engine log events"),
):
    """Family relationship graph: kinship, implied relations and tree layout."""
    level = log_level.upper()
    if level not in LOG_LEVELS:
        raise typer.BadParameter(f"choose one of {', '.join(LOG_LEVELS)}", param_hint="--log-level")
    configure_logging(level)


def get_config() -> FamilyGraphConfig:
    """Load configuration from environment."""
    from dotenv import load_dotenv

    load_dotenv()
    return load_config()


def load_snapshot(path: Path) -> SnapshotFile:
    """Read a snapshot file, exiting with status 1 when it is unusable."""
    if not path.exists():
        console.print(f"[red]Error: File not found: {path}[/red]")
        raise typer.Exit(1)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return SnapshotFile.model_validate(data)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: {path.name} is not valid JSON: {e}[/red]")
        raise typer.Exit(1)
    except ValidationError as e:
        console.print(f"[red]Error: {path.name} is not a family snapshot: {e.error_count()} problem(s)[/red]")
        raise typer.Exit(1)


def _report_rejected(relations: list[dict[str, Any]]) -> None:
    _, rejected = coerce_relations(relations)
    for error in rejected:
        console.print(f"[yellow]Skipped {error}[/yellow]")


@app.command()
def inspect(
    snapshot: Path = typer.Argument(..., help="Path to snapshot JSON"),
):
    """Show persons, generations and relations of a snapshot."""
    config = get_config()
    data = load_snapshot(snapshot)
    _report_rejected(data.relations)

    engine = TreeLayoutEngine(data.persons, data.relations, config=config.layout)
    generations = engine.assign_generations()
    roots = set(engine.roots())

    table = Table(title="Persons")
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Gender")
    table.add_column("Generation")
    table.add_column("Root")

    for person in engine.persons.values():
        table.add_row(
            person.id,
            person.display_name,
            person.gender.value,
            str(generations.get(person.id, 0)),
            "yes" if person.id in roots else "",
        )

    console.print(table)

    relations_table = Table(title="Relations")
    relations_table.add_column("Type")
    relations_table.add_column("Person 1")
    relations_table.add_column("Person 2")

    for relation in engine.snapshot.relations:
        relations_table.add_row(relation.relation_type, relation.person1_id, relation.person2_id)

    console.print(relations_table)
    console.print(f"[dim]{len(engine.persons)} persons, {len(roots)} root(s)[/dim]")


@app.command()
def resolve(
    snapshot: Path = typer.Argument(..., help="Path to snapshot JSON"),
    from_id: str = typer.Argument(..., help="Person whose relationship is shown"),
    to_id: str = typer.Argument(..., help="Person the relationship is seen from"),
    locale: str = typer.Option(None, "--locale", "-l", help="Label locale (en, ru)"),
):
    """Show what FROM_ID is to TO_ID."""
    config = get_config()
    data = load_snapshot(snapshot)

    kinship = KinshipConfig(
        max_path_depth=config.kinship.max_path_depth,
        locale=locale or config.kinship.locale,
    )
    resolver = KinshipResolver(data.relations, data.persons, config=kinship)
    result = resolver.resolve(from_id, to_id)

    if not result.is_related:
        console.print(f"[yellow]No relation found between {from_id} and {to_id}[/yellow]")
        console.print(f"[dim]{resolver.explain(from_id, to_id)}[/dim]")
        return

    body = f"[bold]Category:[/bold] {result.category.value}\n[bold]Label:[/bold] {result.label}"
    console.print(Panel(body, title=f"{from_id} → {to_id}"))
    console.print(f"[dim]{resolver.explain(from_id, to_id)}[/dim]")


@app.command()
def layout(
    snapshot: Path = typer.Argument(..., help="Path to snapshot JSON"),
    output: Path = typer.Option(None, "--output", "-o", help="Write positions to a JSON file"),
):
    """Compute classic tree layout coordinates."""
    config = get_config()
    data = load_snapshot(snapshot)

    positions = TreeLayoutEngine(data.persons, data.relations, config=config.layout).layout()

    if output:
        with open(output, "w", encoding="utf-8") as f:
            json.dump([p.to_dict() for p in positions], f, indent=2)
        console.print(f"[green]Positions saved to {output}[/green]")
        return

    table = Table(title="Layout")
    table.add_column("Person")
    table.add_column("X", justify="right")
    table.add_column("Y", justify="right")

    for position in positions:
        table.add_row(position.person_id, f"{position.x:.1f}", f"{position.y:.1f}")

    console.print(table)


@app.command()
def derive(
    snapshot: Path = typer.Argument(..., help="Path to snapshot JSON"),
):
    """List implied relations missing from a snapshot."""
    get_config()
    data = load_snapshot(snapshot)
    _report_rejected(data.relations)

    proposed = ImpliedRelationDeriver(data.relations).derive()
    if not proposed:
        console.print("[green]No implied relations missing[/green]")
        return

    names = {p.id: p.display_name for p in coerce_persons(data.persons)}

    table = Table(title="Implied Relations")
    table.add_column("Type")
    table.add_column("Person 1")
    table.add_column("Person 2")

    for relation in proposed:
        table.add_row(
            relation.relation_type,
            names.get(relation.person1_id) or relation.person1_id,
            names.get(relation.person2_id) or relation.person2_id,
        )

    console.print(table)
    console.print(f"[dim]{len(proposed)} relation(s) to add[/dim]")


if __name__ == "__main__":
    app()
