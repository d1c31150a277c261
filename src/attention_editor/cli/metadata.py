import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from attention_editor.core.errors import AccessDeniedError
from attention_editor.core.metadata import MetadataStore
from attention_editor.models import MetadataUpdate

metadata_app = typer.Typer(help="Read and write per-file metadata.")
console = Console()


def _parse_pairs(pairs: list[str], option: str) -> dict[str, str]:
    parsed: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint=option)
        parsed[key.strip()] = value.strip()
    return parsed


def _render_mapping(title: str, values: dict[str, object]) -> None:
    table = Table(title=title)
    table.add_column("key")
    table.add_column("value")
    for key, value in values.items():
        table.add_row(key, str(value))
    console.print(table)


@metadata_app.command("show")
def show(
    root: Annotated[str, typer.Argument(help="Folder root.")],
    file: Annotated[str, typer.Argument(help="File path, absolute or relative to the root.")],
) -> None:
    """Show the merged metadata of one file."""
    try:
        metadata = MetadataStore(root).read_file_metadata(file)
    except AccessDeniedError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc

    if not metadata.has_metadata:
        console.print(f"No metadata for {file}")
    _render_mapping("Attributes", metadata.attributes)
    _render_mapping("Priorities", metadata.priorities)
    console.print(f"Facets: {', '.join(str(f) for f in metadata.facets) or '-'}")


@metadata_app.command("set")
def set_metadata(
    root: Annotated[str, typer.Argument(help="Folder root.")],
    file: Annotated[str, typer.Argument(help="File path, absolute or relative to the root.")],
    attribute: Annotated[list[str] | None, typer.Option("--attribute", "-a", help="KEY=VALUE attribute.")] = None,
    priority: Annotated[list[str] | None, typer.Option("--priority", "-p", help="KEY=VALUE priority.")] = None,
    facet: Annotated[list[str] | None, typer.Option("--facet", "-f", help="Facet tag.")] = None,
) -> None:
    """Replace the metadata of one file."""
    update = MetadataUpdate(
        attributes=_parse_pairs(attribute or [], "--attribute"),
        priorities=_parse_pairs(priority or [], "--priority"),
        facets=list(facet or []),
    )
    try:
        success = MetadataStore(root).write_file_metadata(file, update)
    except AccessDeniedError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc

    if not success:
        console.print("[red]Failed to update metadata.[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Updated[/green] metadata for {file}")


@metadata_app.command("all")
def show_all(
    root: Annotated[str, typer.Argument(help="Folder root.")],
) -> None:
    """Print the whole-folder metadata snapshot as JSON."""
    snapshot = MetadataStore(root).read_all_metadata()
    console.print_json(snapshot.model_dump_json())


@metadata_app.command("import")
def import_dump(
    root: Annotated[str, typer.Argument(help="Folder root.")],
    source: Annotated[Path, typer.Argument(help="JSON document to write as the metadata dump.")],
) -> None:
    """Overwrite the folder's metadata dump with a JSON document."""
    try:
        data = json.loads(source.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        console.print(f"[red]Cannot load {source}: {exc}[/red]")
        raise typer.Exit(1) from exc

    if not MetadataStore(root).write_all_metadata(data):
        console.print("[red]Failed to write metadata dump.[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Wrote[/green] metadata dump for {root}")
