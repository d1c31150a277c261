from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from attention_editor.core.errors import NotFoundError
from attention_editor.core.profile import analyze_folder

console = Console()


def _flags_table(title: str, flags: dict[str, object]) -> Table:
    table = Table(title=title, show_header=False)
    table.add_column("key")
    table.add_column("value")
    for key, value in flags.items():
        table.add_row(key, str(value))
    return table


def analyze(
    path: Annotated[str, typer.Argument(help="Folder to analyze.")] = ".",
) -> None:
    """Show the git, framework and metadata profile of a folder."""
    try:
        profile = analyze_folder(path)
    except NotFoundError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc

    git = profile.git_profile.model_dump()
    git["branches"] = ", ".join(profile.git_profile.branches) or "-"
    console.print(_flags_table("Git", git))

    for name, framework in profile.framework_profile.model_dump().items():
        console.print(_flags_table(name.capitalize(), framework))

    console.print(_flags_table("Metadata", profile.metadata_profile.model_dump()))
