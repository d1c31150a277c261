import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from attention_editor.cli.analyze import analyze
from attention_editor.cli.metadata import metadata_app
from attention_editor.cli.serve import serve
from attention_editor.cli.tree import tree
from attention_editor.config import get_settings

app = typer.Typer(
    name="attention-editor",
    help="Attention Editor CLI — inspect folders and edit per-file attention metadata.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def configure_logging(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output.")] = False,
) -> None:
    level = logging.DEBUG if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


app.command("analyze")(analyze)
app.command("tree")(tree)
app.add_typer(metadata_app, name="metadata")
app.command("serve")(serve)


def main() -> None:
    app()
