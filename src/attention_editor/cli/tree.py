from typing import Annotated

import typer
from rich.console import Console
from rich.tree import Tree

from attention_editor.core.tree import scan_tree
from attention_editor.models import TreeNode

console = Console()


def _render(node: TreeNode, branch: Tree) -> None:
    for child in node.children:
        if child.type == "directory":
            _render(child, branch.add(f"[bold blue]{child.name}/[/bold blue]"))
        else:
            branch.add(child.name)


def tree(
    path: Annotated[str, typer.Argument(help="Folder to render.")] = ".",
    max_depth: Annotated[int | None, typer.Option(help="Maximum directory depth to descend.")] = None,
) -> None:
    """Print the ordered file tree of a folder."""
    scan = scan_tree(path, max_depth=max_depth)
    if scan.tree is None:
        console.print(f"[red]Not a directory: {path}[/red]")
        raise typer.Exit(1)

    root = Tree(f"[bold blue]{scan.tree.name}/[/bold blue]")
    _render(scan.tree, root)
    console.print(root)
    for warning in scan.warnings:
        console.print(f"[yellow]skipped[/yellow] {warning.relative_path} ({warning.reason})")
