import typer
from rich.console import Console

console = Console()


def serve(
    host: str = "127.0.0.1",
    port: int = 8000,
) -> None:
    """Start the FastAPI server."""
    import uvicorn

    from attention_editor.api.app import create_app

    app = create_app()
    console.print(f"[green]Starting API server on {host}:{port}[/green]")
    uvicorn.run(app, host=host, port=port)
