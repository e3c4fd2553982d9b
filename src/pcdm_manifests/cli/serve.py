from typing import Annotated

import typer
from rich.console import Console

from pcdm_manifests.config import get_settings

console = Console()


def serve(
    host: Annotated[str, typer.Option(help="Interface to bind.")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Port to listen on.")] = 8000,
) -> None:
    """Start the manifest API server."""
    import uvicorn

    from pcdm_manifests.api.app import create_app

    settings = get_settings()
    app = create_app()
    console.print(f"[green]Starting API server on {host}:{port}[/green]")
    console.print(f"  Solr:   {settings.solr_url}")
    console.print(f"  Fedora: {settings.fcrepo_url}")
    uvicorn.run(app, host=host, port=port, log_level=settings.log_level.lower())
