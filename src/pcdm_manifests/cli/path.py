from typing import Annotated

import typer
from rich.console import Console

from pcdm_manifests.adapters import FcrepoAdapter
from pcdm_manifests.config import get_settings
from pcdm_manifests.core.paths import PathCodec, parse_id
from pcdm_manifests.errors import ProblemError

path_app = typer.Typer(help="Translate between repository URIs and public ids.")
console = Console()
err_console = Console(stderr=True)


def _codec() -> PathCodec:
    return PathCodec(FcrepoAdapter.prefix, get_settings().fcrepo_url)


@path_app.command("to-uri")
def to_uri(
    identifier: Annotated[str, typer.Argument(help="Public id, abbreviated or not.")],
) -> None:
    """Print the repository URI of a public id."""
    codec = _codec()
    try:
        prefix, _local = parse_id(identifier)
        if prefix != codec.prefix:
            err_console.print(f"[red]Unrecognized prefix '{prefix}'[/red]")
            raise typer.Exit(code=1)
        console.print(codec.id_to_uri(identifier), highlight=False)
    except ProblemError as exc:
        err_console.print(f"[red]{exc.details}[/red]")
        raise typer.Exit(code=1) from exc


@path_app.command("from-uri")
def from_uri(
    uri: Annotated[str, typer.Argument(help="Repository URI.")],
    expand: Annotated[bool, typer.Option(help="Keep the pairtree instead of abbreviating it.")] = False,
) -> None:
    """Print the public id of a repository URI."""
    try:
        console.print(_codec().uri_to_id(uri, abbreviate=not expand), highlight=False)
    except ProblemError as exc:
        err_console.print(f"[red]{exc.details}[/red]")
        raise typer.Exit(code=1) from exc
