import typer

from pcdm_manifests.cli.path import path_app
from pcdm_manifests.cli.render import annotation_list, manifest
from pcdm_manifests.cli.serve import serve

app = typer.Typer(
    name="pcdm-manifests",
    help="PCDM Manifests CLI: render IIIF manifests and annotation lists.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("manifest")(manifest)
app.command("list")(annotation_list)
app.add_typer(path_app, name="path")
app.command("serve")(serve)


def main() -> None:
    app()
