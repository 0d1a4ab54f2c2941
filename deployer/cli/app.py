from __future__ import annotations

import typer

from deployer import __version__
from deployer.cli.commands.package_cmd import package
from deployer.cli.commands.plan_cmd import plan
from deployer.cli.commands.publish_cmd import publish


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(package)
app.command()(publish)
app.command()(plan)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)
    ctx.obj = {"verbose": verbose}


def main() -> None:
    app()
