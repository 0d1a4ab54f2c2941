"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from deployer.core.errors import DeployError, exit_code_for
from deployer.core.result import Err, Result
from deployer.output.console import Style

if TYPE_CHECKING:
    from deployer.cli.context import CLIContext


def fail(error: DeployError, ctx: CLIContext) -> NoReturn:
    ctx.console.error(error.message)
    if error.hint:
        ctx.console.print(f"hint: {error.hint}", Style.DIM)
    raise typer.Exit(code=int(exit_code_for(error)))


def exit_on_error[T](result: Result[T, DeployError], ctx: CLIContext) -> T:
    """Return the value of ``result`` or exit with the code of its error kind."""
    if isinstance(result, Err):
        fail(result.error, ctx)
    return result.value
