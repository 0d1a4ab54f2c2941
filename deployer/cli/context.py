from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from deployer.core.config import DeployerConfig, load_config
from deployer.core.errors import ErrorCode
from deployer.core.result import Err
from deployer.output.console import ConsoleProtocol, RichConsole

DEFAULT_CONFIG = Path("deployer.toml")


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: DeployerConfig
    console: ConsoleProtocol
    verbose: bool = False


def is_verbose(ctx: typer.Context) -> bool:
    obj = ctx.find_root().obj
    return bool(obj.get("verbose")) if isinstance(obj, dict) else False


def build_context(config_path: Path, *, verbose: bool = False) -> CLIContext:
    console = RichConsole(verbose=verbose)
    result = load_config(config_path)
    if isinstance(result, Err):
        typer.echo(f"error: {result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    return CLIContext(config=result.value, console=console, verbose=verbose)
