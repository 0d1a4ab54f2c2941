"""Plan command - show what a release would build."""

from __future__ import annotations

from pathlib import Path

import typer

from deployer.cli.commands._helpers import exit_on_error
from deployer.cli.context import DEFAULT_CONFIG, build_context, is_verbose
from deployer.output.console import Style
from deployer.release.from_config import publishing_options, release_from_config


def plan(
    ctx: typer.Context,
    config: Path = typer.Option(DEFAULT_CONFIG, "--config", "-c", help="Path to deployer.toml"),
) -> None:
    """Validate the release configuration and print it."""
    cli = build_context(config, verbose=is_verbose(ctx))
    release = exit_on_error(release_from_config(cli.config, cli.console), cli)
    options = publishing_options(cli.config)

    console = cli.console
    console.header(f"Release {release.version}")
    app = release.application
    if app.package_name:
        console.print(f"package: {app.package_name}", Style.DIM)
    if app.app_id:
        console.print(f"app id:  {app.app_id}", Style.DIM)

    for platform in release.enabled():
        project = release.project_for(platform)
        console.print(f"  {platform.display_name:<12} {project}")

    policy = options.cleanup_policy
    console.newline()
    console.print(f"mode: {policy.mode}", Style.DIM)
    console.print(f"artifacts: {options.artifacts_root}", Style.DIM)
    console.print(f"persist: {'yes' if options.persist_artifacts else 'no'}", Style.DIM)
