"""Publish command - run the release through the publish pipeline."""

from __future__ import annotations

from pathlib import Path

import typer

from deployer.cli.commands._helpers import exit_on_error
from deployer.cli.context import DEFAULT_CONFIG, build_context, is_verbose
from deployer.publish.publisher import DotnetPublisher
from deployer.release.from_config import publishing_options, release_from_config
from deployer.release.packager import Packager
from deployer.release.plans import publish_release


def publish(
    ctx: typer.Context,
    config: Path = typer.Option(DEFAULT_CONFIG, "--config", "-c", help="Path to deployer.toml"),
    local: bool = typer.Option(
        False, "--local", help="Keep publish directories and staging for inspection"
    ),
) -> None:
    """Publish and package every platform, storing artifacts under the artifact root."""
    cli = build_context(config, verbose=is_verbose(ctx))
    release = exit_on_error(release_from_config(cli.config, cli.console), cli)
    options = publishing_options(cli.config, local=True if local else None)

    packager = Packager(
        DotnetPublisher(cli.console),
        cli.console,
        keep_staging=not options.cleanup_policy.remove_packager_staging,
    )
    artifacts = exit_on_error(publish_release(release, packager, options, cli.console), cli)

    for artifact in artifacts:
        cli.console.print(f"  {artifact.name}")
    where = f" in {options.artifacts_root}" if options.persist_artifacts else ""
    cli.console.success(f"{len(artifacts)} artifact(s) ready{where}")
