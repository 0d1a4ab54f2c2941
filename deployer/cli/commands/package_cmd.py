"""Package command - build every platform and write the artifacts to a directory."""

from __future__ import annotations

from pathlib import Path

import typer

from deployer.cli.commands._helpers import exit_on_error, fail
from deployer.cli.context import DEFAULT_CONFIG, build_context, is_verbose
from deployer.core.errors import DeployError
from deployer.core.result import Err, Result
from deployer.publish.publisher import DotnetPublisher
from deployer.release.fanout import stream_bounded
from deployer.release.from_config import publishing_options, release_from_config
from deployer.release.packager import Packager
from deployer.release.strategy import ReleasePackagingStrategy
from deployer.resources.byte_source import NamedByteSource


def package(
    ctx: typer.Context,
    config: Path = typer.Option(DEFAULT_CONFIG, "--config", "-c", help="Path to deployer.toml"),
    out: Path | None = typer.Option(None, "--out", "-o", help="Output directory"),
    concurrency: int | None = typer.Option(
        None, "--concurrency", min=1, help="Artifacts written in parallel"
    ),
) -> None:
    """Package the release and write each artifact as soon as it is ready."""
    cli = build_context(config, verbose=is_verbose(ctx))
    release = exit_on_error(release_from_config(cli.config, cli.console), cli)
    options = publishing_options(cli.config)

    destination = out or options.artifacts_root
    try:
        destination.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        fail(DeployError("io", f"Cannot create output directory {destination}: {e}"), cli)

    def write(artifact: NamedByteSource) -> Result[Path, DeployError]:
        return artifact.write_to(destination / artifact.name)

    packager = Packager(
        DotnetPublisher(cli.console),
        cli.console,
        keep_staging=not options.cleanup_policy.remove_packager_staging,
    )
    strategy = ReleasePackagingStrategy(packager, cli.console)
    limit = concurrency or cli.config.publishing.max_concurrency

    written = 0
    for result in stream_bounded(strategy.package_stream(release), write, limit):
        if isinstance(result, Err):
            fail(result.error, cli)
        cli.console.success(f"Wrote {result.value}")
        written += 1

    cli.console.success(f"{written} artifact(s) written to {destination}")
