"""Helpers shared by the platform deployments."""

from __future__ import annotations

from collections.abc import Iterable

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import ConsoleProtocol
from deployer.publish.plan import PlatformPackagePlan, PublishLocation
from deployer.publish.publisher import Publisher
from deployer.resources.byte_source import NamedByteSource

__all__ = ["run_plan", "run_plans"]


def run_plan(
    plan: PlatformPackagePlan,
    publisher: Publisher,
    console: ConsoleProtocol,
) -> Result[list[NamedByteSource], DeployError]:
    """Prepare, publish and package one plan without the pipeline's
    disk guard or artifact sink.

    The publish directory is always removed afterwards, so ``build_artifacts``
    must return detached sources.
    """
    prepared = plan.prepare()
    if isinstance(prepared, Err):
        return prepared
    try:
        published = publisher.publish(prepared.value.request)
        if isinstance(published, Err):
            return published
        output = published.value
        with output.container:
            location = PublishLocation(
                platform=plan.platform,
                runtime_identifier=plan.runtime_identifier,
                path=output.path,
                container=output.container,
                size_bytes=output.size_bytes,
            )
            return plan.build_artifacts(location)
    finally:
        cleanup = prepared.value.cleanup
        if cleanup is not None:
            try:
                cleanup()
            except OSError as e:
                console.warning(f"Cleanup failed: {e}")


def run_plans(
    plans: Iterable[PlatformPackagePlan],
    publisher: Publisher,
    console: ConsoleProtocol,
) -> Result[list[NamedByteSource], DeployError]:
    """Run plans in order and concatenate their artifacts; stop at the
    first failure."""
    artifacts: list[NamedByteSource] = []
    for plan in plans:
        result = run_plan(plan, publisher, console)
        if isinstance(result, Err):
            return result
        artifacts.extend(result.value)
    return Ok(artifacts)
