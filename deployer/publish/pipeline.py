"""Sequential plan executor.

For every plan, in order: prepare, check disk space, publish, build
artifacts, optionally persist them, retire the publish session. The first
failure aborts the whole run and nothing is returned for earlier plans.
"""

from __future__ import annotations

from collections.abc import Sequence

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import ConsoleProtocol, for_platform
from deployer.resources.byte_source import NamedByteSource

from .artifact_sink import ArtifactSink
from .disk_guard import DiskGuard
from .plan import CleanupAction, PlatformPackagePlan, PublishLocation
from .policy import PublishingOptions
from .publisher import Publisher
from .session import PublishSession

__all__ = ["PublishPipeline"]


class PublishPipeline:
    def __init__(
        self,
        publisher: Publisher,
        options: PublishingOptions,
        console: ConsoleProtocol,
        *,
        disk_guard: DiskGuard | None = None,
        sink: ArtifactSink | None = None,
    ) -> None:
        self._publisher = publisher
        self._options = options
        self._console = console
        self._disk_guard = disk_guard or DiskGuard(options.cleanup_policy, console)
        self._sink = sink or ArtifactSink(options.artifacts_root, console)

    def execute(
        self, plans: Sequence[PlatformPackagePlan]
    ) -> Result[list[NamedByteSource], DeployError]:
        artifacts: list[NamedByteSource] = []
        for plan in plans:
            result = self._execute_plan(plan)
            if isinstance(result, Err):
                return result
            artifacts.extend(result.value)
        return Ok(artifacts)

    def _execute_plan(
        self, plan: PlatformPackagePlan
    ) -> Result[list[NamedByteSource], DeployError]:
        console = for_platform(self._console, f"{plan.platform} {plan.runtime_label}")
        console.header(f"Publishing {plan.platform} ({plan.runtime_identifier})")

        prepared = plan.prepare()
        if isinstance(prepared, Err):
            return prepared
        request = prepared.value.request
        cleanup = prepared.value.cleanup

        space = self._disk_guard.ensure_has_space(
            self._options.artifacts_root, plan.platform, plan.runtime_identifier
        )
        if isinstance(space, Err):
            _run_cleanup(cleanup, console)
            return space

        published = self._publisher.publish(request)
        if isinstance(published, Err):
            _run_cleanup(cleanup, console)
            return published

        output = published.value
        location = PublishLocation(
            platform=plan.platform,
            runtime_identifier=plan.runtime_identifier,
            path=output.path,
            container=output.container,
            size_bytes=output.size_bytes,
        )
        session = PublishSession(location, self._options.cleanup_policy, console)
        claimed = session.mark_in_use()
        if isinstance(claimed, Err):
            _run_cleanup(cleanup, console)
            return claimed

        try:
            built = plan.build_artifacts(location)
        finally:
            _run_cleanup(cleanup, console)

        if isinstance(built, Err):
            session.retire()
            return built

        if self._options.persist_artifacts:
            persisted = self._sink.persist(plan.platform, plan.runtime_identifier, built.value)
            if isinstance(persisted, Err):
                session.retire()
                return persisted

        retired = session.retire()
        if isinstance(retired, Err):
            return retired

        console.success(f"{len(built.value)} artifact(s) ready")
        return Ok(list(built.value))


def _run_cleanup(cleanup: CleanupAction | None, console: ConsoleProtocol) -> None:
    if cleanup is None:
        return
    try:
        cleanup()
    except OSError as e:
        console.warning(f"Cleanup failed: {e}")
