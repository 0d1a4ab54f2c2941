"""Tests for deployer.publish.pipeline module."""

from __future__ import annotations

from pathlib import Path

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import MockConsole
from deployer.publish.artifact_sink import ArtifactSink
from deployer.publish.disk_guard import DiskGuard, DiskUsage
from deployer.publish.pipeline import PublishPipeline
from deployer.publish.plan import PlatformPackagePlan, PreparedPublish, PublishLocation, PublishRequest
from deployer.publish.policy import PublishingCleanupPolicy, PublishingOptions
from deployer.resources.byte_source import BytesResource, NamedByteSource
from deployer.test.fakes import FakePublisher


class _RecordingPlan:
    """Plan whose steps record their calls into a shared journal."""

    def __init__(self, name: str, journal: list[str], *, fail_build: bool = False) -> None:
        self.name = name
        self.journal = journal
        self.fail_build = fail_build
        self.locations: list[PublishLocation] = []

    def prepare(self) -> Result[PreparedPublish, DeployError]:
        self.journal.append(f"prepare {self.name}")
        request = PublishRequest(project=Path(f"{self.name}.csproj"), runtime_identifier=self.name)
        return Ok(PreparedPublish(request, cleanup=lambda: self.journal.append(f"cleanup {self.name}")))

    def build(self, location: PublishLocation) -> Result[list[NamedByteSource], DeployError]:
        self.journal.append(f"build {self.name}")
        self.locations.append(location)
        if self.fail_build:
            return Err(DeployError("artifact", f"nothing built for {self.name}"))
        return Ok([BytesResource(f"{self.name}.pkg", self.name.encode())])

    def plan(self) -> PlatformPackagePlan:
        return PlatformPackagePlan(
            platform="Linux",
            runtime_identifier=self.name,
            runtime_label=self.name.upper(),
            prepare=self.prepare,
            build_artifacts=self.build,
        )


def _pipeline(
    tmp_path: Path,
    publisher: FakePublisher,
    *,
    persist: bool = False,
    free: int = 100,
) -> PublishPipeline:
    console = MockConsole()
    policy = PublishingCleanupPolicy.ci()
    options = PublishingOptions(policy, tmp_path / "artifacts", persist_artifacts=persist)
    guard = DiskGuard(policy, console, probe=lambda _p: DiskUsage(100, 100 - free, free))
    return PublishPipeline(
        publisher,
        options,
        console,
        disk_guard=guard,
        sink=ArtifactSink(options.artifacts_root, console),
    )


class TestPublishPipeline:
    def test_runs_plans_in_order(self, tmp_path: Path) -> None:
        journal: list[str] = []
        plans = [_RecordingPlan(n, journal) for n in ("a", "b")]
        publisher = FakePublisher(tmp_path / "pub", {"app": b"x"})

        result = _pipeline(tmp_path, publisher).execute([p.plan() for p in plans])

        assert isinstance(result, Ok)
        assert [a.name for a in result.value] == ["a.pkg", "b.pkg"]
        assert journal == [
            "prepare a", "build a", "cleanup a",
            "prepare b", "build b", "cleanup b",
        ]
        # CI policy removes every publish directory.
        assert all(not out.exists() for out in publisher.outputs)

    def test_fails_fast_on_build_failure(self, tmp_path: Path) -> None:
        journal: list[str] = []
        plans = [
            _RecordingPlan("a", journal),
            _RecordingPlan("b", journal, fail_build=True),
            _RecordingPlan("c", journal),
        ]
        publisher = FakePublisher(tmp_path / "pub", {"app": b"x"})

        result = _pipeline(tmp_path, publisher).execute([p.plan() for p in plans])

        assert isinstance(result, Err)
        assert result.error.message == "nothing built for b"
        assert "prepare c" not in journal
        assert "cleanup b" in journal
        assert publisher.rids == ["a", "b"]
        assert not publisher.outputs[1].exists()

    def test_publish_failure_runs_cleanup(self, tmp_path: Path) -> None:
        journal: list[str] = []
        publisher = FakePublisher(tmp_path / "pub", {}, fail_rids=("a",))

        result = _pipeline(tmp_path, publisher).execute([_RecordingPlan("a", journal).plan()])

        assert isinstance(result, Err)
        assert journal == ["prepare a", "cleanup a"]

    def test_disk_guard_failure_skips_publish(self, tmp_path: Path) -> None:
        journal: list[str] = []
        publisher = FakePublisher(tmp_path / "pub", {})

        result = _pipeline(tmp_path, publisher, free=1).execute([_RecordingPlan("a", journal).plan()])

        assert isinstance(result, Err)
        assert result.error.kind == "environment"
        assert publisher.requests == []
        assert journal == ["prepare a", "cleanup a"]

    def test_prepare_failure_aborts_without_cleanup(self, tmp_path: Path) -> None:
        publisher = FakePublisher(tmp_path / "pub", {})
        plan = PlatformPackagePlan(
            platform="Android",
            runtime_identifier="android-arm64",
            runtime_label="ARM64",
            prepare=lambda: Err(DeployError("environment", "no SDK")),
            build_artifacts=lambda _loc: Ok([]),
        )

        result = _pipeline(tmp_path, publisher).execute([plan])

        assert result == Err(DeployError("environment", "no SDK"))
        assert publisher.requests == []

    def test_persists_artifacts(self, tmp_path: Path) -> None:
        journal: list[str] = []
        publisher = FakePublisher(tmp_path / "pub", {"app": b"x"})

        result = _pipeline(tmp_path, publisher, persist=True).execute(
            [_RecordingPlan("linux-x64", journal).plan()]
        )

        assert isinstance(result, Ok)
        stored = tmp_path / "artifacts" / "linux" / "linux-x64" / "linux-x64.pkg"
        assert stored.read_bytes() == b"linux-x64"

    def test_location_describes_publish_output(self, tmp_path: Path) -> None:
        journal: list[str] = []
        plan = _RecordingPlan("a", journal)
        publisher = FakePublisher(tmp_path / "pub", {"app": b"12345"})

        _pipeline(tmp_path, publisher).execute([plan.plan()])

        location = plan.locations[0]
        assert location.platform == "Linux"
        assert location.runtime_identifier == "a"
        assert location.path == publisher.outputs[0]
        assert location.size_bytes == 5
