"""Tests for deployer.release.fanout module."""

from __future__ import annotations

import threading
import time
from collections.abc import Iterator

import pytest

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.release.fanout import stream_bounded
from deployer.resources.byte_source import BytesResource, NamedByteSource


def _stream(*items: str | DeployError) -> Iterator[Result[NamedByteSource, DeployError]]:
    for item in items:
        if isinstance(item, DeployError):
            yield Err(item)
        else:
            yield Ok(BytesResource(item, b""))


class TestStreamBounded:
    def test_all_consumed(self) -> None:
        results = list(stream_bounded(_stream("a", "b", "c"), lambda s: Ok(s.name), 2))
        assert sorted(r.value for r in results if isinstance(r, Ok)) == ["a", "b", "c"]

    def test_concurrency_is_bounded(self) -> None:
        lock = threading.Lock()
        active = 0
        peak = 0

        def consume(source: NamedByteSource) -> Result[str, DeployError]:
            nonlocal active, peak
            with lock:
                active += 1
                peak = max(peak, active)
            time.sleep(0.01)
            with lock:
                active -= 1
            return Ok(source.name)

        results = list(stream_bounded(_stream(*"abcdefgh"), consume, 3))

        assert len(results) == 8
        assert peak <= 3

    def test_stream_error_drains_in_flight_work(self) -> None:
        consumed: list[str] = []
        error = DeployError("process", "linux failed")

        def consume(source: NamedByteSource) -> Result[str, DeployError]:
            consumed.append(source.name)
            return Ok(source.name)

        results = list(stream_bounded(_stream("a", "b", error, "c"), consume, 4))

        assert results[-1] == Err(error)
        assert sorted(r.value for r in results[:-1] if isinstance(r, Ok)) == ["a", "b"]
        assert "c" not in consumed

    def test_consumer_errors_are_yielded(self) -> None:
        results = list(
            stream_bounded(
                _stream("a"), lambda s: Err(DeployError("io", f"cannot write {s.name}")), 1
            )
        )
        assert results == [Err(DeployError("io", "cannot write a"))]

    def test_rejects_zero_concurrency(self) -> None:
        with pytest.raises(ValueError):
            list(stream_bounded(_stream("a"), lambda s: Ok(s.name), 0))
