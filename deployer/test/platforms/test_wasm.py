"""Tests for deployer.platforms.wasm module."""

from __future__ import annotations

from pathlib import Path

from deployer.core.result import Err, Ok
from deployer.output.console import MockConsole
from deployer.platforms.wasm import WasmDeployment
from deployer.test.fakes import FakePublisher


class TestWasmDeployment:
    def test_site_is_wwwroot(self, tmp_path: Path) -> None:
        publisher = FakePublisher(
            tmp_path / "pub", {"wwwroot/index.html": b"<html/>", "web.config": b""}
        )

        result = WasmDeployment(publisher, tmp_path / "Notes.Browser.csproj", MockConsole()).create()

        assert isinstance(result, Ok)
        site = result.value
        assert site.content.path.name == "wwwroot"
        assert publisher.rids == ["browser-wasm"]
        assert not site.closed

    def test_close_removes_publish_output(self, tmp_path: Path) -> None:
        publisher = FakePublisher(tmp_path / "pub", {"wwwroot/index.html": b"<html/>"})

        result = WasmDeployment(publisher, tmp_path / "App.csproj", MockConsole()).create()

        assert isinstance(result, Ok)
        with result.value as site:
            assert (site.content.path / "index.html").is_file()
        assert site.closed
        assert not publisher.outputs[0].exists()

    def test_missing_wwwroot(self, tmp_path: Path) -> None:
        publisher = FakePublisher(tmp_path / "pub", {"index.html": b"<html/>"})

        result = WasmDeployment(publisher, tmp_path / "App.csproj", MockConsole()).create()

        assert isinstance(result, Err)
        assert result.error.message.startswith("Cannot find wwwroot folder in ")
        assert not publisher.outputs[0].exists()
