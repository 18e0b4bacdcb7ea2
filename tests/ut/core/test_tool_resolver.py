"""NuGet 可执行文件定位测试"""

from __future__ import annotations

import os
import stat
from pathlib import Path

from nuget_installer.core.config import Config
from nuget_installer.core.filesystem import LocalFileSystem
from nuget_installer.core.package.tool_resolver import NuGetToolResolver


def _exe(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR)
    return path


class TestNuGetToolResolver:
    def test_configured_path_first(self, tmp_path: Path) -> None:
        configured = _exe(tmp_path / "custom" / "nuget.exe")
        _exe(tmp_path / "tools" / "nuget.exe")
        cfg = Config(nuget_tool_path=str(configured), tools_dir=str(tmp_path / "tools"))
        resolver = NuGetToolResolver(cfg, LocalFileSystem(), environ={"PATH": ""})
        assert resolver.resolve_path() == configured

    def test_env_before_tools_dir(self, tmp_path: Path) -> None:
        from_env = _exe(tmp_path / "env" / "nuget.exe")
        _exe(tmp_path / "tools" / "nuget.exe")
        cfg = Config(tools_dir=str(tmp_path / "tools"))
        resolver = NuGetToolResolver(
            cfg, LocalFileSystem(), environ={"NUGET_EXE": str(from_env), "PATH": ""},
        )
        assert resolver.resolve_path() == from_env

    def test_tools_dir(self, tmp_path: Path) -> None:
        in_tools = _exe(tmp_path / "tools" / "nuget.exe")
        cfg = Config(tools_dir=str(tmp_path / "tools"))
        resolver = NuGetToolResolver(cfg, LocalFileSystem(), environ={"PATH": ""})
        assert resolver.resolve_path() == in_tools

    def test_path_lookup(self, tmp_path: Path) -> None:
        on_path = _exe(tmp_path / "bin" / "nuget")
        cfg = Config(tools_dir=str(tmp_path / "empty"))
        resolver = NuGetToolResolver(
            cfg, LocalFileSystem(), environ={"PATH": str(tmp_path / "bin")},
        )
        assert resolver.resolve_path() == on_path

    def test_missing_configured_path_skipped(self, tmp_path: Path) -> None:
        in_tools = _exe(tmp_path / "tools" / "nuget.exe")
        cfg = Config(
            nuget_tool_path=str(tmp_path / "nowhere" / "nuget.exe"),
            tools_dir=str(tmp_path / "tools"),
        )
        resolver = NuGetToolResolver(cfg, LocalFileSystem(), environ={"PATH": ""})
        assert resolver.resolve_path() == in_tools

    def test_not_found(self, tmp_path: Path) -> None:
        cfg = Config(tools_dir=str(tmp_path / "empty"))
        resolver = NuGetToolResolver(cfg, LocalFileSystem(), environ={"PATH": os.devnull})
        assert resolver.resolve_path() is None

    def test_result_cached(self, tmp_path: Path) -> None:
        exe = _exe(tmp_path / "tools" / "nuget.exe")
        cfg = Config(tools_dir=str(tmp_path / "tools"))
        resolver = NuGetToolResolver(cfg, LocalFileSystem(), environ={"PATH": ""})
        assert resolver.resolve_path() == exe
        exe.unlink()
        assert resolver.resolve_path() == exe
