"""测试共享 fixture — 假执行器 / 假工具定位器

FakeExecutor 满足 CommandExecutor 协议，记录每次调用；
on_run 回调可模拟 nuget 向 -OutputDirectory 写入安装产物。
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from pathlib import Path

import pytest

from nuget_installer.core.config import Config
from nuget_installer.core.filesystem import LocalFileSystem
from nuget_installer.core.package.content import NuGetContentResolver
from nuget_installer.core.package.installer import NuGetPackageInstaller
from nuget_installer.utils.shell import CommandResult


class FakeExecutor:
    def __init__(self, returncode: int = 0, stdout: str = "") -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.calls: list[dict] = []
        self.on_run: Callable[[Path], None] | None = None
        self._lock = threading.Lock()

    def execute(
        self,
        cmd: list[str],
        *,
        cwd: str | None = None,
        env: dict[str, str] | None = None,
        timeout: float | None = None,
        silent: bool = True,
        cancel: threading.Event | None = None,
    ) -> CommandResult:
        with self._lock:
            self.calls.append(
                {"cmd": list(cmd), "timeout": timeout, "silent": silent, "cancel": cancel},
            )
        if self.on_run is not None:
            out_dir = Path(cmd[cmd.index("-OutputDirectory") + 1])
            self.on_run(out_dir)
        return CommandResult(returncode=self.returncode, stdout=self.stdout)


class FakeToolResolver:
    def __init__(self, path: Path | None) -> None:
        self.path = path

    def resolve_path(self) -> Path | None:
        return self.path


@pytest.fixture()
def config() -> Config:
    return Config(target_framework="net8.0", install_timeout=0)


@pytest.fixture()
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture()
def tool_resolver(tmp_path: Path) -> FakeToolResolver:
    return FakeToolResolver(tmp_path / "bin" / "nuget.exe")


@pytest.fixture()
def installer(
    config: Config, executor: FakeExecutor, tool_resolver: FakeToolResolver,
    tmp_path: Path,
) -> NuGetPackageInstaller:
    return NuGetPackageInstaller(
        filesystem=LocalFileSystem(),
        executor=executor,
        tool_resolver=tool_resolver,
        content_resolver=NuGetContentResolver(config),
        config=config,
        working_dir=tmp_path,
    )
