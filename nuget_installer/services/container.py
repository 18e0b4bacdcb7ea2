"""服务容器 — 统一依赖注入，安装器及其协作者都从这里获取

依赖关系图（→ 表示依赖）:
  installer     → filesystem, executor, tool_resolver, content_resolver, config
  tool_resolver → filesystem, config
  content_resolver → config

用法:
    container = ServiceContainer()
    files = container.installer.install(ref, PackageType.TOOL, "tools")

    # 显式注入配置
    cfg = Config.from_file("my_config.yml")
    container = ServiceContainer(config=cfg)
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nuget_installer.core.config import Config
    from nuget_installer.core.filesystem import LocalFileSystem
    from nuget_installer.core.package.content import NuGetContentResolver
    from nuget_installer.core.package.installer import NuGetPackageInstaller
    from nuget_installer.core.package.tool_resolver import NuGetToolResolver
    from nuget_installer.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)


class ServiceContainer:
    """懒加载服务容器 — 同一容器内的实例共享"""

    def __init__(self, config: Config | None = None) -> None:
        self._instances: dict[str, object] = {}
        if config is None:
            from nuget_installer.core.config import get_config
            config = get_config()
        self._config = config

    @property
    def config(self) -> Config:
        return self._config

    @property
    def filesystem(self) -> LocalFileSystem:
        if "filesystem" not in self._instances:
            from nuget_installer.core.filesystem import LocalFileSystem
            self._instances["filesystem"] = LocalFileSystem()
        return self._instances["filesystem"]  # type: ignore[return-value]

    @property
    def executor(self) -> CommandExecutor:
        if "executor" not in self._instances:
            from nuget_installer.utils.shell import get_executor
            self._instances["executor"] = get_executor()
        return self._instances["executor"]  # type: ignore[return-value]

    @property
    def tool_resolver(self) -> NuGetToolResolver:
        if "tool_resolver" not in self._instances:
            from nuget_installer.core.package.tool_resolver import NuGetToolResolver
            self._instances["tool_resolver"] = NuGetToolResolver(
                config=self._config, filesystem=self.filesystem,
            )
        return self._instances["tool_resolver"]  # type: ignore[return-value]

    @property
    def content_resolver(self) -> NuGetContentResolver:
        if "content_resolver" not in self._instances:
            from nuget_installer.core.package.content import NuGetContentResolver
            self._instances["content_resolver"] = NuGetContentResolver(self._config)
        return self._instances["content_resolver"]  # type: ignore[return-value]

    @property
    def installer(self) -> NuGetPackageInstaller:
        if "installer" not in self._instances:
            from nuget_installer.core.package.installer import NuGetPackageInstaller
            self._instances["installer"] = NuGetPackageInstaller(
                filesystem=self.filesystem,
                executor=self.executor,
                tool_resolver=self.tool_resolver,
                content_resolver=self.content_resolver,
                config=self._config,
            )
        return self._instances["installer"]  # type: ignore[return-value]


# ---- 全局单例 ----

_global: ServiceContainer | None = None
_global_lock = threading.Lock()


def get_container() -> ServiceContainer:
    """获取全局 ServiceContainer 单例（线程安全）"""
    global _global  # noqa: PLW0603
    if _global is not None:
        return _global
    with _global_lock:
        if _global is None:
            _global = ServiceContainer()
        return _global


def reset_container() -> None:
    """重置全局容器（仅用于测试）"""
    global _global  # noqa: PLW0603
    with _global_lock:
        _global = None
