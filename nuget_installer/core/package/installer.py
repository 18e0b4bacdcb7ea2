"""NuGet 包安装器

幂等安装流程:
  1. scheme 必须是 nuget（can_install 单独暴露，供调用方预筛）
  2. 目标目录转绝对路径，计算安装根目录
  3. 根目录不存在则创建，并记住"本次调用创建了它"
  4. 根目录下已能定位到内容目录且解析出文件 → 视为已安装，直接返回，不启动进程
  5. 调用 nuget install；失败时若根目录是本次创建的，整体删除并返回空列表，
     否则继续往下尝试发现已有内容
  6. 重新列出子目录，再次定位内容目录并解析文件
  7. 结果为空时按包类型给出告警（仅诊断，不报错）

同一安装根目录的并发安装通过按路径加锁串行化，不同根目录互不影响。
"""

from __future__ import annotations

import logging
import os
import threading
import weakref
from pathlib import Path

from nuget_installer.core.config import Config
from nuget_installer.core.exceptions import ToolNotFoundError, ValidationError
from nuget_installer.core.package.arguments import build_install_arguments
from nuget_installer.core.package.invoker import run_install
from nuget_installer.core.package.models import (
    NUGET_SCHEME,
    PackageReference,
    PackageType,
)
from nuget_installer.core.package.paths import (
    compute_installation_root,
    find_content_directory,
)
from nuget_installer.core.protocols import ContentResolver, FileSystem, ToolResolver
from nuget_installer.utils.logger import is_diagnostic
from nuget_installer.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)

# 只要还有调用在使用，锁就留在表里；无人持有时自动回收
_root_locks: weakref.WeakValueDictionary[str, threading.Lock] = weakref.WeakValueDictionary()
_root_locks_guard = threading.Lock()


def _lock_for(root: Path) -> threading.Lock:
    key = os.path.normcase(str(root))
    with _root_locks_guard:
        return _root_locks.setdefault(key, threading.Lock())


class NuGetPackageInstaller:
    """nuget: 包引用的安装器"""

    def __init__(
        self,
        filesystem: FileSystem,
        executor: CommandExecutor,
        tool_resolver: ToolResolver,
        content_resolver: ContentResolver,
        config: Config,
        *,
        working_dir: Path | None = None,
    ) -> None:
        collaborators = {
            "filesystem": filesystem,
            "executor": executor,
            "tool_resolver": tool_resolver,
            "content_resolver": content_resolver,
            "config": config,
        }
        missing = [name for name, value in collaborators.items() if value is None]
        if missing:
            raise ValidationError(f"缺少协作者: {', '.join(missing)}", missing)
        self.filesystem = filesystem
        self.executor = executor
        self.tool_resolver = tool_resolver
        self.content_resolver = content_resolver
        self.config = config
        self.working_dir = working_dir

    def can_install(self, package: PackageReference, package_type: PackageType) -> bool:
        """是否能处理该包引用（仅看 scheme）"""
        if package is None:
            raise ValidationError("package 不能为空")
        return package.scheme.lower() == NUGET_SCHEME

    def install(
        self,
        package: PackageReference,
        package_type: PackageType,
        path: str | Path,
        *,
        cancel: threading.Event | None = None,
    ) -> list[Path]:
        """安装包并返回可用文件列表；安装失败返回空列表

        找不到 nuget 可执行文件时抛 ToolNotFoundError。
        """
        if package is None:
            raise ValidationError("package 不能为空")
        if path is None:
            raise ValidationError("path 不能为空")

        root = compute_installation_root(self._make_absolute(Path(path)), package)
        with _lock_for(root):
            return self._install_locked(package, package_type, root, cancel)

    def _install_locked(
        self,
        package: PackageReference,
        package_type: PackageType,
        root: Path,
        cancel: threading.Event | None,
    ) -> list[Path]:
        created_directory = False
        if not self.filesystem.directory_exists(root):
            logger.debug("创建包目录 %s...", root)
            self.filesystem.create_directory(root)
            created_directory = True
        logger.info("包目录: %s", root)

        # 已经装过？
        package_path = find_content_directory(self.filesystem, root, package.package)
        logger.debug("包路径: %s", package_path)
        if package_path is not None:
            content = self.content_resolver.get_files(package_path, package, package_type)
            if content:
                logger.info("包 %s 已安装", package.package)
                return content

        try:
            installed = self._install_package(package, root, cancel)
        except Exception:
            if created_directory:
                self._discard(root)
            raise
        if not installed:
            logger.warning("安装包 %s 时出错", package.package)
            if created_directory:
                self._discard(root)
                return []

        for directory in self.filesystem.list_directories(root):
            logger.debug("  %s", directory)
        logger.debug("查找 %s", package.package)
        package_path = find_content_directory(self.filesystem, root, package.package)

        result = self.content_resolver.get_files(package_path, package, package_type)
        if not result:
            if package_type is PackageType.ADDIN:
                logger.warning(
                    "未找到与 %s 兼容的程序集", self.config.target_framework,
                )
            elif package_type is PackageType.TOOL:
                logger.warning(
                    "未找到工具 '%s' 的相关文件，是否缺少 include 参数？",
                    package.package,
                )
        return result

    def _install_package(
        self,
        package: PackageReference,
        root: Path,
        cancel: threading.Event | None,
    ) -> bool:
        logger.info("安装 NuGet 包 %s...", package.package)
        nuget_path = self._nuget_path()
        arguments = build_install_arguments(package, root, self.config)
        outcome = run_install(
            self.executor,
            nuget_path,
            arguments,
            quiet=not is_diagnostic(logger),
            timeout=self.config.install_timeout or None,
            cancel=cancel,
        )
        return outcome.success

    def _nuget_path(self) -> Path:
        nuget_path = self.tool_resolver.resolve_path()
        if nuget_path is None:
            raise ToolNotFoundError("找不到 nuget 可执行文件")
        return nuget_path

    def _discard(self, root: Path) -> None:
        logger.debug("删除包目录 %s...", root)
        self.filesystem.delete_directory(root, recursive=True)

    def _make_absolute(self, path: Path) -> Path:
        if path.is_absolute():
            return Path(os.path.normpath(path))
        base = self.working_dir or Path.cwd()
        return Path(os.path.normpath(base / path))
