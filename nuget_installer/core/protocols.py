"""领域协议定义

安装器依赖的外部协作者契约（Protocol），
上层依赖抽象而非具体实现，测试可注入任意满足协议的对象。

使用 typing.Protocol 而非 ABC，现有类无需修改继承关系即可满足协议。
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from nuget_installer.utils.shell import CommandExecutor

if TYPE_CHECKING:
    from nuget_installer.core.package.models import PackageReference, PackageType

__all__ = [
    "CommandExecutor",
    "ConfigurationStore",
    "ContentResolver",
    "FileSystem",
    "ToolResolver",
]


# =========================================================================
# 文件系统协议
# =========================================================================

class FileSystem(Protocol):
    """文件系统协议 — 所有路径均为绝对路径"""

    def directory_exists(self, path: Path) -> bool:
        ...

    def file_exists(self, path: Path) -> bool:
        ...

    def create_directory(self, path: Path) -> None:
        """递归创建目录"""
        ...

    def delete_directory(self, path: Path, recursive: bool = False) -> None:
        ...

    def list_directories(self, path: Path) -> list[Path]:
        """列出直接子目录（不递归）"""
        ...


# =========================================================================
# 工具定位协议
# =========================================================================

class ToolResolver(Protocol):
    """定位外部包管理器可执行文件"""

    def resolve_path(self) -> Path | None:
        """返回可执行文件绝对路径，找不到返回 None"""
        ...


# =========================================================================
# 内容解析协议
# =========================================================================

class ContentResolver(Protocol):
    """把安装目录映射为可用文件列表

    path 为 None 或不存在时必须返回空列表，不得抛异常。
    """

    def get_files(
        self,
        path: Path | None,
        package: PackageReference,
        package_type: PackageType,
    ) -> list[Path]:
        ...


# =========================================================================
# 配置存储协议
# =========================================================================

class ConfigurationStore(Protocol):
    """只读键值配置"""

    def get_value(self, key: str) -> str | None:
        ...
