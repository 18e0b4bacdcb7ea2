"""安装路径规则

职责:
- 计算包的安装根目录（纯函数，无 IO）
- 在安装根目录下定位包内容目录

安装根目录规则:
  - 有 version 参数: <base>/<package>.<version>  （全部小写）
  - 无 version 参数: <base>/<package>            （小写）

内容目录规则（只看直接子目录，按优先级）:
  1. 与包名同名的目录（忽略大小写）          -ExcludeVersion 安装产物
  2. <包名>.<版本号> 目录（忽略大小写）      未排除版本号的安装产物
  3. tools 目录（忽略大小写）
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from nuget_installer.core.exceptions import ValidationError
from nuget_installer.core.package.models import PackageReference
from nuget_installer.core.protocols import FileSystem

logger = logging.getLogger(__name__)

TOOLS_DIR_NAME = "tools"

# 1.2.3 / 1.2.3.4 / 1.0.0-beta.1 / 2.0.0+build
_VERSION_SUFFIX = r"\.\d+(?:\.\d+)*(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?"


def compute_installation_root(base: Path, package: PackageReference) -> Path:
    """计算包的安装根目录

    base 必须是绝对路径；version 有多个值时取第一个。
    """
    if not base.is_absolute():
        raise ValidationError(f"安装基准目录必须是绝对路径: {base}")
    if package.has_parameter("version"):
        version = package.get_parameter("version") or ""
        return base / f"{package.package}.{version}".lower()
    return base / package.package.lower()


def select_content_directory(
    directories: Iterable[Path], package_name: str,
) -> Path | None:
    """从候选子目录中按优先级挑选内容目录，都不匹配返回 None"""
    candidates = list(directories)
    wanted = package_name.lower()
    versioned = re.compile(re.escape(package_name) + _VERSION_SUFFIX, re.IGNORECASE)

    for d in candidates:
        if d.name.lower() == wanted:
            return d
    for d in candidates:
        if versioned.fullmatch(d.name):
            return d
    for d in candidates:
        if d.name.lower() == TOOLS_DIR_NAME:
            return d
    return None


def find_content_directory(
    filesystem: FileSystem, root: Path, package_name: str,
) -> Path | None:
    """列出 root 的直接子目录并定位内容目录"""
    if not filesystem.directory_exists(root):
        return None
    return select_content_directory(filesystem.list_directories(root), package_name)
