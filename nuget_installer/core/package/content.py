"""包内容解析

把已安装的内容目录映射为可用文件列表:

- addin: lib/<tfm>/*.dll，tfm 取与目标框架最兼容的一个；
         没有 lib 目录时直接取内容目录下的 *.dll
- tool:  include 参数给出的 glob；未指定时取全部文件（排除包元数据）

两类都支持 exclude 参数（glob，相对内容目录）。
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from nuget_installer.core.config import Config
from nuget_installer.core.package.models import PackageReference, PackageType

logger = logging.getLogger(__name__)

_TFM = re.compile(r"^(netstandard|netcoreapp|net)(\d+(?:\.\d+)*)$")

NET = ["net10.0", "net9.0", "net8.0", "net7.0", "net6.0", "net5.0"]
NETCOREAPP = [
    "netcoreapp3.1", "netcoreapp3.0", "netcoreapp2.2", "netcoreapp2.1",
    "netcoreapp2.0", "netcoreapp1.1", "netcoreapp1.0",
]
NETFX = [
    "net481", "net48", "net472", "net471", "net47", "net462", "net461",
    "net46", "net452", "net451", "net45", "net40", "net35", "net20",
]
NETSTANDARD = [
    "netstandard2.1", "netstandard2.0", "netstandard1.6", "netstandard1.5",
    "netstandard1.4", "netstandard1.3", "netstandard1.2", "netstandard1.1",
    "netstandard1.0",
]

# 包元数据，不属于工具内容
_METADATA_SUFFIXES = (".nupkg", ".nuspec", ".nupkg.metadata", ".p7s")
_METADATA_NAMES = {"[content_types].xml"}
_METADATA_DIRS = {"_rels", "package"}


def _parse_tfm(tfm: str) -> tuple[str, tuple[int, ...]] | None:
    m = _TFM.match(tfm.lower())
    if not m:
        return None
    family, ver = m.groups()
    if "." in ver:
        return family, tuple(int(p) for p in ver.split("."))
    # net48 / net472 这类 .NET Framework 写法，每位数字是一段版本号
    if family == "net":
        family = "netfx"
    return family, tuple(int(c) for c in ver)


def _version(tfm: str) -> tuple[int, ...]:
    parsed = _parse_tfm(tfm)
    return parsed[1] if parsed else ()


def compatible_frameworks(target: str) -> list[str]:
    """目标框架可加载的 lib 子目录，按优先级从高到低"""
    target = target.lower()
    parsed = _parse_tfm(target)
    if parsed is None:
        return [target]
    family, version = parsed

    if family == "net":
        chain = [t for t in NET if _version(t) < version] + NETCOREAPP + NETSTANDARD
    elif family == "netcoreapp":
        chain = [t for t in NETCOREAPP if _version(t) < version]
        chain += [
            t for t in NETSTANDARD
            if version >= (3, 0) or _version(t) <= (2, 0)
        ]
    elif family == "netfx":
        chain = [t for t in NETFX if _version(t) < version]
        if version >= (4, 6, 1):
            chain += [t for t in NETSTANDARD if _version(t) <= (2, 0)]
    else:
        chain = [t for t in NETSTANDARD if _version(t) < version]

    result = [target]
    for t in chain:
        if t not in result:
            result.append(t)
    return result


def _child_dir(parent: Path, name: str) -> Path | None:
    for d in parent.iterdir():
        if d.is_dir() and d.name.lower() == name:
            return d
    return None


def _glob(base: Path, patterns: Iterable[str]) -> set[Path]:
    found: set[Path] = set()
    for pattern in patterns:
        pattern = pattern.strip().lstrip("/")
        if pattern.startswith("./"):
            pattern = pattern[2:]
        if not pattern:
            continue
        found.update(p for p in base.glob(pattern) if p.is_file())
    return found


def _is_metadata(base: Path, file: Path) -> bool:
    rel = file.relative_to(base)
    name = rel.name.lower()
    if name in _METADATA_NAMES or name.endswith(_METADATA_SUFFIXES):
        return True
    return len(rel.parts) > 1 and rel.parts[0].lower() in _METADATA_DIRS


class NuGetContentResolver:
    """内容解析器（满足 ContentResolver 协议）"""

    def __init__(self, config: Config) -> None:
        self.config = config

    def get_files(
        self,
        path: Path | None,
        package: PackageReference,
        package_type: PackageType,
    ) -> list[Path]:
        if path is None or not path.is_dir():
            return []
        if package_type is PackageType.ADDIN:
            files = self._addin_files(path)
        else:
            files = self._tool_files(path, package)
        excluded = _glob(path, package.get_parameters("exclude"))
        return sorted(f for f in files if f not in excluded)

    def _addin_files(self, path: Path) -> set[Path]:
        search = path
        lib = _child_dir(path, "lib")
        if lib is not None:
            search = lib
            for tfm in compatible_frameworks(self.config.target_framework):
                chosen = _child_dir(lib, tfm)
                if chosen is not None:
                    logger.debug("选用目标框架目录: %s", chosen)
                    search = chosen
                    break
        return {p for p in search.glob("*.dll") if p.is_file()}

    def _tool_files(self, path: Path, package: PackageReference) -> set[Path]:
        includes = package.get_parameters("include")
        if includes:
            return _glob(path, includes)
        return {
            p for p in path.rglob("*")
            if p.is_file() and not _is_metadata(path, p)
        }
