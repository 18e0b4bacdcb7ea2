"""NuGet install 命令行参数构造

参数顺序固定，兼容 nuget.exe 的解析器:

    install "<id>" -OutputDirectory "<root>" [-Source "<src>"]
        [-ConfigFile "<cfg>"] [-Version "<ver>"] [-Prerelease] [-NoCache]
        -ExcludeVersion -NonInteractive
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from nuget_installer.core.config import NUGET_CONFIG_FILE, NUGET_SOURCE
from nuget_installer.core.package.models import PackageReference
from nuget_installer.core.protocols import ConfigurationStore


class ProcessArgumentBuilder:
    """有序参数列表

    to_list() 供 subprocess 使用（列表形式天然不受空白影响），
    render() 生成带引号的单行字符串，用于日志和预览。
    """

    def __init__(self) -> None:
        self._tokens: list[tuple[str, bool]] = []

    def append(self, token: str) -> ProcessArgumentBuilder:
        self._tokens.append((token, False))
        return self

    def append_quoted(self, token: str) -> ProcessArgumentBuilder:
        self._tokens.append((token, True))
        return self

    def to_list(self) -> list[str]:
        return [t for t, _ in self._tokens]

    def render(self) -> str:
        return " ".join(
            '"' + t.replace('"', '\\"') + '"' if quoted else t
            for t, quoted in self._tokens
        )

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_list())

    def __len__(self) -> int:
        return len(self._tokens)

    def __str__(self) -> str:
        return self.render()


def build_install_arguments(
    reference: PackageReference,
    installation_root: Path,
    config: ConfigurationStore,
) -> ProcessArgumentBuilder:
    """根据包引用、安装根目录和配置构造 install 参数"""
    args = ProcessArgumentBuilder()

    args.append("install")
    args.append_quoted(reference.package)

    args.append("-OutputDirectory")
    args.append_quoted(str(installation_root))

    # 引用里显式给了源地址就用它，否则看配置里的自定义源
    if reference.address is not None:
        args.append("-Source")
        args.append_quoted(reference.address)
    else:
        source = config.get_value(NUGET_SOURCE)
        if source and source.strip():
            args.append("-Source")
            args.append_quoted(source)

    config_file = config.get_value(NUGET_CONFIG_FILE)
    if config_file and config_file.strip():
        args.append("-ConfigFile")
        args.append_quoted(config_file)

    if reference.has_parameter("version"):
        args.append("-Version")
        args.append_quoted(reference.get_parameter("version") or "")

    if reference.has_parameter("prerelease"):
        args.append("-Prerelease")

    if reference.has_parameter("nocache"):
        args.append("-NoCache")

    args.append("-ExcludeVersion")
    args.append("-NonInteractive")
    return args
