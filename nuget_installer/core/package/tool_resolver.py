"""NuGet 可执行文件定位

查找顺序:
  1. 配置项 nuget_tool_path
  2. 环境变量 NUGET_EXE
  3. <tools_dir>/nuget.exe、<tools_dir>/nuget
  4. PATH 中的 nuget / nuget.exe
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Mapping
from pathlib import Path

from nuget_installer.core.config import Config
from nuget_installer.core.protocols import FileSystem

logger = logging.getLogger(__name__)

EXECUTABLE_NAMES = ("nuget.exe", "nuget")


class NuGetToolResolver:
    """定位 nuget 可执行文件，结果缓存"""

    def __init__(
        self,
        config: Config,
        filesystem: FileSystem,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.config = config
        self.filesystem = filesystem
        self.environ = os.environ if environ is None else environ
        self._cached: Path | None = None

    def resolve_path(self) -> Path | None:
        if self._cached is not None:
            return self._cached
        for candidate in self._candidates():
            path = Path(candidate).absolute()
            if self.filesystem.file_exists(path):
                logger.debug("NuGet 路径: %s", path)
                self._cached = path
                return path
        logger.debug("未找到 NuGet 可执行文件")
        return None

    def _candidates(self) -> list[str]:
        found: list[str] = []
        if self.config.nuget_tool_path:
            found.append(self.config.nuget_tool_path)
        env_path = self.environ.get("NUGET_EXE")
        if env_path:
            found.append(env_path)
        tools_dir = Path(self.config.tools_dir)
        found.extend(str(tools_dir / name) for name in EXECUTABLE_NAMES)
        for name in EXECUTABLE_NAMES:
            on_path = shutil.which(name, path=self.environ.get("PATH"))
            if on_path:
                found.append(on_path)
        return found
