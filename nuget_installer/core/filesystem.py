"""本地文件系统实现（满足 FileSystem 协议）"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalFileSystem:
    """基于 pathlib/shutil 的文件系统"""

    def directory_exists(self, path: Path) -> bool:
        return path.is_dir()

    def file_exists(self, path: Path) -> bool:
        return path.is_file()

    def create_directory(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def delete_directory(self, path: Path, recursive: bool = False) -> None:
        if recursive:
            shutil.rmtree(path)
        else:
            path.rmdir()
        logger.debug("已删除目录: %s", path)

    def list_directories(self, path: Path) -> list[Path]:
        if not path.is_dir():
            return []
        return sorted(p for p in path.iterdir() if p.is_dir())
