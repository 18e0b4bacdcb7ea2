"""集中配置管理

YAML 文件加载 + 环境变量覆盖 + 编程式覆盖。
Config 同时充当安装器使用的键值配置存储（get_value）。

环境变量命名: NUGET_INSTALLER_<字段名大写>，如 NUGET_INSTALLER_NUGET_SOURCE。
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, fields
from typing import Any

from nuget_installer.core.exceptions import ConfigError
from nuget_installer.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "configs/default.yml"
ENV_PREFIX = "NUGET_INSTALLER_"

# 安装器读取的配置键
NUGET_SOURCE = "nuget_source"
NUGET_CONFIG_FILE = "nuget_config_file"


@dataclass
class Config:
    """全局配置"""

    # 目录
    tools_dir: str = "tools"

    # NuGet
    nuget_source: str = ""
    nuget_config_file: str = ""
    nuget_tool_path: str = ""

    # 插件程序集的目标框架
    target_framework: str = "net8.0"

    # 外部进程等待上限（秒），0 表示不限
    install_timeout: int = 600

    # 放不到字段里的配置项
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = DEFAULT_CONFIG_FILE) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        data = load_yaml(path)
        if not data:
            return cls()
        known = {f.name for f in fields(cls)} - {"extra"}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        cfg._validate()
        return cfg

    def apply_env(self, environ: Mapping[str, str] | None = None) -> Config:
        """用 NUGET_INSTALLER_* 环境变量覆盖字段，返回自身"""
        environ = os.environ if environ is None else environ
        for f in fields(self):
            if f.name == "extra":
                continue
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            if f.name == "install_timeout":
                try:
                    setattr(self, f.name, int(raw))
                except ValueError as e:
                    raise ConfigError(
                        f"{ENV_PREFIX}INSTALL_TIMEOUT 不是整数: {raw!r}"
                    ) from e
            else:
                setattr(self, f.name, raw)
            logger.debug("环境变量覆盖配置: %s", f.name)
        self._validate()
        return self

    def get_value(self, key: str) -> str | None:
        """键值查询，空白值视为未配置"""
        key = key.lower()
        if key != "extra" and key in {f.name for f in fields(self)}:
            value: Any = getattr(self, key)
        else:
            value = self.extra.get(key)
        if value is None:
            return None
        text = str(value)
        return text if text.strip() else None

    def to_dict(self) -> dict:
        return asdict(self)

    def _validate(self) -> None:
        if not isinstance(self.install_timeout, int) or self.install_timeout < 0:
            raise ConfigError(
                f"install_timeout 必须是非负整数: {self.install_timeout!r}"
            )


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值 + 环境变量覆盖）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config().apply_env()
    return _current


def init_config(path: str = DEFAULT_CONFIG_FILE) -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path).apply_env()
    logger.info("配置已加载: %s", path)
    return _current
