"""nuget-installer 命令行接口

各子模块注册自己的命令到 main group。
"""

import os
from typing import Optional

import click

from nuget_installer import __version__
from nuget_installer.core.config import init_config
from nuget_installer.core.exceptions import InstallerError
from nuget_installer.services.container import ServiceContainer, get_container, reset_container
from nuget_installer.utils.logger import setup_logging


def _svc() -> ServiceContainer:
    """获取全局服务容器的快捷方式"""
    return get_container()


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", default=None, help="YAML 配置文件路径")
def main(config_path: Optional[str]) -> None:
    """nuget-installer - NuGet 插件/工具包安装"""
    setup_logging(
        level=os.getenv("NUGET_INSTALLER_LOG_LEVEL", "INFO"),
        json_output=os.getenv("NUGET_INSTALLER_LOG_JSON", "") == "1",
    )
    if config_path:
        try:
            init_config(config_path)
        except InstallerError as e:
            raise click.ClickException(str(e)) from e
        reset_container()


# 注册各领域子命令
from nuget_installer.cli.cmd_install import register as _reg_install  # noqa: E402

_reg_install(main)
