"""CLI — 包安装命令"""

from __future__ import annotations

from pathlib import Path

import click

from nuget_installer.cli import _svc
from nuget_installer.core.exceptions import InstallerError
from nuget_installer.core.package.arguments import build_install_arguments
from nuget_installer.core.package.models import PackageReference, PackageType
from nuget_installer.core.package.paths import compute_installation_root

_TYPE_CHOICE = click.Choice([t.value for t in PackageType], case_sensitive=False)


def register(group: click.Group) -> None:
    group.add_command(install)
    group.add_command(can_install)
    group.add_command(show_root)
    group.add_command(show_args)


def _parse_ref(uri: str) -> PackageReference:
    try:
        return PackageReference.parse(uri)
    except InstallerError as e:
        raise click.BadParameter(str(e), param_hint="URI") from e


def _base_dir(path: str | None) -> Path:
    return Path(path or _svc().config.tools_dir).absolute()


@click.command()
@click.argument("uri")
@click.option("--type", "package_type", type=_TYPE_CHOICE, default="tool", help="包类型")
@click.option("--path", default=None, help="安装基准目录（默认取配置 tools_dir）")
def install(uri: str, package_type: str, path: str | None) -> None:
    """安装包并列出可用文件（已安装则直接返回）"""
    ref = _parse_ref(uri)
    ptype = PackageType.parse(package_type)
    installer = _svc().installer
    if not installer.can_install(ref, ptype):
        raise click.ClickException(f"不支持的 scheme: {ref.scheme}")
    try:
        files = installer.install(ref, ptype, _base_dir(path))
    except InstallerError as e:
        raise click.ClickException(str(e)) from e
    if not files:
        click.echo(f"未解析到任何文件: {ref.package}", err=True)
        raise SystemExit(1)
    for f in files:
        click.echo(str(f))


@click.command(name="can-install")
@click.argument("uri")
@click.option("--type", "package_type", type=_TYPE_CHOICE, default="tool", help="包类型")
def can_install(uri: str, package_type: str) -> None:
    """判断包引用能否由本安装器处理"""
    ref = _parse_ref(uri)
    ok = _svc().installer.can_install(ref, PackageType.parse(package_type))
    click.echo("yes" if ok else "no")
    if not ok:
        raise SystemExit(1)


@click.command(name="root")
@click.argument("uri")
@click.option("--path", default=None, help="安装基准目录（默认取配置 tools_dir）")
def show_root(uri: str, path: str | None) -> None:
    """打印包的安装根目录（不做任何 IO）"""
    ref = _parse_ref(uri)
    click.echo(str(compute_installation_root(_base_dir(path), ref)))


@click.command(name="args")
@click.argument("uri")
@click.option("--path", default=None, help="安装基准目录（默认取配置 tools_dir）")
def show_args(uri: str, path: str | None) -> None:
    """预览 nuget install 的完整参数"""
    ref = _parse_ref(uri)
    root = compute_installation_root(_base_dir(path), ref)
    click.echo(build_install_arguments(ref, root, _svc().config).render())
