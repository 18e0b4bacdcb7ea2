"""NuGet 包安装模块

拆分说明:
- models.py: 包引用 / 包类型
- paths.py: 安装根目录与内容目录规则
- arguments.py: nuget install 参数构造
- invoker.py: 单次进程调用
- content.py: 内容文件解析
- tool_resolver.py: nuget 可执行文件定位
- installer.py: 幂等安装流程编排
"""

from nuget_installer.core.package.arguments import (
    ProcessArgumentBuilder,
    build_install_arguments,
)
from nuget_installer.core.package.content import NuGetContentResolver
from nuget_installer.core.package.installer import NuGetPackageInstaller
from nuget_installer.core.package.invoker import InstallOutcome, run_install
from nuget_installer.core.package.models import (
    NUGET_SCHEME,
    PackageReference,
    PackageType,
)
from nuget_installer.core.package.paths import (
    compute_installation_root,
    find_content_directory,
    select_content_directory,
)
from nuget_installer.core.package.tool_resolver import NuGetToolResolver

__all__ = [
    "NUGET_SCHEME",
    "PackageReference",
    "PackageType",
    "ProcessArgumentBuilder",
    "build_install_arguments",
    "InstallOutcome",
    "run_install",
    "compute_installation_root",
    "find_content_directory",
    "select_content_directory",
    "NuGetContentResolver",
    "NuGetToolResolver",
    "NuGetPackageInstaller",
]
