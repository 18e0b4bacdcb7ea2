"""nuget-installer — NuGet 包安装解析器"""

__version__ = "0.1.0"
