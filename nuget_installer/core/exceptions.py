"""统一异常体系

所有业务异常继承 InstallerError，替代散落的 ValueError / RuntimeError。
CLI 层可据此输出友好提示。

注意: 包管理器进程返回非零退出码属于可恢复结果，不抛异常。
"""

from __future__ import annotations


class InstallerError(Exception):
    """安装器基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(InstallerError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class ValidationError(InstallerError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


class ToolNotFoundError(InstallerError):
    """找不到外部包管理器可执行文件"""

    code = "TOOL_NOT_FOUND"


class ExecutionError(InstallerError):
    """子进程无法启动、超时或被取消"""

    code = "EXECUTION_ERROR"
