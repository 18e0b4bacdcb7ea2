"""NuGet 进程调用

单次同步调用外部包管理器：阻塞等待退出，返回退出码和捕获的 stdout。
非零退出码是预期内的可恢复结果，由安装器决定如何处理，这里不抛异常。
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path

from nuget_installer.core.package.arguments import ProcessArgumentBuilder
from nuget_installer.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)


@dataclass
class InstallOutcome:
    """一次 NuGet 调用的结果"""

    exit_code: int
    output_lines: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.exit_code == 0


def run_install(
    executor: CommandExecutor,
    executable: Path,
    arguments: ProcessArgumentBuilder,
    *,
    quiet: bool = True,
    timeout: float | None = None,
    cancel: threading.Event | None = None,
) -> InstallOutcome:
    """启动 NuGet 并等待结束

    quiet=True 时不把 NuGet 输出透传到控制台日志。
    启动失败、超时、取消由执行器抛 ExecutionError。
    """
    logger.debug("执行: %s %s", executable, arguments.render())
    result = executor.execute(
        [str(executable), *arguments.to_list()],
        timeout=timeout,
        silent=quiet,
        cancel=cancel,
    )
    outcome = InstallOutcome(
        exit_code=result.returncode, output_lines=result.stdout_lines,
    )
    if not outcome.success:
        logger.warning("NuGet 退出码 %d", outcome.exit_code)
        logger.debug("输出:\n%s", "\n".join(outcome.output_lines))
    return outcome
