"""Shell 命令执行工具 — 统一子进程调用

通过 CommandExecutor 协议抽象子进程执行，安装器只依赖该协议，
测试时注入假执行器即可，无需 patch subprocess。
"""

from __future__ import annotations

import logging
import subprocess
import threading
import time
from dataclasses import dataclass
from typing import Protocol

from nuget_installer.core.exceptions import ExecutionError

logger = logging.getLogger(__name__)

# 阻塞等待时轮询超时/取消信号的间隔（秒）
POLL_INTERVAL = 0.2


# =========================================================================
# 命令执行结果
# =========================================================================

@dataclass
class CommandResult:
    """命令执行结果（与 subprocess 解耦）"""

    returncode: int
    stdout: str
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def stdout_lines(self) -> list[str]:
        return self.stdout.splitlines()


# =========================================================================
# 命令执行器协议
# =========================================================================

class CommandExecutor(Protocol):
    """命令执行器协议 — 抽象子进程调用

    调用方阻塞直到进程退出；非零退出码通过 CommandResult 返回而不抛异常。
    """

    def execute(
        self,
        cmd: list[str],
        *,
        cwd: str | None = None,
        env: dict[str, str] | None = None,
        timeout: float | None = None,
        silent: bool = True,
        cancel: threading.Event | None = None,
    ) -> CommandResult:
        """执行命令并返回结果"""
        ...


# =========================================================================
# 默认实现: 本地执行器
# =========================================================================

class LocalExecutor:
    """本地子进程执行器（默认实现）

    - 始终捕获 stdout/stderr
    - silent=False 时把捕获到的 stdout 逐行透传到日志
    - timeout 秒内未结束或 cancel 被置位时杀掉子进程并抛 ExecutionError
    """

    def execute(
        self,
        cmd: list[str],
        *,
        cwd: str | None = None,
        env: dict[str, str] | None = None,
        timeout: float | None = None,
        silent: bool = True,
        cancel: threading.Event | None = None,
    ) -> CommandResult:
        try:
            proc = subprocess.Popen(
                cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE,
                text=True, cwd=cwd, env=env,
            )
        except OSError as e:
            raise ExecutionError(f"无法启动进程 {cmd[0]}: {e}") from e

        deadline = None if not timeout else time.monotonic() + timeout
        while True:
            try:
                stdout, stderr = proc.communicate(timeout=POLL_INTERVAL)
                break
            except subprocess.TimeoutExpired:
                if cancel is not None and cancel.is_set():
                    _kill(proc)
                    raise ExecutionError(f"进程已取消: {cmd[0]}") from None
                if deadline is not None and time.monotonic() >= deadline:
                    _kill(proc)
                    raise ExecutionError(
                        f"进程超时 ({timeout}s): {cmd[0]}"
                    ) from None

        if not silent:
            for line in stdout.splitlines():
                logger.info("  %s", line)
        return CommandResult(
            returncode=proc.returncode, stdout=stdout, stderr=stderr,
        )


def _kill(proc: subprocess.Popen[str]) -> None:
    proc.kill()
    proc.communicate()


# =========================================================================
# 全局默认执行器（可替换）
# =========================================================================

_default_executor: CommandExecutor = LocalExecutor()


def get_executor() -> CommandExecutor:
    """获取全局默认命令执行器"""
    return _default_executor


def set_executor(executor: CommandExecutor) -> None:
    """替换全局默认命令执行器（用于测试）"""
    global _default_executor  # noqa: PLW0603
    _default_executor = executor
