"""
尽力删除

单一可复用的删除操作：不存在视为成功，被占用时仅警告，从不递归删除非空目录。
数据库文件、设置文件、空目录清理都走同一个入口。
"""

import errno
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from ..utils.logging import get_stage_logger, LogStage

logger = get_stage_logger(LogStage.CLEANUP)

# Windows ERROR_SHARING_VIOLATION / ERROR_LOCK_VIOLATION
_WINERROR_IN_USE = (32, 33)


class RemovalOutcome(str, Enum):
    """删除结果"""
    REMOVED = "removed"
    ALREADY_ABSENT = "already_absent"
    FAILED_WARN = "failed_warn"


class RemovalKind(str, Enum):
    FILE = "file"
    EMPTY_DIR = "empty_dir"


@dataclass
class RemovalResult:
    """一次删除的结果"""
    path: Path
    outcome: RemovalOutcome
    error: Optional[str] = None
    in_use: bool = False

    @property
    def ok(self) -> bool:
        return self.outcome != RemovalOutcome.FAILED_WARN


def _is_in_use(exc: OSError) -> bool:
    if getattr(exc, 'winerror', None) in _WINERROR_IN_USE:
        return True
    return isinstance(exc, PermissionError) or exc.errno in (errno.EBUSY, errno.ETXTBSY)


def best_effort_remove(path: Path, kind: RemovalKind = RemovalKind.FILE) -> RemovalResult:
    """尽力删除文件或空目录

    Args:
        path: 目标路径
        kind: FILE 删除文件；EMPTY_DIR 仅删除空目录

    Returns:
        RemovalResult: REMOVED / ALREADY_ABSENT / FAILED_WARN
    """
    path = Path(path)
    try:
        if kind == RemovalKind.EMPTY_DIR:
            path.rmdir()
        else:
            path.unlink()
    except FileNotFoundError:
        logger.debug(f"不存在，跳过: {path}")
        return RemovalResult(path=path, outcome=RemovalOutcome.ALREADY_ABSENT)
    except OSError as e:
        in_use = _is_in_use(e)
        if in_use:
            logger.warning(f"无法删除 {path}：文件正在被使用。请关闭正在运行的应用程序后重试。")
        else:
            logger.warning(f"无法删除 {path}: {e}")
        return RemovalResult(path=path, outcome=RemovalOutcome.FAILED_WARN, error=str(e), in_use=in_use)

    logger.info(f"已删除: {path}")
    return RemovalResult(path=path, outcome=RemovalOutcome.REMOVED)


def is_empty_dir(path: Path) -> bool:
    """目录存在且为空"""
    try:
        return path.is_dir() and not any(path.iterdir())
    except OSError:
        return False


def remove_dir_if_empty(path: Path) -> Optional[RemovalResult]:
    """目录为空时删除；非空或不存在时不做任何操作并返回 None"""
    if not is_empty_dir(path):
        return None
    return best_effort_remove(path, RemovalKind.EMPTY_DIR)
