"""
错误分类

安装/卸载流程的统一异常体系。每个致命错误都携带退出码，供脚本调用方区分失败类别。
"""

from pathlib import Path
from typing import Optional, Union


class ExitCode:
    """进程退出码"""
    OK = 0
    CANCELLED = 1
    CONFIG_INVALID = 2
    INSECURE_URL = 3
    NETWORK_FAILURE = 4
    HASH_COMPUTE_FAILED = 5
    HASH_MISMATCH = 6
    FILESYSTEM_FAILURE = 7


class SilliSetupError(Exception):
    """所有安装/卸载错误的基类"""
    exit_code = ExitCode.CANCELLED


class ConfigInvalidError(SilliSetupError):
    """配置未填写或格式错误"""
    exit_code = ExitCode.CONFIG_INVALID

    def __init__(self, field: str, reason: str):
        super().__init__(f"配置字段 '{field}' {reason}")
        self.field = field
        self.reason = reason


class InsecureUrlError(SilliSetupError):
    """非 HTTPS 地址"""
    exit_code = ExitCode.INSECURE_URL

    def __init__(self, field: str, url: str):
        super().__init__(f"配置字段 '{field}' 必须使用 https:// 地址: {url}")
        self.field = field
        self.url = url


class NetworkFailureError(SilliSetupError):
    """必需的下载任务失败"""
    exit_code = ExitCode.NETWORK_FAILURE

    def __init__(self, task, cause: Union[Exception, str]):
        super().__init__(f"下载失败 {task.source_url} -> {task.staging_path}: {cause}")
        self.task = task
        self.cause = cause


class HashComputeError(SilliSetupError):
    """无法计算文件指纹"""
    exit_code = ExitCode.HASH_COMPUTE_FAILED

    def __init__(self, path: Path, cause: Union[Exception, str]):
        super().__init__(f"无法计算文件指纹 {path}: {cause}")
        self.path = path
        self.cause = cause


class HashMismatchError(SilliSetupError):
    """文件指纹与期望值不一致"""
    exit_code = ExitCode.HASH_MISMATCH

    def __init__(self, path: Path, expected: str, actual: str):
        super().__init__(
            f"文件指纹不匹配，已删除 {path}\n"
            f"  期望值: {expected}\n"
            f"  实际值: {actual}"
        )
        self.path = path
        self.expected = expected
        self.actual = actual


class FilesystemError(SilliSetupError):
    """目录创建或文件复制失败"""
    exit_code = ExitCode.FILESYSTEM_FAILURE

    def __init__(self, path: Path, message: str, errno: Optional[int] = None):
        detail = f"{message}: {path}"
        if errno is not None:
            detail += f" (错误码 {errno})"
        super().__init__(detail)
        self.path = path
        self.errno = errno


class ArtifactMissingError(FilesystemError):
    """暂存的主程序文件不存在"""

    def __init__(self, path: Path):
        super().__init__(path, "暂存的安装文件不存在")


class OperationCancelled(SilliSetupError):
    """用户取消"""
    exit_code = ExitCode.CANCELLED

    def __init__(self, message: str = "操作已被用户取消"):
        super().__init__(message)
