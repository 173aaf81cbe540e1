"""
哈希校验器

在进程内计算文件的 SHA-256 指纹并与期望值比较。
校验失败时立即删除暂存文件：校验结束后暂存路径要么是通过校验的文件，要么不存在。
"""

import hashlib
import hmac
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from ..config.schema import normalize_fingerprint
from ..errors import FilesystemError
from ..utils.logging import get_stage_logger, LogStage

logger = get_stage_logger(LogStage.VERIFY)


class VerifyOutcome(str, Enum):
    """校验结果"""
    VERIFIED = "verified"
    MISMATCH = "mismatch"
    COMPUTE_FAILED = "compute_failed"


@dataclass(frozen=True)
class FingerprintRecord:
    """规范化后的期望指纹与实际指纹"""
    expected: str
    actual: str

    @classmethod
    def create(cls, expected: str, actual: str) -> "FingerprintRecord":
        return cls(expected=normalize_fingerprint(expected), actual=normalize_fingerprint(actual))

    def matches(self) -> bool:
        return hmac.compare_digest(self.expected, self.actual)


@dataclass
class VerificationResult:
    """一次校验的结果"""
    path: Path
    outcome: VerifyOutcome
    record: Optional[FingerprintRecord] = None
    error: Optional[str] = None

    @property
    def verified(self) -> bool:
        return self.outcome == VerifyOutcome.VERIFIED


class HashCalculator:
    """哈希计算器"""

    def __init__(self, algorithm: str = "sha256"):
        self.algorithm = algorithm.lower()
        if self.algorithm not in hashlib.algorithms_available:
            raise ValueError(f"不支持的哈希算法: {algorithm}")
        self._hasher = hashlib.new(self.algorithm)

    def update(self, data: bytes) -> None:
        self._hasher.update(data)

    def update_from_file(self, file_path: Path, chunk_size: int = 1024 * 1024) -> None:
        """分块读取文件更新哈希

        Raises:
            OSError: 文件读取失败
        """
        with open(file_path, 'rb') as f:
            for chunk in iter(lambda: f.read(chunk_size), b""):
                self._hasher.update(chunk)

    def hexdigest(self) -> str:
        return self._hasher.hexdigest()

    @classmethod
    def hash_file(cls, file_path: Path, algorithm: str = "sha256") -> str:
        """便捷方法：计算文件哈希"""
        calculator = cls(algorithm)
        calculator.update_from_file(file_path)
        return calculator.hexdigest()


def compute_fingerprint(file_path: Path) -> str:
    """计算文件的规范化 SHA-256 指纹"""
    return normalize_fingerprint(HashCalculator.hash_file(file_path))


def verify(file_path: Union[str, Path], expected_fingerprint: str) -> VerificationResult:
    """校验文件指纹

    Args:
        file_path: 暂存文件路径
        expected_fingerprint: 期望的 64 位十六进制指纹（不区分大小写）

    Returns:
        VerificationResult: VERIFIED / MISMATCH / COMPUTE_FAILED

    Raises:
        FilesystemError: 指纹不匹配且无法删除暂存文件
    """
    path = Path(file_path)

    try:
        actual = compute_fingerprint(path)
    except (OSError, ValueError) as e:
        logger.error(f"无法计算指纹 {path}: {e}")
        return VerificationResult(path=path, outcome=VerifyOutcome.COMPUTE_FAILED, error=str(e))

    record = FingerprintRecord.create(expected_fingerprint, actual)
    if record.matches():
        logger.success(f"指纹校验通过: {path.name}")
        return VerificationResult(path=path, outcome=VerifyOutcome.VERIFIED, record=record)

    logger.error(f"指纹不匹配: {path}\n  期望值: {record.expected}\n  实际值: {record.actual}")
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        raise FilesystemError(path, "无法删除未通过校验的暂存文件", e.errno) from e
    logger.info(f"已删除未通过校验的文件: {path}")

    return VerificationResult(path=path, outcome=VerifyOutcome.MISMATCH, record=record)
