"""
安装执行器

将暂存的主程序校验后提交到安装目录，并投递可选的说明文档。
每一步都是下一步的硬性前提；说明文档投递失败不影响安装结果。
复制时再次计算写入内容的指纹，只有一致时才替换已安装的程序。
"""

import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..config.schema import InstallConfig
from ..errors import (
    ArtifactMissingError,
    FilesystemError,
    HashComputeError,
    HashMismatchError,
)
from ..utils.logging import get_stage_logger, LogStage
from ..utils.paths import ensure_directory
from .verifier import FingerprintRecord, HashCalculator, VerificationResult, VerifyOutcome, verify

logger = get_stage_logger(LogStage.INSTALL)
deliver_logger = get_stage_logger(LogStage.DELIVER)

COPY_CHUNK_SIZE = 1024 * 1024
PARTIAL_SUFFIX = ".partial"


@dataclass
class InstallOutcome:
    """安装执行结果"""
    installed_path: Path
    verification: VerificationResult
    secondary_path: Optional[Path] = None
    warnings: List[str] = field(default_factory=list)


class InstallExecutor:
    """安装执行器"""

    def __init__(self, config: InstallConfig):
        self.config = config
        self.install_root = config.get_install_root()
        self.exe_path = self.install_root / config.exe_file_name

    def check_staged(self, staged_primary: Path) -> None:
        """确认暂存的主程序存在"""
        if not staged_primary.is_file():
            raise ArtifactMissingError(staged_primary)

    def verify_primary(self, staged_primary: Path) -> VerificationResult:
        """校验暂存的主程序，不通过则中止安装"""
        result = verify(staged_primary, self.config.expected_fingerprint)
        if result.outcome == VerifyOutcome.MISMATCH:
            assert result.record is not None
            raise HashMismatchError(staged_primary, result.record.expected, result.record.actual)
        if result.outcome == VerifyOutcome.COMPUTE_FAILED:
            raise HashComputeError(staged_primary, result.error or "未知错误")
        return result

    def prepare_install_root(self) -> Path:
        """确保安装目录存在"""
        try:
            return ensure_directory(self.install_root)
        except OSError as e:
            raise FilesystemError(self.install_root, "无法创建安装目录", e.errno) from e

    def commit_primary(self, staged_primary: Path) -> Path:
        """复制主程序到安装目录，覆盖旧版本

        先写入同目录下的临时文件并同时计算指纹，一致后再原子替换。

        Raises:
            HashMismatchError: 复制的内容与期望指纹不一致（旧版本保持不变）
            FilesystemError: 复制或替换失败
        """
        partial = self.exe_path.with_name(self.exe_path.name + PARTIAL_SUFFIX)
        calculator = HashCalculator()
        try:
            with open(staged_primary, 'rb') as src, open(partial, 'wb') as dst:
                for chunk in iter(lambda: src.read(COPY_CHUNK_SIZE), b""):
                    calculator.update(chunk)
                    dst.write(chunk)

            record = FingerprintRecord.create(self.config.expected_fingerprint, calculator.hexdigest())
            if not record.matches():
                self._discard(partial)
                self._discard(staged_primary)
                logger.error(f"复制时指纹不一致，已放弃安装: {staged_primary}")
                raise HashMismatchError(staged_primary, record.expected, record.actual)

            os.replace(partial, self.exe_path)
        except OSError as e:
            self._discard(partial)
            raise FilesystemError(self.exe_path, "复制程序文件失败", e.errno) from e

        logger.success(f"已安装: {self.exe_path}")
        return self.exe_path

    def secondary_destination(self) -> Path:
        return self.config.get_documents_dir() / self.config.secondary_asset_file_name

    def deliver_secondary(self, staged_secondary: Path) -> Optional[Path]:
        """投递说明文档

        Returns:
            Optional[Path]: 目标路径；失败时返回 None 并记录警告
        """
        destination = self.secondary_destination()
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(staged_secondary, destination)
        except OSError as e:
            deliver_logger.warning(f"无法复制说明文档到 {destination}: {e}")
            return None
        deliver_logger.success(f"说明文档已保存: {destination}")
        return destination

    def install(self, staged_primary: Path, staged_secondary: Optional[Path] = None) -> InstallOutcome:
        """依次执行: 存在性检查 -> 校验 -> 创建目录 -> 复制主程序 -> 投递说明文档

        Raises:
            ArtifactMissingError, HashMismatchError, HashComputeError, FilesystemError
        """
        staged_primary = Path(staged_primary)
        self.check_staged(staged_primary)
        verification = self.verify_primary(staged_primary)
        self.prepare_install_root()
        installed = self.commit_primary(staged_primary)

        outcome = InstallOutcome(installed_path=installed, verification=verification)
        if staged_secondary is not None:
            outcome.secondary_path = self.deliver_secondary(Path(staged_secondary))
            if outcome.secondary_path is None:
                outcome.warnings.append(f"说明文档未能保存到 {self.secondary_destination()}")
        return outcome

    def _discard(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"无法删除 {path}: {e}")
