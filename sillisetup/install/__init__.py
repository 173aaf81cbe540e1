"""安装模块

下载、校验并提交 SilliReminder 主程序。
"""

from .downloader import DownloadOrchestrator, DownloadReport, DownloadTask
from .executor import InstallExecutor, InstallOutcome
from .install_context import InstallContext, InstallOptions
from .install_pipeline import InstallPipeline
from .installer import Installer, InstallResult
from .verifier import FingerprintRecord, HashCalculator, VerificationResult, VerifyOutcome, verify

__all__ = [
    "Installer",
    "InstallResult",
    "InstallPipeline",
    "InstallContext",
    "InstallOptions",
    "InstallExecutor",
    "InstallOutcome",
    "DownloadOrchestrator",
    "DownloadReport",
    "DownloadTask",
    "FingerprintRecord",
    "HashCalculator",
    "VerificationResult",
    "VerifyOutcome",
    "verify",
]
