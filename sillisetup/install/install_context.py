"""
安装上下文模块

定义安装过程中各步骤共享的数据结构。
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING

from ..config.schema import InstallConfig

if TYPE_CHECKING:
    from .downloader import DownloadTask
    from .executor import InstallExecutor
    from .verifier import VerificationResult

# 进度回调: (阶段, 当前百分比, 总数, 消息)
ProgressCallback = Callable[[str, int, int, str], None]

# 已安装时是否覆盖的确认回调
OverwriteConfirm = Callable[[Path], bool]


@dataclass
class InstallOptions:
    """用户在向导中做出的选择"""
    with_secondary: bool = False
    force: bool = False
    locale: Optional[str] = None
    confirm_overwrite: Optional[OverwriteConfirm] = None
    keep_staging: bool = False


@dataclass
class InstallContext:
    """安装上下文，包含安装过程中的共享数据"""
    config: InstallConfig
    options: InstallOptions
    staging_dir: Path
    executor: 'InstallExecutor'
    progress_callback: Optional[ProgressCallback] = None

    # 安装过程中生成的数据
    secondary_url: Optional[str] = None
    primary_task: Optional['DownloadTask'] = None
    secondary_task: Optional['DownloadTask'] = None
    staged_secondary: Optional[Path] = None
    verification: Optional['VerificationResult'] = None
    installed_path: Optional[Path] = None
    delivered_secondary: Optional[Path] = None
    warnings: List[str] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=lambda: {
        'start_time': 0.0,
        'end_time': 0.0,
        'downloaded_bytes': 0,
    })

    @property
    def staged_primary(self) -> Path:
        return self.staging_dir / self.config.exe_file_name

    def report_progress(self, stage: str, percent: int, message: str = "") -> None:
        if self.progress_callback:
            self.progress_callback(stage, percent, 100, message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)
