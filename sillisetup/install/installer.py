"""
安装器主类

对外提供统一的安装接口，将管道中的错误转换为带退出码的结果。
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import requests

from ..config.schema import InstallConfig
from ..errors import ExitCode, SilliSetupError
from .install_context import InstallOptions, ProgressCallback
from .install_pipeline import InstallPipeline


@dataclass
class InstallResult:
    """安装结果"""
    success: bool
    exit_code: int = ExitCode.OK
    installed_path: Optional[Path] = None
    secondary_path: Optional[Path] = None
    warnings: List[str] = field(default_factory=list)
    error: Optional[SilliSetupError] = None

    @property
    def message(self) -> str:
        return str(self.error) if self.error else ""


class Installer:
    """SilliReminder 安装器"""

    def __init__(self, session: Optional[requests.Session] = None):
        self.pipeline = InstallPipeline(session)

    def install(
        self,
        config: InstallConfig,
        options: Optional[InstallOptions] = None,
        progress_callback: Optional[ProgressCallback] = None,
        staging_dir: Optional[Path] = None,
    ) -> InstallResult:
        """执行安装

        Returns:
            InstallResult: 失败时 exit_code 对应错误类别
        """
        try:
            context = self.pipeline.execute(config, options, progress_callback, staging_dir)
        except SilliSetupError as e:
            return InstallResult(success=False, exit_code=e.exit_code, error=e)

        return InstallResult(
            success=True,
            installed_path=context.installed_path,
            secondary_path=context.delivered_secondary,
            warnings=list(context.warnings),
        )

    def get_pipeline(self) -> InstallPipeline:
        """获取安装管道，用于自定义安装流程"""
        return self.pipeline
