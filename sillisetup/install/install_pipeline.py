"""
安装管道模块

使用管道模式依次执行安装步骤。每一步都是下一步的前提：
任何致命错误都会阻止后续步骤执行。
"""

import time
from pathlib import Path
from typing import List, Optional

import requests

from ..config.schema import InstallConfig
from ..errors import SilliSetupError
from ..uninstall.cleanup import remove_dir_if_empty
from ..utils.logging import info, success, error, debug, LogStage
from ..utils.paths import format_size, create_staging_dir
from .executor import InstallExecutor
from .install_context import InstallContext, InstallOptions, ProgressCallback
from .steps import (
    CleanupStagingStep,
    DownloadStep,
    InstallArtifactsStep,
    InstallStep,
    ResolveConfigStep,
)


class InstallPipeline:
    """安装管道，负责协调安装步骤的执行"""

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session
        self._steps: List[InstallStep] = []
        self._init_default_steps()

    def _init_default_steps(self) -> None:
        self._steps = [
            ResolveConfigStep(),
            DownloadStep(self.session),
            InstallArtifactsStep(),
            CleanupStagingStep(),
        ]

    def add_step(self, step: InstallStep, position: Optional[int] = None) -> None:
        """添加安装步骤"""
        if position is None:
            self._steps.append(step)
        else:
            self._steps.insert(position, step)

    def remove_step(self, step_name: str) -> None:
        """移除安装步骤"""
        self._steps = [step for step in self._steps if step.name != step_name]

    def get_steps(self) -> List[InstallStep]:
        """获取所有安装步骤"""
        return self._steps.copy()

    def execute(
        self,
        config: InstallConfig,
        options: Optional[InstallOptions] = None,
        progress_callback: Optional[ProgressCallback] = None,
        staging_dir: Optional[Path] = None,
    ) -> InstallContext:
        """执行安装管道

        Returns:
            InstallContext: 安装上下文，包含所有结果

        Raises:
            SilliSetupError: 任一步骤的致命错误
        """
        context = InstallContext(
            config=config,
            options=options or InstallOptions(),
            staging_dir=staging_dir or create_staging_dir(),
            executor=InstallExecutor(config),
            progress_callback=progress_callback,
        )
        context.stats['start_time'] = time.time()

        info(f"开始安装 {config.app_name}", stage=LogStage.INSTALL)
        debug(
            f"安装选项: with_secondary={context.options.with_secondary} force={context.options.force} "
            f"staging={context.staging_dir}",
            stage=LogStage.INSTALL,
        )

        try:
            for step in self._steps:
                debug(f"执行步骤: {step.description}", stage=LogStage.INSTALL)
                step.execute(context)
        except SilliSetupError as e:
            context.stats['end_time'] = time.time()
            error(f"安装失败: {e}", stage=LogStage.INSTALL)
            if staging_dir is None:
                remove_dir_if_empty(context.staging_dir)
            raise

        context.stats['end_time'] = time.time()
        elapsed = context.stats['end_time'] - context.stats['start_time']
        success(f"安装完成: {context.installed_path}", stage=LogStage.INSTALL)
        info(f"下载大小: {format_size(context.stats['downloaded_bytes'])}，耗时 {elapsed:.1f}秒")
        return context

    def validate_pipeline(self) -> List[str]:
        """验证安装管道的完整性

        Returns:
            List[str]: 验证错误列表，空列表表示验证通过
        """
        errors = []

        if not self._steps:
            errors.append("安装管道中没有步骤")
            return errors

        prev_end = 0
        for step in self._steps:
            start, end = step.get_progress_range()
            if start != prev_end:
                errors.append(f"步骤 '{step.name}' 的进度范围不连续: 期望起始 {prev_end}%, 实际 {start}%")
            if start >= end:
                errors.append(f"步骤 '{step.name}' 的进度范围无效: {start}% - {end}%")
            prev_end = end

        if prev_end != 100:
            errors.append(f"安装管道的总进度范围不是100%: {prev_end}%")

        return errors
