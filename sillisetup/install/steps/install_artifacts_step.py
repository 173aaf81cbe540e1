"""
安装步骤

通过 InstallExecutor 依次执行存在性检查、指纹校验、提交主程序与投递说明文档。
校验与复制之间没有任何交互，复制开始后不可中断。
"""

from ..install_context import InstallContext
from .install_step import InstallStep


class InstallArtifactsStep(InstallStep):
    """安装步骤"""

    def __init__(self):
        super().__init__("install", "校验并安装主程序")

    def get_progress_range(self) -> tuple[int, int]:
        return (60, 95)

    def execute(self, context: InstallContext) -> None:
        context.report_progress("校验", 60, context.staged_primary.name)
        outcome = context.executor.install(context.staged_primary, context.staged_secondary)

        context.verification = outcome.verification
        context.installed_path = outcome.installed_path
        context.delivered_secondary = outcome.secondary_path
        for message in outcome.warnings:
            context.add_warning(message)

        context.report_progress("安装", 95, outcome.installed_path.name)
