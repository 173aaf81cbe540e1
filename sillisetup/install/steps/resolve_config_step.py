"""
配置校验步骤

在任何网络连接之前校验配置；用户选择了说明文档时解析其区域化地址。
已安装时在此确认是否覆盖，之后直到安装完成不再有交互。
"""

from typing import Optional

from ...config.resolver import ConfigResolver
from ...errors import OperationCancelled
from ...utils.logging import info, LogStage
from ..install_context import InstallContext
from .install_step import InstallStep


class ResolveConfigStep(InstallStep):
    """配置校验步骤"""

    def __init__(self, resolver: Optional[ConfigResolver] = None):
        super().__init__("resolve_config", "校验安装配置")
        self.resolver = resolver or ConfigResolver()

    def get_progress_range(self) -> tuple[int, int]:
        return (0, 5)

    def execute(self, context: InstallContext) -> None:
        context.report_progress("校验配置", 0)
        self.resolver.validate(context.config)

        if context.options.with_secondary:
            context.secondary_url = self.resolver.resolve_secondary_url(
                context.config, context.options.locale
            )
            info(f"将下载说明文档: {context.secondary_url}", stage=LogStage.CONFIG)

        self.confirm_overwrite(context)
        context.report_progress("校验配置", 5, "配置有效")

    def confirm_overwrite(self, context: InstallContext) -> None:
        """已安装且未指定 force 时询问是否覆盖"""
        exe_path = context.executor.exe_path
        options = context.options
        if not exe_path.exists() or options.force or options.confirm_overwrite is None:
            return
        if not options.confirm_overwrite(exe_path):
            raise OperationCancelled(f"已取消：保留现有安装 {exe_path}")
        info(f"将覆盖现有安装: {exe_path}", stage=LogStage.INSTALL)
