"""
暂存清理步骤

安装成功后删除暂存文件与空的暂存目录。
"""

from ...uninstall.cleanup import best_effort_remove, remove_dir_if_empty
from ..install_context import InstallContext
from .install_step import InstallStep


class CleanupStagingStep(InstallStep):
    """暂存清理步骤"""

    def __init__(self):
        super().__init__("cleanup_staging", "清理暂存文件")

    def get_progress_range(self) -> tuple[int, int]:
        return (95, 100)

    def execute(self, context: InstallContext) -> None:
        if not context.options.keep_staging:
            staged = [context.staged_primary]
            if context.secondary_task is not None:
                staged.append(context.secondary_task.staging_path)
            for path in staged:
                best_effort_remove(path)
            remove_dir_if_empty(context.staging_dir)

        context.report_progress("完成", 100)
