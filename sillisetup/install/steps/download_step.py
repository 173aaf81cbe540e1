"""
下载步骤

把主程序（必需）与说明文档（可选）下载到暂存目录。
"""

from typing import Optional

import requests

from ...utils.logging import warning, LogStage
from ..downloader import DownloadOrchestrator, DownloadTask
from ..install_context import InstallContext
from .install_step import InstallStep


class DownloadStep(InstallStep):
    """下载步骤"""

    def __init__(self, session: Optional[requests.Session] = None):
        super().__init__("download", "下载安装文件")
        self.session = session

    def get_progress_range(self) -> tuple[int, int]:
        return (5, 60)

    def execute(self, context: InstallContext) -> None:
        config = context.config
        context.staging_dir.mkdir(parents=True, exist_ok=True)

        context.primary_task = DownloadTask(
            source_url=config.primary_asset_url,
            staging_path=context.staged_primary,
            required=True,
        )
        tasks = [context.primary_task]
        if context.secondary_url:
            context.secondary_task = DownloadTask(
                source_url=context.secondary_url,
                staging_path=context.staging_dir / config.secondary_asset_file_name,
                required=False,
            )
            tasks.append(context.secondary_task)

        start, end = self.get_progress_range()

        def on_progress(task: DownloadTask, done: int, total: int) -> None:
            if task is context.primary_task and total > 0:
                percent = start + int((end - start) * min(done, total) / total)
                context.report_progress("下载", percent, f"{task.staging_path.name}: {done}/{total}")

        orchestrator = DownloadOrchestrator(
            session=self.session,
            timeout=config.download_timeout_sec,
            parallel=config.parallel_downloads,
            progress_callback=on_progress,
        )
        report = orchestrator.download(tasks)

        context.stats['downloaded_bytes'] = sum(o.bytes_written for o in report.outcomes if o.ok)
        if context.secondary_task is not None:
            if report.succeeded(context.secondary_task):
                context.staged_secondary = context.secondary_task.staging_path
            else:
                message = f"说明文档下载失败，已跳过: {context.secondary_task.source_url}"
                warning(message, stage=LogStage.DOWNLOAD)
                context.add_warning(message)

        context.report_progress("下载", end, "下载完成")
