"""
下载编排器

管理 (远程地址 -> 本地暂存路径) 任务队列，顺序或并行执行，并报告每个任务的结果。
必需任务失败会中止整个运行；可选任务失败只记录警告。
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import requests

from ..config.resolver import require_https
from ..errors import NetworkFailureError
from ..utils.logging import get_stage_logger, LogStage
from ..utils.paths import format_size

logger = get_stage_logger(LogStage.DOWNLOAD)

CHUNK_SIZE = 256 * 1024
USER_AGENT = "SilliSetup/0.1"

# 进度回调: (任务, 已下载字节数, 总字节数或 0)
DownloadProgressCallback = Callable[["DownloadTask", int, int], None]


@dataclass(frozen=True)
class DownloadTask:
    """下载任务"""
    source_url: str
    staging_path: Path
    required: bool = True


@dataclass
class DownloadOutcome:
    """单个任务的结果"""
    task: DownloadTask
    ok: bool
    bytes_written: int = 0
    error: Optional[str] = None


@dataclass
class DownloadReport:
    """一批任务的结果"""
    outcomes: List[DownloadOutcome] = field(default_factory=list)

    def succeeded(self, task: DownloadTask) -> bool:
        return any(o.task == task and o.ok for o in self.outcomes)

    @property
    def failures(self) -> List[DownloadOutcome]:
        return [o for o in self.outcomes if not o.ok]


class DownloadOrchestrator:
    """下载编排器"""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: int = 60,
        parallel: bool = False,
        max_workers: int = 2,
        progress_callback: Optional[DownloadProgressCallback] = None,
    ):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.parallel = parallel
        self.max_workers = max_workers
        self.progress_callback = progress_callback

    def download(self, tasks: Sequence[DownloadTask]) -> DownloadReport:
        """执行所有任务

        Raises:
            InsecureUrlError: 任一任务地址不是 https（在发起任何请求之前）
            NetworkFailureError: 必需任务失败
        """
        for task in tasks:
            require_https("source_url", task.source_url)

        report = DownloadReport()
        if self.parallel and len(tasks) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as ex:
                futures = {ex.submit(self._run_task, task): task for task in tasks}
                for fut in as_completed(futures):
                    report.outcomes.append(fut.result())
        else:
            for task in tasks:
                outcome = self._run_task(task)
                report.outcomes.append(outcome)
                if not outcome.ok and task.required:
                    break

        for outcome in report.failures:
            if outcome.task.required:
                raise NetworkFailureError(outcome.task, outcome.error or "未知错误")
            logger.warning(f"可选文件下载失败，将跳过: {outcome.task.source_url} ({outcome.error})")

        return report

    def _run_task(self, task: DownloadTask) -> DownloadOutcome:
        try:
            written = self._fetch(task)
        except (requests.RequestException, OSError) as e:
            self._discard_partial(task.staging_path)
            return DownloadOutcome(task=task, ok=False, error=str(e))

        logger.success(f"下载完成: {task.staging_path.name} ({format_size(written)})")
        return DownloadOutcome(task=task, ok=True, bytes_written=written)

    def _fetch(self, task: DownloadTask) -> int:
        """整文件单次下载，覆盖旧的暂存文件"""
        logger.info(f"下载 {task.source_url}")
        task.staging_path.parent.mkdir(parents=True, exist_ok=True)

        response = self.session.get(
            task.source_url,
            stream=True,
            timeout=self.timeout,
            headers={"User-Agent": USER_AGENT},
        )
        try:
            response.raise_for_status()
            total = int(response.headers.get("Content-Length") or 0)
            written = 0
            with open(task.staging_path, 'wb') as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if not chunk:
                        continue
                    f.write(chunk)
                    written += len(chunk)
                    if self.progress_callback:
                        self.progress_callback(task, written, total)
            return written
        finally:
            response.close()

    def _discard_partial(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"无法删除不完整的暂存文件 {path}: {e}")
