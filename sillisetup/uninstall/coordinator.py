"""
卸载协调器

状态机: START -> COLLECT_CHOICES -> REMOVE_OPTIONAL_DATA -> REMOVE_FIXED_REGISTRATION
        -> REMOVE_ARTIFACT -> DONE
收集选项阶段可被取消（CANCELLED），此时不产生任何副作用。之后的删除均为尽力而为，
单个失败只记录警告，不会中止其余清理步骤。
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from ..errors import OperationCancelled
from ..utils.logging import get_stage_logger, LogStage
from ..utils.paths import APP_NAME, AppDataPaths
from .choices import ChoicePrompter, UninstallChoice
from .cleanup import RemovalResult, best_effort_remove, remove_dir_if_empty
from .host import AutostartRegistry

logger = get_stage_logger(LogStage.UNINSTALL)
autostart_logger = get_stage_logger(LogStage.AUTOSTART)


class UninstallState(str, Enum):
    """卸载状态"""
    START = "start"
    COLLECT_CHOICES = "collect_choices"
    REMOVE_OPTIONAL_DATA = "remove_optional_data"
    REMOVE_FIXED_REGISTRATION = "remove_fixed_registration"
    REMOVE_ARTIFACT = "remove_artifact"
    DONE = "done"
    CANCELLED = "cancelled"


@dataclass
class UninstallReport:
    """卸载结果"""
    choice: UninstallChoice
    removals: List[RemovalResult] = field(default_factory=list)
    autostart_removed: Optional[bool] = None
    warnings: List[str] = field(default_factory=list)
    states: List[UninstallState] = field(default_factory=list)

    def outcome_for(self, path: Path) -> Optional[RemovalResult]:
        for removal in self.removals:
            if removal.path == path:
                return removal
        return None


class UninstallCoordinator:
    """卸载协调器"""

    def __init__(
        self,
        paths: AppDataPaths,
        autostart: AutostartRegistry,
        prompter: Optional[ChoicePrompter] = None,
        silent: bool = False,
        app_name: str = APP_NAME,
        exe_path: Optional[Path] = None,
    ):
        if not silent and prompter is None:
            raise ValueError("交互式卸载需要提供 ChoicePrompter")
        self.paths = paths
        self.autostart = autostart
        self.prompter = prompter
        self.silent = silent
        self.app_name = app_name
        self.exe_path = exe_path
        self.state = UninstallState.START
        self._report: Optional[UninstallReport] = None

    def _enter(self, state: UninstallState) -> None:
        self.state = state
        if self._report is not None:
            self._report.states.append(state)
        logger.debug(f"状态: {state.value}")

    def run(self) -> UninstallReport:
        """执行卸载

        Raises:
            OperationCancelled: 用户在收集选项阶段取消
        """
        choice = self.collect_choices()
        self._report = UninstallReport(choice=choice, states=[UninstallState.START, UninstallState.COLLECT_CHOICES])

        self._enter(UninstallState.REMOVE_OPTIONAL_DATA)
        self.remove_optional_data(choice)

        self._enter(UninstallState.REMOVE_FIXED_REGISTRATION)
        self.remove_fixed_registration()

        if self.exe_path is not None:
            self._enter(UninstallState.REMOVE_ARTIFACT)
            self.remove_artifact(self.exe_path)

        self._enter(UninstallState.DONE)
        report = self._report
        for removal in report.removals:
            if not removal.ok:
                report.warnings.append(f"未能删除 {removal.path}: {removal.error}")

        if report.warnings:
            logger.warning(f"卸载完成，但有 {len(report.warnings)} 条警告")
        else:
            logger.success(f"{self.app_name} 已卸载")
        return report

    def collect_choices(self) -> UninstallChoice:
        """收集卸载选项；静默模式下跳过并使用默认值（全部不删除）"""
        self.state = UninstallState.COLLECT_CHOICES
        if self.silent:
            logger.info("静默卸载：保留应用数据与设置")
            return UninstallChoice()

        assert self.prompter is not None
        choice = self.prompter.prompt_choices(self.paths)
        if choice is None:
            self.state = UninstallState.CANCELLED
            logger.info("卸载已取消，未做任何更改")
            raise OperationCancelled("卸载已取消")
        return choice

    def remove_optional_data(self, choice: UninstallChoice) -> None:
        """按选择删除数据库与设置文件，随后清理变空的目录"""
        assert self._report is not None
        removals = self._report.removals

        if choice.remove_user_data:
            removals.append(best_effort_remove(self.paths.database))
            # 只有删过数据库的 data 目录才尝试清理
            emptied = remove_dir_if_empty(self.paths.data_dir)
            if emptied is not None:
                removals.append(emptied)

        if choice.remove_settings:
            removals.append(best_effort_remove(self.paths.settings))

        root_removed = remove_dir_if_empty(self.paths.root)
        if root_removed is not None:
            removals.append(root_removed)

    def remove_fixed_registration(self) -> None:
        """无条件删除自启动项；不存在视为成功，失败仅警告"""
        assert self._report is not None
        try:
            removed = self.autostart.remove_autostart(self.app_name)
        except OSError as e:
            message = f"无法删除自启动项 {self.app_name}: {e}"
            autostart_logger.warning(message)
            self._report.warnings.append(message)
            return

        self._report.autostart_removed = removed
        if removed:
            autostart_logger.info(f"已删除自启动项: {self.app_name}")
        else:
            autostart_logger.debug(f"自启动项不存在: {self.app_name}")

    def remove_artifact(self, exe_path: Path) -> None:
        """删除已安装的可执行文件，安装目录变空时一并删除"""
        assert self._report is not None
        self._report.removals.append(best_effort_remove(exe_path))
        emptied = remove_dir_if_empty(exe_path.parent)
        if emptied is not None:
            self._report.removals.append(emptied)
