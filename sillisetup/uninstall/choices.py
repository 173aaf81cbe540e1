"""
卸载选项

UninstallChoice 在任何删除发生之前收集一次，之后只读。
"""

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from rich.console import Console
from rich.prompt import Confirm

from ..utils.paths import AppDataPaths


@dataclass(frozen=True)
class UninstallChoice:
    """用户的可选数据删除选择"""
    remove_user_data: bool = False
    remove_settings: bool = False


@runtime_checkable
class ChoicePrompter(Protocol):
    """收集卸载选项的能力

    返回 None 表示用户取消整个卸载。
    """

    def prompt_choices(self, paths: AppDataPaths) -> Optional[UninstallChoice]:
        ...


class ConsoleChoicePrompter:
    """命令行提示：两个互相独立、默认不勾选的选项，最后确认是否继续"""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def prompt_choices(self, paths: AppDataPaths) -> Optional[UninstallChoice]:
        self.console.print("[bold]卸载 SilliReminder[/bold]")
        remove_user_data = Confirm.ask(
            f"删除应用数据（提醒数据库 {paths.database}）?",
            default=False,
            console=self.console,
        )
        remove_settings = Confirm.ask(
            f"删除偏好设置（{paths.settings}）?",
            default=False,
            console=self.console,
        )
        if not Confirm.ask("继续卸载?", console=self.console):
            return None
        return UninstallChoice(remove_user_data=remove_user_data, remove_settings=remove_settings)
