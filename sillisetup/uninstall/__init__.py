"""卸载模块

收集用户选择，尽力删除应用数据，并删除宿主自启动项与已安装的程序。
"""

from .choices import ChoicePrompter, ConsoleChoicePrompter, UninstallChoice
from .cleanup import RemovalKind, RemovalOutcome, RemovalResult, best_effort_remove, remove_dir_if_empty
from .coordinator import UninstallCoordinator, UninstallReport, UninstallState
from .host import AutostartRegistry, NoAutostartRegistry, WindowsRunKeyRegistry, default_autostart_registry

__all__ = [
    "UninstallCoordinator",
    "UninstallReport",
    "UninstallState",
    "UninstallChoice",
    "ChoicePrompter",
    "ConsoleChoicePrompter",
    "RemovalKind",
    "RemovalOutcome",
    "RemovalResult",
    "best_effort_remove",
    "remove_dir_if_empty",
    "AutostartRegistry",
    "NoAutostartRegistry",
    "WindowsRunKeyRegistry",
    "default_autostart_registry",
]
