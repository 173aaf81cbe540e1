"""
宿主集成

自启动项由应用自己写入（HKCU Run 键下以应用名命名的值），但由卸载器负责删除。
通过能力接口抽象，使卸载流程可以在没有注册表的环境中测试。
"""

import sys
from typing import Protocol, runtime_checkable

RUN_KEY = r"Software\Microsoft\Windows\CurrentVersion\Run"


@runtime_checkable
class AutostartRegistry(Protocol):
    """自启动注册能力"""

    def remove_autostart(self, app_name: str) -> bool:
        """删除自启动项

        Returns:
            bool: True 表示已删除，False 表示原本不存在

        Raises:
            OSError: 删除失败
        """
        ...


class WindowsRunKeyRegistry:
    """HKCU\\...\\Run 注册表实现"""

    def __init__(self, run_key: str = RUN_KEY):
        self.run_key = run_key

    def remove_autostart(self, app_name: str) -> bool:
        import winreg

        try:
            with winreg.OpenKey(winreg.HKEY_CURRENT_USER, self.run_key, 0, winreg.KEY_SET_VALUE) as key:
                winreg.DeleteValue(key, app_name)
        except FileNotFoundError:
            return False
        return True


class NoAutostartRegistry:
    """非 Windows 平台：应用不会注册自启动，删除总是视为不存在"""

    def remove_autostart(self, app_name: str) -> bool:
        return False


def default_autostart_registry() -> AutostartRegistry:
    """按平台选择自启动注册实现"""
    if sys.platform == "win32":
        return WindowsRunKeyRegistry()
    return NoAutostartRegistry()
