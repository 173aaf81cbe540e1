"""
安装步骤基类模块

定义安装步骤的抽象接口。
"""

from abc import ABC, abstractmethod

from ..install_context import InstallContext


class InstallStep(ABC):
    """安装步骤抽象基类"""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description

    @abstractmethod
    def execute(self, context: InstallContext) -> None:
        """执行安装步骤"""
        pass

    @abstractmethod
    def get_progress_range(self) -> tuple[int, int]:
        """获取此步骤的进度范围 (start_percent, end_percent)"""
        pass
