"""命令行接口"""

from .main import app, run

__all__ = ["app", "run"]
