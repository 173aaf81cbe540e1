"""
SilliSetup - SilliReminder 网络安装/卸载工具

A verified network installer and uninstaller for the SilliReminder desktop app.
"""

__version__ = "0.1.0"
__author__ = "Project Team"
__license__ = "MIT"

from .config.schema import InstallConfig
from .install.installer import Installer

__all__ = ["InstallConfig", "Installer", "__version__"]
