"""
路径工具

安装器与卸载器共享的路径解析逻辑。应用数据路径由固定的用户级基准目录和固定后缀推导，
从不由最终用户提供。
"""

import os
import re
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

APP_NAME = "SilliReminder"
DATA_SUBDIR = "data"
DATABASE_FILE_NAME = "silli_reminder.db"
SETTINGS_FILE_NAME = "settings.sillisettings"
STAGING_DIR_PREFIX = "sillisetup-staging-"
DEFAULT_INSTALL_ROOT = f"%LOCALAPPDATA%/Programs/{APP_NAME}"
DEFAULT_EXE_FILE_NAME = f"{APP_NAME}.exe"


def expand_path(path: Union[str, Path], base: Optional[Path] = None) -> Path:
    """扩展路径（处理环境变量和用户目录）

    Args:
        path: 原始路径，支持 %VAR% / $VAR 与 ~
        base: 相对路径的基准目录

    Returns:
        Path: 扩展后的绝对路径
    """
    raw = str(path)
    if os.name != "nt":
        # %LOCALAPPDATA% 形式在非 Windows 平台上不会被 expandvars 处理
        raw = _expand_percent_vars(raw)
    raw = os.path.expanduser(os.path.expandvars(raw))

    result = Path(raw)
    if not result.is_absolute() and base is not None:
        result = base / result
    return result.resolve()


def _expand_percent_vars(raw: str) -> str:
    env = {k.upper(): v for k, v in os.environ.items()}
    env.setdefault("LOCALAPPDATA", str(local_data_base()))

    def _replace(match: "re.Match[str]") -> str:
        return env.get(match.group(1).upper(), match.group(0))

    return re.sub(r"%([A-Za-z_][A-Za-z0-9_]*)%", _replace, raw)


def ensure_directory(path: Union[str, Path]) -> Path:
    """确保目录存在（递归创建）"""
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def local_data_base() -> Path:
    """用户级本地数据根目录

    Windows: %LOCALAPPDATA%。未设置时回退到 ~/.local/share，
    而 SilliReminder 应用本身在这种情况下使用其可执行文件所在目录，
    因此卸载器在该环境下找不到应用写在程序目录旁的数据。
    """
    base = os.environ.get("LOCALAPPDATA")
    if base:
        return Path(base)
    return Path.home() / ".local" / "share"


def documents_dir() -> Path:
    """用户可见的文档目录"""
    home = Path.home()
    for candidate in (home / "Documents", home / "documents"):
        if candidate.is_dir():
            return candidate
    return home / "Documents"


def create_staging_dir() -> Path:
    """为本次运行创建暂存目录

    目录名随机，权限仅限当前用户（0o700）。
    """
    return Path(tempfile.mkdtemp(prefix=STAGING_DIR_PREFIX))


@dataclass(frozen=True)
class AppDataPaths:
    """应用数据路径（推导得出，不存储）"""
    root: Path
    database: Path
    settings: Path

    @property
    def data_dir(self) -> Path:
        return self.database.parent

    @classmethod
    def from_base(cls, base: Union[str, Path], app_name: str = APP_NAME) -> "AppDataPaths":
        root = Path(base) / app_name
        return cls(
            root=root,
            database=root / DATA_SUBDIR / DATABASE_FILE_NAME,
            settings=root / SETTINGS_FILE_NAME,
        )

    @classmethod
    def default(cls, app_name: str = APP_NAME) -> "AppDataPaths":
        return cls.from_base(local_data_base(), app_name)


def format_size(size_bytes: int) -> str:
    """格式化文件大小"""
    if size_bytes <= 0:
        return "0 B"

    units = ["B", "KB", "MB", "GB"]
    unit_index = 0
    size = float(size_bytes)
    while size >= 1024.0 and unit_index < len(units) - 1:
        size /= 1024.0
        unit_index += 1

    if unit_index == 0:
        return f"{int(size)} {units[unit_index]}"
    return f"{size:.1f} {units[unit_index]}"


def is_safe_filename(filename: str) -> bool:
    """检查文件名是否安全（不含路径分隔符、Windows 非法字符或保留名称）"""
    if not filename or filename in (".", ".."):
        return False

    if any(char in filename for char in '<>:"/\\|?*'):
        return False

    reserved_names = {
        'CON', 'PRN', 'AUX', 'NUL',
        'COM1', 'COM2', 'COM3', 'COM4', 'COM5', 'COM6', 'COM7', 'COM8', 'COM9',
        'LPT1', 'LPT2', 'LPT3', 'LPT4', 'LPT5', 'LPT6', 'LPT7', 'LPT8', 'LPT9'
    }
    if filename.split('.')[0].upper() in reserved_names:
        return False

    return len(filename) <= 255
