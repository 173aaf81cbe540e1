"""
子命令共享的辅助函数
"""

from typing import Optional

from ...utils.logging import OutputLevel, configure_logging


def setup_output(verbose: bool, very_silent: bool, log_file: Optional[str]) -> None:
    """在任何输出之前设置日志级别与日志文件"""
    if verbose:
        level = OutputLevel.DEBUG
    elif very_silent:
        level = OutputLevel.WARNING
    else:
        level = OutputLevel.INFO
    configure_logging(level=level, log_file=log_file)
