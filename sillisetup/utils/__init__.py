"""通用工具模块"""

from .logging import (
    configure_logging,
    get_stage_logger,
    StageLogger,
    LogStage,
    OutputLevel,
)

from .paths import (
    AppDataPaths,
    expand_path,
    ensure_directory,
    documents_dir,
    create_staging_dir,
    local_data_base,
    format_size,
    is_safe_filename,
)

__all__ = [
    # 日志相关
    "configure_logging",
    "get_stage_logger",
    "StageLogger",
    "LogStage",
    "OutputLevel",

    # 路径相关
    "AppDataPaths",
    "expand_path",
    "ensure_directory",
    "documents_dir",
    "create_staging_dir",
    "local_data_base",
    "format_size",
    "is_safe_filename",
]
