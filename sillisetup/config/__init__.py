"""配置模块

提供 YAML 安装配置的加载、结构验证、语义校验和保存功能。
"""

from .schema import PLACEHOLDER, InstallConfig, normalize_fingerprint
from .loader import (
    DEFAULT_CONFIG_NAME,
    ConfigLoader,
    ConfigValidationError,
    ConfigError,
    load_config,
    validate_config,
    save_config,
    config_loader,
)
from .resolver import ConfigResolver, detect_locale, require_https

__all__ = [
    # 主要类
    "InstallConfig",
    "ConfigLoader",
    "ConfigResolver",

    # 异常类
    "ConfigError",
    "ConfigValidationError",

    # 便捷函数
    "load_config",
    "validate_config",
    "save_config",
    "require_https",
    "detect_locale",
    "normalize_fingerprint",

    # 常量与单例
    "PLACEHOLDER",
    "DEFAULT_CONFIG_NAME",
    "config_loader",
]
