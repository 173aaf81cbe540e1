"""
配置解析器

在任何网络或磁盘操作之前对配置做语义校验，并在用户选择可选功能时解析区域化的说明文档地址。
"""

import locale
import os
import re
from typing import Optional
from urllib.parse import urlsplit

from ..errors import ConfigInvalidError, InsecureUrlError
from ..utils.logging import get_stage_logger, LogStage
from .schema import PLACEHOLDER, InstallConfig, normalize_fingerprint, normalize_locale

logger = get_stage_logger(LogStage.CONFIG)

FINGERPRINT_PATTERN = re.compile(r"^[0-9A-F]{64}$")
DEFAULT_LOCALE = "en"


def is_placeholder(value: Optional[str]) -> bool:
    return value is not None and value.strip() == PLACEHOLDER


def require_https(field: str, url: str) -> None:
    """地址必须以 https:// 开头并带有主机名"""
    if url[:8].lower() != "https://" or not urlsplit(url).hostname:
        raise InsecureUrlError(field, url)


def detect_locale() -> str:
    """检测当前进程的区域设置，失败时回退到 en"""
    try:
        current = locale.getlocale()[0]
    except ValueError:
        current = None
    current = current or os.environ.get("LC_ALL") or os.environ.get("LANG")
    if not current or current in ("C", "POSIX"):
        return DEFAULT_LOCALE
    return normalize_locale(current) or DEFAULT_LOCALE


class ConfigResolver:
    """配置解析器"""

    def validate(self, config: InstallConfig) -> None:
        """按顺序校验配置，第一个失败即抛出

        Raises:
            ConfigInvalidError: 字段未填写或格式错误
            InsecureUrlError: 主程序地址不是 https
        """
        if is_placeholder(config.primary_asset_url) or not config.primary_asset_url:
            raise ConfigInvalidError("primary_asset_url", "未配置")

        require_https("primary_asset_url", config.primary_asset_url)

        if is_placeholder(config.expected_fingerprint):
            raise ConfigInvalidError("expected_fingerprint", "未配置")
        if not FINGERPRINT_PATTERN.match(normalize_fingerprint(config.expected_fingerprint)):
            raise ConfigInvalidError("expected_fingerprint", "必须是 64 位十六进制 SHA-256 值")

        for field in ("install_root", "exe_file_name", "app_name", "secondary_asset_file_name"):
            if is_placeholder(getattr(config, field)):
                raise ConfigInvalidError(field, "未配置")

        logger.debug(f"配置校验通过: {config.primary_asset_url}")

    def resolve_secondary_url(self, config: InstallConfig, locale_name: Optional[str] = None) -> str:
        """解析说明文档地址：精确区域 -> 语言前缀 -> 通用地址

        仅在用户选择下载说明文档时调用。

        Raises:
            ConfigInvalidError: 没有可用地址或地址未填写
            InsecureUrlError: 地址不是 https
        """
        key = normalize_locale(locale_name or detect_locale())
        candidates = [key]
        language = key.split("_")[0]
        if language != key:
            candidates.append(language)

        url = None
        field = "secondary_asset_url"
        for candidate in candidates:
            if candidate in config.secondary_asset_urls:
                url = config.secondary_asset_urls[candidate]
                field = f"secondary_asset_urls.{candidate}"
                break
        if url is None:
            url = config.secondary_asset_url

        if not url or is_placeholder(url):
            raise ConfigInvalidError(field, "未配置")

        require_https(field, url)
        logger.debug(f"说明文档地址 ({key}): {url}")
        return url
