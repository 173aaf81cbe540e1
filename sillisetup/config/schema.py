"""
配置 Schema 定义

使用 Pydantic 定义安装配置模型。配置在进程启动时加载一次，之后不可修改。
结构校验在此完成；占位符、HTTPS 与指纹格式等语义校验由 ConfigResolver 负责，
以便区分失败类别。
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from ..utils.paths import (
    APP_NAME,
    DEFAULT_EXE_FILE_NAME,
    DEFAULT_INSTALL_ROOT,
    documents_dir,
    expand_path,
    is_safe_filename,
)

# 未填写的配置值
PLACEHOLDER = "CHANGE_ME"


def normalize_fingerprint(value: str) -> str:
    """规范化指纹：去除所有空白并转为大写"""
    return "".join(value.split()).upper()


def normalize_locale(value: str) -> str:
    """规范化区域名：pl-PL / PL_pl.UTF-8 -> pl_pl"""
    return value.split(".")[0].replace("-", "_").strip().lower()


class InstallConfig(BaseModel):
    """安装配置主模型"""

    primary_asset_url: str = Field(..., description="主程序下载地址（必须为 https://）")
    expected_fingerprint: str = Field(..., description="主程序 SHA-256 指纹（64 位十六进制）")

    secondary_asset_url: Optional[str] = Field(None, description="说明文档的通用下载地址")
    secondary_asset_urls: Dict[str, str] = Field(
        default_factory=dict,
        description="按区域覆盖的说明文档下载地址",
    )
    secondary_asset_file_name: str = Field(
        "SilliReminder - instructions.pdf",
        description="说明文档的目标文件名",
        min_length=1,
    )

    install_root: str = Field(
        DEFAULT_INSTALL_ROOT,
        description="用户级安装目录",
        min_length=1,
    )
    exe_file_name: str = Field(DEFAULT_EXE_FILE_NAME, description="可执行文件名", min_length=1)
    app_name: str = Field(APP_NAME, description="应用名称（自启动项与数据目录名）", min_length=1)
    documents_dir: Optional[str] = Field(None, description="说明文档投递目录（默认为用户文档目录）")

    download_timeout_sec: int = Field(60, description="单次下载超时（秒）", ge=1, le=600)
    parallel_downloads: bool = Field(False, description="是否并行下载")

    model_config = {
        "extra": "forbid",
        "frozen": True,
        "str_strip_whitespace": True,
    }

    @field_validator('exe_file_name', 'secondary_asset_file_name', 'app_name')
    @classmethod
    def validate_file_name(cls, v: str) -> str:
        """文件名不能包含路径或非法字符"""
        if v != PLACEHOLDER and not is_safe_filename(v):
            raise ValueError(f"不是合法的文件名: {v}")
        return v

    @field_validator('secondary_asset_urls')
    @classmethod
    def validate_locale_keys(cls, v: Dict[str, str]) -> Dict[str, str]:
        """区域键统一为小写下划线形式"""
        cleaned = {}
        for key, url in v.items():
            locale_key = normalize_locale(str(key))
            if not locale_key:
                raise ValueError("区域键不能为空")
            cleaned[locale_key] = str(url).strip()
        return cleaned

    @property
    def normalized_fingerprint(self) -> str:
        return normalize_fingerprint(self.expected_fingerprint)

    def get_install_root(self) -> Path:
        """展开后的安装目录"""
        return expand_path(self.install_root)

    def get_exe_path(self) -> Path:
        """已安装的可执行文件路径"""
        return self.get_install_root() / self.exe_file_name

    def get_documents_dir(self) -> Path:
        """说明文档投递目录"""
        if self.documents_dir:
            return expand_path(self.documents_dir)
        return documents_dir()

    def has_secondary_asset(self) -> bool:
        return bool(self.secondary_asset_url or self.secondary_asset_urls)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return self.model_dump(exclude_none=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InstallConfig':
        """从字典创建配置实例"""
        return cls.model_validate(data)

    @classmethod
    def template(cls) -> 'InstallConfig':
        """生成占位符模板，需由部署者填写"""
        return cls(
            primary_asset_url=PLACEHOLDER,
            expected_fingerprint=PLACEHOLDER,
            secondary_asset_url=PLACEHOLDER,
            secondary_asset_urls={"pl": PLACEHOLDER, "en": PLACEHOLDER},
        )
