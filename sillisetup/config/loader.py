"""
配置加载器

负责从 YAML 文件加载安装配置并进行结构校验。
"""

import copy
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .schema import InstallConfig

DEFAULT_CONFIG_NAME = "sillisetup.yaml"


class ConfigError(Exception):
    """配置错误基类"""
    pass


class ConfigValidationError(ConfigError):
    """配置结构验证错误"""

    def __init__(self, message: str, errors: List[Dict[str, Any]]):
        super().__init__(message)
        self.errors = errors

    def format_errors(self) -> str:
        """格式化错误信息为人类可读的格式"""
        formatted = []
        for error in self.errors:
            loc = " -> ".join(str(item) for item in error.get('loc', []))
            msg = error.get('msg', '未知错误')
            if loc:
                formatted.append(f"字段 '{loc}': {msg}")
            else:
                formatted.append(f"根级别: {msg}")
        return "\n".join(formatted)

    def format_errors_json(self) -> str:
        """格式化错误信息为 JSON 格式"""
        simplified = [
            {
                'loc': [str(item) for item in error.get('loc', [])],
                'msg': error.get('msg', ''),
                'type': error.get('type', ''),
            }
            for error in self.errors
        ]
        return json.dumps(simplified, ensure_ascii=False, indent=2)


class ConfigLoader:
    """配置加载器"""

    # 相对路径相对于配置文件所在目录解析
    PATH_FIELDS = ('install_root', 'documents_dir')

    def __init__(self):
        self.yaml = YAML(typ='safe')
        self.yaml.default_flow_style = False
        self.yaml.width = 4096

    def load_from_file(self, config_path: Union[str, Path]) -> InstallConfig:
        """从文件加载配置

        Args:
            config_path: 配置文件路径

        Returns:
            InstallConfig: 验证后的配置实例

        Raises:
            ConfigError: 文件缺失、YAML 解析失败或根节点不是字典
            ConfigValidationError: 结构验证失败
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigError(f"配置文件不存在: {config_path}")
        if not config_path.is_file():
            raise ConfigError(f"配置路径不是文件: {config_path}")
        if config_path.suffix.lower() not in ('.yaml', '.yml'):
            raise ConfigError(f"配置文件必须是 .yaml 或 .yml 格式: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                raw_data = self.yaml.load(f)
        except YAMLError as e:
            raise ConfigError(f"YAML 解析错误: {e}")
        except OSError as e:
            raise ConfigError(f"文件读取错误: {e}")

        if raw_data is None:
            raise ConfigError("配置文件为空")
        if not isinstance(raw_data, dict):
            raise ConfigError("配置文件根级别必须是对象/字典格式")

        return self.load_from_dict(raw_data, base_path=config_path.parent)

    def load_from_dict(self, data: Dict[str, Any], base_path: Optional[Path] = None) -> InstallConfig:
        """从字典加载配置

        Raises:
            ConfigValidationError: 结构验证失败
        """
        if base_path:
            data = copy.deepcopy(dict(data))
            self._resolve_relative_paths(data, base_path)

        try:
            return InstallConfig.from_dict(data)
        except ValidationError as e:
            raise ConfigValidationError("配置验证失败", list(e.errors()))

    def save_to_file(self, config: InstallConfig, output_path: Union[str, Path]) -> None:
        """保存配置到文件

        Raises:
            ConfigError: 保存错误
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(output_path, 'w', encoding='utf-8') as f:
                self.yaml.dump(config.to_dict(), f)
        except (OSError, YAMLError) as e:
            raise ConfigError(f"保存配置文件失败: {e}")

    def validate_file(self, config_path: Union[str, Path]) -> List[Dict[str, Any]]:
        """验证配置文件结构并返回错误列表，空列表表示通过"""
        try:
            self.load_from_file(config_path)
            return []
        except ConfigValidationError as e:
            return e.errors
        except ConfigError as e:
            return [{'loc': [], 'msg': str(e), 'type': 'config_error'}]

    def _resolve_relative_paths(self, data: Dict[str, Any], base_path: Path) -> None:
        for key in self.PATH_FIELDS:
            value = data.get(key)
            if not isinstance(value, str) or not value:
                continue
            # 含环境变量或 ~ 的路径在运行时展开
            if value.startswith(('%', '$', '~')):
                continue
            if not Path(value).is_absolute():
                data[key] = str((base_path / value).resolve())


# 全局加载器实例
config_loader = ConfigLoader()


def load_config(config_path: Union[str, Path]) -> InstallConfig:
    """便捷函数：加载配置文件"""
    return config_loader.load_from_file(config_path)


def validate_config(config_path: Union[str, Path]) -> List[Dict[str, Any]]:
    """便捷函数：验证配置文件结构"""
    return config_loader.validate_file(config_path)


def save_config(config: InstallConfig, output_path: Union[str, Path]) -> None:
    """便捷函数：保存配置文件"""
    config_loader.save_to_file(config, output_path)
