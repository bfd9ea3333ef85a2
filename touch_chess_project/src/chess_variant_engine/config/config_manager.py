"""
配置管理器

负责加载、保存和管理各种配置。
"""

import copy
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Dict, Type, TypeVar, Union

import yaml

from .game_config import (
    GameConfig, SystemConfig, DEFAULT_GAME_CONFIG, DEFAULT_SYSTEM_CONFIG
)
from ..utils.exceptions import ConfigurationError
from ..utils.logger import LoggerMixin

T = TypeVar('T')


class ConfigManager(LoggerMixin):
    """
    配置管理器

    每种配置对应配置目录下的一个YAML文件，文件缺失或损坏时回退到默认值。
    """

    def __init__(self, config_dir: Union[str, Path] = "touch_chess_project/configs"):
        """
        初始化配置管理器

        Args:
            config_dir: 配置文件目录
        """
        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.config_files = {
            'game': self.config_dir / 'game_config.yaml',
            'system': self.config_dir / 'system_config.yaml'
        }

        self.default_configs = {
            'game': DEFAULT_GAME_CONFIG,
            'system': DEFAULT_SYSTEM_CONFIG
        }

        self.config_types = {
            'game': GameConfig,
            'system': SystemConfig
        }

        self._initialize_default_configs()

    def _initialize_default_configs(self):
        """初始化默认配置文件"""
        for config_name, config_obj in self.default_configs.items():
            config_file = self.config_files[config_name]
            if not config_file.exists():
                self.save_config(config_name, config_obj)
                self.log_info(f"创建默认配置文件: {config_file}")

    def _default(self, config_name: str) -> Any:
        return copy.deepcopy(self.default_configs[config_name])

    def load_config(self, config_name: str, config_class: Type[T]) -> T:
        """
        加载配置

        Args:
            config_name: 配置名称
            config_class: 配置类

        Returns:
            配置对象
        """
        config_file = self.config_files.get(config_name)
        if config_file is None:
            raise ConfigurationError(config_name, "未知的配置名称")
        if not config_file.exists():
            self.log_warning(f"配置文件不存在: {config_file}，使用默认配置")
            return self._default(config_name)

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
            config = self._dict_to_dataclass(data, config_class)
            self.log_debug(f"成功加载配置: {config_file}")
            return config

        except (OSError, yaml.YAMLError, TypeError, AttributeError) as e:
            self.log_error(f"加载配置文件失败: {config_file}, 错误: {e}")
            return self._default(config_name)

    def save_config(self, config_name: str, config_obj: Any):
        """
        保存配置

        Args:
            config_name: 配置名称
            config_obj: 配置对象
        """
        config_file = self.config_files.get(config_name)
        if not config_file:
            raise ConfigurationError(config_name, "未知的配置名称")

        data = asdict(config_obj)
        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.safe_dump(data, f, default_flow_style=False,
                           allow_unicode=True, indent=2)

        self.log_info(f"成功保存配置: {config_file}")

    def get_game_config(self) -> GameConfig:
        """获取游戏配置"""
        return self.load_config('game', GameConfig)

    def get_system_config(self) -> SystemConfig:
        """获取系统配置"""
        return self.load_config('system', SystemConfig)

    def update_config(self, config_name: str, **kwargs):
        """
        更新配置

        Args:
            config_name: 配置名称
            **kwargs: 要更新的配置项
        """
        config_class = self.config_types[config_name]
        config = self.load_config(config_name, config_class)

        for key, value in kwargs.items():
            if hasattr(config, key):
                setattr(config, key, value)
            else:
                self.log_warning(f"配置项不存在: {key}")

        self.save_config(config_name, config)

    def reset_config(self, config_name: str):
        """
        重置配置为默认值

        Args:
            config_name: 配置名称
        """
        self.save_config(config_name, self._default(config_name))
        self.log_info(f"配置已重置为默认值: {config_name}")

    def validate_config(self, config_name: str) -> bool:
        """
        验证配置的有效性

        Args:
            config_name: 配置名称

        Returns:
            bool: 配置是否有效
        """
        config = self.load_config(config_name, self.config_types[config_name])
        try:
            config.validate()
        except ConfigurationError as e:
            self.log_error(f"配置验证失败: {config_name}, 错误: {e}")
            return False
        return True

    def get_all_configs(self) -> Dict[str, Any]:
        """
        获取所有配置

        Returns:
            Dict[str, Any]: 所有配置的字典
        """
        return {
            config_name: self.load_config(config_name, config_class)
            for config_name, config_class in self.config_types.items()
        }

    def _dict_to_dataclass(self, data: Dict[str, Any], dataclass_type: Type[T]) -> T:
        """
        将字典转换为数据类对象，忽略未知字段

        Args:
            data: 字典数据
            dataclass_type: 数据类类型

        Returns:
            数据类对象
        """
        field_names = {f.name for f in fields(dataclass_type)}
        filtered_data = {k: v for k, v in data.items() if k in field_names}
        return dataclass_type(**filtered_data)
