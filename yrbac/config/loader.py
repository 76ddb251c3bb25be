"""配置加载器模块

提供从 YAML 文件加载配置的功能。

使用示例:
    from yrbac.config import ConfigLoader, load_yaml_config, AppSettings

    config = ConfigLoader.load("config/settings.yaml")
    settings = load_yaml_config("config/settings.yaml", AppSettings)
"""

import os
from typing import Any, Dict, Optional, Type, TypeVar

import yaml


T = TypeVar("T")


def _resolve_path(config_path: str, base_dir: Optional[str] = None) -> str:
    if os.path.isabs(config_path):
        return config_path
    if base_dir:
        return os.path.join(base_dir, config_path)
    return os.path.abspath(config_path)


class ConfigLoader:
    """配置加载器

    从 YAML 文件加载配置，按绝对路径缓存。

    使用示例:
        config = ConfigLoader.load("config/settings.yaml")
        db_url = config.get("database", {}).get("url")

        config = ConfigLoader.reload("config/settings.yaml")
        ConfigLoader.clear_cache()
    """

    _cache: Dict[str, Dict[str, Any]] = {}

    @classmethod
    def load(
        cls,
        config_path: str,
        base_dir: Optional[str] = None,
        use_cache: bool = True
    ) -> Dict[str, Any]:
        """加载配置文件

        Raises:
            FileNotFoundError: 配置文件不存在
            yaml.YAMLError: YAML 解析错误
        """
        abs_path = _resolve_path(config_path, base_dir)

        if use_cache and abs_path in cls._cache:
            return cls._cache[abs_path]

        if not os.path.exists(abs_path):
            raise FileNotFoundError(f"配置文件不存在: {abs_path}")

        with open(abs_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

        if use_cache:
            cls._cache[abs_path] = config

        return config

    @classmethod
    def reload(cls, config_path: str, base_dir: Optional[str] = None) -> Dict[str, Any]:
        """重新加载配置文件（忽略缓存）"""
        cls._cache.pop(_resolve_path(config_path, base_dir), None)
        return cls.load(config_path, base_dir, use_cache=True)

    @classmethod
    def clear_cache(cls):
        cls._cache.clear()

    @classmethod
    def get_cached_paths(cls) -> list:
        return list(cls._cache.keys())


def load_yaml_config(
    config_path: str,
    settings_class: Type[T],
    base_dir: Optional[str] = None,
    **overrides
) -> T:
    """加载 YAML 配置并创建 Pydantic Settings 实例

    overrides 覆盖 YAML 中的同名顶层配置段，缓存中的原始配置不受影响。

    使用示例:
        settings = load_yaml_config(
            "config/settings.yaml",
            AppSettings,
            rbac={"authority_mode": "permission"},
        )
    """
    config = dict(ConfigLoader.load(config_path, base_dir))
    config.update(overrides)
    return settings_class(**config)


class ConfigManager:
    """配置管理器

    管理多个配置文件，后加载的文件可以深度合并到已有配置。

    使用示例:
        manager = ConfigManager(base_dir="config")
        manager.load("settings.yaml")
        manager.load("settings.dev.yaml", merge=True)
        db_url = manager.get("database.url")
    """

    def __init__(self, base_dir: str = None):
        self.base_dir = base_dir or os.getcwd()
        self._config: Dict[str, Any] = {}

    def load(self, config_path: str, merge: bool = False) -> Dict[str, Any]:
        config = ConfigLoader.load(config_path, self.base_dir)

        if merge:
            self._deep_merge(self._config, config)
        else:
            self._config = dict(config)

        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """获取配置值（支持 "database.url" 这样的点号路径）"""
        value = self._config
        for k in key.split("."):
            if not isinstance(value, dict):
                return default
            value = value.get(k)
            if value is None:
                return default
        return value

    def set(self, key: str, value: Any):
        keys = key.split(".")
        config = self._config
        for k in keys[:-1]:
            # 复制途经的配置段，避免修改 ConfigLoader 缓存
            child = config.get(k)
            child = dict(child) if isinstance(child, dict) else {}
            config[k] = child
            config = child
        config[keys[-1]] = value

    def to_dict(self) -> Dict[str, Any]:
        return self._config.copy()

    def _deep_merge(self, base: dict, update: dict):
        for key, value in update.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                base[key] = dict(base[key])
                self._deep_merge(base[key], value)
            else:
                base[key] = value
