"""配置模块

- AppSettings: 聚合配置，支持 YAML + 环境变量
- 子配置类: DatabaseSettings, LoggingSettings, JWTSettings, PaginationSettings, RbacSettings
- ConfigLoader / ConfigManager: YAML 配置加载

快速开始:
    from yrbac.config import AppSettings, load_yaml_config

    settings = load_yaml_config("config/settings.yaml", AppSettings)
"""

from .settings import (
    AppSettings,
    DatabaseSettings,
    LoggingSettings,
    JWTSettings,
    PaginationSettings,
    RbacSettings,
)

from .loader import (
    ConfigLoader,
    ConfigManager,
    load_yaml_config,
)

__all__ = [
    "AppSettings",
    "DatabaseSettings",
    "LoggingSettings",
    "JWTSettings",
    "PaginationSettings",
    "RbacSettings",
    "ConfigLoader",
    "ConfigManager",
    "load_yaml_config",
]
