"""
日志工具模块
提供授权引擎使用的日志配置功能
"""

import inspect
import logging
import logging.handlers
import os
import time
from typing import Any, Optional


# 默认日志格式
DEFAULT_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(filename)s:%(lineno)d - %(message)s"

SQL_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


class MicrosecondFormatter(logging.Formatter):
    """带微秒时间戳的格式化器"""

    def formatTime(self, record, datefmt=None):
        ct = self.converter(record.created)
        s = time.strftime(datefmt or "%Y-%m-%d %H:%M:%S", ct)
        return "%s.%06d" % (s, (record.created - int(record.created)) * 1000000)


def create_formatter(
    log_format: str = None,
    datefmt: str = "%Y-%m-%d %H:%M:%S",
    use_microseconds: bool = True,
) -> logging.Formatter:
    fmt = log_format or DEFAULT_LOG_FORMAT
    if use_microseconds:
        return MicrosecondFormatter(fmt=fmt, datefmt=datefmt)
    return logging.Formatter(fmt, datefmt=datefmt)


def _build_file_handler(log_file: str, max_bytes: int, backup_count: int, encoding: str) -> logging.Handler:
    log_dir = os.path.dirname(log_file)
    if log_dir and not os.path.exists(log_dir):
        os.makedirs(log_dir, exist_ok=True)

    if max_bytes > 0:
        return logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding=encoding,
        )
    return logging.FileHandler(log_file, encoding=encoding)


def setup_logger(
    name: str = None,
    level: str = "INFO",
    log_file: str = None,
    log_format: str = None,
    console: bool = True,
    use_microseconds: bool = True,
    propagate: bool = True,
    max_bytes: int = 0,
    backup_count: int = 5,
    encoding: str = "utf-8",
) -> logging.Logger:
    """设置并返回配置好的日志记录器

    Args:
        name: 日志记录器名称，默认为 root logger
        level: 日志级别，可选：DEBUG, INFO, WARNING, ERROR, CRITICAL
        log_file: 日志文件路径，不指定则不写入文件
        log_format: 日志格式，不指定则使用 DEFAULT_LOG_FORMAT
        console: 是否输出到控制台
        use_microseconds: 是否使用微秒精度时间戳
        propagate: 是否传播到父日志器
        max_bytes: 单个日志文件最大字节数，0 表示不轮转
        backup_count: 轮转保留的备份数量
        encoding: 文件编码

    Returns:
        配置好的日志记录器

    使用示例:
        from yrbac.log import setup_logger

        logger = setup_logger("yrbac", level="DEBUG", log_file="logs/rbac.log")
    """
    _logger = logging.getLogger(name) if name else logging.getLogger()
    _logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    _logger.propagate = propagate

    # 重复调用时避免处理器叠加
    _logger.handlers.clear()

    formatter = create_formatter(log_format, use_microseconds=use_microseconds)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        _logger.addHandler(console_handler)

    if log_file:
        file_handler = _build_file_handler(log_file, max_bytes, backup_count, encoding)
        file_handler.setFormatter(formatter)
        _logger.addHandler(file_handler)

    return _logger


def setup_sql_logger(config: Any) -> Optional[logging.Logger]:
    """按配置设置 SQLAlchemy 日志器

    config.sql_log_enabled 为 False 时返回 None。
    """
    if not getattr(config, "sql_log_enabled", False):
        return None

    sql_logger = None
    for logger_name in ("sqlalchemy.engine", "sqlalchemy.pool"):
        configured = setup_logger(
            name=logger_name,
            level=getattr(config, "sql_log_level", "DEBUG"),
            log_file=getattr(config, "sql_log_file_path", None),
            log_format=SQL_LOG_FORMAT,
            console=False,
            propagate=False,
            max_bytes=getattr(config, "parsed_file_max_bytes", 0),
            backup_count=getattr(config, "file_backup_count", 5),
            encoding=getattr(config, "file_encoding", "utf-8"),
        )
        if sql_logger is None:
            sql_logger = configured
    return sql_logger


def setup_root_logger(
    level: str = "INFO",
    log_file: str = None,
    console: bool = True,
    use_microseconds: bool = True,
    config: Any = None,
) -> logging.Logger:
    """设置根日志记录器

    子日志器会自动继承根日志器的处理器配置。

    Args:
        level: 日志级别（提供 config 时忽略）
        log_file: 日志文件路径（提供 config 时忽略）
        console: 是否输出到控制台
        use_microseconds: 是否使用微秒精度
        config: LoggingSettings 或具有相同属性的对象

    使用示例:
        # 参数方式
        setup_root_logger(level="INFO", log_file="logs/app.log")

        # 配置对象方式
        setup_root_logger(config=settings.logging)
    """
    max_bytes = 0
    backup_count = 5
    encoding = "utf-8"

    if config is not None:
        level = getattr(config, "level", level)
        log_file = getattr(config, "file_path", log_file) or None
        console = getattr(config, "enable_console", console)
        max_bytes = getattr(config, "parsed_file_max_bytes", max_bytes)
        backup_count = getattr(config, "file_backup_count", backup_count)
        encoding = getattr(config, "file_encoding", encoding)
        setup_sql_logger(config)

    return setup_logger(
        name=None,
        level=level,
        log_file=log_file,
        console=console,
        use_microseconds=use_microseconds,
        propagate=False,
        max_bytes=max_bytes,
        backup_count=backup_count,
        encoding=encoding,
    )


def get_logger(name: str = None) -> logging.Logger:
    """获取日志记录器，支持自动推断模块名

    无参数调用时，使用调用模块的 __name__ 作为日志器名称。
    传入不含点号的简写时，自动添加 'yrbac.' 前缀。

    使用示例:
        from yrbac.log import get_logger

        logger = get_logger()              # yrbac/rbac/services/role_service.py -> "yrbac.rbac.services.role_service"
        logger = get_logger("reconciler")  # -> "yrbac.reconciler"
        logger = get_logger("sqlalchemy.engine")  # 含点号，不添加前缀
    """
    if name is None:
        frame = inspect.currentframe()
        if frame is not None and frame.f_back is not None:
            name = frame.f_back.f_globals.get("__name__", "yrbac")
        else:
            name = "yrbac"
    elif name != "yrbac" and "." not in name:
        name = f"yrbac.{name}"

    return logging.getLogger(name)


logger = logging.getLogger("yrbac")
