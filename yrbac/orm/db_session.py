"""
数据库会话管理模块

公开 API:
- db_manager: 数据库管理器单例
- init_database(): 初始化数据库连接
- get_engine(): 获取数据库引擎
- db_session_scope(): 非 HTTP 场景的上下文管理器
"""

from contextlib import contextmanager
from typing import Any, Callable, Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from yrbac.log import get_logger

logger = get_logger("yrbac.orm.session")

__all__ = [
    "db_manager",
    "init_database",
    "get_engine",
    "db_session_scope",
]


class DatabaseManager:
    """数据库管理器（单例）

    使用示例:
        from yrbac.orm import db_manager

        db_manager.init(database_url="sqlite:///./rbac.db")
        session = db_manager.get_session()
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return
        self._engine = None
        self._session_maker = None
        self._session_scope = None
        self._initialized = True

    @property
    def engine(self):
        if self._engine is None:
            raise RuntimeError("数据库未初始化，请先调用 init_database()")
        return self._engine

    @property
    def session_scope(self) -> scoped_session:
        if self._session_scope is None:
            raise RuntimeError("数据库未初始化，请先调用 init_database()")
        return self._session_scope

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None and self._session_scope is not None

    def init(
        self,
        database_url: str = None,
        echo: bool = False,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        pool_pre_ping: bool = True,
        scopefunc: Callable = None,
        config: Any = None,
        create_tables: bool = False,
    ):
        """初始化数据库连接

        Args:
            database_url: 数据库连接 URL
            config: DatabaseSettings 或具有相同属性的对象，提供时覆盖单独参数
            scopefunc: scoped_session 的作用域函数，默认按线程隔离
            create_tables: 是否根据模型元数据建表

        Returns:
            tuple: (engine, session_scope)
        """
        if config is not None:
            database_url = getattr(config, "url", database_url) or database_url
            echo = getattr(config, "echo", echo)
            pool_size = getattr(config, "pool_size", pool_size)
            max_overflow = getattr(config, "max_overflow", max_overflow)
            pool_timeout = getattr(config, "pool_timeout", pool_timeout)
            pool_recycle = getattr(config, "pool_recycle", pool_recycle)
            pool_pre_ping = getattr(config, "pool_pre_ping", pool_pre_ping)

        if not database_url:
            raise ValueError("database_url 是必需的，请通过参数或 config 提供")

        logger.info(f"数据库配置URL: {database_url}")

        try:
            if database_url.startswith("sqlite"):
                is_memory_db = database_url in ("sqlite://", "sqlite:///:memory:", "sqlite:///")
                if is_memory_db:
                    # 内存数据库：单连接
                    self._engine = create_engine(
                        database_url,
                        echo=echo,
                        connect_args={"check_same_thread": False},
                        poolclass=StaticPool,
                    )
                    logger.info("SQLite内存数据库引擎创建成功（StaticPool）")
                else:
                    self._engine = create_engine(
                        database_url,
                        echo=echo,
                        connect_args={"check_same_thread": False, "timeout": pool_timeout},
                    )
                    logger.info("SQLite文件数据库引擎创建成功")
            else:
                self._engine = create_engine(
                    database_url,
                    echo=echo,
                    pool_pre_ping=pool_pre_ping,
                    pool_size=pool_size,
                    max_overflow=max_overflow,
                    pool_timeout=pool_timeout,
                    pool_recycle=pool_recycle,
                )
                logger.info("数据库引擎创建成功")
        except Exception as e:
            logger.error(f"创建数据库引擎失败: {e}")
            raise

        self._session_maker = sessionmaker(autocommit=False, autoflush=True, bind=self._engine)
        self._session_scope = scoped_session(self._session_maker, scopefunc=scopefunc)

        from .core_model import Base, CoreModel
        CoreModel.query = self._session_scope.query_property()

        if create_tables:
            Base.metadata.create_all(self._engine)
            logger.info("数据表创建完成")

        return self._engine, self._session_scope

    def get_session(self) -> Session:
        """获取当前作用域的 session（低级 API，优先使用 db_session_scope()）"""
        return self.session_scope()

    def cleanup(self):
        """释放当前作用域的 session（幂等）"""
        if self._session_scope is not None:
            self._session_scope.remove()

    def dispose(self):
        """关闭引擎并重置状态"""
        self.cleanup()
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None
        self._session_maker = None
        self._session_scope = None


db_manager = DatabaseManager()


def init_database(database_url: str = None, config: Any = None, create_tables: bool = False, **kwargs):
    """初始化数据库连接，db_manager.init() 的便捷包装

    使用示例:
        from yrbac.orm import init_database

        init_database(config=settings.database, create_tables=True)
    """
    return db_manager.init(database_url=database_url, config=config, create_tables=create_tables, **kwargs)


def get_engine():
    return db_manager.engine


@contextmanager
def db_session_scope(auto_commit: bool = True) -> Generator[Session, None, None]:
    """非 HTTP 场景的 session 上下文管理器

    正常结束时提交，异常时回滚，最后释放 session。

    使用示例:
        with db_session_scope() as session:
            Role(code="admin", name="管理员").save()
    """
    session = db_manager.get_session()
    try:
        yield session
        if auto_commit:
            session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        db_manager.cleanup()
