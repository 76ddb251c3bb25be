"""密码工具模块

加盐单向哈希，明文密码不可从存储值恢复。

使用示例:
    from yrbac.auth import PasswordHelper

    hashed = PasswordHelper.hash("my_password")
    if PasswordHelper.verify("my_password", hashed):
        print("密码正确")
"""

from typing import Optional

from passlib.context import CryptContext

# pbkdf2_sha256 自带随机盐值
_pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto"
)


class PasswordTooShortError(ValueError):
    """密码太短"""
    pass


class PasswordTooLongError(ValueError):
    """密码太长"""
    pass


class PasswordHelper:
    """密码工具类

    - 每次哈希结果不同（随机盐）
    - 可配置密码长度限制
    - 线程安全

    使用示例:
        PasswordHelper.configure(min_length=8)
        hashed = PasswordHelper.hash("password123")
        PasswordHelper.verify("password123", hashed)  # True
    """

    _min_length: int = 6
    _max_length: int = 128

    @classmethod
    def configure(cls, min_length: Optional[int] = None, max_length: Optional[int] = None) -> None:
        if min_length is not None:
            cls._min_length = min_length
        if max_length is not None:
            cls._max_length = max_length

    @classmethod
    def validate_length(cls, password: str) -> None:
        """
        Raises:
            PasswordTooShortError: 密码太短
            PasswordTooLongError: 密码太长
        """
        if len(password) < cls._min_length:
            raise PasswordTooShortError(
                f"密码长度不能少于 {cls._min_length} 个字符，当前 {len(password)} 个字符"
            )
        if len(password) > cls._max_length:
            raise PasswordTooLongError(
                f"密码长度不能超过 {cls._max_length} 个字符，当前 {len(password)} 个字符"
            )

    @classmethod
    def hash(cls, password: str, validate: bool = True) -> str:
        """对密码进行哈希处理，返回 $pbkdf2-sha256$... 格式字符串"""
        if validate:
            cls.validate_length(password)
        return _pwd_context.hash(password)

    @classmethod
    def verify(cls, password: str, hashed: str) -> bool:
        """验证密码；存储值为空或格式无法识别时返回 False"""
        if not hashed or password is None:
            return False
        try:
            return _pwd_context.verify(password, hashed)
        except ValueError:
            return False

    @classmethod
    def needs_rehash(cls, hashed: str) -> bool:
        if not hashed:
            return True
        try:
            return _pwd_context.needs_update(hashed)
        except ValueError:
            return True


def hash_password(password: str) -> str:
    return PasswordHelper.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return PasswordHelper.verify(password, hashed)
