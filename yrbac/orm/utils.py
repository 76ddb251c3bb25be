"""ORM 工具函数"""
import re


def to_snake_case(name: str) -> str:
    """驼峰命名转下划线命名

    Examples:
        >>> to_snake_case("RolePermission")
        'role_permission'
        >>> to_snake_case("APIClient")
        'api_client'
    """
    result = re.sub(r'([A-Z\d]+)([A-Z][a-z])', r'\1_\2', name)
    result = re.sub(r'([a-z])([A-Z])', r'\1_\2', result)
    return result.lower()
