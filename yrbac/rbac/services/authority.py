"""
授权模块 - 路由授权标记

路由节点 meta.authority 的计算策略:
    - StaticAuthority: 所有节点使用同一个固定值，默认 [1]
    - PermissionAuthority: 节点的值为当前用户中持有该菜单 menu 类型权限的角色 id（升序），
      没有任何角色持有时为 []
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Tuple

DEFAULT_AUTHORITY: List[int] = [1]


class AuthorityResolver(Protocol):
    def resolve(self, menu: Any) -> Optional[List[int]]:
        ...


class StaticAuthority:
    """固定授权标记"""

    def __init__(self, value: Optional[Iterable[int]] = None):
        self._value = list(DEFAULT_AUTHORITY if value is None else value)

    def resolve(self, menu: Any) -> Optional[List[int]]:
        return list(self._value)

    def __repr__(self) -> str:
        return f"StaticAuthority({self._value})"


class PermissionAuthority:
    """按菜单权限计算授权标记

    使用示例:
        authority = PermissionAuthority.from_grants([(role_id, menu_id), ...])
        authority.resolve(menu)  # -> [1, 3]
    """

    def __init__(self, grants: Optional[Mapping[int, Iterable[int]]] = None):
        self._grants: Dict[int, List[int]] = {
            menu_id: sorted(set(role_ids)) for menu_id, role_ids in (grants or {}).items()
        }

    @classmethod
    def from_grants(cls, pairs: Iterable[Tuple[int, int]]) -> "PermissionAuthority":
        """从 (role_id, menu_id) 对构建"""
        grants: Dict[int, set] = {}
        for role_id, menu_id in pairs:
            if menu_id is None:
                continue
            grants.setdefault(menu_id, set()).add(role_id)
        return cls(grants)

    def resolve(self, menu: Any) -> Optional[List[int]]:
        return list(self._grants.get(menu.id, []))

    def __repr__(self) -> str:
        return f"PermissionAuthority({self._grants})"


__all__ = ["DEFAULT_AUTHORITY", "AuthorityResolver", "StaticAuthority", "PermissionAuthority"]
