"""
授权模块 - 权限树构建

把扁平的权限目录按 parent_id 组装成树，并按角色的直接授权标记 enable。

规则:
    - parent_id 为 None 或 0 的节点为根
    - 同级顺序即目录顺序
    - parent_id 指向不存在的权限时，该节点挂到根上
    - enable 只看节点自身是否在授权集合中，不向上或向下传递
    - 层级中出现环时抛出 HierarchyCycleError，不返回部分结果

使用示例:
    permissions = Permission.get_all()
    granted = RolePermission.get_role_permission_ids(role_id)
    tree = build_permission_tree(permissions, granted)
    payload = [node.to_dict() for node in tree]
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence, Set

from yrbac.orm.tree import find_cycle_members, index_children
from ..exceptions import HierarchyCycleError
from ..schemas import PermissionNode


def build_permission_tree(
    permissions: Sequence[Any],
    granted_ids: Optional[Iterable[int]] = None,
    icons: Optional[Dict[int, str]] = None,
) -> List[PermissionNode]:
    """构建权限树

    Args:
        permissions: 权限目录（需要 id / name / parent_id 属性）
        granted_ids: 角色直接持有的权限 id
        icons: 权限 id -> 图标，一般来自关联菜单

    Raises:
        HierarchyCycleError: parent_id 形成环
    """
    granted: Set[int] = set(granted_ids or ())
    icons = icons or {}

    roots, children = index_children(
        permissions,
        id_getter=lambda p: p.id,
        parent_getter=lambda p: p.parent_id,
    )

    visited: Set[int] = set()
    tree: List[PermissionNode] = []

    # 显式栈先序遍历
    stack = [(root, tree) for root in reversed(roots)]
    while stack:
        perm, siblings = stack.pop()
        visited.add(perm.id)
        node = PermissionNode(
            id=perm.id,
            name=perm.name,
            enable=perm.id in granted,
            icon=icons.get(perm.id) or None,
        )
        siblings.append(node)
        stack.extend((child, node.children) for child in reversed(children.get(perm.id, [])))

    # 环上的节点不会从任何根被访问到
    parent_of = {}
    for perm in permissions:
        parent_of.setdefault(perm.id, perm.parent_id)
    if len(visited) < len(parent_of):
        members = find_cycle_members(parent_of) or [pid for pid in parent_of if pid not in visited]
        raise HierarchyCycleError("Permission", members)

    return tree


__all__ = ["build_permission_tree"]
