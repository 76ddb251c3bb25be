"""
授权模块 - 前端路由树构建

菜单按 (parent_id, order) 排序后组装成树，同级按 order 升序，order 相同时保持目录顺序。

节点形状:
    {component, name, path, meta: {title, icon, darkIcon, activeIcon, order, authority}, children}

- meta.title 为空时回退为菜单 name
- 空字符串图标与值为 0 的 order 不输出
- 没有子节点时不输出 children
- include_hidden=False 时隐藏菜单及其整个子树被剔除
"""

from typing import Any, Dict, List, Optional, Sequence, Set

from yrbac.orm.tree import find_cycle_members, index_children, parent_key
from ..exceptions import HierarchyCycleError
from ..schemas import RouteMeta, RouteNode
from .authority import AuthorityResolver, StaticAuthority


def _menu_meta(menu: Any) -> Dict[str, Any]:
    meta = getattr(menu, "meta", None)
    return meta if isinstance(meta, dict) else {}


def _route_meta(menu: Any, authority: AuthorityResolver) -> RouteMeta:
    meta = _menu_meta(menu)
    icon = getattr(menu, "icon", None) or meta.get("icon") or None
    return RouteMeta(
        title=meta.get("title") or menu.name,
        icon=icon,
        dark_icon=meta.get("darkIcon") or icon,
        active_icon=meta.get("activeIcon") or icon,
        order=menu.order or None,
        authority=authority.resolve(menu),
    )


def build_route_tree(
    menus: Sequence[Any],
    authority: Optional[AuthorityResolver] = None,
    include_hidden: bool = True,
) -> List[RouteNode]:
    """构建路由树

    Args:
        menus: 菜单目录（需要 id / parent_id / name / path / component / order / meta 属性）
        authority: 授权标记策略，默认 StaticAuthority([1])
        include_hidden: 是否包含 is_visible=False 的菜单

    Raises:
        HierarchyCycleError: parent_id 形成环
    """
    authority = authority or StaticAuthority()
    ordered = sorted(menus, key=lambda m: (parent_key(m.parent_id), m.order or 0))

    roots, children = index_children(
        ordered,
        id_getter=lambda m: m.id,
        parent_getter=lambda m: m.parent_id,
    )

    visited: Set[int] = set()

    # 先序收集保留的菜单，隐藏菜单的子树一并剔除，但仍计入已访问
    kept: List[Any] = []
    stack = [(root, True) for root in reversed(roots)]
    while stack:
        menu, keep = stack.pop()
        visited.add(menu.id)
        keep = keep and (include_hidden or getattr(menu, "is_visible", True))
        if keep:
            kept.append(menu)
        stack.extend((child, keep) for child in reversed(children.get(menu.id, [])))

    # 逆先序构建，子节点总在父节点之前完成
    built: Dict[int, RouteNode] = {}
    for menu in reversed(kept):
        kids = [built.pop(child.id) for child in children.get(menu.id, []) if child.id in built]
        built[menu.id] = RouteNode(
            component=menu.component or "",
            name=menu.name,
            path=menu.path or "",
            meta=_route_meta(menu, authority),
            children=kids or None,
        )

    tree = [built[root.id] for root in roots if root.id in built]

    parent_of = {}
    for menu in ordered:
        parent_of.setdefault(menu.id, menu.parent_id)
    if len(visited) < len(parent_of):
        members = find_cycle_members(parent_of) or [mid for mid in parent_of if mid not in visited]
        raise HierarchyCycleError("Menu", members)

    return tree


__all__ = ["build_route_tree"]
