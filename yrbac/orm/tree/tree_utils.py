"""树形结构工具函数

层级数据只存 parent_id（None 或 0 表示根），这里提供从扁平列表
建立父子索引、环检测与树遍历的通用函数。

使用示例:
    from yrbac.orm.tree import index_children, find_cycle_members

    roots, children = index_children(rows, id_getter=lambda r: r.id, parent_getter=lambda r: r.parent_id)
"""

from typing import Any, Callable, Dict, Hashable, Iterable, List, Mapping, Optional, Sequence, Set, Tuple, TypeVar


T = TypeVar("T")

ROOT_KEY = 0


def is_root_parent(parent_id: Optional[Any]) -> bool:
    """parent_id 为 None 或 0 时视为根"""
    return parent_id is None or parent_id == 0


def parent_key(parent_id: Optional[Any]) -> Any:
    """把 None / 0 统一为 ROOT_KEY，便于排序和分组"""
    return ROOT_KEY if is_root_parent(parent_id) else parent_id


def index_children(
    items: Iterable[T],
    id_getter: Callable[[T], Hashable],
    parent_getter: Callable[[T], Optional[Hashable]],
) -> Tuple[List[T], Dict[Hashable, List[T]]]:
    """建立根列表与 parent_id -> children 索引

    - 保持输入顺序（同级节点顺序即输入顺序）
    - 重复 id 只保留第一次出现
    - parent_id 指向不存在的节点时，挂到根上

    Returns:
        (roots, children_index)
    """
    unique: List[T] = []
    seen: Set[Hashable] = set()
    for item in items:
        item_id = id_getter(item)
        if item_id in seen:
            continue
        seen.add(item_id)
        unique.append(item)

    roots: List[T] = []
    children: Dict[Hashable, List[T]] = {}
    for item in unique:
        pid = parent_getter(item)
        if is_root_parent(pid) or pid not in seen:
            roots.append(item)
        else:
            children.setdefault(pid, []).append(item)
    return roots, children


def find_cycle_members(parent_of: Mapping[Hashable, Optional[Hashable]]) -> List[Hashable]:
    """找出所有处于父子环上的节点 id（按首次发现顺序）

    Args:
        parent_of: id -> parent_id 映射；parent 不在映射中视为根
    """
    state: Dict[Hashable, int] = {}  # 1: 访问中, 2: 已完成
    members: List[Hashable] = []

    for start in parent_of:
        if state.get(start) == 2:
            continue
        path: List[Hashable] = []
        node = start
        while node in parent_of and not is_root_parent(node) and state.get(node) is None:
            state[node] = 1
            path.append(node)
            node = parent_of[node]
        if state.get(node) == 1:
            # node 是本次路径上的节点，环从它开始
            idx = path.index(node)
            members.extend(path[idx:])
        for visited in path:
            state[visited] = 2
    return members


def would_create_cycle(
    node_id: Hashable,
    new_parent_id: Optional[Hashable],
    parent_of: Mapping[Hashable, Optional[Hashable]],
) -> bool:
    """把 node_id 的父节点改为 new_parent_id 是否会形成环"""
    if is_root_parent(new_parent_id):
        return False
    current = new_parent_id
    visited: Set[Hashable] = set()
    while not is_root_parent(current) and current in parent_of:
        if current == node_id or current in visited:
            return True
        visited.add(current)
        current = parent_of[current]
    return current == node_id


def flatten_tree(
    nodes: Sequence[Any],
    children_getter: Callable[[Any], Optional[Sequence[Any]]],
) -> List[Any]:
    """深度优先展开树，父节点先于子节点"""
    result: List[Any] = []
    stack = list(reversed(nodes))
    while stack:
        node = stack.pop()
        result.append(node)
        children = children_getter(node) or []
        stack.extend(reversed(children))
    return result


def calculate_tree_depth(
    nodes: Sequence[Any],
    children_getter: Callable[[Any], Optional[Sequence[Any]]],
) -> int:
    """计算树的最大深度，空树为 0"""
    depth = 0
    stack = [(node, 1) for node in nodes]
    while stack:
        node, level = stack.pop()
        depth = max(depth, level)
        stack.extend((child, level + 1) for child in children_getter(node) or [])
    return depth
