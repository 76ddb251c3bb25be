"""路由树构建测试"""

from types import SimpleNamespace

import pytest

from yrbac.orm.tree import calculate_tree_depth, flatten_tree
from yrbac.rbac import HierarchyCycleError, PermissionAuthority, StaticAuthority, build_route_tree


def menu(id, name=None, parent_id=None, order=0, icon=None, meta=None, is_visible=True, path=None, component=""):
    return SimpleNamespace(
        id=id,
        name=name or f"M{id}",
        parent_id=parent_id,
        order=order,
        icon=icon,
        meta=meta or {},
        is_visible=is_visible,
        path=path if path is not None else f"/m{id}",
        component=component,
    )


class TestBuildRouteTree:
    """build_route_tree 测试"""

    def test_node_shape(self):
        menus = [
            menu(1, name="System", order=1, icon="setting", meta={"title": "系统管理"}, component="Layout"),
            menu(2, name="Users", parent_id=1, order=1, path="/system/users"),
        ]

        tree = build_route_tree(menus)

        assert [node.to_dict() for node in tree] == [
            {
                "component": "Layout",
                "name": "System",
                "path": "/m1",
                "meta": {
                    "title": "系统管理",
                    "icon": "setting",
                    "darkIcon": "setting",
                    "activeIcon": "setting",
                    "order": 1,
                    "authority": [1],
                },
                "children": [
                    {
                        "component": "",
                        "name": "Users",
                        "path": "/system/users",
                        "meta": {"title": "Users", "order": 1, "authority": [1]},
                    }
                ],
            }
        ]

    def test_siblings_sorted_by_order(self):
        menus = [menu(1, order=3), menu(2, order=1), menu(3, order=2)]

        tree = build_route_tree(menus)

        assert [node.meta.order for node in tree] == [1, 2, 3]
        assert [node.name for node in tree] == ["M2", "M3", "M1"]

    def test_equal_order_keeps_catalog_order(self):
        menus = [menu(5), menu(2), menu(9)]

        tree = build_route_tree(menus)

        assert [node.name for node in tree] == ["M5", "M2", "M9"]

    def test_zero_order_omitted(self):
        tree = build_route_tree([menu(1, order=0)])

        assert "order" not in tree[0].to_dict()["meta"]

    def test_leaf_has_no_children_key(self):
        tree = build_route_tree([menu(1)])

        assert "children" not in tree[0].to_dict()
        assert tree[0].children is None

    def test_meta_icon_overrides(self):
        menus = [menu(1, icon="home", meta={"darkIcon": "home-dark"})]

        meta = build_route_tree(menus)[0].to_dict()["meta"]

        assert meta["icon"] == "home"
        assert meta["darkIcon"] == "home-dark"
        assert meta["activeIcon"] == "home"

    def test_orphan_attached_to_root(self):
        tree = build_route_tree([menu(1), menu(2, parent_id=42)])

        assert [node.name for node in tree] == ["M1", "M2"]

    def test_hidden_included_by_default(self):
        tree = build_route_tree([menu(1, is_visible=False)])

        assert len(tree) == 1

    def test_hidden_subtree_excluded(self):
        menus = [
            menu(1, order=1),
            menu(2, order=2, is_visible=False),
            menu(3, parent_id=2),
            menu(4, parent_id=1, is_visible=False),
        ]

        tree = build_route_tree(menus, include_hidden=False)

        assert [node.name for node in tree] == ["M1"]
        assert tree[0].children is None

    def test_static_authority(self):
        tree = build_route_tree([menu(1)], authority=StaticAuthority([1, 2]))

        assert tree[0].meta.authority == [1, 2]

    def test_permission_authority(self):
        authority = PermissionAuthority.from_grants([(3, 1), (1, 1), (3, 1)])

        tree = build_route_tree([menu(1), menu(2)], authority=authority)

        assert tree[0].meta.authority == [1, 3]
        assert tree[1].to_dict()["meta"]["authority"] == []

    def test_cycle_raises(self):
        menus = [menu(1), menu(2, parent_id=3), menu(3, parent_id=2)]

        with pytest.raises(HierarchyCycleError) as exc_info:
            build_route_tree(menus)

        assert set(exc_info.value.ids) == {2, 3}

    def test_empty_catalog(self):
        assert build_route_tree([]) == []

    def test_deep_chain(self):
        depth = 3000
        menus = [menu(1)] + [menu(i, parent_id=i - 1) for i in range(2, depth + 1)]

        tree = build_route_tree(menus)

        assert calculate_tree_depth(tree, lambda n: n.children) == depth
        leaf = flatten_tree(tree, lambda n: n.children)[-1]
        assert leaf.name == f"M{depth}"
        assert leaf.children is None

    def test_deep_chain_hidden_cut(self):
        """深层链中的隐藏菜单截断其下方所有节点"""
        depth = 3000
        menus = [menu(1)] + [menu(i, parent_id=i - 1, is_visible=(i != 2000)) for i in range(2, depth + 1)]

        tree = build_route_tree(menus, include_hidden=False)

        assert calculate_tree_depth(tree, lambda n: n.children) == 1999
        assert flatten_tree(tree, lambda n: n.children)[-1].name == "M1999"
