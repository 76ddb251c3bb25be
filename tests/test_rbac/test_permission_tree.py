"""权限树构建测试"""

from types import SimpleNamespace

import pytest

from yrbac.orm.tree import calculate_tree_depth, flatten_tree
from yrbac.rbac import HierarchyCycleError, build_permission_tree


def perm(id, name=None, parent_id=None):
    return SimpleNamespace(id=id, name=name or f"P{id}", parent_id=parent_id)


class TestBuildPermissionTree:
    """build_permission_tree 测试"""

    def test_enable_marks_direct_grant_only(self):
        """只有直接授予的节点 enable=True"""
        permissions = [perm(1), perm(2, parent_id=1), perm(3, parent_id=1)]

        tree = build_permission_tree(permissions, granted_ids=[2])

        assert [node.to_dict() for node in tree] == [
            {
                "id": 1,
                "name": "P1",
                "enable": False,
                "children": [
                    {"id": 2, "name": "P2", "enable": True, "children": []},
                    {"id": 3, "name": "P3", "enable": False, "children": []},
                ],
            }
        ]

    def test_parent_granted_does_not_enable_children(self):
        permissions = [perm(1), perm(2, parent_id=1)]

        tree = build_permission_tree(permissions, granted_ids={1})

        assert tree[0].enable is True
        assert tree[0].children[0].enable is False

    def test_child_granted_does_not_enable_parent(self):
        permissions = [perm(1), perm(2, parent_id=1)]

        tree = build_permission_tree(permissions, granted_ids={2})

        assert tree[0].enable is False
        assert tree[0].children[0].enable is True

    def test_zero_and_none_parent_are_roots(self):
        permissions = [perm(1, parent_id=None), perm(2, parent_id=0)]

        tree = build_permission_tree(permissions, granted_ids=[])

        assert [node.id for node in tree] == [1, 2]

    def test_sibling_order_follows_catalog(self):
        permissions = [perm(1), perm(5, parent_id=1), perm(3, parent_id=1), perm(4, parent_id=1)]

        tree = build_permission_tree(permissions)

        assert [child.id for child in tree[0].children] == [5, 3, 4]

    def test_orphan_attached_to_root(self):
        """父节点不在目录中时挂到根上"""
        permissions = [perm(1), perm(2, parent_id=99)]

        tree = build_permission_tree(permissions)

        assert [node.id for node in tree] == [1, 2]

    def test_duplicate_ids_first_wins(self):
        permissions = [perm(1, name="first"), perm(1, name="second")]

        tree = build_permission_tree(permissions)

        assert len(tree) == 1
        assert tree[0].name == "first"

    def test_empty_catalog(self):
        assert build_permission_tree([], granted_ids=[1]) == []

    def test_icon_omitted_when_missing(self):
        permissions = [perm(1), perm(2)]

        tree = build_permission_tree(permissions, icons={1: "setting"})

        assert tree[0].to_dict()["icon"] == "setting"
        assert "icon" not in tree[1].to_dict()

    def test_granted_id_outside_catalog_is_ignored(self):
        tree = build_permission_tree([perm(1)], granted_ids=[1, 42])

        assert tree[0].enable is True
        assert len(tree) == 1

    def test_cycle_raises(self):
        permissions = [perm(1), perm(2, parent_id=3), perm(3, parent_id=2)]

        with pytest.raises(HierarchyCycleError) as exc_info:
            build_permission_tree(permissions)

        assert set(exc_info.value.ids) == {2, 3}
        assert exc_info.value.status_code == 400

    def test_self_parent_raises(self):
        with pytest.raises(HierarchyCycleError) as exc_info:
            build_permission_tree([perm(7, parent_id=7)])

        assert exc_info.value.ids == [7]

    def test_descendant_of_cycle_raises(self):
        """挂在环上的子树同样无法到达"""
        permissions = [perm(1, parent_id=2), perm(2, parent_id=1), perm(3, parent_id=1)]

        with pytest.raises(HierarchyCycleError):
            build_permission_tree(permissions)

    def test_deep_chain(self):
        """层级深度超过解释器递归上限时仍能构建"""
        depth = 3000
        permissions = [perm(1)] + [perm(i, parent_id=i - 1) for i in range(2, depth + 1)]

        tree = build_permission_tree(permissions, granted_ids=[depth])

        assert calculate_tree_depth(tree, lambda n: n.children) == depth
        leaf = flatten_tree(tree, lambda n: n.children)[-1]
        assert leaf.id == depth
        assert leaf.enable is True
        assert leaf.children == []
