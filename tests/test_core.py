import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from intrusive_rbtree.core import (
    Color,
    DuplicateKeyError,
    EmptyTreeError,
    KeyMismatchError,
    Node,
    NodeInUseError,
    NodeNotInTreeError,
    NotFoundError,
    RBTreeError,
    TreeCore,
)

ADD_KEYS = [20, 10, 30, 5, 15, 25, 35, 3, 7, 12, 17, 22, 27, 32, 37, 1]
DEL_KEYS = [15, 5, 25, 20, 30, 10, 35, 3, 17, 22, 27, 32, 37, 7, 12, 1, 19]


def _insert(core, key):
    nil = core.nil
    node = Node(key)
    node.left = node.right = nil
    parent = nil
    cur = core.root
    while not core.is_nil(cur):
        parent = cur
        if key < cur.item:
            cur = cur.left
        elif key > cur.item:
            cur = cur.right
        else:
            return None
    node.parent = parent
    if not core.is_nil(parent):
        if key < parent.item:
            parent.left = node
        else:
            parent.right = node
    core.fix_after_insert(node)
    return node


def _find(core, key):
    cur = core.root
    while not core.is_nil(cur):
        if key < cur.item:
            cur = cur.left
        elif key > cur.item:
            cur = cur.right
        else:
            return cur
    return None


def _inorder(core, node=None):
    node = core.root if node is None else node
    if core.is_nil(node):
        return []
    return _inorder(core, node.left) + [node] + _inorder(core, node.right)


def _check(core):
    nil = core.nil
    assert nil.color is Color.BLACK
    if core.is_nil(core.root):
        return 0
    assert core.root.color is Color.BLACK
    assert core.root.parent is nil

    def walk(node, lo, hi):
        if node is nil:
            return 1
        assert node.item is not None
        if lo is not None:
            assert node.item > lo
        if hi is not None:
            assert node.item < hi
        for child in (node.left, node.right):
            if child is not nil:
                assert child.parent is node
                if node.color is Color.RED:
                    assert child.color is Color.BLACK
        left_height = walk(node.left, lo, node.item)
        right_height = walk(node.right, node.item, hi)
        assert left_height == right_height
        return left_height + (node.color is Color.BLACK)

    return walk(core.root, None, None)


def _build(keys):
    core = TreeCore()
    for key in keys:
        _insert(core, key)
    return core


def test_new_core_is_empty():
    core = TreeCore()
    assert core.is_nil(core.root)
    assert core.nil.color is Color.BLACK
    assert _inorder(core) == []


def test_is_nil_rejects_real_node():
    core = _build([1])
    assert core.is_nil(core.nil)
    assert not core.is_nil(core.root)


def test_first_insert_becomes_black_root():
    core = TreeCore()
    node = _insert(core, 20)
    assert core.root is node
    assert node.color is Color.BLACK
    assert node.parent is core.nil


def test_leaf_under_black_parent_stays_red():
    core = _build([20, 10])
    assert core.root.item == 20
    assert core.root.left.item == 10
    assert core.root.left.color is Color.RED


def test_straight_line_insert_rotates():
    core = _build([1, 2, 3])
    assert core.root.item == 2
    assert core.root.left.item == 1
    assert core.root.right.item == 3
    assert core.root.left.color is Color.RED
    assert core.root.right.color is Color.RED
    _check(core)


def test_zigzag_insert_rotates_twice():
    core = _build([30, 10, 20])
    assert core.root.item == 20
    assert [n.item for n in _inorder(core)] == [10, 20, 30]
    _check(core)


def test_source_sequence_inserts_balanced():
    core = _build(ADD_KEYS)
    assert [n.item for n in _inorder(core)] == sorted(ADD_KEYS)
    _check(core)


def test_rotate_left_at_root():
    core = _build([20, 10, 30])
    old_root = core.root
    core.rotate_left(old_root)
    assert core.root.item == 30
    assert core.root.left is old_root
    assert old_root.parent is core.root
    assert core.root.parent is core.nil
    assert [n.item for n in _inorder(core)] == [10, 20, 30]


def test_rotate_right_at_root():
    core = _build([20, 10, 30])
    old_root = core.root
    core.rotate_right(old_root)
    assert core.root.item == 10
    assert core.root.right is old_root
    assert old_root.left is core.nil
    assert [n.item for n in _inorder(core)] == [10, 20, 30]


def test_rotations_are_inverse():
    core = _build(ADD_KEYS)
    pivot = _find(core, 10)
    before = [(n.item, n.color) for n in _inorder(core)]
    core.rotate_left(pivot)
    core.rotate_right(pivot.parent)
    assert [(n.item, n.color) for n in _inorder(core)] == before
    _check(core)


def test_swap_with_successor_without_right_subtree():
    core = _build([20, 10, 30])
    leaf = _find(core, 10)
    assert core.swap_with_successor(leaf) is None
    assert [n.item for n in _inorder(core)] == [10, 20, 30]


@pytest.mark.parametrize("key", [20, 10, 5, 30])
def test_swap_with_successor_exchanges_positions(key):
    core = _build(ADD_KEYS)
    node = _find(core, key)
    before = _inorder(core)
    index = before.index(node)
    colors_before = [n.color for n in before]
    succ = core.swap_with_successor(node)
    after = _inorder(core)
    assert succ is before[index + 1]
    assert after[index] is succ
    assert after[index + 1] is node
    assert node.left is core.nil
    assert [n.color for n in after] == colors_before
    for n in after:
        for child in (n.left, n.right):
            if not core.is_nil(child):
                assert child.parent is n


def test_swap_root_updates_root():
    core = _build(ADD_KEYS)
    old_root = core.root
    succ = core.swap_with_successor(old_root)
    assert core.root is succ
    assert succ.parent is core.nil


def test_unlink_source_sequence():
    core = _build(ADD_KEYS)
    remaining = set(ADD_KEYS)
    for key in DEL_KEYS:
        node = _find(core, key)
        if key not in remaining:
            assert node is None
            continue
        core.unlink(node)
        remaining.discard(key)
        assert node.item is None
        assert [n.item for n in _inorder(core)] == sorted(remaining)
        _check(core)
    assert core.is_nil(core.root)


def test_unlink_last_node_empties_tree():
    core = _build([7])
    node = core.root
    core.unlink(node)
    assert core.is_nil(core.root)
    assert node.item is None


def test_unlink_free_node_raises():
    core = _build([1, 2])
    with pytest.raises(NodeNotInTreeError):
        core.unlink(Node())
    with pytest.raises(NodeNotInTreeError):
        core.unlink(core.nil)


def test_error_hierarchy():
    err = DuplicateKeyError("first")
    assert err.existing == "first"
    assert isinstance(err, RBTreeError)
    with pytest.raises(KeyError):
        raise NotFoundError(3)
    with pytest.raises(NotFoundError):
        raise EmptyTreeError(3)
    for cls in (NodeInUseError, NodeNotInTreeError, KeyMismatchError):
        assert issubclass(cls, RBTreeError)


@settings(max_examples=60, deadline=None)
@given(
    st.lists(st.integers(min_value=-200, max_value=200), max_size=60),
    st.randoms(use_true_random=False),
)
def test_random_insert_and_unlink_keep_invariants(keys, rnd):
    core = TreeCore()
    for key in keys:
        _insert(core, key)
        _check(core)
    present = sorted(set(keys))
    assert [n.item for n in _inorder(core)] == present
    order = list(present)
    rnd.shuffle(order)
    remaining = set(present)
    for key in order:
        core.unlink(_find(core, key))
        remaining.discard(key)
        _check(core)
        assert [n.item for n in _inorder(core)] == sorted(remaining)
    assert core.is_nil(core.root)