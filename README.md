# intrusive-rbtree

A red-black tree that keeps *your* objects in order. It does not store
key/value pairs. It indexes the items you give it. You supply a function
that extracts the key from an item and a three-way comparison function.
The tree then links the items together without copying them.

This is useful when objects already exist elsewhere and you want a balanced
index over them. The tree keeps one item per key. When you add an item whose
key is already taken, it tells you which item holds that key. It also lets
you swap a stored item for another item with an equal key without
rebalancing.

## Installation

```
pip install .
```

## Usage

```python
from dataclasses import dataclass

from intrusive_rbtree.tree import RBTree
from intrusive_rbtree.core import DuplicateKeyError, NotFoundError


@dataclass(eq=False)
class Record:
    value: int
    label: str


def compare(a, b):
    return (a > b) - (a < b)


tree = RBTree(key=lambda record: record.value, compare=compare)

first = Record(20, "first")
tree.add(first)
tree.add(Record(10, "second"))
tree.add(Record(30, "third"))

print(len(tree))                      # 3
print([r.value for r in tree])        # [10, 20, 30], in key order
print(tree.find(20).label)            # first

try:
    tree.add(Record(20, "again"))
except DuplicateKeyError as exc:
    print(exc.existing.label)         # first: the item that holds the key

# Swap a stored item for another with an equal key; the shape of the tree is kept.
tree.replace(first, Record(20, "replacement"))
print(tree.find(20).label)            # replacement

tree.remove(tree.find(10))
try:
    tree.find(10)
except NotFoundError:
    print("gone")
```

Both `key` and `compare` are optional. Without `key`, the item itself is the
key. Without `compare`, keys are compared with `<` and `>`.

The tree tracks items by identity, not by equality. One object can therefore
be in several trees at once, and each tree orders it by its own key. Adding
the same object to one tree twice raises `NodeInUseError`. This applies to
objects that Python shares between equal values, such as small integers. Do
not store `None` as an item.

### Operations

| Call | What it does | Errors |
| --- | --- | --- |
| `tree.add(item)` | Inserts the item and rebalances. | `DuplicateKeyError` (with `.existing`) if the key is already held; `NodeInUseError` if this very item is already in the tree |
| `tree.remove(item)` | Unlinks the item and rebalances. | `NodeNotInTreeError` if the item is not in this tree |
| `tree.find(key)` | Returns the item holding `key`. | `NotFoundError` (also a `KeyError`); `EmptyTreeError`, a kind of `NotFoundError`, on an empty tree |
| `tree.replace(old, new)` | Puts `new` where `old` was, keeping its colour and position. | `NodeNotInTreeError` if `old` is not in the tree; `NodeInUseError` if `new` already is; `KeyMismatchError` if their keys do not compare equal |

All errors derive from `RBTreeError` in `intrusive_rbtree.core`.

The tree works with `len(tree)`, iteration in key order, `item in tree` (by
identity) and truthiness, as any container does. It also provides:

- `tree.root()` returns the item at the root, or `None` when the tree is empty.
- `tree.nodes()` yields a `NodeInfo` for every node in key order. Each one has
  the fields `item`, `color` (a `Color`, `RED` or `BLACK`) and `depth`. This
  is useful for inspecting the shape of the tree.
- `tree.validate()` checks the red-black invariants, the key order and the
  parent links. It returns the black height, or raises `RBTreeError` that
  describes the first violation it finds.

### Lower level

`intrusive_rbtree.core.TreeCore` holds only the structure: `Node` objects
around a black sentinel. It provides:

- rotations: `rotate_left` and `rotate_right`
- `fix_after_insert`, which rebalances after the caller has linked in a leaf
- `swap_with_successor`
- `unlink`

It does not compare keys. `RBTree` is built on it.

## Running the tests

```
pip install .[test]
pytest
```