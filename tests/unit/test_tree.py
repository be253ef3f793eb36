"""Tree object tests."""

import pytest
from rgit.core.objects import Tree, TreeEntry
from rgit.core.errors import MalformedTree, MalformedObject

OID = '3b18e512dba79e4c8300dd08aeb37f8e728b8dad'
OID_BYTES = b"\x3b\x18\xe5\x12\xdb\xa7\x9e\x4c\x83\x00\xdd\x08\xae\xb3\x7f\x8e\x72\x8b\x8d\xad"


def test_tree_entry_creation():
    """Test creating a tree entry."""
    entry = TreeEntry('100644', b'file.txt', 'a' * 40)
    assert entry.mode == '100644'
    assert entry.path == b'file.txt'
    assert entry.target == 'a' * 40


def test_tree_creation():
    """Test creating empty tree."""
    tree = Tree()
    assert len(tree.entries) == 0
    assert tree.type == 'tree'
    assert tree.serialize() == b''


def test_tree_add_entry_encodes_str_path():
    """Test str paths are stored as UTF-8 bytes."""
    tree = Tree()
    entry = tree.add_entry('100644', 'résumé.txt', 'a' * 40)
    assert entry.path == 'résumé.txt'.encode('utf-8')
    assert tree.entries == [entry]


def test_tree_keeps_insertion_order():
    """Test entries are not sorted."""
    tree = Tree()
    tree.add_entry('100644', b'zebra.txt', 'a' * 40)
    tree.add_entry('100644', b'apple.txt', 'b' * 40)
    tree.add_entry('40000', b'middle', 'c' * 40)

    assert [e.path for e in tree.entries] == [b'zebra.txt', b'apple.txt', b'middle']
    assert tree.serialize().index(b'zebra.txt') < tree.serialize().index(b'apple.txt')


def test_tree_serialize():
    """Test tree serialization bytes."""
    tree = Tree()
    tree.add_entry('100644', b'file.txt', OID)
    assert tree.serialize() == b"100644 file.txt\x00" + OID_BYTES


def test_tree_deserialize():
    """Test tree deserialization."""
    tree = Tree()
    tree.deserialize(b"100644 file.txt\x00" + OID_BYTES + b"40000 sub\x00" + b"\x00" * 20)

    assert tree.entries == [
        TreeEntry('100644', b'file.txt', OID),
        TreeEntry('40000', b'sub', '0' * 40),
    ]


def test_tree_roundtrip():
    """Test tree serialize/deserialize cycle."""
    tree1 = Tree()
    tree1.add_entry('100644', b'file1.txt', 'a' * 40)
    tree1.add_entry('100755', b'script.sh', 'b' * 40)
    tree1.add_entry('40000', b'subdir', 'c' * 40)
    tree1.add_entry('120000', b'link with space', 'd' * 40)

    tree2 = Tree.from_bytes(tree1.serialize())
    assert tree2.entries == tree1.entries
    assert tree2.hash == tree1.hash


def test_tree_path_with_binary_bytes():
    """Test paths are raw bytes, not text."""
    tree = Tree()
    tree.add_entry('100644', b'caf\xe9', 'a' * 40)
    assert Tree.from_bytes(tree.serialize()).entries[0].path == b'caf\xe9'


def test_constructor_copies_entries():
    """Test building a tree from entries."""
    entries = [TreeEntry('100644', b'a', 'a' * 40), TreeEntry('40000', b'b', 'b' * 40)]
    assert Tree(entries).entries == entries


@pytest.mark.parametrize('mode', [b'1006', b'1006440', b'', b'1'])
def test_invalid_mode_length(mode):
    """Test modes must be 5 or 6 characters."""
    with pytest.raises(MalformedTree):
        Tree.from_bytes(mode + b" file\x00" + OID_BYTES)


def test_malformed_tree_is_malformed_object():
    """Test MalformedTree belongs to the MalformedObject family."""
    assert issubclass(MalformedTree, MalformedObject)


@pytest.mark.parametrize('data', [
    b"100644file.txt",
    b"100644 file.txt",
    b"100644 file.txt\x00" + OID_BYTES[:10],
])
def test_truncated_entries(data):
    """Test truncated entries raise MalformedTree."""
    with pytest.raises(MalformedTree):
        Tree.from_bytes(data)


@pytest.mark.parametrize('mode,path,target', [
    ('1006', b'f', 'a' * 40),
    ('10064x', b'f', 'a' * 40),
    ('100644', b'', 'a' * 40),
    ('100644', b'a\x00b', 'a' * 40),
    ('100644', b'f', 'a' * 39),
    ('100644', b'f', 'A' * 40),
    ('100644', b'f', 'a' * 40 + '\n'),
])
def test_add_entry_validation(mode, path, target):
    """Test entries that could not be serialized are refused."""
    with pytest.raises(ValueError):
        Tree().add_entry(mode, path, target)
