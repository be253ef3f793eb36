"""Object model tests."""

import pytest
import tempfile
from pathlib import Path
from rgit.core.errors import UnknownObjectType
from rgit.core.objects import (
    GitObject, Blob, Tree, Commit, Tag, OBJECT_TYPES, object_class,
)


def test_blob_creation():
    """Test blob creation with data."""
    blob = Blob(b'hello world')
    assert blob.data == b'hello world'
    assert blob.type == 'blob'


def test_blob_default_is_empty():
    """Test a new blob holds no data."""
    assert Blob().data == b''


def test_blob_serialize_is_passthrough():
    """Test blob serialization returns data verbatim."""
    data = b'\x00\xffbinary\n'
    assert Blob(data).serialize() == data


def test_blob_roundtrip():
    """Test blob serialize/deserialize cycle."""
    blob1 = Blob(b'test content')
    blob2 = Blob()
    blob2.deserialize(blob1.serialize())
    assert blob2.data == b'test content'
    assert blob1 == blob2


def test_blob_hash_matches_git():
    """Test blob ids match the ones git computes."""
    assert Blob(b'hello world').hash == '95d09f2b10159347eece71399a7e2e907ea3df4f'
    assert Blob().hash == 'e69de29bb2d1d6434b8b29ae775ad8c2e48c5391'


def test_blob_hash_recomputed_after_change():
    """Test the id follows the content."""
    blob = Blob(b'hello world')
    before = blob.hash
    blob.data = b''
    assert blob.hash != before
    assert blob.hash == 'e69de29bb2d1d6434b8b29ae775ad8c2e48c5391'


def test_blob_from_file():
    """Test blob creation from file."""
    with tempfile.NamedTemporaryFile(mode='w', delete=False) as f:
        f.write('file content')
        temp_path = f.name

    try:
        blob = Blob.from_file(temp_path)
        assert blob.data == b'file content'
    finally:
        Path(temp_path).unlink()


def test_empty_tree_hash_matches_git():
    """Test the empty tree id."""
    assert Tree().hash == '4b825dc642cb6eb9a060e54bf8d69288fbee4904'


def test_objects_of_different_type_differ():
    """Test objects with equal payload but different type are not equal."""
    assert Blob(b'') != Tree()


def test_registry_contains_all_types():
    """Test every type tag maps to its class."""
    assert OBJECT_TYPES == {'blob': Blob, 'tree': Tree, 'commit': Commit, 'tag': Tag}
    for name, cls in OBJECT_TYPES.items():
        assert object_class(name) is cls
        assert cls.type == name


def test_unknown_type_rejected():
    """Test unknown type tags raise UnknownObjectType."""
    with pytest.raises(UnknownObjectType) as excinfo:
        object_class('frob')
    assert excinfo.value.type_name == 'frob'


def test_from_bytes_builds_instance():
    """Test building an object from its payload."""
    blob = object_class('blob').from_bytes(b'abc')
    assert isinstance(blob, Blob)
    assert blob.data == b'abc'


def test_base_codec_methods_not_implemented():
    """Test the abstract codec methods refuse to run."""

    class Incomplete(GitObject):
        type = 'incomplete'

        def serialize(self):
            return super().serialize()

        def deserialize(self, data):
            return super().deserialize(data)

    obj = Incomplete()
    with pytest.raises(NotImplementedError):
        obj.serialize()
    with pytest.raises(NotImplementedError):
        obj.deserialize(b'')


def test_base_class_cannot_be_instantiated():
    """Test GitObject is abstract."""
    with pytest.raises(TypeError):
        GitObject()
