"""Shared pytest fixtures for rgit tests."""

import pytest
import tempfile
import shutil
import zlib
from pathlib import Path
from rgit.core.repository import Repository
from rgit.core.objects import Blob, Tree, Commit


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create a repository with an empty git directory layout."""
    git_dir = temp_dir / '.git'
    (git_dir / 'objects').mkdir(parents=True)
    (git_dir / 'refs' / 'heads').mkdir(parents=True)
    (git_dir / 'refs' / 'tags').mkdir(parents=True)
    return Repository(str(temp_dir))


@pytest.fixture
def sample_blob():
    """Create a sample blob object."""
    return Blob(b"Hello, World!\n")


@pytest.fixture
def sample_tree(repo, sample_blob):
    """Create a sample tree with one blob."""
    blob_hash = repo.write_object(sample_blob)
    tree = Tree()
    tree.add_entry('100644', b'test.txt', blob_hash)
    return tree


@pytest.fixture
def sample_commit(sample_tree, repo):
    """Sample commit object."""
    tree_hash = repo.write_object(sample_tree)
    return Commit.create(
        tree_hash=tree_hash,
        parent_hashes=[],
        author="Test User <test@example.com>",
        committer="Test User <test@example.com>",
        message="Test commit\n",
        timestamp=1700000000,
    )


@pytest.fixture
def write_raw_object():
    """
    Store arbitrary uncompressed content under an object id.

    Used to plant corrupt objects and ids that share a prefix.
    """
    def write(repo, object_id, content):
        path = repo.git_dir / 'objects' / object_id[:2] / object_id[2:]
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(zlib.compress(content))
        return path
    return write
