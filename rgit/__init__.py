"""rgit - content-addressable object store for a Git-like object graph."""

__version__ = '0.1.0'

from rgit.core.repository import Repository
from rgit.core.objects import GitObject, Blob, Tree, Commit, Tag

__all__ = [
    'Repository',
    'GitObject',
    'Blob',
    'Tree',
    'Commit',
    'Tag',
]
