"""Core functionality for rgit.

This module contains the object graph and its storage:
- Objects (Blob, Tree, Commit, Tag) and their codecs
- KVLM header/message format shared by commits and tags
- Loose object store
- Reference management
- Name resolution
"""

from rgit.core.errors import (
    RgitError,
    ObjectNotFound,
    MalformedObject,
    UnknownObjectType,
    MalformedTree,
    MalformedHeader,
    ResolutionError,
    NoSuchReference,
    AmbiguousReference,
    UnresolvableReference,
    ReferenceCycle,
)
from rgit.core.hash import hash_object, hash_file, is_object_id
from rgit.core.kvlm import KVLM
from rgit.core.objects import GitObject, Blob, Tree, TreeEntry, Commit, Tag, OBJECT_TYPES, object_class
from rgit.core.repository import Repository
from rgit.core.store import ObjectStore
from rgit.core.refs import RefManager, Annotation
from rgit.core.resolver import NameResolver

__all__ = [
    'RgitError',
    'ObjectNotFound',
    'MalformedObject',
    'UnknownObjectType',
    'MalformedTree',
    'MalformedHeader',
    'ResolutionError',
    'NoSuchReference',
    'AmbiguousReference',
    'UnresolvableReference',
    'ReferenceCycle',
    'hash_object',
    'hash_file',
    'is_object_id',
    'KVLM',
    'GitObject',
    'Blob',
    'Tree',
    'TreeEntry',
    'Commit',
    'Tag',
    'OBJECT_TYPES',
    'object_class',
    'Repository',
    'ObjectStore',
    'RefManager',
    'Annotation',
    'NameResolver',
]
