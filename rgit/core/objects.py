"""Object model for rgit: blobs, trees, commits and tags."""

import time
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Type

from . import kvlm as kvlm_codec
from .errors import MalformedTree, UnknownObjectType
from .hash import hash_object, is_object_id, object_header
from .kvlm import KVLM

# Raw length of a SHA-1 digest inside tree entries
RAW_ID_LENGTH = 20


class GitObject(ABC):
    """Base class for all objects stored in the object database."""

    type: str = ''

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Serialize object to bytes.

        Returns:
            bytes: Object payload, without header
        """
        raise NotImplementedError(f"{self.__class__.__name__} cannot be serialized")

    @abstractmethod
    def deserialize(self, data: bytes) -> None:
        """
        Deserialize object from bytes.

        Args:
            data: Object payload, without header
        """
        raise NotImplementedError(f"{self.__class__.__name__} cannot be deserialized")

    @classmethod
    def from_bytes(cls, data: bytes) -> 'GitObject':
        """Build a new object of this type from its payload."""
        obj = cls()
        obj.deserialize(data)
        return obj

    def compute_hash(self) -> str:
        """
        Compute the object hash.

        Objects are hashed with a header containing the type and size.
        Format: <type> <size>\\0<content>

        Returns:
            str: 40-character SHA-1 hash
        """
        data = self.serialize()
        return hash_object(object_header(self.type, len(data)) + data)

    @property
    def hash(self) -> str:
        """Object id, recomputed from the current content."""
        return self.compute_hash()

    def __eq__(self, other) -> bool:
        if not isinstance(other, GitObject):
            return NotImplemented
        return self.type == other.type and self.serialize() == other.serialize()

    __hash__ = None


class Blob(GitObject):
    """
    Represents file content.

    A blob stores raw bytes without any metadata like filename or
    permissions.
    """

    type = 'blob'

    def __init__(self, data: Optional[bytes] = None):
        self.data = data or b''

    def serialize(self) -> bytes:
        return self.data

    def deserialize(self, data: bytes) -> None:
        self.data = data

    @classmethod
    def from_file(cls, filepath: str) -> 'Blob':
        """
        Create blob from file.

        Args:
            filepath: Path to file

        Returns:
            Blob: New blob containing file content
        """
        with open(filepath, 'rb') as f:
            return cls(f.read())

    def __repr__(self) -> str:
        return f"Blob(hash={self.hash[:7]}, size={len(self.data)})"


class TreeEntry:
    """
    A single entry in a tree.

    Each entry contains:
    - mode: 5 or 6 ASCII digits (e.g. '100644' for a file, '40000' for a directory)
    - path: Entry name as bytes
    - target: Object id of the blob or tree the entry points to
    """

    def __init__(self, mode: str, path: bytes, target: str):
        self.mode = mode
        self.path = path
        self.target = target

    def __eq__(self, other) -> bool:
        if not isinstance(other, TreeEntry):
            return NotImplemented
        return (self.mode, self.path, self.target) == (other.mode, other.path, other.target)

    __hash__ = None

    def __repr__(self) -> str:
        return f"TreeEntry({self.mode} {self.target[:7]} {self.path!r})"


class Tree(GitObject):
    """
    Represents directory structure.

    Entries are kept in the order they were added or parsed. No canonical
    sort is applied before serialization.
    """

    type = 'tree'

    def __init__(self, entries: Optional[List[TreeEntry]] = None):
        self.entries: List[TreeEntry] = []
        for entry in entries or []:
            self.add_entry(entry.mode, entry.path, entry.target)

    def add_entry(self, mode: str, path, target: str) -> TreeEntry:
        """
        Append an entry to the tree.

        Args:
            mode: File mode, 5 or 6 characters
            path: Entry name (str is encoded as UTF-8)
            target: Object id of the entry

        Returns:
            TreeEntry: The new entry

        Raises:
            ValueError: If any field cannot be serialized
        """
        if isinstance(path, str):
            path = path.encode('utf-8')
        if len(mode) not in (5, 6) or not mode.isdigit():
            raise ValueError(f"Invalid tree entry mode: {mode!r}")
        if not path or b'\0' in path:
            raise ValueError(f"Invalid tree entry path: {path!r}")
        if not is_object_id(target):
            raise ValueError(f"Invalid tree entry target: {target!r}")

        entry = TreeEntry(mode, path, target)
        self.entries.append(entry)
        return entry

    def serialize(self) -> bytes:
        """
        Serialize tree entries.

        Format: <mode> <path>\\0<20-byte hash>, repeated for every entry.

        Returns:
            bytes: Serialized tree data
        """
        parts = []
        for entry in self.entries:
            parts.append(entry.mode.encode('ascii') + b' ' + entry.path + b'\0')
            parts.append(bytes.fromhex(entry.target))
        return b''.join(parts)

    def deserialize(self, data: bytes) -> None:
        """
        Deserialize tree entries.

        Args:
            data: Serialized tree data

        Raises:
            MalformedTree: If an entry is truncated or its mode is not
                5 or 6 characters long
        """
        entries = []
        pos = 0

        while pos < len(data):
            space = data.find(b' ', pos)
            if space < 0:
                raise MalformedTree(f"Missing mode separator at offset {pos}")
            mode = data[pos:space]
            if len(mode) not in (5, 6):
                raise MalformedTree(f"Invalid mode {mode!r} at offset {pos}")

            null = data.find(b'\0', space)
            if null < 0:
                raise MalformedTree(f"Missing path terminator at offset {space}")
            path = data[space + 1:null]

            raw_id = data[null + 1:null + 1 + RAW_ID_LENGTH]
            if len(raw_id) != RAW_ID_LENGTH:
                raise MalformedTree(f"Truncated object id at offset {null + 1}")

            entries.append(TreeEntry(mode.decode('ascii', 'replace'), path, raw_id.hex()))
            pos = null + 1 + RAW_ID_LENGTH

        self.entries = entries

    def __repr__(self) -> str:
        return f"Tree(entries={len(self.entries)})"


class Commit(GitObject):
    """
    Represents a commit.

    A commit is a KVLM document: ``tree``, zero or more ``parent``,
    ``author`` and ``committer`` headers, then the commit message. Any
    other header (``gpgsig``, ``encoding``...) is preserved as is.
    """

    type = 'commit'

    def __init__(self, kvlm: Optional[KVLM] = None):
        self.kvlm = kvlm if kvlm is not None else KVLM()

    def serialize(self) -> bytes:
        return kvlm_codec.serialize(self.kvlm)

    def deserialize(self, data: bytes) -> None:
        self.kvlm = kvlm_codec.parse(data)

    @property
    def tree(self) -> str:
        return self.kvlm.first('tree')

    @tree.setter
    def tree(self, value: str) -> None:
        self.kvlm.set('tree', [value])

    @property
    def parents(self) -> List[str]:
        return self.kvlm.get('parent')

    @parents.setter
    def parents(self, values: List[str]) -> None:
        self.kvlm.set('parent', values)

    @property
    def author(self) -> str:
        return self.kvlm.first('author')

    @author.setter
    def author(self, value: str) -> None:
        self.kvlm.set('author', [value])

    @property
    def committer(self) -> str:
        return self.kvlm.first('committer')

    @committer.setter
    def committer(self, value: str) -> None:
        self.kvlm.set('committer', [value])

    @property
    def message(self) -> str:
        return self.kvlm.message

    @message.setter
    def message(self, value: str) -> None:
        self.kvlm.message = value

    @classmethod
    def create(
        cls,
        tree_hash: str,
        parent_hashes: List[str],
        author: str,
        committer: str,
        message: str,
        timestamp: Optional[int] = None,
        timezone: str = '+0000'
    ) -> 'Commit':
        """
        Create a new commit.

        Args:
            tree_hash: Hash of tree object
            parent_hashes: List of parent commit hashes
            author: Author name and email (e.g., "Name <email>")
            committer: Committer name and email
            message: Commit message
            timestamp: Unix timestamp (defaults to current time)
            timezone: Timezone offset (e.g., "+0000", "-0500")

        Returns:
            Commit: New commit object
        """
        if timestamp is None:
            timestamp = int(time.time())

        commit = cls()
        commit.tree = tree_hash
        commit.parents = parent_hashes
        commit.author = f"{author} {timestamp} {timezone}"
        commit.committer = f"{committer} {timestamp} {timezone}"
        commit.message = message
        return commit

    def __repr__(self) -> str:
        parent_info = f", parents={len(self.parents)}" if self.parents else ""
        msg_preview = self.message.split('\n')[0][:50]
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{msg_preview}')"


class Tag(GitObject):
    """
    Represents an annotated tag.

    Same KVLM layout as a commit, with ``object``, ``type``, ``tag`` and
    ``tagger`` headers followed by the tag message.
    """

    type = 'tag'

    def __init__(self, kvlm: Optional[KVLM] = None):
        self.kvlm = kvlm if kvlm is not None else KVLM()

    def serialize(self) -> bytes:
        return kvlm_codec.serialize(self.kvlm)

    def deserialize(self, data: bytes) -> None:
        self.kvlm = kvlm_codec.parse(data)

    @property
    def target(self) -> str:
        """Id of the tagged object."""
        return self.kvlm.first('object')

    @target.setter
    def target(self, value: str) -> None:
        self.kvlm.set('object', [value])

    @property
    def target_type(self) -> str:
        return self.kvlm.first('type')

    @target_type.setter
    def target_type(self, value: str) -> None:
        self.kvlm.set('type', [value])

    @property
    def name(self) -> str:
        return self.kvlm.first('tag')

    @name.setter
    def name(self, value: str) -> None:
        self.kvlm.set('tag', [value])

    @property
    def tagger(self) -> str:
        return self.kvlm.first('tagger')

    @tagger.setter
    def tagger(self, value: str) -> None:
        self.kvlm.set('tagger', [value])

    @property
    def message(self) -> str:
        return self.kvlm.message

    @message.setter
    def message(self, value: str) -> None:
        self.kvlm.message = value

    @classmethod
    def create(cls, target: str, target_type: str, name: str, tagger: str, message: str) -> 'Tag':
        """
        Create a new annotated tag.

        Args:
            target: Id of the tagged object
            target_type: Type of the tagged object (usually 'commit')
            name: Tag name
            tagger: Tagger identity
            message: Tag message

        Returns:
            Tag: New tag object
        """
        tag = cls()
        tag.target = target
        tag.target_type = target_type
        tag.name = name
        tag.tagger = tagger
        tag.message = message
        return tag

    def __repr__(self) -> str:
        return f"Tag(name={self.name!r}, object={self.target[:7]})"


OBJECT_TYPES: Dict[str, Type[GitObject]] = {
    Blob.type: Blob,
    Tree.type: Tree,
    Commit.type: Commit,
    Tag.type: Tag,
}


def object_class(type_name: str) -> Type[GitObject]:
    """
    Look up the object class registered for a type name.

    Raises:
        UnknownObjectType: If type_name is not blob, tree, commit or tag
    """
    try:
        return OBJECT_TYPES[type_name]
    except KeyError:
        raise UnknownObjectType(type_name) from None
