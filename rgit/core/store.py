"""Loose object storage for rgit."""

import logging
import os
import tempfile
import zlib
from pathlib import Path

from .errors import MalformedObject, ObjectNotFound
from .hash import hash_object, is_object_id, object_header
from .objects import GitObject, object_class

logger = logging.getLogger(__name__)


class ObjectStore:
    """
    Content-addressable store of zlib-compressed objects.

    Every object lives at objects/<first 2 hex>/<remaining 38 hex> and
    holds the compressed bytes of ``<type> <size>\\0<payload>``. The id
    is the SHA-1 of the same uncompressed bytes.
    """

    def __init__(self, repo, compression_level: int = zlib.Z_DEFAULT_COMPRESSION):
        """
        Initialize object store.

        Args:
            repo: Repository instance
            compression_level: zlib level used when writing objects
        """
        self.repo = repo
        self.compression_level = compression_level

    def object_path(self, hash: str) -> Path:
        """
        Get filesystem path for an object.

        Example: ab/cdef0123456789... for hash abcdef0123456789...

        Args:
            hash: 40-character SHA-1 hash

        Returns:
            Path: Full path to object file
        """
        return self.repo.path('objects', hash[:2], hash[2:])

    def exists(self, hash: str) -> bool:
        return self.object_path(hash).is_file()

    def hash(self, obj: GitObject) -> str:
        """Compute the id obj would be stored under, without writing it."""
        return self.write(obj, persist=False)

    def read(self, hash: str) -> GitObject:
        """
        Read object from the store.

        Args:
            hash: 40-character SHA-1 hash

        Returns:
            GitObject: Deserialized Blob, Tree, Commit or Tag

        Raises:
            ObjectNotFound: If no object is stored under hash
                or hash is not a full object id
            MalformedObject: If the stored bytes are corrupt or the
                declared size does not match the payload
            UnknownObjectType: If the header names an unknown type
        """
        if not is_object_id(hash):
            raise ObjectNotFound(hash)

        try:
            with self.repo.open('objects', hash[:2], hash[2:], mode='rb') as f:
                compressed = f.read()
        except FileNotFoundError:
            raise ObjectNotFound(hash) from None

        try:
            content = zlib.decompress(compressed)
        except zlib.error as e:
            raise MalformedObject(f"Object {hash} is not valid zlib data: {e}") from e

        # Parse header: <type> <size>\0
        null_idx = content.find(b'\0')
        if null_idx < 0:
            raise MalformedObject(f"Object {hash} has no header terminator")
        header = content[:null_idx]
        data = content[null_idx + 1:]

        try:
            obj_type, size_str = header.decode('ascii').split(' ', 1)
            size = int(size_str)
        except ValueError:
            raise MalformedObject(f"Invalid object header: {header!r}") from None

        if len(data) != size:
            raise MalformedObject(
                f"Object {hash} size mismatch: expected {size}, got {len(data)}")

        cls = object_class(obj_type)
        logger.debug("read %s %s (%d bytes)", obj_type, hash, size)
        return cls.from_bytes(data)

    def write(self, obj: GitObject, persist: bool = True) -> str:
        """
        Hash an object and optionally write it to the store.

        The compressed object is written to a temporary file next to its
        final location and moved into place once complete, so a failed
        write never leaves a partial object behind. Writing an object that
        is already stored is a no-op.

        Args:
            obj: Object to write
            persist: Store the object; if False only compute its id

        Returns:
            str: SHA-1 hash of the object
        """
        data = obj.serialize()
        content = object_header(obj.type, len(data)) + data
        hash = hash_object(content)

        if not persist:
            return hash

        path = self.object_path(hash)
        if path.exists():
            logger.debug("%s %s already stored", obj.type, hash)
            return hash

        path.parent.mkdir(parents=True, exist_ok=True)
        compressed = zlib.compress(content, self.compression_level)

        fd, tmp_name = tempfile.mkstemp(prefix='tmp_obj_', dir=path.parent)
        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(compressed)
                f.flush()
                os.fsync(f.fileno())
            if os.path.getsize(tmp_name) != len(compressed):
                raise OSError(f"Short write for object {hash}")
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        logger.debug("wrote %s %s (%d bytes)", obj.type, hash, len(data))
        return hash
