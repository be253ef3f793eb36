"""Hash utilities for rgit."""

import hashlib
import re

OBJECT_ID_LENGTH = 40

_OBJECT_ID_RE = re.compile(r'[0-9a-f]{40}')


def hash_object(data: bytes) -> str:
    """
    Compute SHA-1 hash of data.
    
    Args:
        data: Bytes to hash
        
    Returns:
        40-character hex string
    """
    return hashlib.sha1(data).hexdigest()


def object_header(type_name: str, size: int) -> bytes:
    """
    Build the header stored in front of every object payload.
    
    Format: <type> <size>\\0
    """
    return f"{type_name} {size}\0".encode('ascii')


def is_object_id(value: str) -> bool:
    """Check that value is a full, lowercase 40-character hex id."""
    return bool(_OBJECT_ID_RE.fullmatch(value))


def hash_file(filepath: str, type_name: str = 'blob') -> str:
    """
    Compute the object id a file would get when stored as a blob.
    
    Args:
        filepath: Path to file
        type_name: Object type used in the header
        
    Returns:
        40-character hex string
    """
    with open(filepath, 'rb') as f:
        data = f.read()
    return hash_object(object_header(type_name, len(data)) + data)
