"""Exceptions raised by the rgit object store and resolver."""

from typing import List


class RgitError(Exception):
    """Base class for all rgit errors."""


class ObjectNotFound(RgitError):
    """No object is stored under the requested id."""

    def __init__(self, object_id: str):
        super().__init__(f"Object {object_id} not found")
        self.object_id = object_id


class MalformedObject(RgitError):
    """Stored object bytes do not match the object format."""


class UnknownObjectType(RgitError):
    """Object header names a type that is not blob, tree, commit or tag."""

    def __init__(self, type_name: str):
        super().__init__(f"Unknown object type: {type_name}")
        self.type_name = type_name


class MalformedTree(MalformedObject):
    """Tree payload contains an invalid entry."""


class MalformedHeader(MalformedObject):
    """Commit or tag headers are not terminated by a blank line."""


class ResolutionError(RgitError):
    """A name could not be turned into a single object id."""


class NoSuchReference(ResolutionError):
    def __init__(self, name: str):
        super().__init__(f"No such reference: {name}")
        self.name = name


class AmbiguousReference(ResolutionError):
    """
    Several objects match a name.

    Attributes:
        name: The name that was resolved
        candidates: Every matching object id
    """

    def __init__(self, name: str, candidates: List[str]):
        listing = ', '.join(candidates)
        super().__init__(f"Ambiguous reference {name}: candidates are {listing}")
        self.name = name
        self.candidates = list(candidates)


class UnresolvableReference(ResolutionError):
    def __init__(self, name: str, object_type: str):
        super().__init__(f"Cannot resolve {name} to a {object_type}")
        self.name = name
        self.object_type = object_type


class ReferenceCycle(ResolutionError):
    """Symbolic references point at each other without reaching an id."""

    def __init__(self, ref_name: str):
        super().__init__(f"Reference cycle through {ref_name}")
        self.ref_name = ref_name
