"""Resolution of user-given names to object ids."""

import logging
import re
from typing import Callable, List, Optional

from .errors import AmbiguousReference, NoSuchReference, UnresolvableReference
from .hash import is_object_id
from .objects import Commit, Tag

logger = logging.getLogger(__name__)

# Git needs at least 4 hex digits before it treats a name as a short hash
SHORT_HASH_RE = re.compile(r'^[0-9A-Fa-f]{4,40}$')

RefLookup = Callable[[str], List[str]]


class NameResolver:
    """
    Resolves names to object ids.

    Understands:
    - HEAD, followed through symbolic references
    - Full 40-character hashes
    - Short hashes of 4 to 39 hex digits, matched against the stored
      objects of their bucket directory

    Any other name (branch, tag, remote branch) is passed to the optional
    ``ref_lookup`` callable, which returns the candidate ids for it. No
    lookup is installed by default, so such names have no candidates.
    """

    def __init__(self, repo, store, ref_lookup: Optional[RefLookup] = None):
        """
        Initialize resolver.

        Args:
            repo: Repository instance
            store: ObjectStore objects are read from
            ref_lookup: Callable returning candidate ids for other names
        """
        self.repo = repo
        self.store = store
        self.ref_lookup = ref_lookup

    def resolve(self, name: str) -> List[str]:
        """
        List every object id a name may refer to.

        Args:
            name: HEAD, a full or short hash, or a reference name

        Returns:
            Candidate ids, empty when nothing matches
        """
        name = name.strip()
        if not name:
            return []

        if name == 'HEAD':
            head = self.repo.refs.read_ref('HEAD')
            return [head] if head and is_object_id(head) else []

        if SHORT_HASH_RE.match(name):
            name = name.lower()
            if len(name) == 40:
                return [name]

            bucket, rest = name[:2], name[2:]
            candidates = [
                bucket + entry
                for entry in self.repo.list_directory('objects', bucket)
                if entry.startswith(rest)
            ]
            logger.debug("short hash %s matched %d object(s)", name, len(candidates))
            return candidates

        if self.ref_lookup is None:
            return []
        return list(self.ref_lookup(name))

    def find(self, name: str, object_type: Optional[str] = None, follow: bool = True) -> str:
        """
        Resolve a name to exactly one object id.

        When object_type is given, the resolved object must be of that
        type. With follow enabled, annotated tags are peeled to the object
        they point at, and commits are peeled to their tree when a tree
        is requested.

        Args:
            name: Name to resolve
            object_type: Required type ('blob', 'tree', 'commit', 'tag')
            follow: Peel tags and commits to reach object_type

        Returns:
            str: Full object id

        Raises:
            NoSuchReference: If nothing matches name
            AmbiguousReference: If several objects match name
            UnresolvableReference: If the object cannot be peeled to
                object_type
        """
        candidates = self.resolve(name)
        if not candidates:
            raise NoSuchReference(name)
        if len(candidates) > 1:
            raise AmbiguousReference(name, candidates)

        object_id = candidates[0]
        if object_type is None:
            return object_id

        while True:
            obj = self.store.read(object_id)
            if obj.type == object_type:
                return object_id

            if not follow:
                raise UnresolvableReference(name, object_type)

            if isinstance(obj, Tag):
                object_id = obj.target
            elif isinstance(obj, Commit) and object_type == 'tree':
                object_id = obj.tree
            else:
                raise UnresolvableReference(name, object_type)
            if not is_object_id(object_id):
                raise UnresolvableReference(name, object_type)
            logger.debug("%s: followed %s to %s", name, obj.type, object_id)
