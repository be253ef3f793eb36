"""Reference management for rgit."""

import logging
from typing import Dict, Optional, Union

from .errors import ReferenceCycle
from .objects import Tag

logger = logging.getLogger(__name__)

SYMBOLIC_PREFIX = 'ref:'


class Annotation:
    """Author and message of an annotated tag."""

    def __init__(self, author: str = 'Unknown Author <unknown@author.com>', message: str = ''):
        self.author = author
        self.message = message

    def __repr__(self) -> str:
        return f"Annotation(author={self.author!r})"


class RefManager:
    """
    Manages references (HEAD, branches, tags).

    A reference file holds either an object id or ``ref: <path>``
    pointing at another reference, relative to the git directory.
    Reference writes are plain overwrites; callers must not update the
    same reference concurrently.
    """

    def __init__(self, repo):
        """
        Initialize reference manager.

        Args:
            repo: Repository instance
        """
        self.repo = repo

    def read_ref(self, ref_name: str) -> Optional[str]:
        """
        Resolve a reference to the object id at the end of its chain.

        Args:
            ref_name: Path relative to the git directory (e.g. 'HEAD',
                'refs/heads/main')

        Returns:
            Object id or None if a reference in the chain does not exist
        """
        seen = set()
        while True:
            if ref_name in seen:
                raise ReferenceCycle(ref_name)
            seen.add(ref_name)

            try:
                with self.repo.open(*ref_name.split('/'), mode='r') as f:
                    content = f.read().strip()
            except (FileNotFoundError, IsADirectoryError):
                logger.debug("ref %s does not exist", ref_name)
                return None

            if not content.startswith(SYMBOLIC_PREFIX):
                return content or None
            ref_name = content[len(SYMBOLIC_PREFIX):].strip()

    def write_ref(self, ref_name: str, object_id: str) -> None:
        """
        Point a reference at an object id.

        Args:
            ref_name: Path relative to the git directory
            object_id: 40-character SHA-1 hash
        """
        with self.repo.open(*ref_name.split('/'), mode='w', mkdir=True) as f:
            f.write(object_id + '\n')
        logger.debug("ref %s -> %s", ref_name, object_id)

    def write_symbolic_ref(self, ref_name: str, target: str) -> None:
        """
        Make a reference point at another reference.

        Args:
            ref_name: Reference to write (e.g. 'HEAD')
            target: Referenced path (e.g. 'refs/heads/main')
        """
        with self.repo.open(*ref_name.split('/'), mode='w', mkdir=True) as f:
            f.write(f'{SYMBOLIC_PREFIX} {target}\n')
        logger.debug("ref %s -> %s %s", ref_name, SYMBOLIC_PREFIX, target)

    def create_ref(self, ref: str, object_id: str) -> None:
        """Write refs/<ref> (e.g. 'heads/main', 'tags/v1.0')."""
        self.write_ref(f'refs/{ref}', object_id)

    def list_refs(self, path: str = 'refs') -> Dict[str, Union[str, Dict, None]]:
        """
        List references below a directory.

        Returns:
            Dictionary keyed by entry name, in sorted order. Files map to
            their resolved object id, directories to a nested dictionary.
        """
        result = {}
        for name in self.repo.list_directory(*path.split('/')):
            child = f'{path}/{name}'
            if self.repo.path(*child.split('/')).is_dir():
                result[name] = self.list_refs(child)
            else:
                result[name] = self.read_ref(child)
        return result

    def create_tag(self, name: str, target_name: str, annotation: Optional[Annotation] = None) -> str:
        """
        Create a tag.

        Without an annotation a lightweight tag is written: refs/tags/<name>
        points straight at the target. With an annotation a tag object is
        stored and the reference points at it.

        Args:
            name: Tag name
            target_name: Any name the resolver accepts
            annotation: Author and message for an annotated tag

        Returns:
            str: Id the tag reference points to
        """
        target = self.repo.resolver.find(target_name)

        if annotation is None:
            object_id = target
        else:
            target_type = self.repo.objects.read(target).type
            tag = Tag.create(
                target=target,
                target_type=target_type,
                name=name,
                tagger=annotation.author,
                message=annotation.message,
            )
            object_id = self.repo.objects.write(tag)

        self.create_ref(f'tags/{name}', object_id)
        return object_id
