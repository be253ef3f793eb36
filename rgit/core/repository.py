"""Repository access for rgit."""

from pathlib import Path
from typing import IO, List, Optional

from .objects import GitObject


class Repository:
    """
    Represents an rgit repository.

    A repository gives file access inside its git directory and wires up
    the object store, reference manager and name resolver working on it.
    It does not create the directory layout; the git directory is
    expected to exist already.
    """

    GIT_DIR_NAME = '.git'

    def __init__(self, path: str = '.', git_dir_name: Optional[str] = None):
        """
        Initialize repository.

        Args:
            path: Path to repository root (defaults to current directory)
            git_dir_name: Name of the git directory under the root
        """
        self.work_tree = Path(path).resolve()
        self.git_dir = self.work_tree / (git_dir_name or self.GIT_DIR_NAME)
        self.objects_dir = self.git_dir / 'objects'
        self.refs_dir = self.git_dir / 'refs'
        self.head_file = self.git_dir / 'HEAD'

        # Initialize managers lazily to avoid circular imports
        self._object_store = None
        self._ref_manager = None
        self._resolver = None

    @property
    def objects(self):
        """Get ObjectStore instance."""
        if self._object_store is None:
            from .store import ObjectStore
            self._object_store = ObjectStore(self)
        return self._object_store

    @property
    def refs(self):
        """Get RefManager instance."""
        if self._ref_manager is None:
            from .refs import RefManager
            self._ref_manager = RefManager(self)
        return self._ref_manager

    @property
    def resolver(self):
        """Get NameResolver instance."""
        if self._resolver is None:
            from .resolver import NameResolver
            self._resolver = NameResolver(self, self.objects)
        return self._resolver

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Searches from the given path upwards until it finds a git directory
        or reaches the filesystem root.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / cls.GIT_DIR_NAME).is_dir():
                return cls(str(current))

            # Reached filesystem root
            if current == current.parent:
                return None

            current = current.parent

    def path(self, *segments: str) -> Path:
        """Build a path inside the git directory."""
        return self.git_dir.joinpath(*segments)

    def open(self, *segments: str, mode: str = 'rb', mkdir: bool = False) -> IO:
        """
        Open a file inside the git directory.

        Args:
            segments: Path segments relative to the git directory
            mode: File mode passed to open()
            mkdir: Create missing parent directories first

        Returns:
            File object, to be used as a context manager
        """
        path = self.path(*segments)
        if mkdir:
            path.parent.mkdir(parents=True, exist_ok=True)
        return open(path, mode)

    def list_directory(self, *segments: str) -> List[str]:
        """
        List entry names of a directory inside the git directory.

        Returns:
            Sorted entry names, empty if the directory does not exist
        """
        path = self.path(*segments)
        if not path.is_dir():
            return []
        return sorted(child.name for child in path.iterdir())

    def read_object(self, hash: str) -> GitObject:
        return self.objects.read(hash)

    def write_object(self, obj: GitObject, persist: bool = True) -> str:
        return self.objects.write(obj, persist=persist)

    def find_object(self, name: str, object_type: Optional[str] = None, follow: bool = True) -> str:
        return self.resolver.find(name, object_type, follow)

    def __repr__(self) -> str:
        return f"Repository(path={self.work_tree})"
