"""Data model for discovered files and the references between them."""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from errors import RegistryError


@dataclass(frozen=True)
class Reference:
    """
    A relative file reference embedded in a document.

    Attributes:
        position: Byte offset where the raw path token starts.
        length: Byte length of the raw path token.
        target_path: Source-relative path of the referenced file.
    """

    position: int
    length: int
    target_path: str

    @property
    def end(self) -> int:
        return self.position + self.length


@dataclass
class File:
    """A source file, its outgoing references and (later) its hashed name."""

    path: str
    references: Tuple[Reference, ...] = ()
    hashed_path: Optional[str] = None

    @property
    def is_resolved(self) -> bool:
        return self.hashed_path is not None

    def targets(self) -> List[str]:
        """Return the distinct target paths in order of first appearance."""
        seen: Dict[str, None] = {}
        for ref in self.references:
            seen.setdefault(ref.target_path, None)
        return list(seen)


class Registry:
    """
    Mapping of source-relative path to File.

    Built once from the traversal; afterwards the only mutation allowed is
    assigning each file's hashed path, exactly once.
    """

    def __init__(self):
        self._files: Dict[str, File] = {}

    def add(self, path: str, references: Optional[List[Reference]] = None) -> File:
        """
        Register a file.

        References are stored sorted by position. Overlapping spans are
        rejected since they cannot be rewritten independently.
        """
        if path in self._files:
            raise RegistryError(f"Duplicate file in registry: {path}")
        ordered = tuple(sorted(references or (), key=lambda r: r.position))
        for previous, current in zip(ordered, ordered[1:]):
            if current.position < previous.end:
                raise RegistryError(
                    f"Overlapping references in {path} at bytes "
                    f"{previous.position} and {current.position}"
                )
        file = File(path=path, references=ordered)
        self._files[path] = file
        return file

    def get(self, path: str) -> File:
        try:
            return self._files[path]
        except KeyError:
            raise RegistryError(f"Unknown file: {path}") from None

    def prune_dangling(self) -> List[Tuple[str, Reference]]:
        """
        Drop references whose target is not a registered file.

        Returns:
            The dropped (source path, reference) pairs, in path order.
        """
        dropped: List[Tuple[str, Reference]] = []
        for path in sorted(self._files):
            file = self._files[path]
            kept = []
            for ref in file.references:
                if ref.target_path in self._files:
                    kept.append(ref)
                else:
                    dropped.append((path, ref))
            if len(kept) != len(file.references):
                file.references = tuple(kept)
        return dropped

    def assign_hashed_path(self, path: str, hashed_path: str) -> None:
        """Record the hashed destination path of a file (single assignment)."""
        file = self.get(path)
        if file.hashed_path is not None:
            raise RegistryError(
                f"{path} already has hashed path {file.hashed_path}"
            )
        file.hashed_path = hashed_path

    def hashed_path_of(self, path: str) -> str:
        """Return the hashed path of a file that has already been processed."""
        hashed = self.get(path).hashed_path
        if hashed is None:
            raise RegistryError(f"{path} has not been processed yet")
        return hashed

    def is_ready(self, file: File) -> bool:
        """Check if every file referenced by ``file`` has a hashed path."""
        return all(self.get(target).is_resolved for target in file.targets())

    def unresolved(self) -> List[File]:
        return [f for f in self._files.values() if not f.is_resolved]

    def mapping(self) -> Dict[str, str]:
        """
        Return the source path -> hashed path mapping for all files.

        Raises:
            RegistryError: If any file has not been processed.
        """
        pending = [f.path for f in self.unresolved()]
        if pending:
            raise RegistryError(f"Files without hashed path: {', '.join(sorted(pending))}")
        return {path: f.hashed_path for path, f in sorted(self._files.items())}

    @property
    def paths(self) -> List[str]:
        return sorted(self._files)

    def __iter__(self) -> Iterator[File]:
        return iter(self._files.values())

    def __len__(self) -> int:
        return len(self._files)

    def __contains__(self, path: str) -> bool:
        return path in self._files

    def __repr__(self) -> str:
        references = sum(len(f.references) for f in self._files.values())
        resolved = sum(1 for f in self._files.values() if f.is_resolved)
        return f"Registry(files={len(self._files)}, references={references}, resolved={resolved})"
