"""Exception types raised by hashthing."""

from typing import Iterable, List


class HashthingError(Exception):
    """Base class for fatal hashthing errors."""


class ConfigError(HashthingError):
    """Raised when a configuration file cannot be loaded or is invalid."""


class RegistryError(HashthingError):
    """Raised when the file registry is used inconsistently."""


class CyclicDependencyError(HashthingError):
    """
    Raised when the scheduler stops making progress.

    The remaining files reference each other (directly or through a chain),
    so none of them can ever be assigned a hashed name.
    """

    def __init__(self, paths: Iterable[str]):
        self.paths: List[str] = sorted(paths)
        super().__init__(
            "Unsatisfiable file references (cycle?) between: " + ", ".join(self.paths)
        )


class ReferenceSpanError(HashthingError):
    """Raised when a reference span does not fit inside its document."""

    def __init__(self, path: str, reference):
        self.path = path
        self.reference = reference
        super().__init__(
            f"Reference to '{reference.target_path}' at byte {reference.position} "
            f"(length {reference.length}) is outside the bounds of '{path}'"
        )
