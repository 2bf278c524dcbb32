"""Dependency-ordered processing of registry files."""

from typing import Callable, List

from errors import CyclicDependencyError
from graph.model import File, Registry
from log import get_logger

logger = get_logger("scheduler")

Processor = Callable[[File], str]


def schedule(registry: Registry, process: Processor) -> int:
    """
    Process every file once, after all the files it references.

    Runs full passes over the unprocessed files. In each pass every file
    whose references all point at already-hashed files is handed to
    ``process``, and the hashed path it returns is recorded in the registry.
    Passes repeat until nothing is left.

    Args:
        registry: Registry of files, with dangling references already pruned.
        process: Callable that writes a file and returns its hashed path.

    Returns:
        The number of passes that were needed.

    Raises:
        CyclicDependencyError: If a pass makes no progress while files remain.
    """
    pending: List[File] = registry.unresolved()
    passes = 0

    while pending:
        passes += 1
        waiting: List[File] = []
        processed = 0
        for file in pending:
            if registry.is_ready(file):
                registry.assign_hashed_path(file.path, process(file))
                processed += 1
            else:
                waiting.append(file)

        logger.debug("Pass %d: processed %d file(s), %d waiting", passes, processed, len(waiting))

        if processed == 0:
            raise CyclicDependencyError(f.path for f in waiting)
        pending = waiting

    return passes
