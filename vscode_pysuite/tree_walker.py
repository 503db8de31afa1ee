"""Directory discovery for the generated workspace.

The walker visits directories depth-first, pre-order, in the order the
operating system lists them. Classification is delegated to two predicates
so a stricter matcher can replace the substring ones without touching the
traversal.
"""

import os
from typing import Callable, Iterator, Optional, Sequence, Set, Tuple

from .logger import Logger

PathPredicate = Callable[[str], bool]


class SubstringExclusion:
    """True for any path whose text contains one of the excluded tokens.

    Matching is case-sensitive against the full path, not per segment, so a
    folder such as ``outline`` is excluded by the ``out`` token.
    """

    def __init__(self, tokens: Sequence[str]) -> None:
        self.tokens = tuple(tokens)

    def __call__(self, path: str) -> bool:
        return any(token in path for token in self.tokens)


class SourceFileDetector:
    """True when a directory directly holds an entry named with the marker."""

    def __init__(self, marker: str) -> None:
        self.marker = marker

    def __call__(self, path: str) -> bool:
        try:
            with os.scandir(path) as entries:
                for entry in entries:
                    if self.marker in entry.name:
                        return True
        except OSError:
            return False
        return False


class TreeWalker:

    def __init__(
        self,
        is_excluded: PathPredicate,
        has_source_files: PathPredicate,
        max_depth: Optional[int] = None,
    ) -> None:
        self.is_excluded = is_excluded
        self.has_source_files = has_source_files
        self.max_depth = max_depth
        self.logger = Logger("tree_walker")

    @classmethod
    def from_config(cls, section) -> "TreeWalker":
        return cls(
            SubstringExclusion(section.exclude_folders),
            SourceFileDetector(section.source_marker),
            section.max_depth,
        )

    def walk(self, root: str) -> Iterator[str]:
        """Yield qualifying directories below ``root`` in discovery order."""
        ancestors: Set[Tuple[int, int]] = set()
        key = self._identity(root)
        if key is not None:
            ancestors.add(key)
        yield from self._scan(root, 1, ancestors)

    def _scan(self, base: str, depth: int, ancestors: Set[Tuple[int, int]]) -> Iterator[str]:
        try:
            with os.scandir(base) as it:
                entries = list(it)
        except OSError as exc:
            self.logger.debug(f"Skipping unreadable directory '{base}': {exc}")
            return

        for entry in entries:
            path = os.path.join(base, entry.name)
            try:
                is_dir = entry.is_dir()
            except OSError:
                continue
            if not is_dir or self.is_excluded(path):
                continue

            if self.max_depth is not None and depth > self.max_depth:
                self.logger.warning(f"Depth limit {self.max_depth} reached; not visiting '{path}'")
                continue

            key = self._identity(path)
            if key is not None and key in ancestors:
                self.logger.warning(f"Directory cycle detected; not revisiting '{path}'")
                continue

            if self.has_source_files(path):
                yield path

            if key is not None:
                ancestors.add(key)
            try:
                yield from self._scan(path, depth + 1, ancestors)
            finally:
                if key is not None:
                    ancestors.discard(key)

    @staticmethod
    def _identity(path: str) -> Optional[Tuple[int, int]]:
        try:
            st = os.stat(path)
        except OSError:
            return None
        return st.st_dev, st.st_ino

