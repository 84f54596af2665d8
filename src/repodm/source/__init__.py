"""Corpus sources providing file listings and file contents.

This package contains:
- FileRef, CorpusSource and ListingFetchError: the interface the comparison engine depends on
- identifier: parsing of repository identifiers
- github: CorpusSource backed by the GitHub REST API
"""

from abc import ABC, abstractmethod
from collections.abc import Hashable, Iterable
from typing import NamedTuple

SOURCE_EXTENSIONS = frozenset({
    'js', 'ts', 'py', 'java', 'cpp', 'c', 'h', 'cs', 'php', 'rb', 'go', 'rs'
})

EXCLUDED_PATH_PARTS = ('node_modules/', '.git/', 'dist/', 'build/')


class FileRef(NamedTuple):
    """A source file listed in a corpus."""
    path: str  # Path for display, relative to the corpus root
    content_id: str  # Opaque handle passed back to CorpusSource.fetch_content()


class ListingFetchError(RuntimeError):
    """The file listing of a corpus could not be retrieved."""

    def __init__(self, corpus, reason: str):
        super().__init__(f"Failed to fetch repository {corpus}: {reason}")
        self.corpus = corpus
        self.reason = reason


def is_source_path(path: str, extensions: Iterable[str] = SOURCE_EXTENSIONS,
                   excluded: Iterable[str] = EXCLUDED_PATH_PARTS) -> bool:
    """Check whether a path is a candidate source file.

    The extension is compared case-insensitively; excluded directory markers are
    matched as case-sensitive substrings anywhere in the path.
    """
    _, dot, extension = path.rpartition('.')
    if not dot or extension.lower() not in extensions:
        return False
    return not any(part in path for part in excluded)


class CorpusSource(ABC):
    """Provides the files of a corpus and their contents."""

    @abstractmethod
    async def list_source_files(self, corpus: Hashable) -> list[FileRef]:
        """List candidate source files of a corpus.

        Raises:
            ListingFetchError: The listing could not be retrieved
        """

    @abstractmethod
    async def fetch_content(self, corpus: Hashable, content_id: str) -> str | None:
        """Fetch the content of a file, or None when it cannot be retrieved."""
