"""Shared test utilities for repodm tests."""
import asyncio
import hashlib

from repodm.source import CorpusSource, FileRef, ListingFetchError


def content_id(path: str, content: str | None) -> str:
    """Content-addressed id like a git blob SHA, so equal contents share an id."""
    if content is None:
        return f"missing:{path}"
    return hashlib.sha1(content.encode('utf-8')).hexdigest()


class MemorySource(CorpusSource):
    """In-memory CorpusSource.

    Each corpus maps paths to contents; a content of None simulates a failed fetch.
    Corpora listed in `failing` raise ListingFetchError with the given reason. Fetches
    are recorded in `fetches` and the highest number of fetches in flight at once in
    `max_in_flight`.
    """

    def __init__(self, corpora: dict, *, failing: dict | None = None, fetch_delay: float = 0.0):
        self._corpora = corpora
        self._failing = failing or {}
        self._fetch_delay = fetch_delay
        self._blobs = {
            corpus: {content_id(path, content): content for path, content in files.items()}
            for corpus, files in corpora.items()
        }
        self.fetches: list[tuple] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def list_source_files(self, corpus) -> list[FileRef]:
        await asyncio.sleep(0)
        if corpus in self._failing:
            raise ListingFetchError(corpus, self._failing[corpus])
        return [FileRef(path, content_id(path, content)) for path, content in self._corpora[corpus].items()]

    async def fetch_content(self, corpus, content_id: str) -> str | None:
        self.fetches.append((corpus, content_id))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self._fetch_delay)
            return self._blobs[corpus][content_id]
        finally:
            self.in_flight -= 1


class CollectingOutput:
    """Collects rendered lines."""

    def __init__(self):
        self.lines: list[str] = []

    def __call__(self, line: str):
        self.lines.append(line)

    @property
    def text(self) -> str:
        return '\n'.join(self.lines)
