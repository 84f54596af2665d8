"""CorpusSource backed by the GitHub REST API."""

import asyncio
import logging
from collections.abc import Iterable

import aiohttp

from . import CorpusSource, FileRef, ListingFetchError, is_source_path, SOURCE_EXTENSIONS, EXCLUDED_PATH_PARTS
from .identifier import RepositoryId

logger = logging.getLogger(__name__)

DEFAULT_API_URL = 'https://api.github.com'
DEFAULT_REF = 'main'
DEFAULT_TIMEOUT = 30

RAW_MEDIA_TYPE = 'application/vnd.github.v3.raw'


def describe_status(status: int) -> str:
    if status == 404:
        return "repository or branch not found (HTTP 404)"
    if status in (403, 429):
        return f"access denied or rate limit exceeded (HTTP {status})"
    return f"unexpected response (HTTP {status})"


class GitHubSource(CorpusSource):
    """Lists repository trees and fetches blobs through the GitHub REST API.

    Corpora are identified by RepositoryId and files by their git blob SHA. The source must
    be entered as an async context manager, which owns the underlying aiohttp session.

    Example:
        async with GitHubSource(ref='main') as source:
            files = await source.list_source_files(RepositoryId('owner', 'repo'))
            content = await source.fetch_content(RepositoryId('owner', 'repo'), files[0].content_id)
    """

    def __init__(self, *, api_url: str = DEFAULT_API_URL, ref: str = DEFAULT_REF, token: str | None = None,
                 timeout: float = DEFAULT_TIMEOUT, connection_limit: int = 16,
                 extensions: Iterable[str] = SOURCE_EXTENSIONS, excluded: Iterable[str] = EXCLUDED_PATH_PARTS):
        self._api_url = api_url.rstrip('/')
        self._ref = ref
        self._token = token
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._connection_limit = connection_limit
        self._extensions = frozenset(e.lower() for e in extensions)
        self._excluded = tuple(excluded)
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self):
        headers = {
            'Accept': 'application/vnd.github+json',
            'User-Agent': 'repodm',
        }
        if self._token:
            headers['Authorization'] = f'token {self._token}'

        self._session = aiohttp.ClientSession(
            connector=aiohttp.TCPConnector(limit=self._connection_limit),
            timeout=self._timeout,
            headers=headers
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        if self._session is not None:
            await self._session.close()
            self._session = None

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            raise RuntimeError("GitHubSource is not open; use it as an async context manager")
        return self._session

    def _repository_url(self, corpus: RepositoryId) -> str:
        return f"{self._api_url}/repos/{corpus.owner}/{corpus.repo}"

    async def list_source_files(self, corpus: RepositoryId) -> list[FileRef]:
        """List source files of the configured ref, filtered by extension and excluded directories.

        Raises:
            ListingFetchError: Network failure, unknown repository, rate limiting or a malformed response
        """
        url = f"{self._repository_url(corpus)}/git/trees/{self._ref}"
        logger.info(f"Fetching file tree of {corpus} at {self._ref}")

        try:
            async with self.session.get(url, params={'recursive': '1'}) as response:
                if response.status != 200:
                    raise ListingFetchError(corpus, describe_status(response.status))
                payload = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ListingFetchError(corpus, str(e) or type(e).__name__) from e
        except ValueError as e:
            raise ListingFetchError(corpus, f"malformed response: {e}") from e

        tree = payload.get('tree') if isinstance(payload, dict) else None
        if not isinstance(tree, list):
            raise ListingFetchError(corpus, "malformed response: no tree")

        if payload.get('truncated'):
            logger.warning(f"File tree of {corpus} was truncated by GitHub; some files are not compared")

        files = [
            FileRef(item['path'], item['sha'])
            for item in tree
            if item.get('type') == 'blob' and 'sha' in item
            and is_source_path(item.get('path', ''), self._extensions, self._excluded)
        ]
        logger.info(f"Found {len(files)} source files in {corpus}")
        return files

    async def fetch_content(self, corpus: RepositoryId, content_id: str) -> str | None:
        """Fetch a blob as text. Failures are logged and reported as None."""
        url = f"{self._repository_url(corpus)}/git/blobs/{content_id}"

        try:
            async with self.session.get(url, headers={'Accept': RAW_MEDIA_TYPE}) as response:
                if response.status != 200:
                    logger.debug(f"Fetching blob {content_id} of {corpus} failed: HTTP {response.status}")
                    return None
                data = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.debug(f"Fetching blob {content_id} of {corpus} failed: {e!r}")
            return None

        return data.decode('utf-8', errors='replace')
