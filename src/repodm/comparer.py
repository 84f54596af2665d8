import asyncio
import logging
import os
from collections.abc import Callable

from .commands.compare import do_compare, CompareArgs, DEFAULT_FETCH_CONCURRENCY
from .report.match import MatchRule, DEFAULT_NEAR_THRESHOLD
from .report.summary import ComparisonReport, DEFAULT_HIGH_THRESHOLD
from .settings import (
    Settings,
    SETTING_NEAR_THRESHOLD,
    SETTING_HIGH_THRESHOLD,
    SETTING_FETCH_CONCURRENCY,
    SETTING_GITHUB_API_URL,
    SETTING_GITHUB_REF,
    SETTING_GITHUB_TOKEN,
    SETTING_LOGGING_PATH,
)
from .source import CorpusSource
from .source.github import GitHubSource, DEFAULT_API_URL, DEFAULT_REF
from .source.identifier import parse_repository, RepositoryId
from .utils.processor import Processor

logger = logging.getLogger(__name__)


class Comparer:
    """High-level workflow for comparing two GitHub repositories.

    Comparer resolves configuration (explicit arguments first, then settings, then
    defaults), parses repository identifiers before any network access, and runs the
    asynchronous comparison to completion. The comparison itself is stateless; a Comparer
    can run any number of comparisons with the same processor.
    """

    def __init__(self, processor: Processor, settings: Settings | None = None, *,
                 near_threshold: float | None = None, high_threshold: float | None = None,
                 fetch_concurrency: int | None = None, ref: str | None = None,
                 token: str | None = None, api_url: str | None = None):
        """Initialize the comparer.

        Args:
            processor: Pool used for similarity computation
            settings: Configuration consulted for options not given explicitly
            near_threshold: Exclusive lower bound of near-match similarity
            high_threshold: Similarity above which a near match counts as high
            fetch_concurrency: Maximum number of content fetches in flight
            ref: Branch, tag or commit compared in both repositories
            token: GitHub token; GITHUB_TOKEN is used when neither this nor the settings provide one
            api_url: GitHub API base URL

        Raises:
            ValueError: A threshold or the fetch concurrency is out of range
        """
        if settings is None:
            settings = Settings()

        self._processor = processor
        self._settings = settings

        self._rule = MatchRule(near_threshold=float(
            near_threshold if near_threshold is not None
            else settings.get(SETTING_NEAR_THRESHOLD, DEFAULT_NEAR_THRESHOLD)))

        self._high_threshold = float(
            high_threshold if high_threshold is not None
            else settings.get(SETTING_HIGH_THRESHOLD, DEFAULT_HIGH_THRESHOLD))
        if not 0.0 <= self._high_threshold <= 1.0:
            raise ValueError(f"High-similarity threshold must be in [0, 1]: {self._high_threshold}")

        self._fetch_concurrency = int(
            fetch_concurrency if fetch_concurrency is not None
            else settings.get(SETTING_FETCH_CONCURRENCY, DEFAULT_FETCH_CONCURRENCY))
        if self._fetch_concurrency < 1:
            raise ValueError(f"Fetch concurrency must be positive: {self._fetch_concurrency}")

        self._ref = ref or settings.get(SETTING_GITHUB_REF, DEFAULT_REF)
        self._token = token or os.environ.get('GITHUB_TOKEN') or settings.get(SETTING_GITHUB_TOKEN)
        self._api_url = api_url or settings.get(SETTING_GITHUB_API_URL, DEFAULT_API_URL)

    @property
    def rule(self) -> MatchRule:
        return self._rule

    def configure_logging_from_settings(self) -> bool:
        """Configure logging to the file named by ``logging.path`` in the settings, if any.

        Preserves the current logging level if already configured.

        Returns:
            True if logging was configured, False otherwise
        """
        log_path = self._settings.get(SETTING_LOGGING_PATH)
        if not log_path:
            return False

        current_level = logging.root.level if logging.root.level != logging.NOTSET else logging.INFO

        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)

        logging.basicConfig(
            filename=str(log_path),
            level=current_level,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        return True

    def compare(self, repo1: str | RepositoryId, repo2: str | RepositoryId, *,
                source: CorpusSource | None = None,
                progress: Callable[[int], None] | None = None,
                on_start: Callable[[int], None] | None = None) -> ComparisonReport:
        """Compare the source files of two repositories.

        Args:
            repo1: First repository, as a GitHub URL, an owner/repo token or a RepositoryId
            repo2: Second repository, in the same forms
            source: Corpus source to use instead of a GitHubSource built from the configuration
            progress: Called with the number of first-repository files whose comparisons completed
            on_start: Called once both listings succeed, with the number of first-repository files

        Raises:
            RepositoryFormatError: An identifier is malformed; raised before any network access
            ListingFetchError: The file listing of either repository could not be retrieved
        """
        corpus1 = repo1 if isinstance(repo1, RepositoryId) else parse_repository(repo1)
        corpus2 = repo2 if isinstance(repo2, RepositoryId) else parse_repository(repo2)

        return asyncio.run(self._compare(corpus1, corpus2, source, progress, on_start))

    async def _compare(self, corpus1: RepositoryId, corpus2: RepositoryId, source: CorpusSource | None,
                       progress: Callable[[int], None] | None,
                       on_start: Callable[[int], None] | None) -> ComparisonReport:
        args = CompareArgs(
            self._processor,
            self._rule,
            self._fetch_concurrency,
            self._high_threshold,
            progress,
            on_start
        )

        if source is not None:
            return await do_compare(source, corpus1, corpus2, args)

        async with GitHubSource(api_url=self._api_url, ref=self._ref, token=self._token,
                                connection_limit=self._fetch_concurrency) as github:
            return await do_compare(github, corpus1, corpus2, args)
