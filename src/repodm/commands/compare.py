import logging
from asyncio import TaskGroup
from collections.abc import Callable, Hashable, Iterable
from typing import NamedTuple

from ..report.match import Match, MatchRule
from ..report.summary import ComparisonReport, aggregate, DEFAULT_HIGH_THRESHOLD
from ..source import CorpusSource, FileRef
from ..text.normalize import NormalizedText
from ..utils.processor import Processor
from ..utils.throttler import Throttler

logger = logging.getLogger(__name__)

DEFAULT_FETCH_CONCURRENCY = 8


class CompareArgs(NamedTuple):
    """Arguments for the compare operation."""
    processor: Processor  # Pool computing similarity rows
    rule: MatchRule = MatchRule()
    fetch_concurrency: int = DEFAULT_FETCH_CONCURRENCY  # Maximum number of content fetches in flight
    high_threshold: float = DEFAULT_HIGH_THRESHOLD
    # Called with the number of corpus-1 files whose comparisons have just completed
    progress: Callable[[int], None] | None = None
    # Called once both corpora are listed, with the number of corpus-1 files
    on_start: Callable[[int], None] | None = None


class TextGroup(NamedTuple):
    """Files of one corpus sharing the same normalized text."""
    text: NormalizedText
    files: list[tuple[int, FileRef]]  # (position in the corpus listing, file)


def group_by_text(entries: Iterable[tuple[int, FileRef, NormalizedText]]) -> list[TextGroup]:
    """Group files with equal normalized texts, keeping first-occurrence order."""
    groups: list[TextGroup] = []
    by_fingerprint: dict[int, int] = {}

    for index, ref, text in entries:
        slot = by_fingerprint.get(text.fingerprint)
        if slot is not None and groups[slot].text.text == text.text:
            groups[slot].files.append((index, ref))
            continue

        if slot is None:
            by_fingerprint[text.fingerprint] = len(groups)
        groups.append(TextGroup(text, [(index, ref)]))

    return groups


def _first_error(group: BaseExceptionGroup) -> BaseException:
    error = group.exceptions[0]
    while isinstance(error, BaseExceptionGroup):
        error = error.exceptions[0]
    return error


class CrossComparator:
    """Compares every file of one corpus with every file of another."""

    def __init__(self, source: CorpusSource, args: CompareArgs):
        self._source = source
        self._processor = args.processor
        self._rule = args.rule
        self._fetch_concurrency = args.fetch_concurrency
        self._high_threshold = args.high_threshold
        self._progress = args.progress
        self._on_start = args.on_start

    async def run(self, corpus1: Hashable, corpus2: Hashable) -> ComparisonReport:
        """Execute the comparison.

        Raises:
            ListingFetchError: The file listing of either corpus could not be retrieved
        """
        files1, files2 = await self._list(corpus1, corpus2)
        logger.info(f"Comparing {len(files1)} files of {corpus1} with {len(files2)} files of {corpus2}")
        if self._on_start is not None:
            self._on_start(len(files1))

        texts1, texts2 = await self._fetch(corpus1, files1, corpus2, files2)

        present1 = [(i, ref, texts1[ref.content_id]) for i, ref in enumerate(files1)
                    if texts1[ref.content_id] is not None]
        present2 = [(j, ref, texts2[ref.content_id]) for j, ref in enumerate(files2)
                    if texts2[ref.content_id] is not None]
        skipped_files = (len(files1) - len(present1)) + (len(files2) - len(present2))
        if skipped_files:
            logger.info(f"Skipped {skipped_files} empty files or files whose content could not be fetched")
        if self._progress is not None and len(present1) < len(files1):
            self._progress(len(files1) - len(present1))

        matches = await self._score(group_by_text(present1), group_by_text(present2), len(files2))

        report = aggregate(
            matches,
            high_threshold=self._high_threshold,
            files1=len(files1),
            files2=len(files2),
            skipped_files=skipped_files,
            scored_pairs=len(present1) * len(present2)
        )
        logger.info(f"Comparison complete: {len(report.identical)} identical, "
                    f"{len(report.near_matches)} near matches, risk {report.risk}")
        return report

    async def _list(self, corpus1: Hashable, corpus2: Hashable) -> tuple[list[FileRef], list[FileRef]]:
        """List both corpora concurrently. The first failure cancels the other listing."""
        try:
            async with TaskGroup() as tg:
                listing1 = tg.create_task(self._source.list_source_files(corpus1))
                listing2 = tg.create_task(self._source.list_source_files(corpus2))
        except BaseExceptionGroup as e:
            raise _first_error(e)

        return listing1.result(), listing2.result()

    async def _fetch(self, corpus1: Hashable, files1: list[FileRef], corpus2: Hashable, files2: list[FileRef]) \
            -> tuple[dict[str, NormalizedText | None], dict[str, NormalizedText | None]]:
        """Fetch and normalize each distinct content of both corpora exactly once."""
        texts1: dict[str, NormalizedText | None] = {}
        texts2: dict[str, NormalizedText | None] = {}

        try:
            async with TaskGroup() as tg:
                throttler = Throttler(tg, self._fetch_concurrency)
                for corpus, files, texts in ((corpus1, files1, texts1), (corpus2, files2, texts2)):
                    for content_id in dict.fromkeys(ref.content_id for ref in files):
                        await throttler.schedule(self._load(corpus, content_id, texts))
        except BaseExceptionGroup as e:
            raise _first_error(e)

        return texts1, texts2

    async def _load(self, corpus: Hashable, content_id: str, texts: dict[str, NormalizedText | None]):
        content = await self._source.fetch_content(corpus, content_id)
        if not content:
            logger.debug(f"No content for {content_id} in {corpus}; excluding it from comparison")
            texts[content_id] = None
        else:
            texts[content_id] = NormalizedText.from_content(content)

    async def _score(self, rows: list[TextGroup], columns: list[TextGroup], width: int) -> list[Match]:
        """Score every distinct corpus-1 text against every distinct corpus-2 text on the process pool."""
        matches: list[Match] = []
        if not rows or not columns:
            if self._progress is not None:
                self._progress(sum(len(row.files) for row in rows))
            return matches

        candidates = [column.text.text for column in columns]

        async def score_row(row: TextGroup):
            scores = await self._processor.score_row(row.text.text, candidates)
            for column, score in zip(columns, scores):
                kind = self._rule.classify(score)
                if kind is None:
                    continue
                for i, ref1 in row.files:
                    for j, ref2 in column.files:
                        matches.append(Match(kind, ref1.path, ref2.path, score, i * width + j))
            if self._progress is not None:
                self._progress(len(row.files))

        try:
            async with TaskGroup() as tg:
                throttler = Throttler(tg, self._processor.concurrency * 2)
                for row in rows:
                    await throttler.schedule(score_row(row))
        except BaseExceptionGroup as e:
            raise _first_error(e)

        return matches


async def do_compare(source: CorpusSource, corpus1: Hashable, corpus2: Hashable, args: CompareArgs) \
        -> ComparisonReport:
    """Async implementation of the compare operation."""
    comparator = CrossComparator(source, args)
    return await comparator.run(corpus1, corpus2)
