import asyncio
import logging
import multiprocessing
from collections.abc import Sequence
from multiprocessing.pool import Pool
from typing import Awaitable

from ..text.similarity import similarity

logger = logging.getLogger(__name__)


def compute_similarity_row(subject: str, candidates: Sequence[str]) -> list[float]:
    return [similarity(subject, candidate) for candidate in candidates]


class Processor:
    """Process pool running CPU-bound similarity computations for asyncio code."""

    def __init__(self, concurrency: int | None = None):
        if concurrency is None:
            concurrency = multiprocessing.cpu_count()
        if concurrency < 1:
            raise ValueError(f"Concurrency must be positive: {concurrency}")

        self._concurrency = concurrency
        self._pool: Pool = Pool(self._concurrency)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self._pool.close()
        self._pool.join()

    @property
    def concurrency(self):
        return self._concurrency

    def score_row(self, subject: str, candidates: Sequence[str]) -> Awaitable[list[float]]:
        """Compute similarity of one text against many.

        :return: Similarity ratios in the order of candidates."""
        logger.debug(f"Starting similarity row: {len(subject)} chars against {len(candidates)} candidates")

        async def log_and_compute():
            result = await self._evaluate(compute_similarity_row, subject, list(candidates))
            logger.debug(f"Completed similarity row: {len(subject)} chars against {len(candidates)} candidates")
            return result

        return log_and_compute()

    def _evaluate(self, func, *args):
        loop = asyncio.get_running_loop()
        future = loop.create_future()

        def resolve(value):
            if not future.done():
                future.set_result(value)

        def reject(error):
            if not future.done():
                future.set_exception(error)

        self._pool.apply_async(func, args=args,
                               callback=lambda v: loop.call_soon_threadsafe(resolve, v),
                               error_callback=lambda e: loop.call_soon_threadsafe(reject, e))

        return future
