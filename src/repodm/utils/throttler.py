import asyncio
from asyncio import TaskGroup, Semaphore
from collections.abc import Coroutine


class Throttler:
    """Limits how many tasks of a TaskGroup run at the same time.

    schedule() waits for a free slot before creating the task, so a producer looping over
    a large number of coroutines is itself held back instead of creating every task at once.
    The slot is returned when the task finishes, whether it succeeds, fails or is cancelled.

    Example:
        async with TaskGroup() as tg:
            throttler = Throttler(tg, 8)
            for ref in files:
                await throttler.schedule(fetch(ref))
    """

    def __init__(self, task_group: TaskGroup, concurrency: int):
        """Initialize the throttler.

        Args:
            task_group: The TaskGroup to which tasks will be added
            concurrency: Maximum number of tasks that can run concurrently
        """
        if concurrency < 1:
            raise ValueError(f"Concurrency must be positive: {concurrency}")

        self._task_group = task_group
        self._semaphore = Semaphore(concurrency)

    async def schedule(self, coro: Coroutine, name: str | None = None) -> asyncio.Task:
        """Schedule a coroutine once fewer than `concurrency` scheduled tasks are running.

        Returns:
            The created asyncio.Task
        """
        try:
            await self._semaphore.acquire()
        except BaseException:
            coro.close()
            raise

        async def wrapper():
            try:
                return await coro
            finally:
                self._semaphore.release()

        try:
            return self._task_group.create_task(wrapper(), name=name)
        except BaseException:
            self._semaphore.release()
            coro.close()
            raise
