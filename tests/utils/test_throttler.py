import asyncio
import unittest
from asyncio import TaskGroup

from repodm.utils.throttler import Throttler


class ThrottlerTest(unittest.IsolatedAsyncioTestCase):
    async def test_limits_concurrency(self):
        running = 0
        peak = 0
        finished = []

        async def job(i):
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0.01)
            running -= 1
            finished.append(i)

        async with TaskGroup() as tg:
            throttler = Throttler(tg, 2)
            for i in range(6):
                await throttler.schedule(job(i))

        self.assertEqual(2, peak)
        self.assertEqual(list(range(6)), sorted(finished))

    async def test_returns_task_result(self):
        async def answer():
            return 42

        async with TaskGroup() as tg:
            task = await Throttler(tg, 1).schedule(answer())

        self.assertEqual(42, task.result())

    async def test_slot_released_on_failure(self):
        async def fail():
            raise KeyError('boom')

        throttler = None
        with self.assertRaises(ExceptionGroup) as cm:
            async with TaskGroup() as tg:
                throttler = Throttler(tg, 1)
                await throttler.schedule(fail())

        self.assertIsInstance(cm.exception.exceptions[0], KeyError)
        # noinspection PyProtectedMember
        self.assertFalse(throttler._semaphore.locked())

    def test_invalid_concurrency(self):
        with self.assertRaises(ValueError):
            Throttler(None, 0)


if __name__ == '__main__':
    unittest.main()
