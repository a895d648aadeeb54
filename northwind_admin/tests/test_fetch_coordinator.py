import asyncio
import unittest

from northwind_admin.errors import NotFoundError, TransportError
from northwind_admin.models.query import Pagination
from northwind_admin.services.fetch_coordinator import FetchCoordinator
from northwind_admin.services.query_builder import build
from northwind_admin.tests.fakes import GatedRepo, Item, ManualClock, MemoryRepo, settle


def names(state):
    return [item.name for item in state.window.data]


class TestFetchCoordinator(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.page1 = build(Pagination(1, 2))
        self.page2 = build(Pagination(2, 2))

    async def test_applies_result(self):
        repo = MemoryRepo(["Chai", "Chang", "Tofu"])
        fetcher = FetchCoordinator(repo)

        state = await fetcher.use_query(self.page1)

        self.assertEqual(names(state), ["Chai", "Chang"])
        self.assertEqual(state.window.total, 3)
        self.assertEqual(state.window_descriptor, self.page1)
        self.assertFalse(state.loading)
        self.assertIsNone(state.error)

    async def test_late_response_for_old_query_is_not_shown(self):
        repo = GatedRepo()
        fetcher = FetchCoordinator(repo)

        first = asyncio.ensure_future(fetcher.use_query(self.page1))
        await settle()
        second = asyncio.ensure_future(fetcher.use_query(self.page2))
        await settle()
        self.assertTrue(fetcher.state.loading)

        repo.resolve(1, ["B1", "B2"], total=4)
        await settle()
        self.assertEqual(names(fetcher.state), ["B1", "B2"])

        repo.resolve(0, ["A1", "A2"], total=4)
        await asyncio.gather(first, second)

        self.assertEqual(fetcher.state.window_descriptor, self.page2)
        self.assertEqual(names(fetcher.state), ["B1", "B2"])
        self.assertFalse(fetcher.state.loading)

        # the late page-1 result still warmed the cache
        state = await fetcher.use_query(self.page1)
        self.assertEqual(len(repo.calls), 2)
        self.assertEqual(names(state), ["A1", "A2"])

    async def test_refetch_supersedes_in_flight_fetch(self):
        repo = GatedRepo()
        fetcher = FetchCoordinator(repo)

        first = asyncio.ensure_future(fetcher.use_query(self.page1))
        await settle()
        again = asyncio.ensure_future(fetcher.refetch())
        await settle()
        self.assertEqual(len(repo.calls), 2)

        repo.resolve(1, ["New"])
        await settle()
        repo.resolve(0, ["Old"])
        await asyncio.gather(first, again)

        self.assertEqual(names(fetcher.state), ["New"])

    async def test_failure_keeps_previous_window(self):
        repo = GatedRepo()
        fetcher = FetchCoordinator(repo)

        first = asyncio.ensure_future(fetcher.use_query(self.page1))
        await settle()
        repo.resolve(0, ["Chai"])
        await first

        again = asyncio.ensure_future(fetcher.refetch())
        await settle()
        repo.fail(1, TransportError("database is locked"))
        state = await again

        self.assertIsInstance(state.error, TransportError)
        self.assertEqual(names(state), ["Chai"])
        self.assertFalse(state.loading)

    async def test_dashboard_errors_are_stored_as_is(self):
        repo = GatedRepo()
        fetcher = FetchCoordinator(repo)
        error = NotFoundError("gone")

        task = asyncio.ensure_future(fetcher.use_query(self.page1))
        await settle()
        repo.fail(0, error)
        state = await task

        self.assertIs(state.error, error)
        self.assertIsNone(state.window)

    async def test_unexpected_exception_becomes_transport_error(self):
        repo = GatedRepo()
        fetcher = FetchCoordinator(repo)

        task = asyncio.ensure_future(fetcher.use_query(self.page1))
        await settle()
        repo.fail(0, RuntimeError("boom"))
        state = await task

        self.assertIsInstance(state.error, TransportError)
        self.assertIn("boom", state.error.message)

    async def test_one_fetch_per_descriptor_in_flight(self):
        repo = GatedRepo()
        fetcher = FetchCoordinator(repo)

        first = asyncio.ensure_future(fetcher.use_query(self.page1))
        second = asyncio.ensure_future(fetcher.use_query(build(Pagination(1, 2))))
        await settle()
        self.assertEqual(len(repo.calls), 1)

        repo.resolve(0, ["Chai"])
        a, b = await asyncio.gather(first, second)
        self.assertEqual(names(a), ["Chai"])
        self.assertEqual(names(b), ["Chai"])

    async def test_fresh_cache_skips_fetch(self):
        repo = MemoryRepo(["Chai"])
        clock = ManualClock()
        fetcher = FetchCoordinator(repo, stale_after=300, clock=clock)

        await fetcher.use_query(self.page1)
        await fetcher.use_query(self.page1)
        self.assertEqual(len(repo.list_calls), 1)

        clock.advance(301)
        await fetcher.use_query(self.page1)
        self.assertEqual(len(repo.list_calls), 2)

    async def test_invalidate_forces_fetch(self):
        repo = MemoryRepo(["Chai"])
        fetcher = FetchCoordinator(repo)

        await fetcher.use_query(self.page1)
        repo.items.append(Item(2, "Chang"))
        fetcher.invalidate()
        state = await fetcher.use_query(self.page1)

        self.assertEqual(len(repo.list_calls), 2)
        self.assertEqual(state.window.total, 2)

    async def test_fetch_started_before_invalidate_is_not_fresh(self):
        repo = GatedRepo()
        fetcher = FetchCoordinator(repo)

        first = asyncio.ensure_future(fetcher.use_query(self.page1))
        await settle()
        second = asyncio.ensure_future(fetcher.use_query(self.page2))
        await settle()
        fetcher.invalidate()

        repo.resolve(1, ["Tofu"])
        await settle()
        repo.resolve(0, ["OLD"])
        await asyncio.gather(first, second)

        third = asyncio.ensure_future(fetcher.use_query(self.page1))
        await settle()
        self.assertEqual(len(repo.calls), 3)
        repo.resolve(2, ["NEW"])
        self.assertEqual(names(await third), ["NEW"])

    async def test_query_after_invalidate_does_not_join_older_fetch(self):
        repo = GatedRepo()
        fetcher = FetchCoordinator(repo)

        first = asyncio.ensure_future(fetcher.use_query(self.page1))
        await settle()
        fetcher.invalidate()
        second = asyncio.ensure_future(fetcher.use_query(self.page1))
        await settle()
        self.assertEqual(len(repo.calls), 2)

        repo.resolve(1, ["NEW"])
        await settle()
        repo.resolve(0, ["OLD"])
        await asyncio.gather(first, second)
        self.assertEqual(names(fetcher.state), ["NEW"])

    async def test_refetch_without_query_is_noop(self):
        repo = MemoryRepo([])
        fetcher = FetchCoordinator(repo)
        state = await fetcher.refetch()
        self.assertIsNone(state.descriptor)
        self.assertEqual(repo.list_calls, [])

    async def test_listeners_see_loading_then_result(self):
        repo = MemoryRepo(["Chai"])
        fetcher = FetchCoordinator(repo)
        seen = []
        fetcher.subscribe(seen.append)

        await fetcher.use_query(self.page1)

        self.assertTrue(any(s.loading for s in seen))
        self.assertFalse(seen[-1].loading)
        self.assertEqual(names(seen[-1]), ["Chai"])

        self.assertTrue(fetcher.unsubscribe(seen.append))
        count = len(seen)
        await fetcher.refetch()
        self.assertEqual(len(seen), count)


if __name__ == "__main__":
    unittest.main()
