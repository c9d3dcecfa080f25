"""
Tests for the recent activity recording service.
"""

import asyncio

import httpx

from apollo_devtools.cache import CacheObjectWithSize
from apollo_devtools.recent_activity.service import HttpCacheSampler, RecentActivityService
from apollo_devtools.recent_activity.session import RecordingSession


class FakeSampler:
    """Returns prepared snapshots in order, repeating the last one."""

    def __init__(self, snapshots):
        self.snapshots = list(snapshots)
        self.calls = 0

    async def __call__(self):
        snapshot = self.snapshots[min(self.calls, len(self.snapshots) - 1)]
        self.calls += 1
        return snapshot


class TestRecentActivityService:
    """Polling loop behaviour."""

    def test_run_once_counts_changes(self):
        session = RecordingSession("cache")
        session.start(["A"])
        service = RecentActivityService(FakeSampler([["A", "B"]]), session)

        assert asyncio.run(service.run_once()) == 1
        assert asyncio.run(service.run_once()) == 0

    def test_run_once_survives_sampler_errors(self):
        async def failing_sampler():
            raise ConnectionError("client went away")

        session = RecordingSession("cache")
        session.start(["A"])
        service = RecentActivityService(failing_sampler, session)

        assert asyncio.run(service.run_once()) == 0
        assert session.reference == ["A"]

    def test_run_until_stopped(self):
        sampler = FakeSampler([["A"], ["A", "B"], ["B"]])
        session = RecordingSession("cache")
        service = RecentActivityService(sampler, session, poll_interval_seconds=0)

        async def stopping_sampler():
            snapshot = await sampler()
            if sampler.calls == 3:
                service.stop()
            return snapshot

        service.sampler = stopping_sampler
        asyncio.run(service.run())

        assert session.recording is False
        assert [(e.change.value, e.data) for e in session.events] == [
            ("added", "B"),
            ("removed", "A"),
        ]


class TestHttpCacheSampler:
    """Sampling the cache extract over HTTP."""

    def test_fetches_cache_objects(self):
        def handler(request):
            assert request.url.path == "/__apollo/cache"
            return httpx.Response(200, json={"ROOT_QUERY": {"me": {"__ref": "User:1"}}})

        sampler = HttpCacheSampler("http://client.test/__apollo/cache")
        sampler.client = httpx.AsyncClient(transport=httpx.MockTransport(handler))

        async def sample():
            try:
                return await sampler()
            finally:
                await sampler.close()

        objects = asyncio.run(sample())

        assert objects == [
            CacheObjectWithSize(
                key="ROOT_QUERY",
                value={"me": {"__ref": "User:1"}},
                value_size=len('{"me":{"__ref":"User:1"}}'),
            )
        ]

    def test_http_errors_are_logged_by_service(self):
        def handler(request):
            return httpx.Response(500)

        sampler = HttpCacheSampler("http://client.test/__apollo/cache")
        sampler.client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        session = RecordingSession("cache")
        session.start()
        service = RecentActivityService(sampler, session)

        async def run():
            try:
                return await service.run_once()
            finally:
                await sampler.close()

        assert asyncio.run(run()) == 0
        assert session.ticks == 0
