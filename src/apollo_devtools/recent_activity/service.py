"""
Recent activity recording service.
"""

import asyncio
import logging
import sys
from typing import Any, Awaitable, Callable, List, Sequence

import httpx

from ..cache import build_cache_objects
from ..core.config import get_config
from .session import RecordingSession

logger = logging.getLogger(__name__)

Sampler = Callable[[], Awaitable[Sequence[Any]]]


class HttpCacheSampler:
    """
    Samples the client cache by fetching its JSON extract over HTTP.

    Usage:
        sampler = HttpCacheSampler("http://localhost:4000/__apollo/cache")
        entries = await sampler()
        await sampler.close()
    """

    def __init__(self, url: str, timeout: float = 5.0):
        """
        Initialize cache sampler.

        Args:
            url: URL returning the cache extract as a JSON object
            timeout: HTTP request timeout in seconds
        """
        self.url = url
        self.timeout = timeout
        self.client = httpx.AsyncClient(timeout=self.timeout)

    async def __call__(self) -> List[Any]:
        """
        Fetch the current cache entries.

        Raises:
            httpx.HTTPError: If the request fails
            ValueError: If the response is not a JSON object
        """
        response = await self.client.get(self.url)
        response.raise_for_status()
        extract = response.json()
        if extract is not None and not isinstance(extract, dict):
            raise ValueError(
                f"Expected a JSON object from {self.url}, got {type(extract).__name__}"
            )
        return build_cache_objects(extract)

    async def close(self) -> None:
        await self.client.aclose()


class RecentActivityService:
    """
    Service for continuous recording of recent activity.

    Periodically:
    1. Sample the watched collection
    2. Record the snapshot in the session
    3. Log the detected changes
    """

    def __init__(
        self,
        sampler: Sampler,
        session: RecordingSession,
        poll_interval_seconds: float = 1.0,
    ):
        """
        Initialize recent activity service.

        Args:
            sampler: Async callable returning the latest snapshot
            session: Session the snapshots are recorded in
            poll_interval_seconds: Delay between samples
        """
        self.sampler = sampler
        self.session = session
        self.poll_interval_seconds = poll_interval_seconds
        self.running = False

    async def run_once(self) -> int:
        """
        Sample once and record the snapshot.

        Returns:
            Number of changes detected
        """
        try:
            snapshot = await self.sampler()
            activities = self.session.record(snapshot)
        except Exception as e:
            logger.error(f"Error sampling {self.session.name}: {e}", exc_info=True)
            return 0

        if not activities:
            return 0

        for activity in activities:
            logger.info(f"Recent activity on {self.session.name}: {activity.change.value}")
            logger.debug(f"Activity details: {activity.model_dump(mode='json')}")

        return len(activities)

    async def run(self) -> None:
        """Run recording service continuously."""
        self.running = True
        if not self.session.recording:
            self.session.start()

        logger.info(
            f"Starting recent activity service for {self.session.name} "
            f"(poll interval: {self.poll_interval_seconds}s)"
        )

        while self.running:
            await self.run_once()
            await asyncio.sleep(self.poll_interval_seconds)

        self.session.stop()

    def stop(self) -> None:
        """Stop recording service."""
        logger.info("Stopping recent activity service")
        self.running = False


async def _run_until_stopped(
    service: RecentActivityService, sampler: HttpCacheSampler
) -> None:
    try:
        await service.run()
    finally:
        await sampler.close()


def main() -> None:
    """Main entry point for recent activity recorder."""
    config = get_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    recorder = config.recorder

    logger.info("=" * 60)
    logger.info("Apollo Devtools - Recent Activity Recorder")
    logger.info("=" * 60)
    logger.info(f"Source URL: {recorder.source_url}")
    logger.info(f"Poll Interval: {recorder.poll_interval_seconds}s")
    logger.info(f"Max Events: {recorder.max_events}")
    logger.info("=" * 60)

    sampler = HttpCacheSampler(recorder.source_url, timeout=recorder.timeout)
    session = RecordingSession("cache", max_events=recorder.max_events)
    service = RecentActivityService(
        sampler=sampler,
        session=session,
        poll_interval_seconds=recorder.poll_interval_seconds,
    )

    try:
        asyncio.run(_run_until_stopped(service, sampler))
    except KeyboardInterrupt:
        logger.info("Received interrupt signal")
        service.stop()
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
