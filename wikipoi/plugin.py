# plugin.py
# Plugin lifecycle and poll scheduler: one cycle after a startup delay, then
# one per interval. Cycles run as background tasks and may overlap.

import asyncio
import logging
from typing import Any, Dict, Optional, Set

import httpx

from wikipoi import config
from wikipoi.cache import DetailCache, Stats
from wikipoi.dispatcher import SearchDispatcher
from wikipoi.geo import haversine_km, ring
from wikipoi.host import Host, read_position
from wikipoi.provider_wikipedia import make_client
from wikipoi.publisher import Publisher
from wikipoi.resolver import DetailResolver

logger = logging.getLogger(__name__)


class WikipediaPlugin:
    id = "wikipedia"
    name = "Wikipedia"
    description = "Publishes Wikipedia Points of Interest"
    schema: Dict[str, Any] = {"type": "object", "required": [], "properties": {}}

    def __init__(self, host: Host,
                 ring_radius_km: float = config.RING_RADIUS_KM,
                 poll_interval_s: float = config.POLL_INTERVAL_MIN * 60,
                 startup_delay_s: float = config.STARTUP_DELAY_S,
                 http_timeout: float = config.HTTP_TIMEOUT,
                 api_url: str = config.WIKIPEDIA_API_URL,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.host = host
        self.ring_radius_km = ring_radius_km
        self.poll_interval_s = poll_interval_s
        self.startup_delay_s = startup_delay_s
        self.http_timeout = http_timeout
        self.api_url = api_url
        self.transport = transport

        # the cache outlives start/stop; only a process restart clears it
        self.stats = Stats()
        self.cache = DetailCache(self.stats)

        self.client: Optional[httpx.AsyncClient] = None
        self.dispatcher: Optional[SearchDispatcher] = None
        self._ticker: Optional[asyncio.Task] = None
        self._cycles: Set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._ticker is not None and not self._ticker.done()

    async def start(self, options: Optional[Dict[str, Any]] = None) -> None:
        if self.running:
            return
        self.client = make_client(timeout=self.http_timeout, transport=self.transport)
        resolver = DetailResolver(self.client, Publisher(self.host, self.id),
                                  cache=self.cache, api_url=self.api_url)
        self.dispatcher = SearchDispatcher(self.client, resolver, stats=self.stats,
                                           api_url=self.api_url)
        self._ticker = asyncio.create_task(self._tick())
        logger.info("%s plugin started (every %ss, first run in %ss)",
                    self.id, self.poll_interval_s, self.startup_delay_s)

    async def stop(self) -> None:
        if self._ticker is None:
            return
        self._ticker.cancel()
        for t in list(self._cycles):
            t.cancel()
        await asyncio.gather(self._ticker, *self._cycles, return_exceptions=True)
        self._ticker = None
        self._cycles.clear()
        if self.client is not None:
            await self.client.aclose()
            self.client = None
        self.dispatcher = None
        logger.info("%s plugin stopped", self.id)

    async def _tick(self) -> None:
        # position data is not immediately available after boot
        await asyncio.sleep(self.startup_delay_s)
        while True:
            self.trigger()
            await asyncio.sleep(self.poll_interval_s)

    def trigger(self) -> Optional[asyncio.Task]:
        """Start one cycle in the background without waiting for it."""
        if self.dispatcher is None:
            return None
        task = asyncio.create_task(self.check_and_publish())
        self._cycles.add(task)
        task.add_done_callback(self._cycle_done)
        return task

    def _cycle_done(self, task: asyncio.Task) -> None:
        self._cycles.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("poll cycle failed", exc_info=task.exception())

    async def check_and_publish(self) -> int:
        """Run one full cycle for the current position. Returns the number of hits."""
        position = read_position(self.host)
        if position is None:
            logger.debug("no position available, skipping cycle")
            return 0
        if self.dispatcher is None:
            return 0
        points = ring(position, self.ring_radius_km)
        logger.debug("searching %d centres up to %.2f km from %.5f|%.5f", len(points),
                     max(haversine_km(position, p) for p in points),
                     position.latitude, position.longitude)
        found = await self.dispatcher.search(points)
        logger.info("cycle at %.5f|%.5f: %d POIs found, %d cached",
                    position.latitude, position.longitude, len(found), len(self.cache))
        return len(found)
