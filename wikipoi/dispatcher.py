# dispatcher.py
# Fans a ring of coordinates out into concurrent geosearches and hands every
# hit to the resolver as soon as its response is parsed.

import asyncio
import logging
from typing import Iterable, List, Optional

import httpx

from wikipoi.cache import Stats
from wikipoi.config import GEOSEARCH_LIMIT, GEOSEARCH_RADIUS_M, WIKIPEDIA_API_URL
from wikipoi.exceptions import UpstreamError
from wikipoi.models import Coordinate, POISummary
from wikipoi.provider_wikipedia import geosearch
from wikipoi.resolver import DetailResolver

logger = logging.getLogger(__name__)


def log_task_failures(results: Iterable, what: str) -> None:
    for res in results:
        if isinstance(res, Exception):
            logger.error("%s task failed", what, exc_info=res)


class SearchDispatcher:
    def __init__(self, client: httpx.AsyncClient, resolver: DetailResolver,
                 stats: Optional[Stats] = None,
                 radius_m: int = GEOSEARCH_RADIUS_M, limit: int = GEOSEARCH_LIMIT,
                 api_url: str = WIKIPEDIA_API_URL):
        self.client = client
        self.resolver = resolver
        self.stats = stats if stats is not None else resolver.stats
        self.radius_m = radius_m
        self.limit = limit
        self.api_url = api_url

    async def search_one(self, coord: Coordinate) -> List[POISummary]:
        """Geosearch one coordinate and resolve its hits. Failures yield []."""
        self.stats.searches += 1
        try:
            summaries = await geosearch(self.client, coord, radius_m=self.radius_m,
                                        limit=self.limit, api_url=self.api_url)
        except UpstreamError as e:
            self.stats.search_failures += 1
            logger.warning("Error retrieving POIs around %s|%s: %s",
                           coord.latitude, coord.longitude, e,
                           extra={"gscoord": f"{coord.latitude}|{coord.longitude}"})
            return []

        results = await asyncio.gather(*(self.resolver.resolve(s) for s in summaries),
                                       return_exceptions=True)
        log_task_failures(results, "resolve")
        return summaries

    async def search(self, ring: Iterable[Coordinate]) -> List[POISummary]:
        results = await asyncio.gather(*(self.search_one(c) for c in ring),
                                       return_exceptions=True)
        log_task_failures(results, "geosearch")
        found: List[POISummary] = []
        for res in results:
            if isinstance(res, list):
                found.extend(res)
        return found
