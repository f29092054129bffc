# resolver.py
# Page id -> POIRecord, through the detail cache, then publish.

import logging
from typing import Optional

import httpx

from wikipoi.cache import DetailCache
from wikipoi.config import WIKIPEDIA_API_URL, WIKIPEDIA_PAGE_URL
from wikipoi.exceptions import UpstreamError
from wikipoi.models import POIRecord, POISummary
from wikipoi.provider_wikipedia import page_extract
from wikipoi.publisher import Publisher

logger = logging.getLogger(__name__)


class DetailResolver:
    """Owns the detail cache; every successful resolution is published exactly once."""

    def __init__(self, client: httpx.AsyncClient, publisher: Publisher,
                 cache: Optional[DetailCache] = None,
                 api_url: str = WIKIPEDIA_API_URL, page_url: str = WIKIPEDIA_PAGE_URL):
        self.client = client
        self.publisher = publisher
        self.cache = cache if cache is not None else DetailCache()
        self.api_url = api_url
        self.page_url = page_url

    @property
    def stats(self):
        return self.cache.stats

    async def _fetch(self, summary: POISummary) -> Optional[POIRecord]:
        self.stats.detail_fetches += 1
        try:
            page = await page_extract(self.client, summary.pageid, api_url=self.api_url)
        except UpstreamError as e:
            self.stats.detail_failures += 1
            logger.warning("Error retrieving details for POI %s: %s", summary.pageid, e,
                           extra={"pageid": summary.pageid, "status": getattr(e, "status", None)})
            return None
        if page is None:
            self.stats.detail_failures += 1
            logger.warning("Cannot decode response for POI %s: page missing", summary.pageid,
                           extra={"pageid": summary.pageid})
            return None
        return POIRecord(
            id=summary.pageid,
            name=page.title,
            position=summary.position,
            notes=page.extract,
            url=self.page_url.format(pageid=summary.pageid),
        )

    async def resolve(self, summary: POISummary) -> Optional[POIRecord]:
        record, hit = await self.cache.get_or_load(summary.pageid, lambda: self._fetch(summary))
        if record is None:
            return None
        if hit:
            logger.debug("POI details for ID %s already known, used cached values", summary.pageid)
        self.publisher.publish(record)
        self.stats.published += 1
        if not hit:
            logger.debug("Published details for POI %s", summary.pageid)
        return record
