# provider_wikipedia.py
# Wikipedia MediaWiki API provider: geosearch around a coordinate -> page extracts.

import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from wikipoi.config import (
    GEOSEARCH_LIMIT,
    GEOSEARCH_RADIUS_M,
    HTTP_TIMEOUT,
    USER_AGENT,
    WIKIPEDIA_API_URL,
)
from wikipoi.exceptions import MalformedResponse, UpstreamUnavailable
from wikipoi.models import Coordinate, DetailResponse, GeosearchResponse, PageExtract, POISummary

logger = logging.getLogger(__name__)


def make_client(timeout: float = HTTP_TIMEOUT, user_agent: str = USER_AGENT,
                transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    kwargs = {"headers": {"User-Agent": user_agent}, "timeout": timeout}
    if transport is not None:
        kwargs["transport"] = transport
    else:
        kwargs["http2"] = True
    return httpx.AsyncClient(**kwargs)


async def _get_json(client: httpx.AsyncClient, url: str, params: dict) -> dict:
    try:
        resp = await client.get(url, params=params)
    except httpx.HTTPError as e:
        raise UpstreamUnavailable(url, reason=f"{type(e).__name__}:{e}") from e
    if resp.status_code != 200:
        raise UpstreamUnavailable(url, status=resp.status_code)
    try:
        data = resp.json()
    except ValueError as e:
        raise MalformedResponse(f"invalid JSON from {url}") from e
    if not isinstance(data, dict):
        raise MalformedResponse(f"expected JSON object from {url}, got {type(data).__name__}")
    return data


async def geosearch(client: httpx.AsyncClient, coord: Coordinate,
                    radius_m: int = GEOSEARCH_RADIUS_M, limit: int = GEOSEARCH_LIMIT,
                    api_url: str = WIKIPEDIA_API_URL) -> List[POISummary]:
    """
    Pages geotagged within `radius_m` of `coord`. A body without
    query.geosearch means nothing was found.
    """
    data = await _get_json(client, api_url, {
        "action": "query",
        "format": "json",
        "list": "geosearch",
        "formatversion": 2,
        "gscoord": f"{coord.latitude}|{coord.longitude}",
        "gsradius": radius_m,
        "gslimit": limit,
    })
    logger.debug("POIs received for %s|%s: %s", coord.latitude, coord.longitude, data)
    try:
        return GeosearchResponse.model_validate(data).summaries()
    except ValidationError as e:
        raise MalformedResponse(f"unexpected geosearch body: {e.error_count()} errors") from e


async def page_extract(client: httpx.AsyncClient, pageid: int,
                       api_url: str = WIKIPEDIA_API_URL) -> Optional[PageExtract]:
    """Title and intro extract for `pageid`, or None when the page is not in the body."""
    data = await _get_json(client, api_url, {
        "action": "query",
        "format": "json",
        "prop": "extracts",
        "exlimit": "max",
        "exintro": "true",
        "pageids": pageid,
    })
    try:
        return DetailResponse.model_validate(data).page(pageid)
    except ValidationError as e:
        raise MalformedResponse(f"unexpected detail body for {pageid}: {e.error_count()} errors") from e
