"""wikipoi: publish Wikipedia points of interest around a moving vessel."""

from wikipoi.cache import DetailCache, Stats
from wikipoi.dispatcher import SearchDispatcher
from wikipoi.exceptions import MalformedResponse, UpstreamError, UpstreamUnavailable, WikiPOIError
from wikipoi.geo import destination, ring
from wikipoi.host import InMemoryHost
from wikipoi.models import Coordinate, POIRecord, POISummary
from wikipoi.plugin import WikipediaPlugin
from wikipoi.publisher import Publisher
from wikipoi.resolver import DetailResolver

__all__ = [
    "Coordinate",
    "POISummary",
    "POIRecord",
    "destination",
    "ring",
    "DetailCache",
    "Stats",
    "DetailResolver",
    "SearchDispatcher",
    "Publisher",
    "InMemoryHost",
    "WikipediaPlugin",
    "WikiPOIError",
    "UpstreamError",
    "UpstreamUnavailable",
    "MalformedResponse",
]
