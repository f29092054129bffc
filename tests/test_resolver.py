"""Tests for wikipoi.resolver and wikipoi.publisher modules."""

import asyncio

import pytest

from tests.conftest import API_URL
from wikipoi.models import Coordinate, POIRecord, POISummary
from wikipoi.provider_wikipedia import make_client
from wikipoi.publisher import Publisher, make_delta
from wikipoi.resolver import DetailResolver

SUMMARY = POISummary(pageid=12345, lat=47.6062, lon=-122.3321)


def resolver_for(client, host) -> DetailResolver:
    return DetailResolver(client, Publisher(host, "wikipedia"), api_url=API_URL)


class TestPublisher:
    def test_delta_shape(self):
        rec = POIRecord(id=12345, name="Space Needle",
                        position=Coordinate(latitude=47.6062, longitude=-122.3321),
                        notes="A tower.", url="https://en.wikipedia.org/wiki?curid=12345")
        assert make_delta(rec) == {
            "updates": [{
                "values": [{
                    "path": "pointsOfInterest.wikipedia.12345",
                    "value": {
                        "name": "Space Needle",
                        "position": {"latitude": 47.6062, "longitude": -122.3321},
                        "notes": "A tower.",
                        "type": "",
                        "url": "https://en.wikipedia.org/wiki?curid=12345",
                    },
                }]
            }]
        }

    def test_publish_hands_delta_to_host(self, host):
        rec = POIRecord(id=1, name="A", position=Coordinate(latitude=0, longitude=0),
                        notes="", url="u")
        Publisher(host, "wikipedia").publish(rec)
        assert host.messages[0]["plugin_id"] == "wikipedia"
        assert "pointsOfInterest.wikipedia.1" in host.values


class TestResolve:
    @pytest.mark.asyncio
    async def test_miss_fetches_caches_and_publishes(self, wiki, transport, host):
        wiki.set_detail(12345, "Space Needle", "A tower.")
        async with make_client(transport=transport) as client:
            resolver = resolver_for(client, host)
            rec = await resolver.resolve(SUMMARY)

        assert rec == POIRecord(
            id=12345, name="Space Needle",
            position=Coordinate(latitude=47.6062, longitude=-122.3321),
            notes="A tower.", url="https://en.wikipedia.org/wiki?curid=12345",
        )
        assert resolver.cache.get(12345) == rec
        assert len(host.messages) == 1

    @pytest.mark.asyncio
    async def test_second_resolve_is_a_pure_cache_hit(self, wiki, transport, host):
        wiki.set_detail(12345, "Space Needle", "A tower.")
        async with make_client(transport=transport) as client:
            resolver = resolver_for(client, host)
            await resolver.resolve(SUMMARY)
            await resolver.resolve(SUMMARY)

        assert len(wiki.detail_requests(12345)) == 1
        assert len(host.messages) == 2
        assert host.messages[0]["delta"] == host.messages[1]["delta"]
        assert resolver.stats.cache_hits == 1
        assert resolver.stats.published == 2

    @pytest.mark.asyncio
    async def test_missing_page_publishes_nothing(self, wiki, transport, host):
        wiki.details[12345] = (200, {"query": {"pages": {}}})
        async with make_client(transport=transport) as client:
            resolver = resolver_for(client, host)
            assert await resolver.resolve(SUMMARY) is None

        assert host.messages == []
        assert 12345 not in resolver.cache
        assert resolver.stats.detail_failures == 1

    @pytest.mark.asyncio
    async def test_upstream_error_publishes_nothing_and_retries_later(self, wiki, transport, host):
        wiki.details[12345] = (500, {"error": "internal"})
        async with make_client(transport=transport) as client:
            resolver = resolver_for(client, host)
            assert await resolver.resolve(SUMMARY) is None
            assert host.messages == []

            wiki.set_detail(12345, "Space Needle", "A tower.")
            rec = await resolver.resolve(SUMMARY)

        assert rec.name == "Space Needle"
        assert len(wiki.detail_requests(12345)) == 2
        assert len(host.messages) == 1

    @pytest.mark.asyncio
    async def test_concurrent_resolves_leave_one_complete_record(self, wiki, transport, host):
        wiki.set_detail(12345, "Space Needle", "A tower.")
        async with make_client(transport=transport) as client:
            resolver = resolver_for(client, host)
            a, b = await asyncio.gather(resolver.resolve(SUMMARY), resolver.resolve(SUMMARY))

        assert a == b
        assert len(resolver.cache) == 1
        assert resolver.cache.get(12345) == a
        assert 1 <= len(wiki.detail_requests(12345)) <= 2
        assert len(host.messages) == 2
        assert host.messages[0]["delta"] == host.messages[1]["delta"]
