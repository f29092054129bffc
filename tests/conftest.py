"""Shared test fixtures: an in-memory Wikipedia API behind httpx.MockTransport."""

import json
from typing import Dict, List, Optional, Tuple

import httpx
import pytest

from wikipoi.host import InMemoryHost

API_URL = "https://en.wikipedia.org/w/api.php"


def geosearch_body(*hits: Tuple[int, float, float]) -> dict:
    return {
        "batchcomplete": True,
        "query": {
            "geosearch": [
                {"pageid": pid, "ns": 0, "title": f"Page {pid}", "lat": lat, "lon": lon,
                 "dist": 12.3, "primary": True}
                for pid, lat, lon in hits
            ]
        },
    }


def detail_body(pageid: int, title: str, extract: str) -> dict:
    return {
        "batchcomplete": "",
        "query": {"pages": {str(pageid): {"pageid": pageid, "ns": 0, "title": title, "extract": extract}}},
    }


class FakeWikipedia:
    """
    Answers geosearch and extract queries. Geosearch answers can be set per
    gscoord string, with a default for everything else; extracts per page id.
    """

    def __init__(self):
        self.geosearch_default: Tuple[int, object] = (200, {"batchcomplete": True, "query": {"geosearch": []}})
        self.geosearch_by_coord: Dict[str, Tuple[int, object]] = {}
        self.details: Dict[int, Tuple[int, object]] = {}
        self.requests: List[httpx.Request] = []

    def set_detail(self, pageid: int, title: str, extract: str) -> None:
        self.details[pageid] = (200, detail_body(pageid, title, extract))

    def geosearch_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.params.get("list") == "geosearch"]

    def detail_requests(self, pageid: Optional[int] = None) -> List[httpx.Request]:
        out = [r for r in self.requests if r.url.params.get("prop") == "extracts"]
        if pageid is not None:
            out = [r for r in out if r.url.params.get("pageids") == str(pageid)]
        return out

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        params = request.url.params
        if params.get("list") == "geosearch":
            status, body = self.geosearch_by_coord.get(params["gscoord"], self.geosearch_default)
        elif params.get("prop") == "extracts":
            pageid = int(params["pageids"])
            status, body = self.details.get(
                pageid, (200, detail_body(pageid, f"Page {pageid}", f"About page {pageid}."))
            )
        else:
            status, body = 400, {"error": {"code": "badparams"}}
        if isinstance(body, Exception):
            raise body
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, content=json.dumps(body).encode(),
                              headers={"content-type": "application/json"})


@pytest.fixture()
def wiki() -> FakeWikipedia:
    return FakeWikipedia()


@pytest.fixture()
def transport(wiki: FakeWikipedia) -> httpx.MockTransport:
    return httpx.MockTransport(wiki.handler)


@pytest.fixture()
def host() -> InMemoryHost:
    return InMemoryHost()
