from typing import Optional, List, Dict
from pydantic import BaseModel, ConfigDict, Field


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float


class POISummary(BaseModel):
    # one geosearch hit; dist, title, ns and primary are ignored
    pageid: int
    lat: float
    lon: float

    @property
    def position(self) -> Coordinate:
        return Coordinate(latitude=self.lat, longitude=self.lon)


class POIRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    position: Coordinate
    notes: str
    url: str


class POIValue(BaseModel):
    """Value published to the host under pointsOfInterest.wikipedia.<id>."""
    name: str
    position: Coordinate
    notes: str
    type: str = ""
    url: str


# ---- Upstream response shapes ----

class GeosearchQuery(BaseModel):
    geosearch: Optional[List[POISummary]] = None


class GeosearchResponse(BaseModel):
    query: Optional[GeosearchQuery] = None

    def summaries(self) -> List[POISummary]:
        if self.query is None or self.query.geosearch is None:
            return []
        return self.query.geosearch


class PageExtract(BaseModel):
    title: str
    extract: str = ""


class DetailQuery(BaseModel):
    pages: Optional[Dict[str, PageExtract]] = None


class DetailResponse(BaseModel):
    query: Optional[DetailQuery] = None

    def page(self, pageid: int) -> Optional[PageExtract]:
        if self.query is None or self.query.pages is None:
            return None
        return self.query.pages.get(str(pageid))
