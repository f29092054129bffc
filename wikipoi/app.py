# app.py
# FastAPI host around the plugin:
# - PUT/DELETE /navigation/position feed the vessel position
# - GET /pois lists what the plugin published
# - /stats, /healthz and POST /refresh

from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Request

from wikipoi.config import POI_KEY
from wikipoi.host import InMemoryHost
from wikipoi.logging_config import configure_logging
from wikipoi.models import Coordinate, POIValue
from wikipoi.plugin import WikipediaPlugin
from wikipoi.publisher import poi_path


class PublishedPOI(POIValue):
    id: int


def create_app(host: Optional[InMemoryHost] = None,
               plugin: Optional[WikipediaPlugin] = None) -> FastAPI:
    host = host or InMemoryHost()
    plugin = plugin or WikipediaPlugin(host)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging()
        await plugin.start({})
        try:
            yield
        finally:
            await plugin.stop()

    app = FastAPI(title="Wikipedia POI Service", version="1.0.0", lifespan=lifespan)
    app.state.host = host
    app.state.plugin = plugin

    @app.get("/healthz")
    async def healthz(request: Request):
        p: WikipediaPlugin = request.app.state.plugin
        h: InMemoryHost = request.app.state.host
        return {"running": p.running, "position_known": h.get_self_path("navigation.position") is not None}

    @app.get("/stats")
    async def stats(request: Request):
        p: WikipediaPlugin = request.app.state.plugin
        out = p.stats.as_dict()
        out["cached_pois"] = len(p.cache)
        return out

    @app.put("/navigation/position")
    async def set_position(position: Coordinate, request: Request):
        request.app.state.host.set_position(position)
        return {"ok": True}

    @app.delete("/navigation/position")
    async def clear_position(request: Request):
        request.app.state.host.set_position(None)
        return {"ok": True}

    @app.post("/refresh", status_code=202)
    async def refresh(request: Request):
        p: WikipediaPlugin = request.app.state.plugin
        if p.trigger() is None:
            raise HTTPException(status_code=503, detail="plugin not running")
        return {"ok": True}

    @app.get("/pois", response_model=List[PublishedPOI])
    async def list_pois(request: Request):
        h: InMemoryHost = request.app.state.host
        out = []
        for path, value in h.values.items():
            if not path.startswith(f"{POI_KEY}."):
                continue
            out.append({"id": int(path.rsplit(".", 1)[1]), **value})
        return out

    @app.get("/pois/{poi_id}", response_model=PublishedPOI)
    async def read_poi(poi_id: int, request: Request):
        value = request.app.state.host.values.get(poi_path(poi_id))
        if not value:
            raise HTTPException(status_code=404, detail="POI not found")
        return {"id": poi_id, **value}

    return app


app = create_app()
