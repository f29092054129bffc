# host.py
# Host platform seam: where positions come from and where deltas go.

import logging
from typing import Any, Dict, List, Optional, Protocol

from wikipoi.models import Coordinate

logger = logging.getLogger(__name__)

POSITION_PATH = "navigation.position"


class Host(Protocol):
    def get_self_path(self, path: str) -> Optional[Dict[str, Any]]: ...

    def handle_message(self, plugin_id: str, delta: Dict[str, Any]) -> None: ...


def read_position(host: Host) -> Optional[Coordinate]:
    """Current vessel position, or None while no fix is available."""
    node = host.get_self_path(POSITION_PATH)
    if not node:
        return None
    value = node.get("value", node)
    if not isinstance(value, dict):
        return None
    lat, lon = value.get("latitude"), value.get("longitude")
    if lat is None or lon is None:
        return None
    return Coordinate(latitude=lat, longitude=lon)


class InMemoryHost:
    """
    Minimal host keeping the latest position and the latest value per
    published path. Backs the HTTP service and the tests.
    """

    def __init__(self):
        self._position: Optional[Coordinate] = None
        self.values: Dict[str, Dict[str, Any]] = {}
        self.messages: List[Dict[str, Any]] = []

    def set_position(self, position: Optional[Coordinate]) -> None:
        self._position = position

    def get_self_path(self, path: str) -> Optional[Dict[str, Any]]:
        if path != POSITION_PATH or self._position is None:
            return None
        return {"value": self._position.model_dump()}

    def handle_message(self, plugin_id: str, delta: Dict[str, Any]) -> None:
        self.messages.append({"plugin_id": plugin_id, "delta": delta})
        for update in delta.get("updates", []):
            for v in update.get("values", []):
                self.values[v["path"]] = v["value"]
        logger.debug("delta from %s: %d updates", plugin_id, len(delta.get("updates", [])))
