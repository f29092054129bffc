# publisher.py
# Turns a resolved POI into a host delta.

from typing import Any, Dict

from wikipoi.config import POI_KEY
from wikipoi.host import Host
from wikipoi.models import POIRecord, POIValue


def poi_path(poi_id: int, namespace: str = POI_KEY) -> str:
    return f"{namespace}.{poi_id}"


def make_delta(record: POIRecord, namespace: str = POI_KEY) -> Dict[str, Any]:
    # Wikipedia has no place taxonomy, so type stays empty
    value = POIValue(name=record.name, position=record.position,
                     notes=record.notes, type="", url=record.url)
    return {
        "updates": [
            {"values": [{"path": poi_path(record.id, namespace), "value": value.model_dump()}]}
        ]
    }


class Publisher:
    def __init__(self, host: Host, plugin_id: str, namespace: str = POI_KEY):
        self.host = host
        self.plugin_id = plugin_id
        self.namespace = namespace

    def publish(self, record: POIRecord) -> None:
        self.host.handle_message(self.plugin_id, make_delta(record, self.namespace))
