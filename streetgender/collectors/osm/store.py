"""
In-memory index of OSM elements

Nodes, ways and relations are kept in separate mappings: ids are only
unique within a kind.
"""

from typing import Any, Dict, Iterable, Optional

from .models import NODE, RELATION, WAY, OSMElement, OSMNode, OSMRelation, OSMWay
from .parser import OSMResponseParser


class EntityStore:
    """Index of OSM elements by kind and id"""

    def __init__(self):
        self.nodes: Dict[int, OSMNode] = {}
        self.ways: Dict[int, OSMWay] = {}
        self.relations: Dict[int, OSMRelation] = {}

    @classmethod
    def build(cls, elements: Iterable[OSMElement]) -> "EntityStore":
        """Partition elements by kind (last write wins for duplicate ids)"""
        store = cls()
        for element in elements:
            store._index(element.kind)[element.id] = element
        return store

    @classmethod
    def from_overpass(cls, data: Dict[str, Any]) -> "EntityStore":
        return cls.build(OSMResponseParser.iter_elements(data))

    def _index(self, kind: str) -> Dict[int, Any]:
        if kind == NODE:
            return self.nodes
        if kind == WAY:
            return self.ways
        if kind == RELATION:
            return self.relations
        raise KeyError(f"Unknown OSM element kind: {kind}")

    def lookup(self, kind: str, osm_id: int) -> Optional[OSMElement]:
        try:
            return self._index(kind).get(osm_id)
        except KeyError:
            return None

    def elements(self, kind: str) -> Iterable[OSMElement]:
        """Elements of one kind in source document order"""
        return self._index(kind).values()

    def __len__(self) -> int:
        return len(self.nodes) + len(self.ways) + len(self.relations)

    def summary(self) -> str:
        return f"{len(self.nodes)} node(s), {len(self.ways)} way(s), {len(self.relations)} relation(s)"
