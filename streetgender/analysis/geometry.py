"""
Street geometry reconstruction

Rebuilds LineString / MultiLineString coordinates of ways and relations
from node references held in an EntityStore.
"""

from typing import FrozenSet, List, Optional, Sequence, Tuple

from ..collectors.osm.models import NODE, RELATION, WAY, OSMElement, OSMRelation, OSMWay
from ..collectors.osm.store import EntityStore
from ..config import get_config
from ..models import Geometry, GeoJSONLineString, GeoJSONMultiLineString
from .warning_sink import WarningSink

Line = List[List[float]]
Visited = FrozenSet[Tuple[str, int]]


class GeometryResolver:
    """
    Resolve the geometry of an OSM way or relation

    Relations are resolved recursively through their "street"/"outer"
    members. Problems are recorded as warnings; resolution never fails.
    """

    def __init__(
        self,
        store: EntityStore,
        roles: Optional[Sequence[str]] = None,
        max_depth: Optional[int] = None
    ):
        config = get_config()
        self.store = store
        self.roles = tuple(roles or config.geometry_roles)
        self.max_depth = max_depth or config.max_relation_depth

    def resolve(self, element: OSMElement, warnings: WarningSink) -> Optional[Geometry]:
        """
        Geometry of an element

        Returns:
            LineString for a single line, MultiLineString for several,
            None (with a warning) when nothing could be resolved
        """
        lines = self.lines(element, warnings)

        if len(lines) == 0:
            # A relation without usable members has already been reported
            if element.kind == RELATION and not element.members_with_roles(self.roles):
                return None
            warnings.add(f"No geometry for {element.label}.")
            return None
        if len(lines) == 1:
            return GeoJSONLineString(coordinates=lines[0])
        return GeoJSONMultiLineString(coordinates=lines)

    def lines(
        self,
        element: OSMElement,
        warnings: WarningSink,
        visited: Visited = frozenset()
    ) -> List[Line]:
        """Flat list of lines making up an element"""
        if element.kind == WAY:
            line = self._way_line(element, warnings)
            return [line] if line else []
        if element.kind == RELATION:
            return self._relation_lines(element, warnings, visited | {(RELATION, element.id)})
        return []

    def _way_line(self, way: OSMWay, warnings: WarningSink) -> Line:
        line = []
        for node_id in way.nodes:
            node = self.store.lookup(NODE, node_id)
            if node is None:
                warnings.add(f"Can't find node({node_id}) in {way.label}.")
                continue
            line.append([node.lon, node.lat])
        return line

    def _relation_lines(
        self,
        relation: OSMRelation,
        warnings: WarningSink,
        visited: Visited
    ) -> List[Line]:
        members = relation.members_with_roles(self.roles)
        if not members:
            warnings.add(f'No "street" or "outer" member in {relation.label}.')
            return []

        lines = []
        for member in members:
            if member.kind not in (WAY, RELATION):
                continue

            if member.kind == RELATION:
                if (RELATION, member.ref) in visited:
                    warnings.add(f"Cycle detected: relation({member.ref}) in {relation.label}.")
                    continue
                # visited holds the current path, so its size is the nesting depth
                if len(visited) >= self.max_depth:
                    warnings.add(f"Maximum relation depth reached at relation({member.ref}) in {relation.label}.")
                    continue

            target = self.store.lookup(member.kind, member.ref)
            if target is None:
                warnings.add(f"Can't find {member.kind}({member.ref}) in {relation.label}.")
                continue

            lines.extend(self.lines(target, warnings, visited))
        return lines
