"""
OSM response parser

Parses Overpass API responses into OSMNode, OSMWay and OSMRelation objects
"""

from typing import Dict, Any, Iterator, Optional
from loguru import logger

from .models import OSMElement, OSMMember, OSMNode, OSMRelation, OSMWay


class OSMResponseParser:
    """Parses Overpass API responses"""

    @staticmethod
    def parse_element(element: Dict[str, Any]) -> Optional[OSMElement]:
        """
        Parse a single Overpass element

        Args:
            element: One entry of the `elements` array

        Returns:
            Parsed element, or None for unsupported element types
        """
        kind = element.get("type")
        tags = element.get("tags") or {}

        if kind == "node":
            return OSMNode(
                id=element["id"],
                tags=tags,
                lat=element["lat"],
                lon=element["lon"],
            )
        elif kind == "way":
            return OSMWay(
                id=element["id"],
                tags=tags,
                nodes=list(element.get("nodes", [])),
            )
        elif kind == "relation":
            members = [
                OSMMember(kind=m["type"], ref=m["ref"], role=m.get("role", ""))
                for m in element.get("members", [])
            ]
            return OSMRelation(id=element["id"], tags=tags, members=members)

        logger.debug(f"Skipping unsupported element type: {kind}")
        return None

    @classmethod
    def iter_elements(cls, data: Dict[str, Any]) -> Iterator[OSMElement]:
        """Parse an Overpass response document, preserving element order"""
        for element in data.get("elements", []):
            parsed = cls.parse_element(element)
            if parsed is not None:
                yield parsed
