"""
OpenStreetMap data collection module

Modular OSM data collector with separate components for:
- API client: Overpass API communication
- Models: Data structures (OSMNode, OSMWay, OSMRelation)
- Parser: Response parsing
- Store: Per-kind element indexes
- Cache: Caching functionality
- Collector: Main orchestrator class
"""

from .models import OSMMember, OSMNode, OSMWay, OSMRelation
from .store import EntityStore
from .collector import OSMCollector

__all__ = [
    "OSMMember",
    "OSMNode",
    "OSMWay",
    "OSMRelation",
    "EntityStore",
    "OSMCollector",
]
