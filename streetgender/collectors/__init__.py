"""
Data collectors for the street gender pipeline

- OSMCollector: named streets from OpenStreetMap (Overpass API)
- WikidataCollector: entities streets are named after
- WikidataStore: lazy access to downloaded entities
"""

from .osm import OSMCollector, EntityStore
from .wikidata import WikidataCollector, WikidataStore

__all__ = [
    "OSMCollector",
    "EntityStore",
    "WikidataCollector",
    "WikidataStore",
]
