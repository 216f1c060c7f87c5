"""
Wikidata collection module

- Entity: field extraction from entity documents
- Store: lazy per-identifier entity cache
- API client: Special:EntityData downloads
- Collector: download stage for etymology identifiers
"""

from .entity import WikidataEntity
from .store import WikidataStore
from .collector import WikidataCollector, split_identifiers

__all__ = [
    "WikidataEntity",
    "WikidataStore",
    "WikidataCollector",
    "split_identifiers",
]
