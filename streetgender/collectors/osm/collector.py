"""
Main OSM Collector

Fetches the Overpass documents of a city and loads them back into
EntityStore indexes.
"""

from typing import Dict, Any, Optional
from loguru import logger

from .api_client import OverpassAPIClient
from .cache import DocumentCache
from .store import EntityStore
from ...config import APIConfig

OSM_KINDS = ("relation", "way")


class OSMCollector:
    """
    Collect street data from OpenStreetMap via Overpass API

    One document per element kind is cached as `<cache_dir>/<kind>.json`.
    """

    def __init__(self, cache_dir: Optional[str] = None, api_config: Optional[APIConfig] = None):
        self.api_client = OverpassAPIClient(api_config)
        self.cache = DocumentCache(cache_dir)

    def fetch(self, relation_id: int, refresh: bool = False) -> Dict[str, Dict[str, Any]]:
        """
        Download relation and way documents for the city area

        Args:
            relation_id: OSM relation id of the city boundary
            refresh: Re-download even when a cached document exists

        Returns:
            Dict of raw Overpass documents keyed by kind
        """
        documents = {}
        for kind in OSM_KINDS:
            cache_path = self.cache.get_cache_path(kind)
            if cache_path and not refresh:
                cached = self.cache.load(cache_path)
                if cached is not None:
                    documents[kind] = cached
                    continue

            logger.info(f"Fetching {kind}s of area relation({relation_id}) from Overpass")
            data = self.api_client.query(self.api_client.build_query(kind, relation_id))
            if cache_path:
                self.cache.save(cache_path, data)
            logger.info(f"Fetched {len(data.get('elements', []))} element(s) for {kind}s")
            documents[kind] = data
        return documents

    def load_document(self, kind: str) -> Dict[str, Any]:
        """Raw Overpass document fetched by the `overpass` stage"""
        return self.cache.load_required(kind, stage="overpass")

    def load_store(self, kind: str) -> EntityStore:
        store = EntityStore.from_overpass(self.load_document(kind))
        logger.info(f"{kind.capitalize()}s: {store.summary()}")
        return store
