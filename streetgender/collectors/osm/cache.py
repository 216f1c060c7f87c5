"""
JSON document caching

Stores raw Overpass and Wikidata responses on disk so later stages can run
without network access.
"""

import os
import json
from typing import Dict, Any, Optional
from loguru import logger

from ...exceptions import CorruptInputError, MissingInputError


class DocumentCache:
    """Handles caching of fetched JSON documents to disk"""

    def __init__(self, cache_dir: Optional[str] = None):
        self.cache_dir = cache_dir

    def get_cache_path(self, name: str) -> Optional[str]:
        """Get cache file path for a document name (without extension)"""
        if not self.cache_dir:
            return None
        return os.path.join(self.cache_dir, f"{name}.json")

    def exists(self, name: str) -> bool:
        path = self.get_cache_path(name)
        return path is not None and os.path.isfile(path)

    def load(self, cache_path: str) -> Optional[Dict[str, Any]]:
        """Load a document from cache if it exists and decodes"""
        if os.path.exists(cache_path):
            try:
                with open(cache_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                    logger.debug(f"Loaded document from cache: {cache_path}")
                    return data
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Failed to load cache {cache_path}: {e}")
        return None

    def load_required(self, name: str, stage: str) -> Dict[str, Any]:
        """
        Load a document a previous stage must have produced

        Raises:
            MissingInputError: If the file is absent or unreadable
            CorruptInputError: If the file is not valid JSON
        """
        cache_path = self.get_cache_path(name)
        if not cache_path or not os.path.isfile(cache_path) or not os.access(cache_path, os.R_OK):
            raise MissingInputError(cache_path or name, stage)
        try:
            with open(cache_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CorruptInputError(cache_path, str(e)) from e
        if not isinstance(data, dict):
            raise CorruptInputError(cache_path, "Expected a JSON object.")
        return data

    def save(self, cache_path: str, data: Dict[str, Any]):
        """Save a document to cache"""
        if not self.cache_dir:
            return
        os.makedirs(os.path.dirname(cache_path), exist_ok=True)
        with open(cache_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False)
        logger.info(f"Saved document to cache: {cache_path}")
