"""
Wikidata download stage

Finds every etymology identifier referenced by the Overpass documents and
downloads the missing entity documents.
"""

import re
from typing import Any, Dict, Iterable, List, Optional, Tuple
from loguru import logger

from .api_client import WikidataAPIClient
from ..osm.cache import DocumentCache
from ..osm.models import OSMElement
from ..osm.parser import OSMResponseParser
from ...config import APIConfig
from ...exceptions import InvalidIdentifierError

ETYMOLOGY_TAG = "name:etymology:wikidata"
IDENTIFIER_PATTERN = re.compile(r"^Q\d+$")


def split_identifiers(value: str) -> List[str]:
    """Identifiers of a `;`-separated tag value"""
    return [identifier.strip() for identifier in value.split(";") if identifier.strip()]


class WikidataCollector:
    """Downloads Wikidata documents for etymology-tagged streets"""

    def __init__(self, cache_dir: Optional[str] = None, api_config: Optional[APIConfig] = None):
        self.api_client = WikidataAPIClient(api_config)
        self.cache = DocumentCache(cache_dir)

    @staticmethod
    def referenced_identifiers(elements: Iterable[OSMElement]) -> List[Tuple[str, OSMElement]]:
        """
        Etymology identifiers in first-reference order

        Raises:
            InvalidIdentifierError: If a tag value is not a Q-identifier
        """
        seen = {}
        for element in elements:
            value = element.tag(ETYMOLOGY_TAG)
            if value is None:
                continue
            for identifier in split_identifiers(value):
                if not IDENTIFIER_PATTERN.match(identifier):
                    raise InvalidIdentifierError(identifier, element.kind, element.id)
                seen.setdefault(identifier, element)
        return list(seen.items())

    def collect(self, documents: Iterable[Dict[str, Any]]) -> List[str]:
        """
        Download every missing entity document

        Args:
            documents: Raw Overpass documents (relations, ways)

        Returns:
            Identifiers that were downloaded during this call
        """
        elements = [
            element
            for document in documents
            for element in OSMResponseParser.iter_elements(document)
        ]
        references = self.referenced_identifiers(elements)
        logger.info(f"{len(references)} Wikidata item(s) referenced")

        downloaded = []
        for identifier, element in references:
            if self.cache.exists(identifier):
                continue
            data = self.api_client.fetch(identifier, element.label)
            self.cache.save(self.cache.get_cache_path(identifier), data)
            downloaded.append(identifier)

        logger.info(f"Downloaded {len(downloaded)} Wikidata item(s)")
        return downloaded
