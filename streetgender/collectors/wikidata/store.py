"""
Lazy per-identifier Wikidata entity store

Entity documents are read from the `wikidata` stage cache on first
reference and kept for the lifetime of the store.
"""

from typing import Any, Dict, Optional

from ..osm.cache import DocumentCache
from ...exceptions import CorruptInputError, MissingInputError
from .entity import WikidataEntity


class WikidataStore:
    """Memoized lookup of Wikidata entities by identifier"""

    def __init__(self, cache_dir: Optional[str] = None):
        self.cache = DocumentCache(cache_dir)
        self._entities: Dict[str, WikidataEntity] = {}

    @classmethod
    def from_documents(cls, documents: Dict[str, Dict[str, Any]]) -> "WikidataStore":
        """Store pre-loaded with decoded documents keyed by requested identifier"""
        store = cls()
        for identifier, document in documents.items():
            store._entities[identifier] = store._decode(identifier, document)
        return store

    @staticmethod
    def _decode(identifier: str, document: Dict[str, Any]) -> WikidataEntity:
        entity = WikidataEntity.from_document(document)
        if entity is None:
            raise CorruptInputError(identifier, "No entity in Wikidata document.")
        return entity

    def get(self, identifier: str) -> WikidataEntity:
        """
        Entity for an identifier, loading it on first reference

        The returned entity's id may differ from the identifier when
        Wikidata redirected the item.

        Raises:
            MissingInputError: If no document was downloaded for the identifier
            CorruptInputError: If the document can't be decoded
        """
        entity = self._entities.get(identifier)
        if entity is None:
            if not self.cache.cache_dir:
                raise MissingInputError(f"{identifier}.json", stage="wikidata")
            document = self.cache.load_required(identifier, stage="wikidata")
            entity = self._decode(self.cache.get_cache_path(identifier), document)
            self._entities[identifier] = entity
        return entity

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._entities or self.cache.exists(identifier)

    def __len__(self) -> int:
        return len(self._entities)
