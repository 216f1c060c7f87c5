"""
GeoJSON feature assembly

Combines attribution and geometry of every way or relation of an
EntityStore into a FeatureCollection.
"""

from typing import List, Optional, Sequence, Tuple
from loguru import logger

from ..collectors.osm.store import EntityStore
from ..models import Feature, FeatureCollection, FeatureProperties
from .attribution import AttributionResolver
from .geometry import GeometryResolver
from .warning_sink import WarningSink


class FeatureAssembler:
    """Builds the FeatureCollection of one element kind"""

    def __init__(
        self,
        attribution: AttributionResolver,
        roles: Optional[Sequence[str]] = None,
        max_depth: Optional[int] = None
    ):
        self.attribution = attribution
        self.roles = roles
        self.max_depth = max_depth

    def build(
        self,
        kind: str,
        store: EntityStore,
        exclude: Optional[List[int]] = None,
        warnings: Optional[WarningSink] = None
    ) -> Tuple[FeatureCollection, WarningSink]:
        """
        Build features for every element of a kind

        Args:
            kind: "way" or "relation"
            store: Elements of the source document
            exclude: Feature ids to drop from the collection
            warnings: Sink for data-quality warnings (a new one if omitted)

        Returns:
            Tuple of (collection in source document order, warnings)
        """
        warnings = warnings if warnings is not None else WarningSink()
        geometry = GeometryResolver(store, self.roles, self.max_depth)

        features = []
        for element in store.elements(kind):
            record = self.attribution.resolve(element, warnings)
            features.append(Feature(
                id=element.id,
                properties=FeatureProperties.from_record(
                    record,
                    name=element.tag("name"),
                    wikidata=element.tag("wikidata"),
                ),
                geometry=geometry.resolve(element, warnings),
            ))

        collection = FeatureCollection(features=features).exclude(exclude or [])
        dropped = len(features) - len(collection.features)
        logger.info(
            f"Built {len(collection.features)} {kind} feature(s)"
            + (f", {dropped} excluded" if dropped else "")
            + (f", {len(warnings)} warning(s)" if len(warnings) else "")
        )
        return collection, warnings
