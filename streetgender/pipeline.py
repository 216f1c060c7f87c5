"""
Main Pipeline Orchestrator for street gender GeoJSON generation

Stages:

  1. overpass  - download named streets of the city (relations, ways)
  2. wikidata  - download entities referenced by `name:etymology:wikidata`
  3. geojson   - attribute a gender to every street and write
                 relations.geojson / ways.geojson

Each stage reads what the previous one cached under the city output
directory; a missing document aborts the run.
"""

import json
import os
from typing import Dict, Optional
from loguru import logger

from .analysis import AttributionResolver, FeatureAssembler, GenderEventMap
from .collectors import OSMCollector, WikidataCollector, WikidataStore
from .collectors.osm.collector import OSM_KINDS
from .config import CityConfig, PipelineConfig, get_config, validate_config
from .exceptions import StreetGenderError
from .models import FeatureCollection

OUTPUT_FILES = {
    "relation": "relations.geojson",
    "way": "ways.geojson",
}


class GeoJSONPipeline:
    """
    Pipeline generating the street gender GeoJSON of one city

    Usage:
        pipeline = GeoJSONPipeline("belgium/brussels")
        collections = pipeline.run()
        pipeline.save(collections)
    """

    def __init__(self, city: str, config: Optional[PipelineConfig] = None):
        self.config = config or get_config()
        validate_config(self.config)

        self.city = city
        self.data_dir = self.config.city_data_dir(city)
        self.output_dir = self.config.city_output_dir(city)

        self.osm_collector = OSMCollector(
            cache_dir=os.path.join(self.output_dir, "overpass"),
            api_config=self.config.api
        )
        self.wikidata_dir = os.path.join(self.output_dir, "wikidata")

        self._city_config: Optional[CityConfig] = None

    @property
    def city_config(self) -> CityConfig:
        if self._city_config is None:
            self._city_config = CityConfig.load(os.path.join(self.data_dir, "config.json"))
        return self._city_config

    def fetch_overpass(self, refresh: bool = False):
        """Stage 1: download Overpass documents"""
        relation_id = self.city_config.relation_id
        if relation_id is None:
            raise StreetGenderError(f'No "relationId" in configuration of {self.city}.')
        self.osm_collector.fetch(int(relation_id), refresh=refresh)

    def fetch_wikidata(self):
        """Stage 2: download Wikidata documents"""
        documents = [self.osm_collector.load_document(kind) for kind in OSM_KINDS]
        WikidataCollector(cache_dir=self.wikidata_dir, api_config=self.config.api).collect(documents)

    def load_event_map(self) -> Optional[GenderEventMap]:
        """Event CSV of the city, if the city has one"""
        path = os.path.join(self.data_dir, self.config.event_csv)
        if not os.path.isfile(path):
            return None
        return GenderEventMap.load(path)

    def run(self) -> Dict[str, FeatureCollection]:
        """
        Stage 3: build the relation and way FeatureCollections

        Returns:
            Collections keyed by element kind
        """
        logger.info(f"Generating GeoJSON for {self.city}")

        city_config = self.city_config
        attribution = AttributionResolver.default(
            city_config,
            WikidataStore(self.wikidata_dir),
            self.load_event_map(),
        )
        assembler = FeatureAssembler(
            attribution,
            roles=self.config.geometry_roles,
            max_depth=self.config.max_relation_depth,
        )

        collections = {}
        for kind in OSM_KINDS:
            store = self.osm_collector.load_store(kind)
            collection, warnings = assembler.build(
                kind,
                store,
                exclude=city_config.excluded_ids(kind),
            )
            warnings.flush_to_log(f"{kind}s")
            collections[kind] = collection
        return collections

    def save(self, collections: Dict[str, FeatureCollection]) -> Dict[str, str]:
        """Write each collection to the city output directory"""
        os.makedirs(self.output_dir, exist_ok=True)

        paths = {}
        for kind, collection in collections.items():
            output_path = os.path.join(self.output_dir, OUTPUT_FILES[kind])
            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(collection.to_geojson(), f, ensure_ascii=False)
            logger.info(f"Saved {len(collection.features)} feature(s) to {output_path}")
            paths[kind] = output_path
        return paths
