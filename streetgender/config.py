"""
Configuration settings for the street gender pipeline
"""

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .exceptions import CorruptInputError, MissingInputError


@dataclass
class APIConfig:
    """API endpoints and configuration"""
    # Overpass API (OSM)
    overpass_url: str = "https://overpass-api.de/api/interpreter"
    overpass_timeout: int = 300  # Whole-city queries are slow

    # Wikidata entity documents, one per identifier
    wikidata_url: str = "https://www.wikidata.org/wiki/Special:EntityData/"

    # Request settings
    request_timeout: int = 30
    max_retries: int = 3
    retry_delay: float = 5.0

    # User agent for API requests
    user_agent: str = "StreetGender/1.0"


@dataclass
class PipelineConfig:
    """Pipeline configuration"""
    # Per-city static configuration and event CSV live here
    data_dir: str = "data"

    # Fetched documents and generated GeoJSON live here
    output_dir: str = "output"

    # Event CSV file name inside the city data directory
    event_csv: str = "gender.csv"

    # Guard against deeply nested (or cyclic) relation graphs
    max_relation_depth: int = 32

    # Member roles that contribute to a relation geometry
    geometry_roles: List[str] = field(default_factory=lambda: ["street", "outer"])

    # API config
    api: APIConfig = field(default_factory=APIConfig)

    def city_data_dir(self, city: str) -> str:
        return os.path.join(self.data_dir, city)

    def city_output_dir(self, city: str) -> str:
        return os.path.join(self.output_dir, city)


@dataclass
class CityConfig:
    """
    Static per-city configuration

    Mirrors the city `config.json`:
        {
            "relationId": 54094,
            "instances": ["Q5", ...],
            "languages": ["fr", "nl"],
            "gender": {"way": {"123": "F"}, "relation": {}},
            "exclude": {"way": [456], "relation": []}
        }
    """
    instances: List[str] = field(default_factory=lambda: ["Q5"])
    languages: List[str] = field(default_factory=lambda: ["en"])
    gender: Dict[str, Dict[str, str]] = field(default_factory=dict)
    exclude: Dict[str, List[int]] = field(default_factory=dict)
    relation_id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CityConfig":
        gender = {}
        for kind, overrides in (data.get("gender") or {}).items():
            if isinstance(overrides, dict):
                # JSON object keys are strings; normalise in case of int keys from Python callers
                gender[kind] = {str(osm_id): value for osm_id, value in overrides.items()}

        exclude = {}
        for kind, ids in (data.get("exclude") or {}).items():
            if isinstance(ids, list):
                exclude[kind] = [int(osm_id) for osm_id in ids]

        return cls(
            instances=list(data.get("instances") or ["Q5"]),
            languages=list(data.get("languages") or ["en"]),
            gender=gender,
            exclude=exclude,
            relation_id=data.get("relationId", data.get("relation_id")),
        )

    @classmethod
    def load(cls, path: str) -> "CityConfig":
        """Load city configuration from a JSON file"""
        if not os.path.isfile(path) or not os.access(path, os.R_OK):
            raise MissingInputError(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise CorruptInputError(path, str(e)) from e
        return cls.from_dict(data)

    def gender_override(self, kind: str, osm_id: int) -> Optional[str]:
        """Static gender for an OSM object, if configured"""
        return self.gender.get(kind, {}).get(str(osm_id))

    def excluded_ids(self, kind: str) -> List[int]:
        return self.exclude.get(kind, [])


# Global config instance
config = PipelineConfig()


def get_config() -> PipelineConfig:
    """Get global configuration"""
    return config


def validate_config(config: PipelineConfig) -> None:
    """
    Validate that all required configuration values are set.
    Raises ValueError if any required value is missing or invalid.
    """
    errors = []

    if not config.data_dir:
        errors.append("data_dir is required in config but not set")
    if not config.output_dir:
        errors.append("output_dir is required in config but not set")

    if config.max_relation_depth is None or config.max_relation_depth < 1:
        errors.append(f"max_relation_depth must be positive, got {config.max_relation_depth}")

    if not config.geometry_roles:
        errors.append("geometry_roles must list at least one member role")

    if config.api is None:
        errors.append("api configuration is required but not set")
    else:
        if not config.api.overpass_url:
            errors.append("api.overpass_url is required but not set")
        if not config.api.wikidata_url:
            errors.append("api.wikidata_url is required but not set")
        if config.api.max_retries < 1:
            errors.append(f"api.max_retries must be at least 1, got {config.api.max_retries}")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)
