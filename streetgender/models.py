"""
Pydantic models for the street gender GeoJSON output
Field aliases keep the serialized keys of the published datasets
"""

from typing import List, Optional, Dict, Any, Literal, Union
from pydantic import BaseModel, ConfigDict, Field


# ============================================================
# GeoJSON Types
# ============================================================

class GeoJSONLineString(BaseModel):
    type: Literal["LineString"] = "LineString"
    coordinates: List[List[float]]  # [[lon, lat], ...]


class GeoJSONMultiLineString(BaseModel):
    type: Literal["MultiLineString"] = "MultiLineString"
    coordinates: List[List[List[float]]]  # [[[lon, lat], ...], ...]


Geometry = Union[GeoJSONLineString, GeoJSONMultiLineString]


# ============================================================
# Attribution Models
# ============================================================

SOURCE_WIKIDATA = "wikidata"
SOURCE_CONFIG = "config"
SOURCE_EVENT = "event"

# Aggregate gender of a street named after people of different genders
MIXED_GENDER = "+"


class WikidataDetails(BaseModel):
    """Biographical facts extracted for one etymology identifier"""
    model_config = ConfigDict(populate_by_name=True)

    wikidata_id: str = Field(alias="wikidata")
    is_person: bool = Field(alias="person")
    gender: Optional[str] = None
    labels: Dict[str, Any] = Field(default_factory=dict)
    descriptions: Dict[str, Any] = Field(default_factory=dict)
    nicknames: Dict[str, Any] = Field(default_factory=dict)
    birth_year: Optional[int] = Field(default=None, alias="birth")
    death_year: Optional[int] = Field(default=None, alias="death")
    sitelinks: Dict[str, Any] = Field(default_factory=dict)
    image: Optional[str] = None


class AttributionRecord(BaseModel):
    """Resolved gender verdict for one OSM object"""
    source: Optional[Literal["wikidata", "config", "event"]] = None
    gender: Optional[str] = None
    details: Optional[Union[WikidataDetails, List[WikidataDetails]]] = None

    @classmethod
    def none(cls) -> "AttributionRecord":
        return cls()


class FeatureProperties(BaseModel):
    name: Optional[str] = None
    wikidata: Optional[str] = None
    source: Optional[Literal["wikidata", "config", "event"]] = None
    gender: Optional[str] = None
    details: Optional[Union[WikidataDetails, List[WikidataDetails]]] = None

    @classmethod
    def from_record(cls, record: AttributionRecord, name: Optional[str], wikidata: Optional[str]) -> "FeatureProperties":
        return cls(
            name=name,
            wikidata=wikidata,
            source=record.source,
            gender=record.gender,
            details=record.details,
        )


# ============================================================
# Feature Models
# ============================================================

class Feature(BaseModel):
    type: Literal["Feature"] = "Feature"
    id: int
    properties: FeatureProperties
    geometry: Optional[Geometry] = None


class FeatureCollection(BaseModel):
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: List[Feature] = Field(default_factory=list)

    def exclude(self, ids: List[int]) -> "FeatureCollection":
        """Copy without the features whose id is listed, order preserved"""
        if not ids:
            return self
        excluded = set(ids)
        return FeatureCollection(features=[f for f in self.features if f.id not in excluded])

    def to_geojson(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
