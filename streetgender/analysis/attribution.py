"""
Gender attribution of streets

Each strategy tries one source of attribution; AttributionResolver runs
them in priority order and keeps the first record produced:

  1. Wikidata - `name:etymology:wikidata` tag
  2. Config   - static per-city override
  3. Event    - street names from the event CSV
"""

from typing import List, Optional

from ..collectors.osm.models import OSMElement
from ..collectors.wikidata.collector import ETYMOLOGY_TAG, split_identifiers
from ..collectors.wikidata.entity import UNKNOWN_GENDER, WikidataEntity
from ..collectors.wikidata.store import WikidataStore
from ..config import CityConfig
from ..models import (
    MIXED_GENDER, SOURCE_CONFIG, SOURCE_EVENT, SOURCE_WIKIDATA,
    AttributionRecord, WikidataDetails
)
from .events import GenderEventMap
from .warning_sink import WarningSink

# Name tags probed against the event map, in order
EVENT_NAME_TAGS = ("name:fr", "name:nl", "name")


class AttributionStrategy:
    """One source of gender attribution"""

    source: str = ""

    def attribute(self, element: OSMElement, warnings: WarningSink) -> Optional[AttributionRecord]:
        """Record for the element, or None when this source doesn't apply"""
        raise NotImplementedError


class WikidataAttribution(AttributionStrategy):
    """Attribution from the Wikidata entities a street is named after"""

    source = SOURCE_WIKIDATA

    def __init__(self, wikidata: WikidataStore, city: CityConfig):
        self.wikidata = wikidata
        self.city = city

    def details(self, entity: WikidataEntity, warnings: WarningSink) -> WikidataDetails:
        """Detail record of one entity"""
        languages = self.city.languages

        person = entity.is_person(self.city.instances)
        if person is None:
            warnings.add(f'No instance or subclass for "{entity.id}".')
            person = False

        gender = entity.gender()
        if gender == UNKNOWN_GENDER:
            warnings.add(f'Unknown gender "{entity.gender_id()}" for "{entity.id}".')

        return WikidataDetails(
            wikidata_id=entity.id,
            is_person=person,
            gender=gender,
            labels=entity.labels(languages),
            descriptions=entity.descriptions(languages),
            nicknames=entity.nicknames(languages),
            birth_year=entity.birth_year(),
            death_year=entity.death_year(),
            sitelinks=entity.sitelinks(languages),
            image=entity.image(),
        )

    @staticmethod
    def aggregate_gender(details: List[WikidataDetails]) -> Optional[str]:
        """
        Gender of the group of people a street is named after

        Only defined when every entity is a person: the shared gender, or
        MIXED_GENDER when genders differ.
        """
        persons = {d.is_person for d in details}
        genders = {d.gender for d in details}

        if persons != {True}:
            return None
        if len(genders) == 1:
            return next(iter(genders))
        return MIXED_GENDER

    def attribute(self, element: OSMElement, warnings: WarningSink) -> Optional[AttributionRecord]:
        tag = element.tag(ETYMOLOGY_TAG)
        if tag is None:
            return None

        details = []
        for identifier in split_identifiers(tag):
            entity = self.wikidata.get(identifier)
            if entity.id != identifier:
                warnings.add(
                    f'Entity "{identifier}" is (probably) redirected to "{entity.id}" '
                    f"(tagged in {element.label})."
                )
            details.append(self.details(entity, warnings))

        return AttributionRecord(
            source=self.source,
            gender=self.aggregate_gender(details),
            details=details[0] if len(details) == 1 else details,
        )


class ConfigAttribution(AttributionStrategy):
    """Attribution from the static per-city configuration"""

    source = SOURCE_CONFIG

    def __init__(self, city: CityConfig):
        self.city = city

    def attribute(self, element: OSMElement, warnings: WarningSink) -> Optional[AttributionRecord]:
        gender = self.city.gender_override(element.kind, element.id)
        if gender is None:
            return None
        return AttributionRecord(source=self.source, gender=gender)


class EventAttribution(AttributionStrategy):
    """Attribution from the event CSV street names"""

    source = SOURCE_EVENT

    def __init__(self, event_map: Optional[GenderEventMap]):
        self.event_map = event_map

    def attribute(self, element: OSMElement, warnings: WarningSink) -> Optional[AttributionRecord]:
        if not self.event_map:
            return None
        for key in EVENT_NAME_TAGS:
            gender = self.event_map.get(element.tag(key))
            if gender is not None:
                return AttributionRecord(source=self.source, gender=gender)
        return None


class AttributionResolver:
    """Runs attribution strategies in priority order"""

    def __init__(self, strategies: List[AttributionStrategy]):
        self.strategies = strategies

    @classmethod
    def default(
        cls,
        city: CityConfig,
        wikidata: WikidataStore,
        event_map: Optional[GenderEventMap] = None
    ) -> "AttributionResolver":
        return cls([
            WikidataAttribution(wikidata, city),
            ConfigAttribution(city),
            EventAttribution(event_map),
        ])

    def resolve(self, element: OSMElement, warnings: WarningSink) -> AttributionRecord:
        for strategy in self.strategies:
            record = strategy.attribute(element, warnings)
            if record is not None:
                return record
        return AttributionRecord.none()
