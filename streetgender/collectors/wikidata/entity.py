"""
Wikidata entity field extraction

Read-only accessors over a decoded Special:EntityData entity. Only the
fields needed for street attribution are exposed.
"""

from typing import Any, Dict, List, Optional

# Property ids
INSTANCE_OF = "P31"
SUBCLASS_OF = "P279"
SEX_OR_GENDER = "P21"
DATE_OF_BIRTH = "P569"
DATE_OF_DEATH = "P570"
IMAGE = "P18"

GENDERS = {
    "Q6581097": "M",   # male
    "Q6581072": "F",   # female
    "Q1052281": "FX",  # transgender female
    "Q2449503": "MX",  # transgender male
    "Q1097630": "X",   # intersex
    "Q48270": "NB",    # non-binary
}
UNKNOWN_GENDER = "?"


class WikidataEntity:
    """Wrapper around one entity of a Wikidata JSON document"""

    def __init__(self, data: Dict[str, Any]):
        self.data = data

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> Optional["WikidataEntity"]:
        """First entity of an `{"entities": {...}}` document"""
        entities = document.get("entities") or {}
        for entity in entities.values():
            return cls(entity)
        return None

    @property
    def id(self) -> str:
        return self.data.get("id", "")

    @property
    def claims(self) -> Dict[str, List[Dict[str, Any]]]:
        return self.data.get("claims") or {}

    def claim_values(self, prop: str) -> List[Any]:
        """Datavalue of every claim for a property, skipping novalue/somevalue snaks"""
        values = []
        for claim in self.claims.get(prop, []):
            mainsnak = claim.get("mainsnak", {})
            datavalue = mainsnak.get("datavalue")
            if datavalue is not None:
                values.append(datavalue.get("value"))
        return values

    def claim_ids(self, prop: str) -> List[str]:
        """Item ids referenced by a property"""
        return [
            value["id"] for value in self.claim_values(prop)
            if isinstance(value, dict) and "id" in value
        ]

    def first_time(self, prop: str) -> Optional[str]:
        for value in self.claim_values(prop):
            if isinstance(value, dict) and value.get("time"):
                return value["time"]
        return None

    def gender_id(self) -> Optional[str]:
        ids = self.claim_ids(SEX_OR_GENDER)
        return ids[0] if ids else None

    def gender(self) -> Optional[str]:
        """
        Gender code of the entity

        Returns:
            One of the GENDERS codes, UNKNOWN_GENDER for an unmapped item,
            or None when the entity has no P21 claim
        """
        gender_id = self.gender_id()
        if gender_id is None:
            return None
        return GENDERS.get(gender_id, UNKNOWN_GENDER)

    def is_person(self, instances: List[str]) -> Optional[bool]:
        """
        Whether the entity is an instance (or subclass) of an accepted class

        Returns None when the entity has neither P31 nor P279 claims.
        """
        ids = self.claim_ids(INSTANCE_OF) or self.claim_ids(SUBCLASS_OF)
        if not ids:
            return None
        return any(i in instances for i in ids)

    @staticmethod
    def _year(time: Optional[str]) -> Optional[int]:
        # "+1879-03-14T00:00:00Z" -> 1879, "-0500-00-00T00:00:00Z" -> -500
        if not time:
            return None
        try:
            return int(time[:5])
        except ValueError:
            return None

    def birth_year(self) -> Optional[int]:
        return self._year(self.first_time(DATE_OF_BIRTH))

    def death_year(self) -> Optional[int]:
        return self._year(self.first_time(DATE_OF_DEATH))

    def _by_language(self, key: str, languages: List[str]) -> Dict[str, Any]:
        values = self.data.get(key) or {}
        return {lang: values[lang] for lang in languages if lang in values}

    def labels(self, languages: List[str]) -> Dict[str, Any]:
        return self._by_language("labels", languages)

    def descriptions(self, languages: List[str]) -> Dict[str, Any]:
        return self._by_language("descriptions", languages)

    def nicknames(self, languages: List[str]) -> Dict[str, Any]:
        return self._by_language("aliases", languages)

    def sitelinks(self, languages: List[str]) -> Dict[str, Any]:
        values = self.data.get("sitelinks") or {}
        return {
            f"{lang}wiki": values[f"{lang}wiki"]
            for lang in languages if f"{lang}wiki" in values
        }

    def image(self) -> Optional[str]:
        for value in self.claim_values(IMAGE):
            if isinstance(value, str):
                return value
        return None
