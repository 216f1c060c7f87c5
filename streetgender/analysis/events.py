"""
Gender Event Map

Street name → gender lookup built from the event CSV (rows of
French name, Dutch name, gender). Names are keyed by their MD5 digest.
"""

import csv
import hashlib
import os
from typing import Dict, Iterable, Optional, Sequence
from loguru import logger

from ..exceptions import AmbiguousMappingError, MissingInputError


def name_hash(name: str) -> str:
    return hashlib.md5(name.encode("utf-8")).hexdigest()


class GenderEventMap:
    """Hashed street name to gender mapping"""

    def __init__(self):
        self._genders: Dict[str, str] = {}

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[str]]) -> "GenderEventMap":
        """
        Build the map from (name_fr, name_nl, gender) rows

        Raises:
            AmbiguousMappingError: If a name already maps to another gender
        """
        event_map = cls()
        for row in rows:
            if len(row) < 3:
                logger.debug(f"Skipping short event CSV row: {row}")
                continue
            street_fr, street_nl, gender = row[0], row[1], row[2]
            event_map.add(street_fr, gender)
            event_map.add(street_nl, gender)
        return event_map

    @classmethod
    def load(cls, path: str) -> "GenderEventMap":
        """Read the event CSV file"""
        if not os.path.isfile(path) or not os.access(path, os.R_OK):
            raise MissingInputError(path)
        with open(path, "r", newline="", encoding="utf-8") as f:
            event_map = cls.from_rows(csv.reader(f))
        logger.info(f"Loaded {len(event_map)} street name(s) from {path}")
        return event_map

    def add(self, name: str, gender: str):
        key = name_hash(name)
        existing = self._genders.get(key)
        if existing is not None and existing != gender:
            raise AmbiguousMappingError(name, existing, gender)
        self._genders[key] = gender

    def get(self, name: Optional[str]) -> Optional[str]:
        if name is None:
            return None
        return self._genders.get(name_hash(name))

    def __contains__(self, name: str) -> bool:
        return name_hash(name) in self._genders

    def __len__(self) -> int:
        return len(self._genders)

    def __bool__(self) -> bool:
        return len(self._genders) > 0
