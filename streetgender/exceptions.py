"""
Error types raised by the street gender pipeline

Fatal conditions only. Data-quality problems are reported through
WarningSink and never raised.
"""


class StreetGenderError(Exception):
    """Base class for pipeline errors"""


class MissingInputError(StreetGenderError):
    """A document produced by an earlier stage is missing or unreadable"""

    def __init__(self, path: str, stage: str = None):
        self.path = path
        self.stage = stage
        message = f'File "{path}" doesn\'t exist or is not readable.'
        if stage:
            message += f' You maybe need to run "{stage}" command first.'
        super().__init__(message)


class CorruptInputError(StreetGenderError):
    """A document exists but can't be decoded"""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        message = f'Can\'t read "{path}".'
        if reason:
            message += f" {reason}"
        super().__init__(message)


class AmbiguousMappingError(StreetGenderError):
    """The same street name maps to two different genders in the event CSV"""

    def __init__(self, street: str, existing: str, conflicting: str):
        self.street = street
        self.existing = existing
        self.conflicting = conflicting
        super().__init__(
            f'Street "{street}" is mapped to both "{existing}" and "{conflicting}".'
        )


class InvalidIdentifierError(StreetGenderError):
    """A name:etymology:wikidata value is not a Wikidata item identifier"""

    def __init__(self, identifier: str, kind: str, osm_id: int):
        self.identifier = identifier
        super().__init__(
            f"Format of `name:etymology:wikidata` is invalid ({identifier}) for {kind}({osm_id})."
        )
