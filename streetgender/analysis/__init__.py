"""
Analysis modules for the street gender pipeline
"""

from .warning_sink import WarningSink
from .events import GenderEventMap
from .geometry import GeometryResolver
from .attribution import (
    AttributionResolver,
    AttributionStrategy,
    ConfigAttribution,
    EventAttribution,
    WikidataAttribution,
)
from .assembler import FeatureAssembler

__all__ = [
    "WarningSink",
    "GenderEventMap",
    "GeometryResolver",
    "AttributionResolver",
    "AttributionStrategy",
    "ConfigAttribution",
    "EventAttribution",
    "WikidataAttribution",
    "FeatureAssembler",
]
