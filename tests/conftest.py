"""Shared fixtures for street gender tests."""

import json

import pytest

from streetgender.analysis import WarningSink
from streetgender.collectors.osm import EntityStore
from streetgender.config import CityConfig

MALE = "Q6581097"
FEMALE = "Q6581072"
HUMAN = "Q5"


def node(osm_id, lon, lat, **tags):
    return {"type": "node", "id": osm_id, "lat": lat, "lon": lon, "tags": tags}


def way(osm_id, nodes, **tags):
    return {"type": "way", "id": osm_id, "nodes": nodes, "tags": tags}


def relation(osm_id, members, **tags):
    return {
        "type": "relation",
        "id": osm_id,
        "members": [{"type": kind, "ref": ref, "role": role} for kind, ref, role in members],
        "tags": tags,
    }


def claim(prop, value):
    return {"mainsnak": {"snaktype": "value", "property": prop, "datavalue": {"value": value}}}


def item_claim(prop, item_id):
    return claim(prop, {"entity-type": "item", "id": item_id})


def time_claim(prop, time):
    return claim(prop, {"time": time, "precision": 11})


def entity_document(entity_id, instance_of=(HUMAN,), gender=None, birth=None, death=None, image=None,
                    labels=None, descriptions=None, aliases=None, sitelinks=None):
    """Special:EntityData document with the claims used by the pipeline"""
    claims = {}
    if instance_of:
        claims["P31"] = [item_claim("P31", i) for i in instance_of]
    if gender:
        claims["P21"] = [item_claim("P21", gender)]
    if birth:
        claims["P569"] = [time_claim("P569", birth)]
    if death:
        claims["P570"] = [time_claim("P570", death)]
    if image:
        claims["P18"] = [claim("P18", image)]
    return {
        "entities": {
            entity_id: {
                "id": entity_id,
                "labels": labels or {},
                "descriptions": descriptions or {},
                "aliases": aliases or {},
                "sitelinks": sitelinks or {},
                "claims": claims,
            }
        }
    }



@pytest.fixture
def warnings():
    """Fresh warning sink."""
    return WarningSink()


@pytest.fixture
def city_config():
    """City configuration for a bilingual city."""
    return CityConfig(instances=[HUMAN], languages=["fr", "nl"])


@pytest.fixture
def street_store():
    """
    Small street network:
    - way 10: nodes 1 → 2 → 3
    - way 11: nodes 3 → 4
    - relation 20: associatedStreet of ways 10 and 11
    - relation 21: single street member (way 10)
    - relation 22: no street/outer member
    - relation 23: nested relation 21 plus way 11
    """
    return EntityStore.from_overpass({
        "elements": [
            node(1, 4.35, 50.85),
            node(2, 4.36, 50.86),
            node(3, 4.37, 50.87),
            node(4, 4.38, 50.88),
            way(10, [1, 2, 3], name="Rue Haute"),
            way(11, [3, 4], name="Rue Haute"),
            relation(20, [("way", 10, "street"), ("way", 11, "street"), ("node", 1, "house")]),
            relation(21, [("way", 10, "street")]),
            relation(22, [("node", 1, "house")]),
            relation(23, [("relation", 21, "street"), ("way", 11, "outer")]),
        ]
    })


@pytest.fixture
def write_json():
    """Write a JSON document to a path, creating parent directories."""
    def _write(path, data):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write
