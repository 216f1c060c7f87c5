"""Tests for Wikidata entity extraction, storage and download."""

from unittest.mock import MagicMock, patch

import pytest
import requests
from conftest import FEMALE, HUMAN, MALE, entity_document, way

from streetgender.collectors.osm.parser import OSMResponseParser
from streetgender.collectors.wikidata import WikidataCollector, WikidataEntity, WikidataStore, split_identifiers
from streetgender.collectors.wikidata.api_client import WikidataAPIClient
from streetgender.config import APIConfig
from streetgender.exceptions import CorruptInputError, InvalidIdentifierError, MissingInputError


def entity(*args, **kwargs):
    return WikidataEntity.from_document(entity_document(*args, **kwargs))


class TestWikidataEntity:
    """Tests for field extraction."""

    def test_gender_codes(self):
        """Gender items should map to short codes."""
        assert entity("Q1", gender=MALE).gender() == "M"
        assert entity("Q1", gender=FEMALE).gender() == "F"
        assert entity("Q1", gender="Q48270").gender() == "NB"

    def test_unknown_gender(self):
        """Unmapped gender items should give the unknown marker."""
        e = entity("Q1", gender="Q999")
        assert e.gender() == "?"
        assert e.gender_id() == "Q999"

    def test_no_gender(self):
        """No P21 claim means no gender."""
        assert entity("Q1").gender() is None

    def test_is_person(self):
        """Instance of an accepted class is a person."""
        assert entity("Q1", instance_of=[HUMAN]).is_person([HUMAN]) is True
        assert entity("Q1", instance_of=["Q515"]).is_person([HUMAN]) is False

    def test_is_person_subclass_fallback(self):
        """Subclass of should be used when there is no instance of."""
        document = entity_document("Q1", instance_of=())
        document["entities"]["Q1"]["claims"]["P279"] = [
            {"mainsnak": {"datavalue": {"value": {"id": HUMAN}}}}
        ]
        assert WikidataEntity.from_document(document).is_person([HUMAN]) is True

    def test_is_person_unknown(self):
        """No classification claim gives None."""
        assert entity("Q1", instance_of=()).is_person([HUMAN]) is None

    def test_novalue_snak_ignored(self):
        """Claims without datavalue should be skipped."""
        document = entity_document("Q1", instance_of=())
        document["entities"]["Q1"]["claims"]["P21"] = [{"mainsnak": {"snaktype": "novalue"}}]
        assert WikidataEntity.from_document(document).gender() is None

    def test_years(self):
        """Years should be read from the time prefix, BCE negative."""
        e = entity("Q1", birth="+1879-03-14T00:00:00Z", death="-0044-03-15T00:00:00Z")
        assert e.birth_year() == 1879
        assert e.death_year() == -44
        assert entity("Q1").birth_year() is None

    def test_language_filters(self):
        """Labels, descriptions, aliases and sitelinks should keep configured languages."""
        e = entity(
            "Q1",
            labels={"fr": {"language": "fr", "value": "Marie"}, "de": {"language": "de", "value": "Marie"}},
            descriptions={"nl": {"language": "nl", "value": "natuurkundige"}},
            aliases={"fr": [{"language": "fr", "value": "Maria"}]},
            sitelinks={"frwiki": {"site": "frwiki", "title": "Marie Curie"}, "dewiki": {"site": "dewiki"}},
        )
        assert list(e.labels(["fr", "nl"])) == ["fr"]
        assert e.descriptions(["fr", "nl"]) == {"nl": {"language": "nl", "value": "natuurkundige"}}
        assert e.nicknames(["fr"]) == {"fr": [{"language": "fr", "value": "Maria"}]}
        assert e.sitelinks(["fr", "nl"]) == {"frwiki": {"site": "frwiki", "title": "Marie Curie"}}

    def test_image(self):
        """Image should be the first P18 value."""
        assert entity("Q1", image="Curie.jpg").image() == "Curie.jpg"
        assert entity("Q1").image() is None

    def test_empty_document(self):
        """A document without entities gives None."""
        assert WikidataEntity.from_document({"entities": {}}) is None


class TestWikidataStore:
    """Tests for WikidataStore."""

    def test_lazy_load_and_memoize(self, tmp_path, write_json):
        """Documents should be read once on first reference."""
        write_json(tmp_path / "Q1.json", entity_document("Q1", gender=FEMALE))
        store = WikidataStore(str(tmp_path))
        assert len(store) == 0
        first = store.get("Q1")
        (tmp_path / "Q1.json").unlink()
        assert store.get("Q1") is first
        assert len(store) == 1

    def test_missing_document(self, tmp_path):
        """A missing document is fatal."""
        with pytest.raises(MissingInputError) as exc_info:
            WikidataStore(str(tmp_path)).get("Q404")
        assert '"wikidata" command' in str(exc_info.value)

    def test_corrupt_document(self, tmp_path):
        """An undecodable document is fatal."""
        (tmp_path / "Q1.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(CorruptInputError):
            WikidataStore(str(tmp_path)).get("Q1")

    def test_document_without_entity(self, tmp_path, write_json):
        """A document without entity is fatal."""
        write_json(tmp_path / "Q1.json", {"entities": {}})
        with pytest.raises(CorruptInputError):
            WikidataStore(str(tmp_path)).get("Q1")

    def test_from_documents(self):
        """Pre-loaded documents should not need a directory."""
        store = WikidataStore.from_documents({"Q1": entity_document("Q1")})
        assert store.get("Q1").id == "Q1"
        assert "Q1" in store
        with pytest.raises(MissingInputError):
            store.get("Q2")


class TestWikidataCollector:
    """Tests for the download stage."""

    def test_split_identifiers(self):
        """Identifiers should be split on ; and trimmed."""
        assert split_identifiers("Q1; Q2 ;Q3") == ["Q1", "Q2", "Q3"]
        assert split_identifiers("Q1;") == ["Q1"]

    def test_referenced_identifiers(self):
        """Identifiers should be unique, in first-reference order."""
        elements = OSMResponseParser.iter_elements({"elements": [
            way(1, [], **{"name:etymology:wikidata": "Q2;Q1"}),
            way(2, [], name="Rue"),
            way(3, [], **{"name:etymology:wikidata": "Q1"}),
        ]})
        references = WikidataCollector.referenced_identifiers(elements)
        assert [identifier for identifier, _ in references] == ["Q2", "Q1"]
        assert references[0][1].id == 1

    def test_invalid_identifier(self):
        """Non Q-identifiers should be rejected."""
        elements = OSMResponseParser.iter_elements({"elements": [
            way(1, [], **{"name:etymology:wikidata": "Marie Curie"}),
        ]})
        with pytest.raises(InvalidIdentifierError):
            WikidataCollector.referenced_identifiers(elements)

    def test_collect_downloads_missing(self, tmp_path, write_json):
        """Only identifiers without a cached document should be fetched."""
        write_json(tmp_path / "Q1.json", entity_document("Q1"))
        collector = WikidataCollector(cache_dir=str(tmp_path))
        collector.api_client = MagicMock()
        collector.api_client.fetch.return_value = entity_document("Q2")

        document = {"elements": [way(1, [], **{"name:etymology:wikidata": "Q1;Q2"})]}
        downloaded = collector.collect([document])

        assert downloaded == ["Q2"]
        collector.api_client.fetch.assert_called_once_with("Q2", "way(1)")
        assert (tmp_path / "Q2.json").exists()


class TestWikidataAPIClient:
    """Tests for WikidataAPIClient."""

    def _response(self, status, payload=None):
        response = MagicMock()
        response.status_code = status
        response.json.return_value = payload
        if status >= 400:
            response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=response)
        return response

    def test_fetch(self):
        """Should return the decoded document."""
        client = WikidataAPIClient(APIConfig(retry_delay=0))
        with patch("streetgender.collectors.wikidata.api_client.requests.get") as get:
            get.return_value = self._response(200, entity_document("Q1"))
            assert client.fetch("Q1")["entities"]["Q1"]["id"] == "Q1"
            assert get.call_args[0][0] == "https://www.wikidata.org/wiki/Special:EntityData/Q1.json"

    def test_not_found(self):
        """404 should report a missing item without retrying."""
        client = WikidataAPIClient(APIConfig(retry_delay=0))
        with patch("streetgender.collectors.wikidata.api_client.requests.get") as get:
            get.return_value = self._response(404)
            with pytest.raises(RuntimeError, match="does not exist"):
                client.fetch("Q404", "way(1)")
            assert get.call_count == 1

    def test_retries_on_throttle(self):
        """429 should be retried."""
        client = WikidataAPIClient(APIConfig(retry_delay=0, max_retries=3))
        with patch("streetgender.collectors.wikidata.api_client.requests.get") as get:
            get.side_effect = [self._response(429), self._response(200, entity_document("Q1"))]
            assert "entities" in client.fetch("Q1")
            assert get.call_count == 2
