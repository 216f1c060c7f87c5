"""
Wikidata API client

Downloads entity documents from Special:EntityData with retry logic.
"""

import time
import requests
from typing import Dict, Any, Optional
from loguru import logger

from ...config import APIConfig, get_config


class WikidataAPIClient:
    """Client for Wikidata Special:EntityData"""

    def __init__(self, api_config: Optional[APIConfig] = None):
        self.api = api_config or get_config().api
        self.base_url = self.api.wikidata_url

    def entity_url(self, identifier: str) -> str:
        return f"{self.base_url}{identifier}.json"

    def fetch(self, identifier: str, element_label: str = "") -> Dict[str, Any]:
        """
        Fetch the JSON document of one Wikidata item

        Args:
            identifier: Item identifier (Q...)
            element_label: OSM element referencing the item, for error messages

        Returns:
            Decoded `{"entities": {...}}` document

        Raises:
            RuntimeError: If the item doesn't exist or the request fails after all retries
        """
        url = self.entity_url(identifier)
        headers = {"User-Agent": self.api.user_agent}
        max_retries = self.api.max_retries
        context = f" for {element_label}" if element_label else ""

        for attempt in range(max_retries):
            try:
                response = requests.get(url, headers=headers, timeout=self.api.request_timeout)
                response.raise_for_status()
                return response.json()
            except requests.exceptions.HTTPError as e:
                status = e.response.status_code
                if status == 404:
                    raise RuntimeError(f"Wikidata item {identifier}{context} does not exist.") from e
                if status in [429, 503] and attempt < max_retries - 1:
                    wait_time = self.api.retry_delay * (attempt + 1)
                    logger.warning(f"Wikidata {status} (attempt {attempt + 1}/{max_retries}). Retrying in {wait_time}s...")
                    time.sleep(wait_time)
                else:
                    raise RuntimeError(f"Error while fetching Wikidata item {identifier}{context}: HTTP {status}.") from e
            except requests.exceptions.RequestException as e:
                logger.warning(f"Wikidata request failed (attempt {attempt + 1}): {e}")
                if attempt < max_retries - 1:
                    time.sleep(self.api.retry_delay * (attempt + 1))
                else:
                    raise RuntimeError(f"Error while fetching Wikidata item {identifier}{context}: {e}.") from e

        raise RuntimeError(f"Error while fetching Wikidata item {identifier}{context}.")
