"""
Overpass API client

Handles communication with Overpass API including:
- Rate limiting
- Retry logic
- Error handling
"""

import time
import requests
from typing import Dict, Any, Optional
from loguru import logger

from ...config import APIConfig, get_config

# Overpass area ids are relation ids offset by this constant
AREA_OFFSET = 3600000000


class OverpassAPIClient:
    """Client for interacting with Overpass API"""

    def __init__(self, api_config: Optional[APIConfig] = None):
        self.api = api_config or get_config().api
        self.overpass_url = self.api.overpass_url
        self.timeout = self.api.overpass_timeout
        self._last_request_time = 0
        self._min_request_interval = 2.0

    def _rate_limit(self):
        """Ensure we don't exceed rate limits"""
        elapsed = time.time() - self._last_request_time
        if elapsed < self._min_request_interval:
            time.sleep(self._min_request_interval - elapsed)
        self._last_request_time = time.time()

    def build_query(self, kind: str, relation_id: int) -> str:
        """
        Overpass QL for the named streets of a city area

        Args:
            kind: "relation" (associatedStreet/street relations) or "way" (named highways)
            relation_id: OSM relation id of the city boundary
        """
        area_id = AREA_OFFSET + relation_id
        if kind == "relation":
            selector = 'relation["type"~"^(associatedStreet|street)$"]["name"](area.city);'
        else:
            selector = 'way["highway"]["name"](area.city);'
        return (
            f"[out:json][timeout:{self.timeout}];"
            f"area({area_id})->.city;"
            f"({selector});"
            "(._;>>;);"
            "out body;"
        )

    def query(self, query: str, retry_delay: Optional[float] = None) -> Dict[str, Any]:
        """
        Execute Overpass API query with retry logic

        Args:
            query: Overpass QL query string
            retry_delay: Initial delay between retries (increases with attempts)

        Returns:
            JSON response from Overpass API

        Raises:
            RuntimeError: If query fails after all retries
        """
        self._rate_limit()
        retry_delay = self.api.retry_delay if retry_delay is None else retry_delay
        max_retries = self.api.max_retries

        headers = {
            "User-Agent": self.api.user_agent,
            "Content-Type": "application/x-www-form-urlencoded"
        }

        for attempt in range(max_retries):
            try:
                response = requests.post(
                    self.overpass_url,
                    data={"data": query},
                    headers=headers,
                    timeout=self.timeout
                )
                response.raise_for_status()
                return response.json()
            except requests.exceptions.Timeout:
                wait_time = retry_delay * (attempt + 1)
                logger.warning(f"Overpass timeout (attempt {attempt + 1}/{max_retries}). Retrying in {wait_time}s...")
                if attempt < max_retries - 1:
                    time.sleep(wait_time)
                else:
                    raise RuntimeError(f"Overpass API timeout after {max_retries} attempts")
            except requests.exceptions.HTTPError as e:
                if e.response.status_code in [429, 504] and attempt < max_retries - 1:
                    wait_time = retry_delay * (attempt + 1)
                    logger.warning(f"Overpass {e.response.status_code} (attempt {attempt + 1}/{max_retries}). Retrying in {wait_time}s...")
                    time.sleep(wait_time)
                else:
                    raise RuntimeError(f"Overpass API HTTP error {e.response.status_code} after {attempt + 1} attempts") from e
            except requests.exceptions.RequestException as e:
                logger.warning(f"Overpass request failed (attempt {attempt + 1}): {e}")
                if attempt < max_retries - 1:
                    time.sleep(retry_delay * (attempt + 1))
                else:
                    raise RuntimeError(f"Overpass API request failed after {max_retries} attempts: {e}") from e

        return {"elements": []}
