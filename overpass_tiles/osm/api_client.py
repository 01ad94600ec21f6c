"""
Overpass API client

Handles communication with the Overpass API:
- Rate limiting between consecutive requests
- Error mapping to TransportError

Requests are not retried, callers decide what to do with a failed tile.
"""

import time
from typing import Optional

import requests
from loguru import logger

from ..config import APIConfig, get_config
from ..exceptions import TransportError


class OverpassAPIClient:
    """Client for interacting with Overpass API"""

    def __init__(self, api_config: Optional[APIConfig] = None):
        self.api_config = api_config or get_config().api
        self.overpass_url = self.api_config.overpass_url
        self.timeout = self.api_config.request_timeout
        self._last_request_time = 0.0
        self._min_request_interval = self.api_config.min_request_interval

    def _rate_limit(self):
        """Ensure we don't exceed rate limits"""
        elapsed = time.time() - self._last_request_time
        if elapsed < self._min_request_interval:
            time.sleep(self._min_request_interval - elapsed)
        self._last_request_time = time.time()

    def query(self, query: str) -> bytes:
        """
        Execute an Overpass XML query

        Args:
            query: serialised <osm-script> document

        Returns:
            Raw response body

        Raises:
            TransportError: on timeout, connection failure or HTTP error status
        """
        self._rate_limit()

        headers = {
            "User-Agent": self.api_config.user_agent,
            "Content-Type": "application/xml; charset=utf-8",
        }

        try:
            response = requests.post(
                self.overpass_url,
                data=query.encode("utf-8"),
                headers=headers,
                timeout=self.timeout
            )
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            logger.error(f"Overpass timeout after {self.timeout}s")
            raise TransportError("Overpass API timeout", {"url": self.overpass_url}) from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error(f"Overpass HTTP error {status}")
            raise TransportError(f"Overpass API HTTP error {status}", {"url": self.overpass_url}) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Overpass request failed: {e}")
            raise TransportError(f"Overpass API request failed: {e}", {"url": self.overpass_url}) from e

        logger.debug(f"Overpass answered with {len(response.content)} bytes")
        return response.content
