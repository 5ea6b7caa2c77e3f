"""PowerSchool API client."""
import logging
from typing import Optional, Dict, Any

import requests

from config import PowerSchoolApiConfig
from src.schema.models import ApiResponse

logger = logging.getLogger(__name__)


class PowerSchoolClient:
    """Client for the PowerSchool REST API."""

    def __init__(self, config: PowerSchoolApiConfig, session: Optional[requests.Session] = None):
        """Initialize client."""
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
        })

        if config.access_token:
            self.session.headers.update({"Authorization": f"Bearer {config.access_token}"})

    def api(self, method: str, path: str, options: Optional[Dict[str, Any]] = None) -> ApiResponse:
        """
        Send a request to the API.

        Args:
            method: HTTP verb ("get", "post", ...)
            path: API path (e.g. "/ws/v1/student")
            options: {"body": <json string>, "query": {...}}

        Returns:
            ApiResponse with status code, parsed JSON body (if any) and raw text
        """
        options = options or {}
        url = f"{self.base_url}{path}"
        logger.debug(f"{method.upper()} {url}")

        try:
            response = self.session.request(
                method.upper(),
                url,
                data=options.get("body"),
                params=options.get("query"),
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Error calling {method.upper()} {path}: {e}")
            raise

        logger.debug(f"{method.upper()} {path} -> {response.status_code}")
        return ApiResponse(
            code=response.status_code,
            parsed_response=self._parse(response),
            response=response.text,
        )

    def get(self, path: str, options: Optional[Dict[str, Any]] = None) -> ApiResponse:
        """Send a GET request."""
        return self.api("get", path, options)

    def post(self, path: str, options: Optional[Dict[str, Any]] = None) -> ApiResponse:
        """Send a POST request."""
        return self.api("post", path, options)

    @staticmethod
    def _parse(response: requests.Response) -> Optional[Any]:
        """Decode a JSON body, None if the body is not JSON."""
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None
