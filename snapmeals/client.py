"""HTTP client for the recipe and SNAP store planning service.

Endpoints:
1. POST /recipes                  {"user_context": str} -> recipes, groceryList, reasoning
2. GET  /snap-stores/closest      ?zip_code=NNNNN -> list of SNAP retailer records

Each call is a single attempt; there are no retries.
"""

from __future__ import annotations

import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)

API_BASE = "https://purna-backend.vercel.app"
JSON_HEADERS = {"Accept": "application/json"}


class ApiError(RuntimeError):
    """Raised when the planning service cannot be reached or answers with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class PlannerApiClient:
    """Client for the planning service."""

    def __init__(
        self,
        base_url: str = API_BASE,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        """
        Args:
            base_url: service root, without a trailing slash.
            session: optional pre-configured session (useful for tests).
            timeout: seconds per request; ``None`` waits indefinitely.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def _request(self, label: str, method: str, path: str, **kwargs):
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            resp = self._session.request(
                method, url, headers=JSON_HEADERS, timeout=self.timeout, **kwargs
            )
        except requests.RequestException as exc:
            logger.warning("%s request failed: %s", label, exc)
            raise ApiError(f"{label} request failed: {exc}") from exc

        if not resp.ok:
            text = resp.text
            logger.warning("%s returned HTTP %s", label, resp.status_code)
            raise ApiError(
                f"{label} error {resp.status_code}: {text}",
                status_code=resp.status_code,
                body=text,
            )

        try:
            return resp.json()
        except ValueError as exc:
            raise ApiError(
                f"{label} returned invalid JSON: {exc}",
                status_code=resp.status_code,
                body=resp.text,
            ) from exc

    def fetch_recipes(self, user_context: str) -> dict:
        """Request recipes and a grocery list for a household description.

        Returns:
            The raw response object; mapping is left to the caller.
        """
        data = self._request(
            "Recipes API",
            "POST",
            "/recipes",
            json={"user_context": user_context},
        )
        return data if isinstance(data, dict) else {}

    def fetch_snap_stores(self, zip_code: str) -> list:
        """Closest SNAP retailers for a zip code, as raw records.

        A response that is not a JSON list is treated as no stores.
        """
        data = self._request(
            "SNAP stores API",
            "GET",
            "/snap-stores/closest",
            params={"zip_code": zip_code.strip()},
        )
        return data if isinstance(data, list) else []
