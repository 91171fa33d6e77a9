"""Client for the remote marketplace store (per-group product and shop collections)."""

import json
import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from src.common.config.settings import settings
from src.common.exceptions.custom_exceptions import APIError

logger = logging.getLogger(__name__)

PRODUCTS_RESOURCE = "products"
SHOPS_RESOURCE = "shops"


class RemoteStoreApiClient:
    """Thin HTTP wrapper over the remote store.

    Every collection lives at ``{base_url}/{group_id}/{resource}``. Items are addressed by
    position, so callers resolve a position from a fresh ``get_collection`` right before
    deleting or updating.
    """

    def __init__(self) -> None:
        self.base_url = settings.REMOTE_API_BASE_URL.rstrip("/")
        self.group_id = settings.REMOTE_API_GROUP_ID
        self.timeout = (settings.REMOTE_API_CONNECT_TIMEOUT, settings.REMOTE_API_READ_TIMEOUT)

        # Transport-level retries only for idempotent reads; writes are attempted once
        self.session = requests.Session()
        retry_strategy = Retry(
            total=settings.REMOTE_API_MAX_RETRIES,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["HEAD", "GET", "OPTIONS"],
            backoff_factor=1,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)
        self.session.headers.update({"Content-Type": "application/json"})

        self.last_error: str | None = None

    def collection_url(self, resource: str) -> str:
        return f"{self.base_url}/{self.group_id}/{resource}"

    def item_url(self, resource: str, position: int) -> str:
        return f"{self.collection_url(resource)}/{position}"

    def is_reachable(self) -> bool:
        """Checks the base URL with a HEAD request. Records the reason in ``last_error`` when it fails."""
        try:
            response = self.session.head(self.base_url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            self.last_error = f"The API isn't available: {e}"
            return False
        if response.status_code != 200:
            self.last_error = f"Server is unreachable. Response code: {response.status_code}"
            return False
        self.last_error = None
        return True

    def get_collection(self, resource: str) -> list[Any]:
        """Fetches the raw records of a collection."""
        url = self.collection_url(resource)
        response = self._send("GET", url)
        try:
            data = response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise APIError(
                f"Failed to decode API JSON response: {e}",
                original_exception=e,
                operation="GET",
                target=url,
            )
        if not isinstance(data, list):
            raise APIError("Response is not a JSON array", operation="GET", target=url)
        return data

    def append(self, resource: str, record: dict[str, Any]) -> None:
        self._send("POST", self.collection_url(resource), record)

    def update_at(self, resource: str, position: int, record: dict[str, Any]) -> None:
        self._send("PUT", self.item_url(resource, position), record)

    def delete_at(self, resource: str, position: int) -> None:
        self._send("DELETE", self.item_url(resource, position))

    def _send(self, method: str, url: str, body: dict[str, Any] | None = None) -> requests.Response:
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(method, url, json=body, timeout=self.timeout)
            response.raise_for_status()
            return response
        except requests.exceptions.Timeout as e:
            raise APIError(f"API request timed out: {e}", original_exception=e, operation=method, target=url)
        except requests.exceptions.RequestException as e:
            status_code = e.response.status_code if e.response is not None else None
            raise APIError(
                f"Failed to make HTTP request: {e}",
                original_exception=e,
                status_code=status_code,
                operation=method,
                target=url,
            )

    def __del__(self) -> None:
        """Clean up the session when the object is destroyed."""
        if hasattr(self, "session"):
            self.session.close()
