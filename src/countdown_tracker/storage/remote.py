"""HTTP client for the remote JSON blob holding the canonical snapshot."""

from typing import Any, Optional

import httpx

from countdown_tracker.exceptions import ConflictError, StoreError
from countdown_tracker.logger import get_logger
from countdown_tracker.models.entries import Snapshot

logger = get_logger("countdown_tracker.storage")


class RemoteStore:
    """Client for a single JSON blob read with GET and written with PUT."""

    def __init__(
        self,
        url: str,
        token: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the blob store client.

        Args:
            url: URL of the JSON blob
            token: Optional bearer token for the store
            client: Preconfigured httpx client (tests pass a mock transport)
        """
        self.url = url
        self.token = token
        self.client = client or httpx.Client(timeout=30.0)
        # Set by load(): True after a 404, False after a 200
        self.missing: Optional[bool] = None

    def _headers(self) -> dict[str, str]:
        headers = {"Cache-Control": "no-store"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, method: str, **kwargs: Any) -> httpx.Response:
        try:
            return self.client.request(method, self.url, **kwargs)
        except httpx.HTTPError as e:
            raise StoreError(f"{method} {self.url} failed: {e}") from e

    def load(self) -> Snapshot:
        """
        Fetch the blob.

        A 404 is an empty snapshot, not an error. The response ETag is kept
        as the snapshot version for the next conditional write.
        """
        response = self._request("GET", headers=self._headers())
        if response.status_code == 404:
            logger.info("Remote blob not found, starting from an empty snapshot")
            self.missing = True
            return Snapshot()
        if response.status_code != 200:
            raise StoreError(f"Error {response.status_code}: {response.text}")
        self.missing = False

        try:
            data = response.json()
        except ValueError as e:
            raise StoreError(f"Remote blob is not valid JSON: {e}") from e
        return Snapshot.from_payload(data, version=response.headers.get("ETag"))

    def save(self, snapshot: Snapshot) -> Optional[str]:
        """
        Write the snapshot only if the blob is still at ``snapshot.version``.

        Without a version the write is create-only after a 404, and
        unconditional when the store served the blob without an ETag.

        Returns:
            The new ETag, if the store sent one

        Raises:
            ConflictError: The blob changed since it was read (HTTP 412)
            StoreError: Any other failure
        """
        headers = self._headers()
        if snapshot.version:
            headers["If-Match"] = snapshot.version
        elif self.missing:
            headers["If-None-Match"] = "*"
        else:
            logger.warning("Remote blob has no ETag, writing without a precondition")

        response = self._request("PUT", headers=headers, json=snapshot.to_payload())
        if response.status_code == 412:
            raise ConflictError()
        if response.status_code not in (200, 201, 204):
            raise StoreError(f"Error {response.status_code}: {response.text}")
        return response.headers.get("ETag")

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()
