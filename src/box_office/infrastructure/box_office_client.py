from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class BoxOfficeClientError(Exception):
    """Request rejected by the Box Office API (4xx)."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"Box Office client error {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class BoxOfficeClient:
    """HTTP client for the Box Office API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "accept": "application/json",
            "content-type": "application/json",
        }

    def _request(self, method: str, path: str, body: Optional[dict[str, Any]] = None) -> Any:
        """Send a request and decode the JSON body.

        Raises BoxOfficeClientError on 4xx responses.
        Raises httpx.HTTPStatusError on server errors (5xx).
        """
        url = f"{self._base_url}{path}"
        with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
            resp = client.request(method, url, json=body, headers=self._headers())
            if 400 <= resp.status_code < 500:
                try:
                    message = resp.json().get("message", resp.text)
                except ValueError:
                    message = resp.text
                logger.info("%s %s rejected with %d: %s", method, path, resp.status_code, message)
                raise BoxOfficeClientError(resp.status_code, message)
            resp.raise_for_status()
            return resp.json()

    def create_event(self, name: str, sections: list[dict[str, Any]]) -> dict[str, Any]:
        """Create an event. ``sections`` use the API shape: name, rows[name, totalSeats]."""
        data = self._request("POST", "/events", {"name": name, "sections": sections})
        return data["event"]

    def list_events(self) -> list[dict[str, Any]]:
        data = self._request("GET", "/events")
        return data.get("event", [])

    def availability(self, event_id: str) -> dict[str, Any]:
        return self._request("GET", f"/events/{event_id}/availability")

    def purchase(
        self,
        event_id: str,
        section_name: str,
        row_name: str,
        quantity: int,
        idempotency_key: Optional[str] = None,
    ) -> dict[str, Any]:
        """Buy seats in one row. Returns the purchase summary."""
        body: dict[str, Any] = {
            "sectionName": section_name,
            "rowName": row_name,
            "quantity": quantity,
        }
        if idempotency_key:
            body["idempotencyKey"] = idempotency_key
        return self._request("POST", f"/events/{event_id}/purchase", body)
