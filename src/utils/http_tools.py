"""HTTP utilities for calling Google's OAuth and Slides endpoints."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

import requests

logger = logging.getLogger(__name__)


@dataclass
class HttpResponse:
    """Result from an outbound HTTP request."""

    status_code: int
    text: str
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Decode the body as JSON.

        Raises:
            ValueError: If the body is not valid JSON
        """
        return json.loads(self.text)


class HttpClient:
    """Thin wrapper over ``requests.Session`` returning plain HttpResponse values.

    Transport failures (DNS, connection reset, timeout) propagate as
    ``requests.RequestException``; HTTP error statuses are returned, not
    raised, so callers decide how to report them.
    """

    def __init__(self, timeout_s: float = 30, session: requests.Session | None = None):
        self.timeout_s = timeout_s
        self._session = session or requests.Session()

    def send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        data: dict[str, str] | None = None,
        json_body: Any = None,
    ) -> HttpResponse:
        """Send a single request.

        Args:
            method: HTTP method
            url: Absolute URL
            headers: Extra request headers
            data: Form fields, sent as application/x-www-form-urlencoded
            json_body: JSON-serialisable body, sent as application/json

        Returns:
            HttpResponse with status code, body text and headers
        """
        logger.debug("%s %s", method, url)
        response = self._session.request(
            method,
            url,
            headers=headers,
            data=data,
            json=json_body,
            timeout=self.timeout_s,
        )
        logger.debug("%s %s -> %d", method, url, response.status_code)
        return HttpResponse(
            status_code=response.status_code,
            text=response.text,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        self._session.close()
