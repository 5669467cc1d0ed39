"""Google Slides API calls used to build a presentation."""

from __future__ import annotations

import logging
from typing import Any

import requests

from core.errors import UpstreamAPIError
from core.schemas import CreatedPresentation, PresentationBatchPlan
from core.slide_plan import DEFAULT_PLACEHOLDER_ID
from utils.http_tools import HttpClient, HttpResponse

logger = logging.getLogger(__name__)

SLIDES_API_BASE = "https://slides.googleapis.com/v1"
PRESENTATION_URL = "https://docs.google.com/presentation/d/{presentation_id}/edit"

_TITLE_PLACEHOLDER_TYPES = ("CENTERED_TITLE", "TITLE")


def presentation_url(presentation_id: str) -> str:
    return PRESENTATION_URL.format(presentation_id=presentation_id)


def find_title_placeholder(presentation: dict[str, Any]) -> str:
    """Object id of the first slide's title placeholder.

    Falls back to the id Google normally assigns when the response does not
    describe the first slide.
    """
    slides = presentation.get("slides") or []
    if not slides:
        return DEFAULT_PLACEHOLDER_ID

    for element in slides[0].get("pageElements") or []:
        placeholder = (element.get("shape") or {}).get("placeholder") or {}
        if placeholder.get("type") in _TITLE_PLACEHOLDER_TYPES and element.get("objectId"):
            return element["objectId"]
    return DEFAULT_PLACEHOLDER_ID


class SlidesClient:
    """Authenticated client for one user's Slides API calls."""

    def __init__(self, access_token: str, http: HttpClient):
        self.access_token = access_token
        self.http = http

    def _post(self, url: str, body: dict[str, Any]) -> HttpResponse:
        try:
            return self.http.send(
                "POST",
                url,
                headers={
                    "Authorization": f"Bearer {self.access_token}",
                    "Content-Type": "application/json",
                },
                json_body=body,
            )
        except requests.RequestException as e:
            logger.error("Slides API request to %s failed: %s", url, e)
            raise UpstreamAPIError(f"Slides API request failed: {e}") from e

    def create_presentation(self, title: str) -> CreatedPresentation:
        """Create an empty presentation.

        Raises:
            UpstreamAPIError: If the API answers with a non-2xx status or a
                body without a presentation id
        """
        response = self._post(f"{SLIDES_API_BASE}/presentations", {"title": title})
        if not response.ok:
            logger.error("Create presentation failed with HTTP %d", response.status_code)
            raise UpstreamAPIError(
                "Failed to create presentation",
                upstream_status=response.status_code,
                body=response.text,
            )

        try:
            payload = response.json()
            presentation_id = payload["presentationId"]
        except (ValueError, KeyError, TypeError) as e:
            raise UpstreamAPIError(
                "Create presentation returned no presentationId",
                upstream_status=response.status_code,
                body=response.text,
            ) from e

        logger.info("Created presentation %s", presentation_id)
        return CreatedPresentation(
            presentation_id=presentation_id,
            default_placeholder_id=find_title_placeholder(payload),
        )

    def apply_plan(self, presentation_id: str, plan: PresentationBatchPlan) -> None:
        """Send the plan as one batch update.

        Raises:
            UpstreamAPIError: If the API answers with a non-2xx status
        """
        url = f"{SLIDES_API_BASE}/presentations/{presentation_id}:batchUpdate"
        response = self._post(url, plan.to_batch_update())
        if not response.ok:
            logger.error(
                "Batch update of %s failed with HTTP %d",
                presentation_id,
                response.status_code,
            )
            raise UpstreamAPIError(
                "Failed to update presentation",
                upstream_status=response.status_code,
                body=response.text,
            )

        logger.info(
            "Applied %d operations to presentation %s",
            len(plan.operations),
            presentation_id,
        )
