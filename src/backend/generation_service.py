"""Turns a content request into a populated Google Slides presentation."""

from __future__ import annotations

import logging

from backend.slides_client import SlidesClient
from core.config import get_max_slides
from core.errors import EmptyContentError, TooManySlidesError
from core.schemas import ContentRequest, Token
from core.slide_plan import build_plan
from utils.http_tools import HttpClient

logger = logging.getLogger(__name__)


class GenerationService:
    """Runs the split, create and batch-update steps for one request."""

    def __init__(self, max_slides: int | None = None):
        self.max_slides = max_slides if max_slides is not None else get_max_slides()

    def split_content(self, request: ContentRequest) -> list[str]:
        """Validate the request and split its content into slide chunks.

        Raises:
            InvalidRequestError: If the title or content is invalid
            InvalidSplitterError: If the splitter limit is zero
            EmptyContentError: If the content yields no chunks
            TooManySlidesError: If the content yields more chunks than allowed
        """
        request.ensure_valid()
        chunks = request.splitter.split(request.content)

        if not chunks:
            raise EmptyContentError("Content produced no slides")
        if len(chunks) > self.max_slides:
            raise TooManySlidesError(
                f"Content produced {len(chunks)} slides, "
                f"the maximum is {self.max_slides}"
            )
        return chunks

    def create_slides_from_text(
        self,
        token: Token,
        request: ContentRequest,
        http: HttpClient,
    ) -> str:
        """Create a presentation with one slide per chunk.

        Nothing is sent upstream until the request has been validated and
        split. If the batch update fails, the already created presentation is
        left in place.

        Args:
            token: The user's OAuth token
            request: Title, content and splitter
            http: Outbound HTTP client

        Returns:
            The new presentation's id
        """
        chunks = self.split_content(request)
        logger.info(
            "Creating presentation with %d slides using %s splitter",
            len(chunks),
            request.splitter.type,
        )

        client = SlidesClient(token.access_token, http)
        created = client.create_presentation(request.title)
        plan = build_plan(chunks, first_placeholder_id=created.default_placeholder_id)
        client.apply_plan(created.presentation_id, plan)

        return created.presentation_id


# Global generation service instance
generation_service = GenerationService()
