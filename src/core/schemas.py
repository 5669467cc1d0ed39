"""Pydantic models shared by the OAuth flow, session store and slide builder."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from core.errors import InvalidRequestError
from core.splitter import NewLineSplitter, Splitter

MAX_TITLE_LENGTH = 100


# ============================================================================
# OAuth Models
# ============================================================================


class Token(BaseModel):
    """OAuth 2.0 token returned by Google's token endpoint.

    ``created_at`` is not part of the provider response; it is stamped locally
    when the code is exchanged.
    """

    model_config = ConfigDict(frozen=True)

    access_token: str
    refresh_token: str = ""
    expires_in: int = 0
    token_type: str = "Bearer"
    scope: str = ""
    created_at: int = 0


class AuthorizationState(BaseModel):
    """Secrets issued when an authorization flow starts.

    ``state`` and ``verifier`` must come back unmodified on the callback; the
    server keeps no copy of them.
    """

    authorization_url: str
    state: str
    verifier: str


# ============================================================================
# Content Request
# ============================================================================


class ContentRequest(BaseModel):
    """Text to turn into a presentation, and how to chunk it."""

    title: str
    content: str
    splitter: Splitter = Field(default_factory=NewLineSplitter)

    def ensure_valid(self) -> None:
        """Check title and content before anything is sent upstream.

        Raises:
            InvalidRequestError: If the title is empty or longer than 100
                characters, or the content is empty
        """
        if not self.title:
            raise InvalidRequestError("Title must not be empty")
        if len(self.title) > MAX_TITLE_LENGTH:
            raise InvalidRequestError(
                f"Title must be at most {MAX_TITLE_LENGTH} characters, "
                f"got {len(self.title)}"
            )
        if not self.content:
            raise InvalidRequestError("Content must not be empty")


# ============================================================================
# Batch Plan Models
# ============================================================================


class CreateSlideOp(BaseModel):
    """Create a slide and name its body placeholder."""

    kind: Literal["create_slide"] = "create_slide"
    object_id: str
    insertion_index: int = Field(ge=0)
    layout: str = "TITLE_AND_BODY"
    placeholder_id: str

    def to_request(self) -> dict[str, Any]:
        return {
            "createSlide": {
                "objectId": self.object_id,
                "insertionIndex": self.insertion_index,
                "slideLayoutReference": {"predefinedLayout": self.layout},
                "placeholderIdMappings": [
                    {
                        "layoutPlaceholder": {"type": "BODY", "index": 0},
                        "objectId": self.placeholder_id,
                    }
                ],
            }
        }


class InsertTextOp(BaseModel):
    """Insert a chunk of text into a placeholder shape."""

    kind: Literal["insert_text"] = "insert_text"
    object_id: str
    insertion_index: int = 0
    text: str

    def to_request(self) -> dict[str, Any]:
        return {
            "insertText": {
                "objectId": self.object_id,
                "insertionIndex": self.insertion_index,
                "text": self.text,
            }
        }


BatchOperation = Annotated[
    Union[CreateSlideOp, InsertTextOp], Field(discriminator="kind")
]


class PresentationBatchPlan(BaseModel):
    """Ordered mutations sent to the Slides API as a single batch update."""

    operations: list[BatchOperation] = Field(default_factory=list)

    @property
    def create_slide_ops(self) -> list[CreateSlideOp]:
        return [op for op in self.operations if isinstance(op, CreateSlideOp)]

    @property
    def insert_text_ops(self) -> list[InsertTextOp]:
        return [op for op in self.operations if isinstance(op, InsertTextOp)]

    def to_batch_update(self) -> dict[str, Any]:
        """Body of a ``presentations.batchUpdate`` call."""
        return {"requests": [op.to_request() for op in self.operations]}


class CreatedPresentation(BaseModel):
    """What the create-presentation call tells us about the new deck."""

    presentation_id: str
    default_placeholder_id: str
