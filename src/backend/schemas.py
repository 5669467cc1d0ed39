"""Pydantic schemas for the web API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class CreateSlidesResponse(BaseModel):
    """Response for a successful slide creation."""

    presentation_id: str
    presentation_url: str
    message: str = "Slides created successfully"


class ErrorResponse(BaseModel):
    """Body returned for any failed request."""

    error: str
    message: str


class SplitterInfo(BaseModel):
    """Item in the splitter catalogue."""

    type: str
    name: str
    description: str
    config: dict[str, Any] | None = None


class SplitterListResponse(BaseModel):
    splitters: list[SplitterInfo]
