"""Tests for the Slides client and the create-slides orchestration."""

import pytest

from backend.generation_service import GenerationService
from backend.slides_client import (
    SLIDES_API_BASE,
    SlidesClient,
    find_title_placeholder,
    presentation_url,
)
from core.errors import (
    EmptyContentError,
    InvalidRequestError,
    InvalidSplitterError,
    TooManySlidesError,
    UpstreamAPIError,
)
from core.schemas import ContentRequest
from core.splitter import MaxCharsSplitter, MaxWordsSplitter, NewLineSplitter

from conftest import UnreachableHttpClient, created_presentation_body


class TestSlidesClient:
    def test_create_presentation(self, fake_http):
        fake_http.queue(200, created_presentation_body("pres-1"))

        created = SlidesClient("access", fake_http).create_presentation("My deck")

        assert created.presentation_id == "pres-1"
        assert created.default_placeholder_id == "i0"
        request = fake_http.requests[0]
        assert request["url"] == f"{SLIDES_API_BASE}/presentations"
        assert request["headers"]["Authorization"] == "Bearer access"
        assert request["json"] == {"title": "My deck"}

    def test_create_presentation_error(self, fake_http):
        fake_http.queue(403, '{"error": {"code": 403, "status": "PERMISSION_DENIED"}}')

        with pytest.raises(UpstreamAPIError) as excinfo:
            SlidesClient("access", fake_http).create_presentation("Deck")

        assert excinfo.value.upstream_status == 403
        assert "PERMISSION_DENIED" in excinfo.value.body

    def test_create_presentation_without_id(self, fake_http):
        fake_http.queue(200, {"title": "Deck"})
        with pytest.raises(UpstreamAPIError):
            SlidesClient("access", fake_http).create_presentation("Deck")

    def test_apply_plan_error(self, fake_http):
        from core.slide_plan import build_plan

        fake_http.queue(400, '{"error": {"message": "Invalid requests[1]"}}')
        with pytest.raises(UpstreamAPIError) as excinfo:
            SlidesClient("access", fake_http).apply_plan("pres-1", build_plan(["a", "b"]))

        assert "Invalid requests[1]" in str(excinfo.value)
        assert fake_http.requests[0]["url"] == f"{SLIDES_API_BASE}/presentations/pres-1:batchUpdate"

    def test_connection_failure(self):
        with pytest.raises(UpstreamAPIError) as excinfo:
            SlidesClient("access", UnreachableHttpClient()).create_presentation("Deck")

        assert excinfo.value.upstream_status is None
        assert "Failed to establish a new connection" in str(excinfo.value)


class TestFindTitlePlaceholder:
    def test_reads_placeholder_from_response(self):
        body = {
            "slides": [
                {
                    "pageElements": [
                        {"objectId": "sub", "shape": {"placeholder": {"type": "SUBTITLE"}}},
                        {"objectId": "g123_title", "shape": {"placeholder": {"type": "CENTERED_TITLE"}}},
                    ]
                }
            ]
        }
        assert find_title_placeholder(body) == "g123_title"

    @pytest.mark.parametrize(
        "body",
        [{}, {"slides": []}, {"slides": [{}]}, {"slides": [{"pageElements": [{"objectId": "x"}]}]}],
    )
    def test_falls_back_to_default(self, body):
        assert find_title_placeholder(body) == "i0"


class TestGenerationService:
    def test_create_slides_from_text(self, token, fake_http):
        fake_http.queue(200, created_presentation_body("pres-42"))
        fake_http.queue(200, {"presentationId": "pres-42", "replies": [{}, {}, {}]})
        request = ContentRequest(title="Talk", content="one\ntwo\nthree", splitter=NewLineSplitter())

        presentation_id = GenerationService(max_slides=100).create_slides_from_text(
            token, request, fake_http
        )

        assert presentation_id == "pres-42"
        assert len(fake_http.requests) == 2
        batch = fake_http.requests[1]["json"]["requests"]
        assert [next(iter(r)) for r in batch] == [
            "insertText",
            "createSlide",
            "insertText",
            "createSlide",
            "insertText",
        ]
        assert [r["insertText"]["text"] for r in batch if "insertText" in r] == [
            "one",
            "two",
            "three",
        ]

    @pytest.mark.parametrize(
        "title, content, error",
        [
            ("", "text", InvalidRequestError),
            ("x" * 101, "text", InvalidRequestError),
            ("Title", "", InvalidRequestError),
            ("Title", " \n\n \n", EmptyContentError),
        ],
    )
    def test_rejected_before_any_request(self, token, fake_http, title, content, error):
        request = ContentRequest(title=title, content=content)
        with pytest.raises(error):
            GenerationService(max_slides=100).create_slides_from_text(token, request, fake_http)
        assert fake_http.requests == []

    def test_title_length_counts_codepoints(self):
        GenerationService(max_slides=100).split_content(
            ContentRequest(title="日" * 100, content="text")
        )

    def test_zero_limit_splitter(self, token, fake_http):
        request = ContentRequest(title="T", content="words", splitter=MaxWordsSplitter(max_words=0))
        with pytest.raises(InvalidSplitterError):
            GenerationService(max_slides=100).create_slides_from_text(token, request, fake_http)
        assert fake_http.requests == []

    def test_too_many_slides(self, token, fake_http):
        request = ContentRequest(title="T", content="a" * 101, splitter=MaxCharsSplitter(max_chars=1))
        with pytest.raises(TooManySlidesError):
            GenerationService(max_slides=100).create_slides_from_text(token, request, fake_http)
        assert fake_http.requests == []

    def test_exactly_max_slides_is_allowed(self):
        request = ContentRequest(title="T", content="a" * 100, splitter=MaxCharsSplitter(max_chars=1))
        assert len(GenerationService(max_slides=100).split_content(request)) == 100

    def test_failed_batch_update_leaves_presentation(self, token, fake_http):
        fake_http.queue(200, created_presentation_body("pres-7"))
        fake_http.queue(500, "backend error")
        request = ContentRequest(title="T", content="a\nb")

        with pytest.raises(UpstreamAPIError):
            GenerationService(max_slides=100).create_slides_from_text(token, request, fake_http)

        # no delete call is issued
        assert [r["url"] for r in fake_http.requests] == [
            f"{SLIDES_API_BASE}/presentations",
            f"{SLIDES_API_BASE}/presentations/pres-7:batchUpdate",
        ]


def test_presentation_url():
    assert presentation_url("abc") == "https://docs.google.com/presentation/d/abc/edit"
