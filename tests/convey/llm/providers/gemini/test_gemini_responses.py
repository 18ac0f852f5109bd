"""Unit tests for Gemini response translation."""

import pytest

from convey.llm.context import ContextItem, StructType, make_typed_struct
from convey.llm.errors import MalformedResponseError
from convey.llm.providers.gemini.messages import to_provider_messages
from convey.llm.providers.gemini.models import DEFAULT_ROLE_MAPPING
from convey.llm.providers.gemini.responses import translate_response


class TestTranslateResponse:
    """Tests for translate_response."""

    def test_single_candidate(self):
        """One candidate yields one assistant-response item."""
        result = translate_response(
            {"candidates": [{"content": {"parts": [{"text": "hello"}]}}]}
        )
        assert result.failed is False
        assert result.items == [
            ContextItem(type="assistant-response", content="hello")
        ]

    def test_error(self):
        """An error object yields one error item on the failure path."""
        result = translate_response(
            {"error": {"message": "bad key", "code": 403, "status": "PERMISSION_DENIED"}}
        )
        assert result.failed is True
        assert len(result.items) == 1
        item = result.items[0]
        assert item.type == "error"
        assert item.content == "bad key"
        assert item.properties == {"code": 403, "status": "PERMISSION_DENIED"}

    def test_candidate_order(self):
        """Items follow the order of candidates."""
        result = translate_response(
            {
                "candidates": [
                    {"content": {"parts": [{"text": "one"}]}},
                    {"content": {"parts": [{"text": "two"}]}},
                ]
            }
        )
        assert [i.content for i in result.items] == ["one", "two"]

    def test_parts_as_object(self):
        """A single parts object is treated as a one-element list."""
        result = translate_response(
            {"candidates": [{"content": {"parts": {"text": "solo"}}}]}
        )
        assert result.items[0].content == "solo"

    def test_first_part_only(self):
        """Only the first part's text is used."""
        result = translate_response(
            {"candidates": [{"content": {"parts": [{"text": "a"}, {"text": "b"}]}}]}
        )
        assert result.items[0].content == "a"

    def test_finish_reason_kept(self):
        """finishReason is exposed as a property."""
        result = translate_response(
            {
                "candidates": [
                    {"content": {"parts": [{"text": "x"}]}, "finishReason": "STOP"}
                ]
            }
        )
        assert result.items[0].properties == {"finish_reason": "STOP"}

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"candidates": []},
            {"candidates": [{}]},
            {"candidates": [{"content": {"parts": []}}]},
            {"candidates": [{"content": {"parts": [{}]}}]},
            {"candidates": [{"content": {"parts": [{"text": None}]}}]},
            {"candidates": [{"finishReason": "SAFETY"}]},
            {"promptFeedback": {"blockReason": "SAFETY"}},
            ["not", "an", "object"],
        ],
    )
    def test_malformed(self, data):
        """Missing candidates, parts or text are hard failures."""
        with pytest.raises(MalformedResponseError):
            translate_response(data)

    def test_empty_text_is_valid(self):
        """An empty but present text is returned as-is."""
        result = translate_response(
            {"candidates": [{"content": {"parts": [{"text": ""}]}}]}
        )
        assert result.items[0].content == ""


class TestRoundTrip:
    """Translating to a provider message and back keeps the text."""

    @pytest.mark.parametrize(
        "text",
        ["hello", "", "multi\nline\n", "unicode: café ✓ 日本語", '{"json": true}'],
    )
    def test_text_preserved(self, text):
        """The text survives the round trip exactly."""
        item = make_typed_struct(text, StructType.ASSISTANT)
        message = to_provider_messages([item], DEFAULT_ROLE_MAPPING)[0]
        result = translate_response({"candidates": [{"content": message}]})
        assert result.items[0].content == text
