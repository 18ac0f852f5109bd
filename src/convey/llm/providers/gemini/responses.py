"""Translate Gemini generateContent responses into context items."""

from dataclasses import dataclass
from typing import Any, List, Mapping

from convey.llm.context import ContextItem, StructType, make_typed_struct
from convey.llm.errors import MalformedResponseError


@dataclass(frozen=True)
class Translation:
    """Context items produced from one response, and which path they take."""

    items: List[ContextItem]
    failed: bool = False


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def candidate_text(candidate: Any, index: int = 0) -> str:
    """
    Extract the text of the first part of a candidate.

    "parts" may be a single object or a list.

    Raises:
        MalformedResponseError: If content, parts or text are missing
    """
    if not isinstance(candidate, Mapping):
        raise MalformedResponseError(f"Candidate {index} is not an object")

    content = candidate.get("content")
    if not isinstance(content, Mapping):
        reason = candidate.get("finishReason", "unknown")
        raise MalformedResponseError(
            f"Candidate {index} has no content (finish reason: {reason})"
        )

    parts = _as_list(content.get("parts"))
    if not parts:
        raise MalformedResponseError(f"Candidate {index} has no parts")

    first = parts[0]
    text = first.get("text") if isinstance(first, Mapping) else None
    if not isinstance(text, str):
        raise MalformedResponseError(f"Candidate {index} has no text part")
    return text


def error_item(message: str, code: Any = None, status: Any = None) -> ContextItem:
    """Build an error-tagged context item."""
    return make_typed_struct(
        message, StructType.ERROR, {"code": code, "status": status}
    )


def translate_response(data: Any) -> Translation:
    """
    Translate a decoded generateContent response.

    An "error" object yields one error item on the failure path; otherwise
    every candidate yields one assistant-response item, in order.

    Args:
        data: Decoded JSON response

    Returns:
        Translation

    Raises:
        MalformedResponseError: If the response has neither an error nor
            readable candidates
    """
    if not isinstance(data, Mapping):
        raise MalformedResponseError("Response is not a JSON object")

    error = data.get("error")
    if error is not None:
        if not isinstance(error, Mapping):
            return Translation(items=[error_item(str(error))], failed=True)
        return Translation(
            items=[
                error_item(
                    str(error.get("message", "Unknown error")),
                    error.get("code"),
                    error.get("status"),
                )
            ],
            failed=True,
        )

    candidates = _as_list(data.get("candidates"))
    if not candidates:
        feedback = data.get("promptFeedback") or {}
        reason = feedback.get("blockReason") if isinstance(feedback, Mapping) else None
        if reason:
            raise MalformedResponseError(f"Prompt was blocked: {reason}")
        raise MalformedResponseError("Response has no candidates")

    items = []
    for index, candidate in enumerate(candidates):
        text = candidate_text(candidate, index)
        extra = {}
        if candidate.get("finishReason") is not None:
            extra["finish_reason"] = candidate["finishReason"]
        items.append(make_typed_struct(text, StructType.ASSISTANT_RESPONSE, extra))
    return Translation(items=items)
