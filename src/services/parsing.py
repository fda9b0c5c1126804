"""Defensive parsing of Gemini output into validated recipe data.

Pipeline used by the recipe and ingredient services:

1. parse_candidate() / extract_response_text(): validate the response envelope
   at the boundary and pull the first candidate's text
2. recover_json_object(): cut the outermost {...} out of prose or code fences
3. parse_recipe_json(): recover + json.loads
4. validate_recipe(): presence check of the required recipe fields

Every step raises a RecipeServiceError subclass; nothing returns None.
"""

import json
from typing import Any, Optional

from src.models.models import REQUIRED_RECIPE_FIELDS, ParsedCandidate
from src.utils.errors import (
    EmptyResponseError,
    IncompleteRecipeError,
    MalformedJsonError,
    NoJsonFoundError,
    SafetyBlockedError,
)
from src.utils.logger import logger

# Finish reasons that mean the candidate was withheld on content-safety grounds
SAFETY_FINISH_REASONS = frozenset({"SAFETY", "PROHIBITED_CONTENT", "BLOCKLIST", "SPII", "IMAGE_SAFETY"})

DEFAULT_BLOCKED_MESSAGE = "The request was blocked for safety reasons. Please try different input."
DEFAULT_EMPTY_MESSAGE = "The AI failed to provide a response."


def _field(obj: Any, name: str) -> Any:
    """Read a field from an SDK object or a plain dict, None when absent."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _enum_name(value: Any) -> Optional[str]:
    if value is None:
        return None
    name = getattr(value, "name", None)
    if isinstance(name, str):
        return name
    return str(value)


def _dump_ratings(ratings: Any) -> list[dict[str, Any]]:
    if not isinstance(ratings, (list, tuple)):
        return []
    dumped = []
    for rating in ratings:
        if hasattr(rating, "model_dump"):
            dumped.append(rating.model_dump(mode="json", exclude_none=True))
        elif isinstance(rating, dict):
            dumped.append(dict(rating))
        else:
            dumped.append({"value": str(rating)})
    return dumped


def parse_candidate(
    response: Any,
    blocked_message: str = DEFAULT_BLOCKED_MESSAGE,
    empty_message: str = DEFAULT_EMPTY_MESSAGE,
) -> ParsedCandidate:
    """Validate a model response envelope and return its first candidate.

    Check order:
    1. No candidates: SafetyBlockedError if the prompt itself was blocked
       (prompt_feedback.block_reason), otherwise EmptyResponseError.
    2. First candidate finished for a safety reason: SafetyBlockedError with
       the safety ratings, whether or not it still carries content parts.
    3. First candidate has no parts or the first part has no text:
       EmptyResponseError.

    Args:
        response: google.genai GenerateContentResponse or an equivalent dict.
        blocked_message: User-safe message for safety blocks.
        empty_message: User-safe message for empty responses.

    Returns:
        ParsedCandidate whose text is the first part's text, untrimmed.
    """
    candidates = _field(response, "candidates")
    if not isinstance(candidates, (list, tuple)) or not candidates:
        feedback = _field(response, "prompt_feedback")
        block_reason = _enum_name(_field(feedback, "block_reason"))
        if block_reason and block_reason != "BLOCKED_REASON_UNSPECIFIED":
            ratings = _dump_ratings(_field(feedback, "safety_ratings"))
            logger.warning(f"Prompt blocked by model ({block_reason}). Safety ratings: {ratings}")
            raise SafetyBlockedError(
                blocked_message,
                details={"blockReason": block_reason, "safetyRatings": ratings},
            )
        raise EmptyResponseError(
            empty_message,
            details={"reason": "No content returned from model."},
            diagnostics={"response": repr(response)},
        )

    first = candidates[0]
    finish_reason = _enum_name(_field(first, "finish_reason"))
    ratings = _dump_ratings(_field(first, "safety_ratings"))

    if finish_reason in SAFETY_FINISH_REASONS:
        logger.warning(f"Response blocked for safety reasons ({finish_reason}). Safety ratings: {ratings}")
        raise SafetyBlockedError(
            blocked_message,
            details={"finishReason": finish_reason, "safetyRatings": ratings},
        )

    parts = _field(_field(first, "content"), "parts")
    if not isinstance(parts, (list, tuple)) or not parts:
        raise EmptyResponseError(
            empty_message,
            details={"reason": "No content returned from model.", "finishReason": finish_reason},
            diagnostics={"response": repr(response)},
        )

    text = _field(parts[0], "text")
    if not isinstance(text, str):
        raise EmptyResponseError(
            empty_message,
            details={"reason": "First content part has no text.", "finishReason": finish_reason},
            diagnostics={"response": repr(response)},
        )

    return ParsedCandidate(text=text, finish_reason=finish_reason, safety_ratings=ratings)


def extract_response_text(response: Any, **messages: str) -> str:
    """Return the first candidate's text; see parse_candidate() for failures."""
    return parse_candidate(response, **messages).text


def recover_json_object(raw: str) -> str:
    """Return the substring from the first '{' to the last '}' inclusive.

    Tolerates prose and code fences around the object. Brace balance is not
    checked; a malformed bounded string is left for the JSON parser to reject.

    Raises:
        NoJsonFoundError: No '{', no '}', or the last '}' precedes the first '{'.
    """
    start = raw.find("{") if isinstance(raw, str) else -1
    end = raw.rfind("}") if isinstance(raw, str) else -1

    if start == -1 or end == -1 or end <= start:
        raise NoJsonFoundError(
            "Failed to parse the recipe from the AI's response. The AI returned a non-JSON response.",
            diagnostics={"rawResponse": raw},
        )

    return raw[start : end + 1]


def parse_recipe_json(raw: str) -> dict[str, Any]:
    """Recover the JSON object from raw model text and decode it.

    Raises:
        NoJsonFoundError: See recover_json_object().
        MalformedJsonError: The recovered substring is not valid JSON. The
            substring is kept in diagnostics only.
    """
    json_string = recover_json_object(raw)
    try:
        return json.loads(json_string)
    except json.JSONDecodeError as e:
        raise MalformedJsonError(
            "There was an issue parsing the generated recipe. Please try again.",
            details={"parseError": str(e)},
            diagnostics={"jsonString": json_string},
        ) from e


def validate_recipe(obj: Any) -> dict[str, Any]:
    """Check that every required recipe field is present.

    Presence only: value types and shapes are not inspected. Stops at the
    first missing field in REQUIRED_RECIPE_FIELDS order.

    Raises:
        IncompleteRecipeError: Naming the first missing field.
    """
    if not isinstance(obj, dict):
        raise IncompleteRecipeError(REQUIRED_RECIPE_FIELDS[0], diagnostics={"recipe": obj})

    for field in REQUIRED_RECIPE_FIELDS:
        if field not in obj:
            raise IncompleteRecipeError(field, diagnostics={"recipe": obj})

    return obj
