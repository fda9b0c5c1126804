"""Data models and schemas for Pantry Chef.

Defines Pydantic models for the callable request/response envelopes and for
the validated view of a Gemini response candidate. Recipes themselves stay
plain dicts: they are validated for field presence only (see
src/services/parsing.py), so a typed model would reject records the cache
has to accept.
"""

from typing import Any, Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field

# Fixed order in which recipe fields are checked
REQUIRED_RECIPE_FIELDS = ("title", "desc", "used", "needs", "instr", "tags", "search_keys")

Recipe = dict[str, Any]


class CallableRequest(BaseModel):
    """Request envelope of the callable protocol: `{"data": {...}}`.

    The payload is left untyped on purpose. Argument checks belong to the
    services so that a bad payload yields an invalid-argument error instead of
    a framework validation error.
    """

    model_config = ConfigDict(extra="ignore")

    data: Annotated[Optional[Any], Field(None, description="Function arguments (image or ingredients)")]


class IngredientsFromImageResult(BaseModel):
    """Result of getIngredientsFromImage: the model's unsplit ingredient text."""

    ingredients: Annotated[str, Field(description="Comma-separated ingredient text exactly as returned by the model")]


class CallableErrorBody(BaseModel):
    """Error body of the callable protocol."""

    status: Annotated[str, Field(description="Canonical status, e.g. INVALID_ARGUMENT")]
    code: Annotated[str, Field(description="Callable code: invalid-argument, permission-denied or internal")]
    message: Annotated[str, Field(description="User-safe message")]
    details: Annotated[Optional[Any], Field(None, description="Diagnostic payload, never needed for control flow")]


class CallableErrorResponse(BaseModel):
    error: CallableErrorBody


class ParsedCandidate(BaseModel):
    """First candidate of a model response after boundary validation.

    `text` is only set when the candidate is neither empty nor safety blocked.
    """

    text: Annotated[Optional[str], Field(None, description="First content part's text, verbatim")]
    finish_reason: Annotated[Optional[str], Field(None, description="Finish reason name, e.g. STOP or SAFETY")]
    safety_ratings: Annotated[
        list[dict[str, Any]], Field(default_factory=list, description="Safety classification detail")
    ]
