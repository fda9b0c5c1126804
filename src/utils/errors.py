"""Error types for the recipe and ingredient services.

Every failure surfaced to a caller is a RecipeServiceError tagged with an
ErrorKind. Subclasses exist per kind so callers can either catch a specific
class or match on `.kind`.

- message: generic, user-safe text
- details: optional payload that may be returned to the caller (safety ratings,
  missing field name, original error text)
- diagnostics: server-side only (raw model output, offending JSON); logged,
  never serialized into a response
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    INVALID_ARGUMENT = "invalid_argument"
    SAFETY_BLOCKED = "safety_blocked"
    EMPTY_RESPONSE = "empty_response"
    NO_JSON_FOUND = "no_json_found"
    MALFORMED_JSON = "malformed_json"
    INCOMPLETE_RECIPE = "incomplete_recipe"
    INTERNAL = "internal"


# Callable error codes understood by the browser client
_CALLABLE_CODES = {
    ErrorKind.INVALID_ARGUMENT: "invalid-argument",
    ErrorKind.SAFETY_BLOCKED: "permission-denied",
}


class RecipeServiceError(Exception):
    """Base error carrying a kind tag, a user-safe message and optional detail."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        diagnostics: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        self.diagnostics = diagnostics

    @property
    def code(self) -> str:
        """Machine-readable callable code: invalid-argument, permission-denied or internal."""
        return _CALLABLE_CODES.get(self.kind, "internal")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class InvalidArgumentError(RecipeServiceError):
    kind = ErrorKind.INVALID_ARGUMENT


class SafetyBlockedError(RecipeServiceError):
    kind = ErrorKind.SAFETY_BLOCKED


class EmptyResponseError(RecipeServiceError):
    kind = ErrorKind.EMPTY_RESPONSE


class NoJsonFoundError(RecipeServiceError):
    kind = ErrorKind.NO_JSON_FOUND


class MalformedJsonError(RecipeServiceError):
    kind = ErrorKind.MALFORMED_JSON


class IncompleteRecipeError(RecipeServiceError):
    """Parsed recipe lacks a required field; `missing_field` names it."""

    kind = ErrorKind.INCOMPLETE_RECIPE

    def __init__(self, missing_field: str, diagnostics: Optional[dict[str, Any]] = None) -> None:
        super().__init__(
            f"The generated recipe was incomplete and missed the '{missing_field}' field.",
            details={"missingField": missing_field},
            diagnostics=diagnostics,
        )
        self.missing_field = missing_field


class InternalError(RecipeServiceError):
    kind = ErrorKind.INTERNAL
