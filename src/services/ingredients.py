"""Ingredient extraction from images using the Gemini vision model.

IngredientExtractionService.extract_from_image():
1. Rejects a missing or empty image argument
2. Decodes plain base64 or a data URL (data:image/jpeg;base64,...)
3. Enforces MAX_IMAGE_SIZE_MB on the decoded bytes
4. Sends the fixed instruction prompt plus the inline image (image/jpeg)
5. Returns the first candidate's text unsplit

Splitting the text into a list is left to the caller. Results are not cached.
"""

import base64
import binascii
from typing import Any

from google.genai import types

from src.prompts.prompts import INGREDIENT_EXTRACTION_PROMPT
from src.services.gemini import GeminiModel
from src.services.parsing import extract_response_text
from src.utils.errors import InternalError, InvalidArgumentError, RecipeServiceError
from src.utils.logger import logger

IMAGE_MIME_TYPE = "image/jpeg"


def decode_image(image: Any) -> bytes:
    """Decode a base64 string or data URL into image bytes.

    Raises:
        InvalidArgumentError: Missing, empty, non-string or undecodable input.
    """
    if not isinstance(image, str) or not image.strip():
        raise InvalidArgumentError(
            'The function must be called with an "image" argument containing a base64 encoded image.'
        )

    encoded = image.strip()
    if encoded.startswith("data:"):
        _, _, encoded = encoded.partition(",")
    # MIME encoders wrap base64 at 76 columns
    encoded = "".join(encoded.split())

    try:
        image_bytes = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidArgumentError(
            'The "image" argument is not valid base64 data.',
            details={"originalError": str(e)},
        ) from e

    if not image_bytes:
        raise InvalidArgumentError('The "image" argument decoded to an empty image.')
    return image_bytes


def validate_image_size(image_bytes: bytes, max_size_mb: int) -> None:
    """Raise InvalidArgumentError if the decoded image exceeds max_size_mb."""
    size_mb = len(image_bytes) / (1024 * 1024)
    if size_mb > max_size_mb:
        logger.warning(f"Image size {size_mb:.2f}MB exceeds limit of {max_size_mb}MB")
        raise InvalidArgumentError(
            f"Image too large. Maximum size is {max_size_mb}MB.",
            details={"sizeMb": round(size_mb, 2), "maxSizeMb": max_size_mb},
        )


class IngredientExtractionService:
    """Image in, unsplit ingredient text out."""

    def __init__(self, model: GeminiModel, max_image_size_mb: int = 5) -> None:
        self.model = model
        self.max_image_size_mb = max_image_size_mb

    async def extract_from_image(self, image: Any) -> str:
        """List the ingredients visible in an image.

        Args:
            image: Base64-encoded JPEG, plain or as a data URL.

        Returns:
            The model's comma-separated ingredient text, verbatim.

        Raises:
            InvalidArgumentError: Missing, undecodable or oversized image.
            SafetyBlockedError: The model refused the image; details carry the safety ratings.
            EmptyResponseError: The model returned no usable content.
            InternalError: The model call failed unexpectedly.
        """
        image_bytes = decode_image(image)
        validate_image_size(image_bytes, self.max_image_size_mb)

        try:
            response = await self.model.generate(
                [
                    INGREDIENT_EXTRACTION_PROMPT,
                    types.Part.from_bytes(data=image_bytes, mime_type=IMAGE_MIME_TYPE),
                ]
            )
            text = extract_response_text(
                response,
                blocked_message="The image was blocked for safety reasons. Please use a different image.",
                empty_message="The AI failed to provide a response for the image.",
            )
        except RecipeServiceError as e:
            logger.error(
                f"Ingredient extraction failed: {e.message}. Diagnostics: {e.diagnostics}",
                extra={"error_kind": e.kind.value},
            )
            raise
        except Exception as e:
            logger.error(f"Error from Gemini (vision): {e}", exc_info=True, extra={"error_kind": "internal"})
            raise InternalError(
                "An unexpected error occurred while processing the image. Please check the logs.",
                details={"originalError": str(e)},
            ) from e

        logger.info(f"Ingredients extracted from image ({len(image_bytes) / 1024:.1f} KB)")
        return text
