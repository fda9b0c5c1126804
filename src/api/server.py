"""HTTP surface speaking the callable protocol used by the browser client.

Endpoints:
- POST /getIngredientsFromImage  {"data": {"image": "<base64>"}} -> {"result": {"ingredients": "..."}}
- POST /generateRecipe           {"data": {"ingredients": [...]}} -> {"result": {<recipe>}}
- GET  /health

Errors are returned as {"error": {"status", "code", "message", "details"}} with
HTTP 400 (invalid-argument), 403 (permission-denied) or 500 (internal).
Diagnostics attached to errors are logged by the services and never sent.
Any other exception is logged here and returned as an internal error.
"""

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.models.models import (
    CallableErrorBody,
    CallableErrorResponse,
    CallableRequest,
    IngredientsFromImageResult,
)
from src.services.ingredients import IngredientExtractionService
from src.services.recipes import RecipeService
from src.utils.errors import InternalError, InvalidArgumentError, RecipeServiceError
from src.utils.logger import logger

HTTP_STATUS_BY_CODE = {
    "invalid-argument": 400,
    "permission-denied": 403,
    "internal": 500,
}


def error_response(error: RecipeServiceError) -> JSONResponse:
    """Serialize a service error into the callable error envelope."""
    body = CallableErrorResponse(
        error=CallableErrorBody(
            status=error.code.upper().replace("-", "_"),
            code=error.code,
            message=error.message,
            details=error.details,
        )
    )
    return JSONResponse(
        status_code=HTTP_STATUS_BY_CODE.get(error.code, 500),
        content=jsonable_encoder(body),
    )


def _arguments(payload: Optional[CallableRequest]) -> dict[str, Any]:
    if payload is None or not isinstance(payload.data, dict):
        return {}
    return payload.data


def create_app(
    recipe_service: RecipeService,
    ingredient_service: IngredientExtractionService,
) -> FastAPI:
    """Build the FastAPI application around already-constructed services."""
    app = FastAPI(title="Pantry Chef", version="1.0.0")

    @app.exception_handler(RecipeServiceError)
    async def handle_service_error(request: Request, exc: RecipeServiceError) -> JSONResponse:
        logger.info(f"{request.url.path} failed with {exc.code}: {exc.message}")
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return error_response(
            InvalidArgumentError(
                'The request body must be a JSON object with a "data" field.',
                details={"errors": [error.get("msg") for error in exc.errors()]},
            )
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"{request.url.path} raised an unexpected error: {exc}", exc_info=exc)
        return error_response(
            InternalError(
                "An unexpected error occurred.",
                details={"originalError": str(exc)},
            )
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/getIngredientsFromImage")
    async def get_ingredients_from_image(payload: Optional[CallableRequest] = None) -> dict[str, Any]:
        text = await ingredient_service.extract_from_image(_arguments(payload).get("image"))
        return {"result": IngredientsFromImageResult(ingredients=text).model_dump()}

    @app.post("/generateRecipe")
    async def generate_recipe(payload: Optional[CallableRequest] = None) -> dict[str, Any]:
        recipe = await recipe_service.get_or_generate(_arguments(payload).get("ingredients"))
        return {"result": jsonable_encoder(recipe)}

    return app
