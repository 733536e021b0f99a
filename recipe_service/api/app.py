"""FastAPI application factory.

Maps service exceptions onto the ApiResponse envelope. Raw model output and
internal error details are logged, never returned to the client.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from recipe_service.api.routes import router as recipes_router, send_response
from recipe_service.utils.config import config
from recipe_service.utils.errors import (
    DuplicateRecipeError,
    GenerationFailedError,
    InvalidIngredientsError,
    InvalidRecipeTokenError,
)
from recipe_service.utils.logger import logger


async def invalid_ingredients_handler(request: Request, exc: InvalidIngredientsError) -> JSONResponse:
    return send_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def generation_failed_handler(request: Request, exc: GenerationFailedError) -> JSONResponse:
    logger.error(f"Recipe generation failed: {exc}", extra={"request_path": request.url.path})
    return send_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Recipe generation failed, please try again later")


async def invalid_token_handler(request: Request, exc: InvalidRecipeTokenError) -> JSONResponse:
    code = status.HTTP_400_BAD_REQUEST if exc.missing else status.HTTP_401_UNAUTHORIZED
    return send_response(code, str(exc))


async def duplicate_recipe_handler(request: Request, exc: DuplicateRecipeError) -> JSONResponse:
    return send_response(status.HTTP_409_CONFLICT, str(exc))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = sorted({".".join(str(part) for part in err["loc"] if part != "body") for err in exc.errors()})
    return send_response(status.HTTP_400_BAD_REQUEST, f"Invalid request fields: {', '.join(fields)}")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.url.path}: {exc}", extra={"request_path": request.url.path})
    return send_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app() -> FastAPI:
    """Build the FastAPI application with routes, CORS and error handlers."""
    app = FastAPI(
        title="AI Recipe Service",
        version="0.1.0",
        description="Generates, signs and saves AI-created recipes from user ingredients",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(InvalidIngredientsError, invalid_ingredients_handler)
    app.add_exception_handler(GenerationFailedError, generation_failed_handler)
    app.add_exception_handler(InvalidRecipeTokenError, invalid_token_handler)
    app.add_exception_handler(DuplicateRecipeError, duplicate_recipe_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(recipes_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
