from __future__ import annotations  # FastAPI server exposing the interview chat gateway

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes import error_response, router
from config import Settings
from observability import configure_logging


logger = logging.getLogger(__name__)


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:  # Map body errors to 400
    message = _describe(exc.errors(), request.url.path)
    logger.info("Rejected %s request: %s", request.url.path, message)
    return error_response(400, message)


def _describe(errors: list, path: str) -> str:
    locations = [[str(part) for part in error.get("loc", ()) if part != "body"] for error in errors]
    if not errors or any(not loc or loc == ["messages"] for loc in locations):
        if path.endswith("/scorecard"):
            return "Invalid request: messages array is required and must not be empty"
        return "messages array is required"
    return f"Invalid request: {'.'.join(locations[0])}: {errors[0].get('msg', 'invalid value')}"


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Interview Chat Gateway")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run("api_server:app", host="0.0.0.0", port=8000)
