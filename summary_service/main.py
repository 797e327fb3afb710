import sys
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config import config
from .errors import SetupError, SummaryError
from .logging import logger
from .routes import health, summarize
from .schemas import SummaryLength

API_PREFIX = "/api"
_UVICORN_LEVELS = {"warn": "warning"}


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"code": status_code, "message": message})


async def _summary_error_handler(request: Request, exc: SummaryError) -> JSONResponse:
    return _error_response(exc.status_code, exc.message)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map framework body validation onto the 400/422 taxonomy.

    Problems with ``text`` (wrong type), a missing or unparseable body are client
    input errors (400); anything else stays 422.
    """
    errors = exc.errors()
    for err in errors:
        loc = err.get("loc") or ()
        if "text" in loc or tuple(loc) == ("body",) or err.get("type") == "json_invalid":
            logger.info("summarize.rejected", status=400, reason=err.get("type"), path=request.url.path)
            return _error_response(400, "Invalid input - text is required")
    first = errors[0] if errors else {}
    logger.info("summarize.rejected", status=422, reason=first.get("type"), path=request.url.path)
    return _error_response(422, first.get("msg") or "Unprocessable request")


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("http.unhandled_error", path=request.url.path, error=exc)
    return _error_response(500, "Internal server error")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Summary Service",
        description="Rule-based text summarization API.",
        version="0.1.0",
    )
    app.include_router(summarize.router, prefix=API_PREFIX)
    app.include_router(health.router, prefix=API_PREFIX)

    app.add_exception_handler(SummaryError, _summary_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
    return app


def setup_and_validate() -> None:
    """Validate configuration before serving.

    Raises SetupError if any value is out of range.
    """
    logger.info("setup.starting")
    _validate_config()
    logger.info(
        "setup.completed",
        config={
            "host": config.HOST,
            "port": config.PORT,
            "max_text_length": config.MAX_TEXT_LENGTH,
            "default_length": config.DEFAULT_LENGTH,
            "log_level": config.LOG_LEVEL,
        },
    )


def _validate_config() -> None:
    logger.info("setup.validating_config")

    if not (0 < config.PORT < 65536):
        raise SetupError(f"PORT must be 1-65535, got {config.PORT}")

    if config.MAX_TEXT_LENGTH < 1:
        raise SetupError(f"MAX_TEXT_LENGTH must be > 0, got {config.MAX_TEXT_LENGTH}")

    valid = [t.value for t in SummaryLength]
    if config.DEFAULT_LENGTH not in valid:
        raise SetupError(f"DEFAULT_LENGTH must be one of {', '.join(valid)}, got {config.DEFAULT_LENGTH}")

    if config.CLIENT_MAX_RETRIES < 1:
        raise SetupError(f"CLIENT_MAX_RETRIES must be >= 1, got {config.CLIENT_MAX_RETRIES}")

    if config.CLIENT_TIMEOUT <= 0:
        raise SetupError(f"CLIENT_TIMEOUT must be > 0, got {config.CLIENT_TIMEOUT}")


app = create_app()


def main(host: Optional[str] = None, port: Optional[int] = None) -> int:
    """Validate setup and serve the API with uvicorn."""
    import uvicorn

    try:
        setup_and_validate()
    except SetupError as e:
        logger.error("setup.failed", error=str(e))
        return 1

    logger.info("server.starting", host=host or config.HOST, port=port or config.PORT)
    uvicorn.run(app, host=host or config.HOST, port=port or config.PORT, log_level=_UVICORN_LEVELS.get(config.LOG_LEVEL, config.LOG_LEVEL))
    return 0


if __name__ == "__main__":
    sys.exit(main())
