"""CEP weather — FastAPI service."""

from __future__ import annotations

import logging
import sys

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from cepweather import __version__
from cepweather.config import Settings, load_settings
from cepweather.errors import ConfigError
from cepweather.middleware import RequestLifetimeMiddleware, request_context
from cepweather.models import ErrorKind, ErrorOutcome
from cepweather.service import WeatherService

logger = structlog.get_logger()

ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: 422,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL_FAILURE: 500,
}


def configure_logging(level: str = "info") -> None:
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
    )


def create_app(settings: Settings, service: WeatherService | None = None) -> FastAPI:
    """Build the HTTP app around an explicitly constructed configuration."""
    configure_logging(settings.log_level)

    app = FastAPI(title="CEP Weather", version=__version__)
    app.state.settings = settings
    app.state.service = service or WeatherService(settings)

    # Last registered runs outermost: request_context wraps the deadline and disconnect watcher.
    app.add_middleware(RequestLifetimeMiddleware, timeout=settings.request_timeout)
    app.middleware("http")(request_context)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
        if exc.status_code == 404:
            body = "route does not exist"
        elif exc.status_code == 405:
            body = "method is not valid"
        else:
            body = str(exc.detail)
        return PlainTextResponse(body, status_code=exc.status_code, headers=exc.headers)

    @app.get("/weather/{cep}")
    async def weather(cep: str, request: Request) -> Response:
        """Current temperature for a postal code in Kelvin, Celsius and Fahrenheit."""
        result = await request.app.state.service.handle_weather_request(cep)
        if isinstance(result, ErrorOutcome):
            return PlainTextResponse(result.message, status_code=ERROR_STATUS[result.kind])
        return JSONResponse(result.model_dump(by_alias=True))

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    return app


def run() -> None:
    """Console entry point: load settings and serve on 0.0.0.0:$PORT."""
    configure_logging()
    try:
        settings = load_settings()
    except (ConfigError, ValueError) as e:
        logger.critical("config_load_failed", error=str(e))
        sys.exit(1)

    app = create_app(settings)
    logger.info("cep_weather_starting", port=settings.port)
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level,
        proxy_headers=True,
        forwarded_allow_ips="*",
    )


if __name__ == "__main__":
    run()
