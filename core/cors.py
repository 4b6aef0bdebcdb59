"""CORS setup.

Starlette's `CORSMiddleware` decorates ordinary responses. Preflight
requests are answered here instead: every `OPTIONS` request gets an empty
200 with the allow headers, whether or not the client sent the full
preflight header set, matching the hosted functions this service replaces.
Unhandled exceptions are turned into the generic 500 body here as well, so
they still carry the allow-origin header.
"""

from typing import List

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from core.error_handlers import create_error_response
from core.logger import get_logger

logger = get_logger("core.cors")

ALLOW_HEADERS = "authorization, x-client-info, apikey, content-type"
ALLOW_METHODS = "GET, POST, OPTIONS"


def _allow_origin(request: Request, origins: List[str]) -> str:
    if "*" in origins:
        return "*"
    origin = request.headers.get("origin")
    return origin if origin in origins else origins[0]


def register_cors(app: FastAPI, origins: List[str]) -> None:
    """Attach CORS handling to `app` for the given allowed origins."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def cors_headers(request: Request, call_next):
        allow_origin = _allow_origin(request, origins)
        if request.method == "OPTIONS":
            return Response(
                status_code=200,
                headers={
                    "Access-Control-Allow-Origin": allow_origin,
                    "Access-Control-Allow-Headers": ALLOW_HEADERS,
                    "Access-Control-Allow-Methods": ALLOW_METHODS,
                },
            )
        try:
            response = await call_next(request)
        except Exception:
            # Unhandled errors bypass the exception handlers registered on the app
            logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
            response = create_error_response("An internal server error occurred", status_code=500)
        if "access-control-allow-origin" not in response.headers:
            response.headers["Access-Control-Allow-Origin"] = allow_origin
        return response
