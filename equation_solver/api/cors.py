"""CORS policy for the equation solver API.

Only the configured front-end origins are allowed. Preflight requests are
answered with 204 whether or not the origin is allowed; a disallowed
origin simply gets no ``Access-Control-Allow-Origin`` header.
"""

from fastapi import FastAPI
from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response

from equation_solver.core.config import Settings

# Body headers of Starlette's plain-text preflight reply
_BODY_HEADERS = {"content-length", "content-type"}


class PreflightCORSMiddleware(CORSMiddleware):
    """CORS middleware whose preflight replies are always empty 204s."""

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        headers = {
            key: value
            for key, value in response.headers.items()
            if key.lower() not in _BODY_HEADERS
        }
        return Response(status_code=204, headers=headers)


def add_cors(app: FastAPI, settings: Settings) -> None:
    """Register the CORS middleware on the app."""
    app.add_middleware(
        PreflightCORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=settings.cors_methods,
        allow_credentials=settings.cors_allow_credentials,
        allow_headers=["*"],
    )
