"""Catch-all OPTIONS handler.

Real CORS preflights are answered by the CORS middleware; this route
covers OPTIONS requests that carry no preflight headers.
"""

from fastapi import APIRouter, Response

router = APIRouter()


@router.options("/{path:path}", include_in_schema=False)
async def preflight(path: str) -> Response:
    return Response(status_code=204)
