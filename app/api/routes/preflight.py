from __future__ import annotations

from fastapi import APIRouter, Response

router = APIRouter(tags=["CORS"])


@router.options("/{full_path:path}", include_in_schema=False)
def preflight(full_path: str) -> Response:
    """Acknowledge a CORS preflight on any path with an empty body."""
    return Response(content="", status_code=200, media_type="application/json")
