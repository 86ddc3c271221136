from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from app.core.dependencies import get_request_validator, get_visit_counter_service
from app.schemas.visit import ErrorResponse, VisitCountResponse
from app.services.request_validator import RequestValidator

router = APIRouter(tags=["Visits"])


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


@router.post(
    "/visits",
    response_model=VisitCountResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing origin header"},
        403: {"model": ErrorResponse, "description": "Origin not allowed or automated client"},
        500: {"model": ErrorResponse, "description": "Storage failure"},
    },
)
def record_visit(
    request: Request,
    validator: RequestValidator = Depends(get_request_validator),
) -> VisitCountResponse:
    """Count one visit for the calling origin in the current month.

    Validation failures raise RequestRejectedError and storage failures raise
    StoreAppError; both are turned into JSON bodies by the exception handlers.
    The counting service is resolved only after validation passes, so
    rejected requests never reach storage.

    Returns:
        VisitCountResponse: The updated counter.
    """
    accepted = validator.validate(request.headers, _client_ip(request))
    record = get_visit_counter_service().record_visit(accepted.origin)
    return VisitCountResponse.from_record(record)
