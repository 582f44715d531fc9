"""Bulk transfer REST endpoints."""
from __future__ import annotations

import logging
from http import HTTPStatus

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from bulk_transfer.api.dependencies import get_transfer_service
from bulk_transfer.api.errors import map_failure, map_unexpected_error
from bulk_transfer.core.outcome import Failure
from bulk_transfer.core.settings import Settings, get_settings
from bulk_transfer.schemas.transfer import (
    BulkTransferRequest,
    BulkTransferSuccessResponse,
    FailureResponse,
)
from bulk_transfer.services.transfer_service import TransferService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/transfer", tags=["transfers"])


@router.post(
    "/bulk",
    response_model=BulkTransferSuccessResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": FailureResponse},
        HTTPStatus.UNPROCESSABLE_ENTITY.value: {"model": FailureResponse},
    },
)
async def bulk_transfer(
    payload: BulkTransferRequest,
    service: TransferService = Depends(get_transfer_service),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Debit the organization account and record every credit transfer."""

    try:
        result = await service.bulk_transactions(payload)
    except Exception as exc:
        logger.exception("Unexpected error while processing bulk transfer")
        return map_unexpected_error(exc, include_stack=not settings.is_production)

    if isinstance(result, Failure):
        return map_failure(result)

    body = BulkTransferSuccessResponse(data=result.data)
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=body.model_dump(mode="json", by_alias=True))
