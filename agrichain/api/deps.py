# agrichain/api/deps.py
from fastapi import HTTPException, Request

from agrichain.domain.errors import (
    AgriChainError,
    NotFoundError,
    StorageWriteError,
    TransientNetworkError,
)
from agrichain.services.registry import Services


def get_services(request: Request) -> Services:
    return request.app.state.services


def to_http(e: AgriChainError) -> HTTPException:
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, TransientNetworkError):
        return HTTPException(status_code=503, detail=str(e))
    if isinstance(e, StorageWriteError):
        return HTTPException(status_code=507, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))
