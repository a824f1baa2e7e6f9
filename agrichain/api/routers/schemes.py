# agrichain/api/routers/schemes.py
from typing import Optional

from fastapi import APIRouter, Depends, Query

from agrichain.api.deps import get_services, to_http
from agrichain.domain.errors import AgriChainError
from agrichain.domain.schemas import Envelope, SchemeIn, SchemeUpdate
from agrichain.services.registry import Services

router = APIRouter(prefix="/schemes", tags=["schemes"])


@router.get("/", response_model=Envelope)
async def list_schemes(
    category: Optional[str] = None,
    status: Optional[str] = None,
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    services: Services = Depends(get_services),
):
    filters = {"category": category, "status": status, "search": search}
    try:
        return await services.schemes.list(filters, page=page, limit=limit)
    except AgriChainError as e:
        raise to_http(e)


@router.get("/{scheme_id}", response_model=Envelope)
async def get_scheme(scheme_id: str, services: Services = Depends(get_services)):
    try:
        return await services.schemes.get_by_id(scheme_id)
    except AgriChainError as e:
        raise to_http(e)


@router.post("/", response_model=Envelope, status_code=201)
async def create_scheme(payload: SchemeIn, services: Services = Depends(get_services)):
    try:
        return await services.schemes.create(payload.model_dump(exclude_none=True))
    except AgriChainError as e:
        raise to_http(e)


@router.patch("/{scheme_id}", response_model=Envelope)
async def update_scheme(scheme_id: str, payload: SchemeUpdate, services: Services = Depends(get_services)):
    try:
        return await services.schemes.update(scheme_id, payload.model_dump(exclude_unset=True))
    except AgriChainError as e:
        raise to_http(e)


@router.delete("/{scheme_id}", response_model=Envelope)
async def delete_scheme(scheme_id: str, services: Services = Depends(get_services)):
    try:
        return await services.schemes.delete(scheme_id)
    except AgriChainError as e:
        raise to_http(e)
