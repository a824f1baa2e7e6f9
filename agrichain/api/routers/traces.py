# agrichain/api/routers/traces.py
from fastapi import APIRouter, Depends, HTTPException

from agrichain.api.deps import get_services, to_http
from agrichain.domain.errors import AgriChainError
from agrichain.domain.schemas import Envelope, TraceIn, TraceStepIn
from agrichain.services.registry import Services

router = APIRouter(prefix="/traces", tags=["traces"])


@router.get("/{product_id}", response_model=Envelope)
async def get_trace(product_id: str, services: Services = Depends(get_services)):
    try:
        return await services.traces.get(product_id)
    except AgriChainError as e:
        raise to_http(e)


@router.post("/{product_id}", response_model=Envelope, status_code=201)
async def create_trace(product_id: str, payload: TraceIn, services: Services = Depends(get_services)):
    try:
        return await services.traces.create(product_id, payload.model_dump(exclude_none=True))
    except AgriChainError as e:
        raise to_http(e)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/{product_id}/steps", response_model=Envelope, status_code=201)
async def add_trace_step(product_id: str, payload: TraceStepIn, services: Services = Depends(get_services)):
    try:
        return await services.traces.append_step(product_id, payload.model_dump(exclude_none=True))
    except AgriChainError as e:
        raise to_http(e)
