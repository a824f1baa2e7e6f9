# agrichain/api/routers/stats.py
from fastapi import APIRouter, Depends, HTTPException, Query

from agrichain.api.deps import get_services, to_http
from agrichain.domain.errors import AgriChainError
from agrichain.domain.schemas import Envelope
from agrichain.services.registry import Services

router = APIRouter(tags=["stats"])


@router.get("/stats/dashboard/{actor_id}", response_model=Envelope)
async def dashboard_stats(
    actor_id: str,
    role: str = Query("farmer"),
    services: Services = Depends(get_services),
):
    try:
        return await services.stats.dashboard_stats(actor_id, role)
    except AgriChainError as e:
        raise to_http(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/search")
async def search_all(
    q: str = Query(..., min_length=1),
    product_limit: int = Query(5, ge=1),
    farmer_limit: int = Query(5, ge=1),
    scheme_limit: int = Query(5, ge=1),
    services: Services = Depends(get_services),
):
    try:
        return await services.search.search_all(q, product_limit, farmer_limit, scheme_limit)
    except AgriChainError as e:
        raise to_http(e)


@router.get("/admin/data-stats", response_model=Envelope)
async def data_stats(services: Services = Depends(get_services)):
    return await services.admin.data_stats()


@router.post("/admin/reset", response_model=Envelope)
async def clear_all_data(services: Services = Depends(get_services)):
    return await services.admin.clear_all_data()
