from fastapi import APIRouter, Depends

from agrichain.api.deps import get_services
from agrichain.services.registry import Services

router = APIRouter(tags=["health"])


@router.get("/health")
def health(services: Services = Depends(get_services)):
    return {"status": "ok", "store": type(services.store.kv).__name__}
