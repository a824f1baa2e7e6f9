from fastapi import APIRouter, Depends, HTTPException

from agrichain.api.deps import get_services, to_http
from agrichain.domain.errors import AgriChainError
from agrichain.domain.schemas import UserIn
from agrichain.services.registry import Services

router = APIRouter(prefix="/session", tags=["session"])


@router.post("/login")
def login(payload: UserIn, services: Services = Depends(get_services)):
    try:
        user = services.session.login(payload.model_dump(exclude_none=True))
    except AgriChainError as e:
        raise to_http(e)
    return {"success": True, "data": user}


@router.get("/me")
def current_user(services: Services = Depends(get_services)):
    user = services.session.current_user()
    if not user:
        raise HTTPException(status_code=404, detail="No user is logged in")
    return {"success": True, "data": user}


@router.post("/logout")
def logout(services: Services = Depends(get_services)):
    services.session.logout()
    return {"success": True, "message": "Logged out"}
