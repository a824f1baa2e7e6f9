# agrichain/api/routers/farmers.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from agrichain.api.deps import get_services, to_http
from agrichain.domain.errors import AgriChainError
from agrichain.domain.schemas import ClaimIn, Envelope, FarmerIn, FarmerUpdate, ListingIn
from agrichain.services.registry import Services

router = APIRouter(prefix="/farmers", tags=["farmers"])


@router.get("/", response_model=Envelope)
async def list_farmers(
    state: Optional[str] = None,
    verified: Optional[str] = None,
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    services: Services = Depends(get_services),
):
    filters = {"state": state, "verified": verified, "search": search}
    try:
        return await services.farmers.list(filters, page=page, limit=limit)
    except AgriChainError as e:
        raise to_http(e)


@router.get("/{farmer_id}", response_model=Envelope)
async def get_farmer(farmer_id: str, services: Services = Depends(get_services)):
    try:
        return await services.farmers.get_by_id(farmer_id)
    except AgriChainError as e:
        raise to_http(e)


@router.post("/", response_model=Envelope, status_code=201)
async def verify_farmer(payload: FarmerIn, services: Services = Depends(get_services)):
    """
    Rejestracja po weryfikacji, farmer_id nadawany jest w tym momencie.
    """
    try:
        return await services.farmers.create(payload.model_dump())
    except AgriChainError as e:
        raise to_http(e)


@router.patch("/{farmer_id}", response_model=Envelope)
async def update_farmer(
    farmer_id: str,
    payload: FarmerUpdate,
    services: Services = Depends(get_services),
):
    try:
        return await services.farmers.update(farmer_id, payload.model_dump(exclude_unset=True))
    except AgriChainError as e:
        raise to_http(e)


@router.delete("/{farmer_id}", response_model=Envelope)
async def delete_farmer(farmer_id: str, services: Services = Depends(get_services)):
    try:
        return await services.farmers.delete(farmer_id)
    except AgriChainError as e:
        raise to_http(e)


# --- zgloszenia szkod i wlasne produkty rolnika ---

@router.get("/{farmer_id}/claims")
def list_claims(farmer_id: str, services: Services = Depends(get_services)):
    return {"success": True, "data": services.claims.list(farmer_id)}


@router.post("/{farmer_id}/claims", status_code=201)
def submit_claim(farmer_id: str, payload: ClaimIn, services: Services = Depends(get_services)):
    try:
        claim = services.claims.submit(farmer_id, payload.model_dump())
    except AgriChainError as e:
        raise to_http(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True, "data": claim, "message": "Claim submitted successfully"}


@router.get("/{farmer_id}/listings")
def list_listings(farmer_id: str, services: Services = Depends(get_services)):
    return {"success": True, "data": services.listings.list(farmer_id)}


@router.post("/{farmer_id}/listings", response_model=Envelope, status_code=201)
async def post_listing(farmer_id: str, payload: ListingIn, services: Services = Depends(get_services)):
    try:
        return await services.listings.post(farmer_id, payload.model_dump(exclude_none=True))
    except AgriChainError as e:
        raise to_http(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
