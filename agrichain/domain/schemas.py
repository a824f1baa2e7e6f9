# agrichain/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Any, List, Literal, Optional
from decimal import Decimal


class Location(BaseModel):
    district: str = ""
    state: str = ""

    model_config = ConfigDict(extra="allow")


class BlockchainRef(BaseModel):
    hash: str
    block_number: Optional[int] = None
    confirmations: Optional[int] = None


# ---------------------------------------------------------------- products

class ProductIn(BaseModel):
    """Schema dla tworzenia produktu."""

    name: str = Field(..., min_length=1, max_length=200)
    category: str = Field(..., min_length=1)
    description: str = ""
    variety: str = ""
    price: float = Field(..., ge=0, description="Cena za jednostke")
    unit: str = Field("kg", description="Jednostka: kg, litr, sztuka...")
    quantity: float = Field(0, ge=0, description="Dostepna ilosc (>= 0)")
    farmer_id: str
    status: Optional[Literal["active", "sold", "expired"]] = None
    image: Optional[str] = None
    certifications: List[str] = []

    model_config = ConfigDict(extra="allow")


class ListingIn(ProductIn):
    """Produkt wystawiany z dashboardu rolnika, farmer_id pochodzi ze sciezki."""

    farmer_id: Optional[str] = None


class ProductUpdate(BaseModel):
    """Schema dla czesciowej aktualizacji produktu."""

    name: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    variety: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = None
    quantity: Optional[float] = Field(None, ge=0)
    status: Optional[Literal["active", "sold", "expired"]] = None
    image: Optional[str] = None
    certifications: Optional[List[str]] = None

    model_config = ConfigDict(extra="allow")


# ----------------------------------------------------------------- farmers

class FarmerIn(BaseModel):
    """Schema dla rejestracji zweryfikowanego rolnika."""

    name: str = Field(..., min_length=1, max_length=100)
    contact: dict[str, Any] = {}
    location: Location = Location()
    specializations: List[str] = []

    model_config = ConfigDict(extra="allow")


class FarmerUpdate(BaseModel):
    name: Optional[str] = None
    contact: Optional[dict[str, Any]] = None
    location: Optional[Location] = None
    verification_status: Optional[str] = None
    specializations: Optional[List[str]] = None

    model_config = ConfigDict(extra="allow")


# ------------------------------------------------------------ transactions

class TransactionIn(BaseModel):
    """Schema dla tworzenia transakcji."""

    farmer_id: str
    buyer_id: str
    product_id: str
    quantity: float = Field(..., gt=0)
    amount: float = Field(..., ge=0)
    status: Optional[Literal["pending", "completed", "failed"]] = None

    model_config = ConfigDict(extra="allow")


class TransactionUpdate(BaseModel):
    quantity: Optional[float] = Field(None, gt=0)
    amount: Optional[float] = Field(None, ge=0)
    status: Optional[Literal["pending", "completed", "failed"]] = None

    model_config = ConfigDict(extra="allow")


# ----------------------------------------------------------------- schemes

class SchemeIn(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    category: str
    eligibility: str = ""
    benefit_amount: float = Field(0, ge=0)
    deadline: Optional[str] = None
    tags: List[str] = []
    status: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class SchemeUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    eligibility: Optional[str] = None
    benefit_amount: Optional[float] = Field(None, ge=0)
    deadline: Optional[str] = None
    tags: Optional[List[str]] = None
    status: Optional[str] = None

    model_config = ConfigDict(extra="allow")


# ------------------------------------------------------------------ traces

class TraceStepIn(BaseModel):
    """Schema dla nowego kroku w lancuchu dostaw."""

    stage: str
    title: str
    description: str = ""
    location: str = ""
    status: Literal["pending", "active", "completed"] = "pending"
    blockchain: Optional[BlockchainRef] = None

    model_config = ConfigDict(extra="allow")


class TraceIn(BaseModel):
    product_name: Optional[str] = None
    farmer_id: Optional[str] = None

    model_config = ConfigDict(extra="allow")


# -------------------------------------------------------------- envelope

class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int
    hasNext: bool
    hasPrev: bool


class Envelope(BaseModel):
    """Jednolita odpowiedz kazdej operacji API."""

    success: bool
    data: Any = None
    pagination: Optional[Pagination] = None
    message: Optional[str] = None


# -------------------------------------------------------------------- cart

class CartItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    id: str = Field(..., min_length=1, description="ID produktu")
    name: str = ""
    price: float = Field(..., ge=0)
    unit: Optional[str] = None
    image: Optional[str] = None
    farmer: Optional[str] = None
    location: Optional[str] = None
    quantity: int = Field(1, description="Ilosc <= 0 usuwa pozycje")


class QuantityIn(BaseModel):
    quantity: int


class DiscountIn(BaseModel):
    amount: float


class CartItemOut(BaseModel):
    id: str
    name: str = ""
    price: float
    quantity: int

    model_config = ConfigDict(extra="allow")


class CartOut(BaseModel):
    """Schema dla koszyka (response)."""

    session_id: str
    items: List[CartItemOut]
    total_items: int
    discount: Decimal
    subtotal: Decimal
    total: Decimal


# ----------------------------------------------------------------- orders

class CheckoutIn(BaseModel):
    """Schema dla zlozenia zamowienia z koszyka."""

    delivery_info: dict[str, Any] = {}
    payment_info: dict[str, Any] = {}
    tx_hash: Optional[str] = None


class ClaimIn(BaseModel):
    """Schema dla zgloszenia szkody przez rolnika."""

    type: str = Field(..., min_length=1)
    description: str = ""

    model_config = ConfigDict(extra="allow")


class UserIn(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = ""
    email: Optional[str] = None
    role: Literal["farmer", "consumer"] = "consumer"

    model_config = ConfigDict(extra="allow")
