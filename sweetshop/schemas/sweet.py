from typing import List, Optional
from datetime import datetime
from pydantic import AnyUrl, BaseModel, Field, validator

from sweetshop.models.sweet import SweetCategory
from sweetshop.schemas.common import ApiResponse

class SweetCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    category: SweetCategory
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=0)
    description: Optional[str] = Field(None, max_length=500)
    image_url: Optional[AnyUrl] = Field(None, alias="imageUrl")

    class Config:
        populate_by_name = True

    @validator("name", "description", pre=True)
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @validator("category", pre=True)
    def lower_category(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

class SweetUpdate(BaseModel):
    """Partial update: only fields present in the payload are written."""
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    category: Optional[SweetCategory] = None
    price: Optional[float] = Field(None, ge=0)
    quantity: Optional[int] = Field(None, ge=0)
    description: Optional[str] = Field(None, max_length=500)
    image_url: Optional[AnyUrl] = Field(None, alias="imageUrl")

    class Config:
        populate_by_name = True

    @validator("name", "description", pre=True)
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @validator("category", pre=True)
    def lower_category(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @validator("name", "category", "price", "quantity")
    def not_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v

class PurchaseRequest(BaseModel):
    quantity: Optional[int] = 1

class RestockRequest(BaseModel):
    quantity: Optional[int] = None

class SweetOut(BaseModel):
    id: str
    name: str
    category: str
    price: float
    quantity: int
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, serialization_alias="imageUrl")
    created_at: datetime = Field(..., serialization_alias="createdAt")
    updated_at: datetime = Field(..., serialization_alias="updatedAt")

    class Config:
        from_attributes = True

class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int

class SweetData(BaseModel):
    sweet: SweetOut

class SweetResponse(ApiResponse):
    data: SweetData

class SweetListData(BaseModel):
    sweets: List[SweetOut]
    count: int

class SweetListResponse(ApiResponse):
    data: SweetListData

class SweetSearchData(BaseModel):
    sweets: List[SweetOut]
    pagination: Pagination

class SweetSearchResponse(ApiResponse):
    data: SweetSearchData
