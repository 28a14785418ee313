from typing import Any, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from sweetshop.api import deps
from sweetshop.core.config import settings
from sweetshop.core.database import get_db
from sweetshop.core.errors import InvalidRequestError
from sweetshop.models.sweet import SweetCategory
from sweetshop.models.user import User
from sweetshop.schemas.common import ApiResponse
from sweetshop.schemas.sweet import (
    PurchaseRequest,
    RestockRequest,
    SweetCreate,
    SweetListResponse,
    SweetResponse,
    SweetSearchResponse,
    SweetUpdate,
)
from sweetshop.services.inventory import InventoryService, page_count

router = APIRouter()

def parse_category(value: Optional[str]) -> Optional[SweetCategory]:
    """Category filter, matched case-insensitively like create and update."""
    if value is None or not value.strip():
        return None
    try:
        return SweetCategory(value.strip().lower())
    except ValueError:
        allowed = ", ".join(c.value for c in SweetCategory)
        raise InvalidRequestError(f"category: must be one of {allowed}")

@router.get("", response_model=SweetListResponse)
def list_sweets(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    """
    List every sweet, newest first.
    """
    sweets = InventoryService(db).list_all()
    return {"success": True, "data": {"sweets": sweets, "count": len(sweets)}}

@router.get("/search", response_model=SweetSearchResponse)
def search_sweets(
    q: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    """
    Search by free text, category and inclusive price range, paginated.
    """
    sweets, total = InventoryService(db).search(
        q=q,
        category=parse_category(category),
        min_price=min_price,
        max_price=max_price,
        page=page,
        limit=limit,
    )
    return {
        "success": True,
        "data": {
            "sweets": sweets,
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "pages": page_count(total, limit),
            },
        },
    }

@router.post("", response_model=SweetResponse, status_code=201)
def create_sweet(
    *,
    db: Session = Depends(get_db),
    sweet_in: SweetCreate,
    current_user: User = Depends(deps.get_current_admin),
) -> Any:
    sweet = InventoryService(db).create(sweet_in)
    return {"success": True, "message": "Sweet created successfully", "data": {"sweet": sweet}}

@router.put("/{sweet_id}", response_model=SweetResponse)
def update_sweet(
    sweet_id: str,
    *,
    db: Session = Depends(get_db),
    sweet_in: SweetUpdate,
    current_user: User = Depends(deps.get_current_admin),
) -> Any:
    sweet = InventoryService(db).update(sweet_id, sweet_in)
    return {"success": True, "message": "Sweet updated successfully", "data": {"sweet": sweet}}

@router.delete("/{sweet_id}", response_model=ApiResponse)
def delete_sweet(
    sweet_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_admin),
) -> Any:
    InventoryService(db).delete(sweet_id)
    return {"success": True, "message": "Sweet deleted successfully"}

@router.post("/{sweet_id}/purchase", response_model=SweetResponse)
def purchase_sweet(
    sweet_id: str,
    payload: Optional[PurchaseRequest] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    """
    Decrease stock. Any authenticated user may purchase; quantity defaults to 1.
    """
    quantity = payload.quantity if payload else 1
    sweet = InventoryService(db).purchase(sweet_id, quantity)
    return {"success": True, "message": "Purchase successful", "data": {"sweet": sweet}}

@router.post("/{sweet_id}/restock", response_model=SweetResponse)
def restock_sweet(
    sweet_id: str,
    payload: Optional[RestockRequest] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_admin),
) -> Any:
    quantity = payload.quantity if payload else None
    sweet = InventoryService(db).restock(sweet_id, quantity)
    return {"success": True, "message": "Restock successful", "data": {"sweet": sweet}}
