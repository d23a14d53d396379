"""Purchase API routes"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException

from storefront.models.purchase import Purchase, PurchaseRequest

from ..database import (
    IdempotencyMismatchError,
    InsufficientStockError,
    PurchaseDatabase,
    UnknownProductError,
)
from ..dependencies import get_purchase_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/purchases", tags=["Purchases"])


@router.get("", response_model=list[Purchase], response_model_by_alias=True)
async def list_purchases(db: PurchaseDatabase = Depends(get_purchase_db)):
    """List purchases, newest first"""
    return db.list_purchases()


@router.get("/{purchase_id}", response_model=Purchase, response_model_by_alias=True)
async def get_purchase(purchase_id: int, db: PurchaseDatabase = Depends(get_purchase_db)):
    """Get purchase details"""
    purchase = db.get_purchase(purchase_id)
    if not purchase:
        raise HTTPException(status_code=404, detail="Purchase not found")
    return purchase


@router.post("", response_model=Purchase, response_model_by_alias=True, status_code=201)
async def create_purchase(
    request: PurchaseRequest,
    idempotency_key: Optional[str] = Header(None),
    db: PurchaseDatabase = Depends(get_purchase_db),
):
    """
    Commit a purchase.

    The total is computed here from current prices; stock is checked and
    decremented atomically for all lines.
    """
    if not request.items:
        raise HTTPException(status_code=400, detail="Purchase has no items")

    product_ids = [item.product_id for item in request.items]
    if len(set(product_ids)) != len(product_ids):
        raise HTTPException(status_code=400, detail="Duplicate products in purchase")

    try:
        purchase = await db.commit_purchase(request, idempotency_key=idempotency_key)
    except UnknownProductError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except InsufficientStockError as exc:
        logger.warning(f"Purchase rejected for client {request.client_id}: {exc}")
        raise HTTPException(status_code=409, detail=str(exc))
    except IdempotencyMismatchError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    logger.info(f"Purchase {purchase.id} created for client {purchase.client_id}: {purchase.total}")
    return purchase
