"""Product API routes"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from storefront.models.product import Product, ProductCreate, ProductUpdate

from ..database import ProductDatabase
from ..dependencies import get_product_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=list[Product], response_model_by_alias=True)
async def list_products(db: ProductDatabase = Depends(get_product_db)):
    """List every product"""
    return db.list_products()


@router.get("/{product_id}", response_model=Product, response_model_by_alias=True)
async def get_product(product_id: int, db: ProductDatabase = Depends(get_product_db)):
    """Get product details"""
    product = db.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.post("", response_model=Product, response_model_by_alias=True, status_code=201)
async def create_product(request: ProductCreate, db: ProductDatabase = Depends(get_product_db)):
    """Create a product"""
    product = db.create_product(request)
    logger.info(f"Product {product.id} created: {product.name}")
    return product


@router.put("/{product_id}", response_model=Product, response_model_by_alias=True)
async def update_product(
    product_id: int,
    request: ProductUpdate,
    db: ProductDatabase = Depends(get_product_db),
):
    """Update the given fields of a product"""
    product = db.update_product(product_id, request)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: int, db: ProductDatabase = Depends(get_product_db)):
    """Delete a product"""
    if not db.delete_product(product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    logger.info(f"Product {product_id} deleted")
    return Response(status_code=204)
