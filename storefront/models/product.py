"""Product models"""

from datetime import date, datetime
from typing import Optional

from pydantic import Field

from .base import WireModel


class Product(WireModel):
    """Product in the inventory; available_quantity is the authoritative stock counter"""
    id: int
    batch: str
    name: str
    price: float = Field(ge=0)
    available_quantity: int = Field(ge=0)
    entry_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductCreate(WireModel):
    """Fields accepted when creating a product"""
    batch: str
    name: str
    price: float = Field(ge=0)
    available_quantity: int = Field(ge=0)
    entry_date: Optional[date] = None


class ProductUpdate(WireModel):
    """Partial product update; unset fields are left unchanged"""
    batch: Optional[str] = None
    name: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    available_quantity: Optional[int] = Field(default=None, ge=0)
    entry_date: Optional[date] = None
