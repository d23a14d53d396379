"""Request-scoped access to the service databases"""

from fastapi import Request

from .database import ProductDatabase, PurchaseDatabase


def get_product_db(request: Request) -> ProductDatabase:
    return request.app.state.product_db


def get_purchase_db(request: Request) -> PurchaseDatabase:
    return request.app.state.purchase_db
