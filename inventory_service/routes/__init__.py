# API Routes

from .products import router as products_router
from .purchases import router as purchases_router

__all__ = ["products_router", "purchases_router"]
