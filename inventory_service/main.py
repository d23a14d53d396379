"""
Inventory Service Application

In-memory inventory and order services for local development and
end-to-end tests of the storefront.
"""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .database import ProductDatabase, PurchaseDatabase, SEED_PRODUCTS
from .routes import products_router, purchases_router

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Inventory service starting up...")
    logger.info(f"Catalog loaded with {len(app.state.product_db.products)} products")
    yield
    logger.info("Inventory service shutting down...")


def create_app(seed: bool = True) -> FastAPI:
    """Build the service with fresh in-memory state"""
    app = FastAPI(
        title="Inventory Service",
        description="Reference inventory and order services for the storefront",
        version="1.0.0",
        lifespan=lifespan,
    )

    product_db = ProductDatabase(SEED_PRODUCTS if seed else None)
    app.state.product_db = product_db
    app.state.purchase_db = PurchaseDatabase(product_db)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=os.getenv("INVENTORY_SERVICE_CORS_ORIGINS", "*").split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(products_router)
    app.include_router(purchases_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "inventory-service"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "inventory_service.main:app",
        host=os.getenv("INVENTORY_SERVICE_HOST", "0.0.0.0"),
        port=int(os.getenv("INVENTORY_SERVICE_PORT", "8001")),
        reload=True,
    )
