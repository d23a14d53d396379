"""In-memory product database"""

from datetime import date, datetime
from typing import Optional

from storefront.models.product import Product, ProductCreate, ProductUpdate

# Seed catalog for local development
SEED_PRODUCTS: list[ProductCreate] = [
    ProductCreate(
        batch="LOT-2024-001",
        name="Arabica Coffee Beans 1kg",
        price=24.50,
        available_quantity=40,
        entry_date=date(2024, 3, 1),
    ),
    ProductCreate(
        batch="LOT-2024-002",
        name="Earl Grey Tea 250g",
        price=9.90,
        available_quantity=8,
        entry_date=date(2024, 3, 4),
    ),
    ProductCreate(
        batch="LOT-2024-003",
        name="Dark Chocolate 85% 100g",
        price=3.75,
        available_quantity=120,
        entry_date=date(2024, 3, 9),
    ),
    ProductCreate(
        batch="LOT-2024-004",
        name="Manuka Honey 500g",
        price=39.00,
        available_quantity=3,
        entry_date=date(2024, 3, 15),
    ),
    ProductCreate(
        batch="LOT-2024-005",
        name="Extra Virgin Olive Oil 1L",
        price=14.20,
        available_quantity=0,
        entry_date=date(2024, 3, 20),
    ),
]


class ProductDatabase:
    """In-memory product storage"""

    def __init__(self, seed: Optional[list[ProductCreate]] = None):
        self.products: dict[int, Product] = {}
        self._next_id = 1
        for product in seed or []:
            self.create_product(product)

    def get_product(self, product_id: int) -> Optional[Product]:
        """Get a product by ID"""
        return self.products.get(product_id)

    def list_products(self) -> list[Product]:
        """Get all products, ordered by ID"""
        return [self.products[pid] for pid in sorted(self.products)]

    def create_product(self, data: ProductCreate) -> Product:
        """Create a product with a fresh ID"""
        now = datetime.utcnow()
        product = Product(
            id=self._next_id,
            **data.model_dump(),
            created_at=now,
            updated_at=now,
        )
        if product.entry_date is None:
            product.entry_date = now.date()
        self.products[product.id] = product
        self._next_id += 1
        return product

    def update_product(self, product_id: int, fields: ProductUpdate) -> Optional[Product]:
        """Apply the set fields of an update"""
        product = self.get_product(product_id)
        if not product:
            return None

        changes = {k: v for k, v in fields.model_dump(exclude_unset=True).items() if v is not None}
        updated = product.model_copy(update={**changes, "updated_at": datetime.utcnow()})
        self.products[product_id] = updated
        return updated

    def delete_product(self, product_id: int) -> bool:
        """Delete a product"""
        if product_id in self.products:
            del self.products[product_id]
            return True
        return False

    def update_stock(self, product_id: int, quantity_change: int) -> bool:
        """
        Update product stock.

        Args:
            product_id: Product to update
            quantity_change: Positive to add, negative to remove

        Returns:
            True if successful
        """
        product = self.products.get(product_id)
        if not product:
            return False

        new_quantity = product.available_quantity + quantity_change
        if new_quantity < 0:
            return False

        self.products[product_id] = product.model_copy(
            update={"available_quantity": new_quantity, "updated_at": datetime.utcnow()}
        )
        return True
