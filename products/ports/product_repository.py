"""
Product repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import Optional
import uuid

from products.domain.product import Product


class ProductRepository(ABC):
    """
    Abstract repository for Product entities.

    Products are read-only from the back office core.
    """

    @abstractmethod
    async def find_by_id(self, product_id: uuid.UUID) -> Optional[Product]:
        """
        Find a product by ID.

        Args:
            product_id: Product UUID

        Returns:
            Product entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_sku(self, sku: str) -> Optional[Product]:
        """
        Find a product by SKU.

        Args:
            sku: Product SKU

        Returns:
            Product entity or None if not found
        """
        pass
