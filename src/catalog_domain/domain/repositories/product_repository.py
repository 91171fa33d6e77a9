"""Product repository interface."""
from abc import ABC, abstractmethod

from src.catalog_domain.domain.entities.product import Product


class IProductRepository(ABC):
    @abstractmethod
    def load_all(self) -> list[Product]:
        """Retrieves every active product, in store order."""
        pass

    @abstractmethod
    def append(self, product: Product) -> None:
        """Adds a product at the end of the collection."""
        pass

    @abstractmethod
    def update(self, product: Product) -> None:
        """Replaces the stored product with the same name."""
        pass

    @abstractmethod
    def remove(self, name: str) -> bool:
        """Removes the product with the given name. Returns False when it was not stored."""
        pass
