"""Shop repository interface."""
from abc import ABC, abstractmethod

from src.catalog_domain.domain.entities.shop import Shop


class IShopRepository(ABC):
    @abstractmethod
    def load_all(self) -> list[Shop]:
        """Retrieves every shop, in store order."""
        pass

    @abstractmethod
    def append(self, shop: Shop) -> None:
        """Adds a shop at the end of the collection."""
        pass

    @abstractmethod
    def update(self, shop: Shop) -> None:
        """Replaces the stored shop with the same name (catalogue, earnings)."""
        pass


class IShopCacheRepository(IShopRepository):
    """A shop store that can also take a whole collection at once (the local copy of the remote shops)."""

    @abstractmethod
    def save_all(self, shops: list[Shop]) -> None:
        """Replaces every stored shop with the given ones, in order."""
        pass
